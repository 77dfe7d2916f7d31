# selenium_mcp.py
import atexit
import inspect
import logging
import time

from mcp.server.fastmcp import FastMCP
from selenium.common.exceptions import TimeoutException
from selenium.webdriver.support.ui import WebDriverWait

from browser_driver import LocatorStrategy, SeleniumDriver, create_webdriver
from cascade_commands import CascadeCommands
from settings import settings_from_env

logger = logging.getLogger(__name__)

# Initialize MCP Server
mcp = FastMCP("CascadeCommands")

settings = settings_from_env()

# --- Driver Setup ---
# The browser starts on first use so importing this module stays cheap.
_driver = None
_session = None

# Commands a client may chain through run_cascade. set_current is left out:
# element handles cannot cross the wire.
CASCADE_COMMANDS = frozenset({
    "clear", "click", "send_keys", "submit", "sleep",
    "find_element", "find_on_current",
    "find_element_by_id", "find_element_by_name", "find_element_by_xpath",
    "find_element_by_tag_name", "find_element_by_partial_link_text",
    "find_element_by_link_text", "find_element_by_css_selector",
    "find_element_by_class_name",
    "find_on_current_by_id", "find_on_current_by_name", "find_on_current_by_xpath",
    "find_on_current_by_tag_name", "find_on_current_by_partial_link_text",
    "find_on_current_by_link_text", "find_on_current_by_css_selector",
    "find_on_current_by_class_name",
    "execute_script", "execute_script_on_current",
    "select_by_text", "select_by_value",
})


def get_driver():
    global _driver
    if _driver is None:
        _driver = create_webdriver(settings)
    return _driver


def get_session():
    global _session
    if _session is None:
        _session = CascadeCommands(SeleniumDriver(get_driver()))
    return _session


def cleanup():
    if _driver is None:
        return
    try:
        _driver.quit()
    except Exception as e:
        logger.warning("Browser did not quit cleanly: %s", e)

atexit.register(cleanup)

# --- Helper Functions ---

def wait_for_ready(timeout=None):
    """Waits for the page to report readyState == complete."""
    timeout = settings.page_timeout if timeout is None else timeout
    try:
        WebDriverWait(get_driver(), timeout).until(lambda d:
            d.execute_script("return document.readyState === 'complete'")
        )
        time.sleep(0.5) # Small buffer for rendering
    except TimeoutException:
        logger.warning("Page was not ready after %ss", timeout)


def session_summary(session):
    return {
        "entries": [e.to_dict() for e in session.get_execution_registry()],
        "has_fault": session.has_fault,
        "halted": session.halted,
        "continue_on_error": session.continue_on_error,
    }


def validate_steps(commands):
    """Returns an error string for the first malformed step, or None."""
    if not isinstance(commands, list):
        return "Error: commands must be a list of steps."
    for index, step in enumerate(commands):
        if not isinstance(step, dict) or "command" not in step:
            return f"Error: step {index} must be an object with a 'command' key."
        if step["command"] not in CASCADE_COMMANDS:
            return f"Error: step {index} uses unknown command '{step['command']}'."
        args = step.get("args", [])
        if not isinstance(args, list):
            return f"Error: step {index} 'args' must be a list."
        try:
            inspect.signature(getattr(CascadeCommands, step["command"])).bind(None, *args)
            if step["command"] in ("find_element", "find_on_current"):
                LocatorStrategy.parse(args[0])
            if step["command"] == "sleep" and not (isinstance(args[0], (int, float)) and args[0] >= 0):
                raise ValueError("sleep needs a non-negative number of milliseconds")
        except (TypeError, ValueError) as e:
            return f"Error: step {index} '{step['command']}' has bad arguments: {str(e)}"
    return None

# =========================================================================
# 1. NAVIGATION
# =========================================================================

@mcp.tool()
def go_to_url(url: str):
    """Navigates the browser to a specific URL."""
    try:
        get_driver().get(url)
        wait_for_ready()
        return f"Navigated to {url}"
    except Exception as e:
        return f"Error navigating: {str(e)}"

@mcp.tool()
def get_current_url():
    """Returns the current URL of the browser."""
    return get_driver().current_url

# =========================================================================
# 2. CASCADE EXECUTION
# =========================================================================

@mcp.tool()
def run_cascade(commands: list, continue_on_error: bool = False):
    """
    Chains commands on the shared session, e.g.
    [{"command": "find_element_by_id", "args": ["user"]},
     {"command": "send_keys", "args": ["bob"]},
     {"command": "submit"}]
    Once a step faults the rest are skipped unless continue_on_error is true.
    Returns the whole execution log.
    """
    problem = validate_steps(commands)
    if problem:
        return problem

    session = get_session()
    session.continue_on_error = continue_on_error
    for step in commands:
        getattr(session, step["command"])(*step.get("args", []))
    return session_summary(session)

@mcp.tool()
def get_execution_log(kind: str = "all"):
    """Returns the execution log. kind: 'all', 'faults' or 'successes'."""
    session = get_session()
    if kind == "faults":
        entries = session.get_execution_registry_with_faults()
    elif kind == "successes":
        entries = session.get_execution_registry_with_success()
    elif kind == "all":
        entries = session.get_execution_registry()
    else:
        return f"Error: unknown log kind '{kind}'."
    return [e.to_dict() for e in entries]

@mcp.tool()
def clear_execution_log():
    """Clears the log. A halted session stays halted; use reset_session for that."""
    session = get_session()
    session.clear_execution_registry()
    return session_summary(session)

@mcp.tool()
def reset_session():
    """Starts a fresh session: empty log, no current element, no fault."""
    global _session
    _session = CascadeCommands(SeleniumDriver(get_driver()))
    return "Session reset."

if __name__ == "__main__":
    logging.basicConfig(level=settings.log_level)
    mcp.run(transport=settings.mcp_transport)
