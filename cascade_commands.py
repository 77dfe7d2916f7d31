# cascade_commands.py
"""
Fluent command session over a BrowserDriver.

Each command returns the session so calls can be chained:

    CascadeCommands(driver).find_element_by_id("user").send_keys("bob").submit()

Every call appends an ExecutionEntry to the log. After the first fault the
session halts and later commands return immediately, unless
continue_on_error is set.
"""
import logging
import time

from browser_driver import LocatorStrategy
from execution_registry import ExecutionEntry, Outcome

logger = logging.getLogger(__name__)


def _labeled(message, label):
    return f"{message} - {label}" if label else message


class CascadeCommands:
    def __init__(self, driver):
        self.driver = driver
        self.continue_on_error = False
        self._current_element = None
        self._has_fault = False
        self._registry = []

    # =========================================================================
    # STATE
    # =========================================================================

    @property
    def current_element(self):
        return self._current_element

    @property
    def has_fault(self):
        return self._has_fault

    @property
    def halted(self):
        return self._has_fault and not self.continue_on_error

    def _cancel_execution(self, command):
        if self.halted:
            logger.debug("Skipping %s: session halted by a previous fault.", command)
            return True
        return False

    def _no_current(self, command):
        """Records the precondition fault when there is nothing to act on."""
        if self._current_element is not None:
            return False
        self._add_fault(f"There is no Current Element to {command}! Check the previous operation.")
        return True

    def _add_success(self, message, label=""):
        entry = ExecutionEntry(len(self._registry) + 1, Outcome.SUCCESS, _labeled(message, label))
        self._registry.append(entry)
        logger.debug("[%d] %s", entry.id, entry.message)

    def _add_fault(self, message, label=""):
        self._has_fault = True
        self._current_element = None
        entry = ExecutionEntry(len(self._registry) + 1, Outcome.FAULT, _labeled(message, label))
        self._registry.append(entry)
        logger.warning("[%d] %s", entry.id, entry.message)

    def _record(self, result, success_message, command, label=""):
        if result.ok:
            self._add_success(success_message, label)
        else:
            self._add_fault(f"{command} execution has thrown some error : {result.error}", label)
        return result.ok

    # =========================================================================
    # EXECUTION REGISTRY
    # =========================================================================

    def get_execution_registry(self):
        return tuple(self._registry)

    def get_execution_registry_with_faults(self):
        return tuple(e for e in self._registry if not e.success)

    def get_execution_registry_with_success(self):
        return tuple(e for e in self._registry if e.success)

    def clear_execution_registry(self):
        """Empties the log. The fault flag and current element stay as they are."""
        self._registry.clear()

    # =========================================================================
    # CURRENT ELEMENT
    # =========================================================================

    def set_current(self, element):
        if self._cancel_execution("SetCurrent"):
            return self

        self._current_element = element
        self._add_success("Current Element was set successfully outside of the chain.")
        return self

    def clear(self):
        if self._cancel_execution("Clear") or self._no_current("Clear"):
            return self

        result = self.driver.clear(self._current_element)
        self._record(result, "The Clear operation was executed successfully.", "Clear")
        return self

    # =========================================================================
    # LOCATING
    # =========================================================================

    def find_element(self, strategy, value, label=""):
        """Locates from the document root and makes the match current."""
        if self._cancel_execution("FindElement"):
            return self

        result = self.driver.locate(LocatorStrategy.parse(strategy), value)
        if self._record(result, "Find Element was executed successfully.", "Find Element", label):
            self._current_element = result.value
        return self

    def find_element_by_id(self, value, label=""):
        return self.find_element(LocatorStrategy.ID, value, label)

    def find_element_by_name(self, value, label=""):
        return self.find_element(LocatorStrategy.NAME, value, label)

    def find_element_by_xpath(self, value, label=""):
        return self.find_element(LocatorStrategy.XPATH, value, label)

    def find_element_by_tag_name(self, value, label=""):
        return self.find_element(LocatorStrategy.TAG_NAME, value, label)

    def find_element_by_partial_link_text(self, value, label=""):
        return self.find_element(LocatorStrategy.PARTIAL_LINK_TEXT, value, label)

    def find_element_by_link_text(self, value, label=""):
        return self.find_element(LocatorStrategy.LINK_TEXT, value, label)

    def find_element_by_css_selector(self, value, label=""):
        return self.find_element(LocatorStrategy.CSS_SELECTOR, value, label)

    def find_element_by_class_name(self, value, label=""):
        return self.find_element(LocatorStrategy.CLASS_NAME, value, label)

    def find_on_current(self, strategy, value, label=""):
        """Locates inside the current element and makes the match current."""
        if self._cancel_execution("FindOnCurrent") or self._no_current("FindOnCurrent"):
            return self

        result = self.driver.locate_within(self._current_element, LocatorStrategy.parse(strategy), value)
        if self._record(result, "Find Element on Current was executed successfully.", "Find On Current", label):
            self._current_element = result.value
        return self

    def find_on_current_by_id(self, value, label=""):
        return self.find_on_current(LocatorStrategy.ID, value, label)

    def find_on_current_by_name(self, value, label=""):
        return self.find_on_current(LocatorStrategy.NAME, value, label)

    def find_on_current_by_xpath(self, value, label=""):
        return self.find_on_current(LocatorStrategy.XPATH, value, label)

    def find_on_current_by_tag_name(self, value, label=""):
        return self.find_on_current(LocatorStrategy.TAG_NAME, value, label)

    def find_on_current_by_partial_link_text(self, value, label=""):
        return self.find_on_current(LocatorStrategy.PARTIAL_LINK_TEXT, value, label)

    def find_on_current_by_link_text(self, value, label=""):
        return self.find_on_current(LocatorStrategy.LINK_TEXT, value, label)

    def find_on_current_by_css_selector(self, value, label=""):
        return self.find_on_current(LocatorStrategy.CSS_SELECTOR, value, label)

    def find_on_current_by_class_name(self, value, label=""):
        return self.find_on_current(LocatorStrategy.CLASS_NAME, value, label)

    # =========================================================================
    # ELEMENT ACTIONS
    # =========================================================================

    def click(self):
        if self._cancel_execution("Click") or self._no_current("Click"):
            return self

        result = self.driver.click(self._current_element)
        self._record(result, "Click execution was executed successfully.", "Click Element")
        return self

    def send_keys(self, text):
        if self._cancel_execution("SendKeys") or self._no_current("SendKeys"):
            return self

        result = self.driver.send_keys(self._current_element, text)
        self._record(result, "SendKeys execution was executed successfully.", "SendKeys Element")
        return self

    def submit(self):
        if self._cancel_execution("Submit") or self._no_current("Submit"):
            return self

        result = self.driver.submit(self._current_element)
        self._record(result, "Submit execution was executed successfully.", "Submit Element")
        return self

    # =========================================================================
    # SCRIPTS
    # =========================================================================

    def execute_script_on_current(self, script):
        """Runs the script with the current element as arguments[0]."""
        if self._cancel_execution("ExecuteScript") or self._no_current("ExecuteScript"):
            return self

        result = self.driver.execute_script(script, self._current_element)
        self._record(result, "JavaScript execution was executed successfully.", "JavaScript")
        return self

    def execute_script(self, script):
        if self._cancel_execution("ExecuteScript"):
            return self

        result = self.driver.execute_script(script)
        self._record(result, "JavaScript execution was executed successfully.", "JavaScript")
        return self

    # =========================================================================
    # DROPDOWNS
    # =========================================================================

    def select_by_text(self, text):
        if self._cancel_execution("SelectByText") or self._no_current("SelectByText"):
            return self

        result = self.driver.select_by_text(self._current_element, text)
        self._record(result, "SelectByText was executed successfully.", "SelectByText")
        return self

    def select_by_value(self, value):
        if self._cancel_execution("SelectByValue") or self._no_current("SelectByValue"):
            return self

        result = self.driver.select_by_value(self._current_element, value)
        self._record(result, "SelectByValue was executed successfully.", "SelectByValue")
        return self

    # =========================================================================
    # TIMING
    # =========================================================================

    def sleep(self, duration_ms):
        """Blocks the calling thread; there is no scheduler behind this."""
        if self._cancel_execution("Sleep"):
            return self
        if duration_ms < 0:
            raise ValueError("Sleep duration must not be negative.")

        time.sleep(duration_ms / 1000)
        self._add_success(f"Slept for {duration_ms} milliseconds.")
        return self
