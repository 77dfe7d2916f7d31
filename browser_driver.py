# browser_driver.py
"""
Capability surface the cascade talks to, plus the Selenium adapter.

Every capability returns an ActionResult instead of raising, so the session
only has to turn results into log entries.
"""
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Protocol

from selenium import webdriver
from selenium.common.exceptions import WebDriverException
from selenium.webdriver.common.by import By
from selenium.webdriver.remote.webelement import WebElement
from selenium.webdriver.support.ui import Select

logger = logging.getLogger(__name__)


class LocatorStrategy(str, Enum):
    ID = By.ID
    NAME = By.NAME
    XPATH = By.XPATH
    TAG_NAME = By.TAG_NAME
    PARTIAL_LINK_TEXT = By.PARTIAL_LINK_TEXT
    LINK_TEXT = By.LINK_TEXT
    CSS_SELECTOR = By.CSS_SELECTOR
    CLASS_NAME = By.CLASS_NAME

    @classmethod
    def parse(cls, text):
        """Accepts 'css selector', 'CSS_SELECTOR' or 'css_selector'."""
        if isinstance(text, cls):
            return text
        key = str(text).strip()
        for member in cls:
            if key.lower() == member.value or key.upper() == member.name:
                return member
        raise ValueError(f"Unknown locator strategy '{text}'.")


@dataclass(frozen=True)
class ActionResult:
    ok: bool
    value: Any = None
    error: str = ""

    @classmethod
    def success(cls, value=None):
        return cls(ok=True, value=value)

    @classmethod
    def failure(cls, error):
        return cls(ok=False, error=error)


class BrowserDriver(Protocol):
    def locate(self, strategy: LocatorStrategy, value: str) -> ActionResult: ...
    def locate_within(self, element: Any, strategy: LocatorStrategy, value: str) -> ActionResult: ...
    def clear(self, element: Any) -> ActionResult: ...
    def click(self, element: Any) -> ActionResult: ...
    def send_keys(self, element: Any, text: str) -> ActionResult: ...
    def submit(self, element: Any) -> ActionResult: ...
    def execute_script(self, script: str, element: Any = None) -> ActionResult: ...
    def select_by_text(self, element: Any, text: str) -> ActionResult: ...
    def select_by_value(self, element: Any, value: str) -> ActionResult: ...


def error_message(exc: Exception) -> str:
    """Selenium keeps the readable part of its errors in `msg`."""
    if isinstance(exc, WebDriverException) and exc.msg:
        return exc.msg
    return str(exc) or exc.__class__.__name__


class SeleniumDriver:
    """BrowserDriver over a live Selenium WebDriver."""

    def __init__(self, driver):
        self.driver = driver

    def _call(self, action, *args):
        try:
            return ActionResult.success(action(*args))
        except Exception as e:
            logger.debug("Selenium call %s failed: %s", getattr(action, "__name__", action), e)
            return ActionResult.failure(error_message(e))

    # --- Locating ---

    def locate(self, strategy, value):
        return self._call(self.driver.find_element, LocatorStrategy.parse(strategy).value, value)

    def locate_within(self, element: WebElement, strategy, value):
        return self._call(element.find_element, LocatorStrategy.parse(strategy).value, value)

    # --- Element actions ---

    def clear(self, element: WebElement):
        return self._call(element.clear)

    def click(self, element: WebElement):
        return self._call(element.click)

    def send_keys(self, element: WebElement, text):
        return self._call(element.send_keys, text)

    def submit(self, element: WebElement):
        return self._call(element.submit)

    # --- Scripts ---

    def execute_script(self, script, element: Optional[WebElement] = None):
        run = getattr(self.driver, "execute_script", None)
        if run is None:
            return ActionResult.failure("The driver does not support JavaScript execution.")
        if element is None:
            return self._call(run, script)
        return self._call(run, script, element)

    # --- Dropdowns ---

    def select_by_text(self, element: WebElement, text):
        return self._call(lambda: Select(element).select_by_visible_text(text))

    def select_by_value(self, element: WebElement, value):
        return self._call(lambda: Select(element).select_by_value(value))


def create_webdriver(settings):
    """Starts the browser described by the settings."""
    if settings.browser == "firefox":
        options = webdriver.FirefoxOptions()
        factory = webdriver.Firefox
    else:
        options = webdriver.ChromeOptions()
        factory = webdriver.Chrome

    if settings.headless:
        options.add_argument("--headless=new" if factory is webdriver.Chrome else "--headless")
    for arg in settings.browser_args:
        options.add_argument(arg)

    logger.info("Starting %s (headless=%s)", settings.browser, settings.headless)
    return factory(options=options)
