"""Tests for the Selenium adapter and locator strategies."""

from unittest.mock import MagicMock, patch

import pytest
from selenium.common.exceptions import NoSuchElementException
from selenium.webdriver.common.by import By

from browser_driver import ActionResult, LocatorStrategy, SeleniumDriver, create_webdriver
from settings import Settings


class TestLocatorStrategy:
    """Tests for LocatorStrategy.parse()."""

    @pytest.mark.parametrize(
        "text, expected",
        [
            ("id", LocatorStrategy.ID),
            ("css selector", LocatorStrategy.CSS_SELECTOR),
            ("CSS_SELECTOR", LocatorStrategy.CSS_SELECTOR),
            ("partial_link_text", LocatorStrategy.PARTIAL_LINK_TEXT),
            (By.XPATH, LocatorStrategy.XPATH),
            (LocatorStrategy.NAME, LocatorStrategy.NAME),
        ],
    )
    def test_parses_values_and_names(self, text, expected):
        """Both Selenium values and member names are accepted."""
        assert LocatorStrategy.parse(text) is expected

    def test_rejects_unknown(self):
        """Unknown strategies raise ValueError."""
        with pytest.raises(ValueError, match="Unknown locator strategy"):
            LocatorStrategy.parse("shadow root")

    def test_values_match_selenium(self):
        """Members can be handed straight to find_element."""
        assert LocatorStrategy.TAG_NAME.value == By.TAG_NAME
        assert LocatorStrategy.CLASS_NAME.value == By.CLASS_NAME


class TestActionResult:
    """Tests for the ActionResult constructors."""

    def test_success(self):
        result = ActionResult.success(42)
        assert result.ok is True
        assert result.value == 42
        assert result.error == ""

    def test_failure(self):
        result = ActionResult.failure("boom")
        assert result.ok is False
        assert result.value is None
        assert result.error == "boom"


class TestSeleniumDriver:
    """Tests for SeleniumDriver delegating to a WebDriver."""

    def test_locate_returns_element(self):
        """find_element is called with the Selenium strategy value."""
        webdriver = MagicMock()
        result = SeleniumDriver(webdriver).locate(LocatorStrategy.ID, "user")

        webdriver.find_element.assert_called_once_with(By.ID, "user")
        assert result.ok
        assert result.value is webdriver.find_element.return_value

    def test_locate_converts_selenium_errors(self):
        """Selenium's msg becomes the failure text."""
        webdriver = MagicMock()
        webdriver.find_element.side_effect = NoSuchElementException("Unable to locate element: #user")

        result = SeleniumDriver(webdriver).locate(LocatorStrategy.CSS_SELECTOR, "#user")

        assert result.ok is False
        assert result.error.startswith("Unable to locate element: #user")

    def test_any_error_is_converted(self):
        """Non-Selenium errors are captured as well."""
        element = MagicMock()
        element.click.side_effect = RuntimeError("socket closed")

        result = SeleniumDriver(MagicMock()).click(element)

        assert result == ActionResult.failure("socket closed")

    def test_locate_within_uses_element(self):
        """Inner lookups go through the parent element."""
        element = MagicMock()
        result = SeleniumDriver(MagicMock()).locate_within(element, LocatorStrategy.TAG_NAME, "input")

        element.find_element.assert_called_once_with(By.TAG_NAME, "input")
        assert result.value is element.find_element.return_value

    def test_element_actions(self):
        """clear, click, send_keys and submit reach the element."""
        element = MagicMock()
        driver = SeleniumDriver(MagicMock())

        assert driver.clear(element).ok
        assert driver.click(element).ok
        assert driver.send_keys(element, "hi").ok
        assert driver.submit(element).ok

        element.clear.assert_called_once_with()
        element.click.assert_called_once_with()
        element.send_keys.assert_called_once_with("hi")
        element.submit.assert_called_once_with()

    def test_execute_script_with_and_without_element(self):
        """The element is only passed when given."""
        webdriver = MagicMock()
        element = MagicMock()
        driver = SeleniumDriver(webdriver)

        driver.execute_script("return 1;")
        driver.execute_script("arguments[0].click();", element)

        assert webdriver.execute_script.call_args_list[0].args == ("return 1;",)
        assert webdriver.execute_script.call_args_list[1].args == ("arguments[0].click();", element)

    def test_execute_script_unsupported(self):
        """Drivers without execute_script fail instead of raising."""
        result = SeleniumDriver(object()).execute_script("return 1;")

        assert result.ok is False
        assert "does not support JavaScript" in result.error

    def test_selects_go_through_select(self):
        """Dropdown capabilities wrap the element in Select."""
        element = MagicMock()
        with patch("browser_driver.Select") as select:
            driver = SeleniumDriver(MagicMock())
            assert driver.select_by_text(element, "Blue").ok
            assert driver.select_by_value(element, "b").ok

        select.assert_called_with(element)
        select.return_value.select_by_visible_text.assert_called_once_with("Blue")
        select.return_value.select_by_value.assert_called_once_with("b")

    def test_select_on_non_select_element_fails(self):
        """Select's own validation error is reported as a failure."""
        element = MagicMock()
        element.tag_name = "div"

        result = SeleniumDriver(MagicMock()).select_by_value(element, "b")

        assert result.ok is False
        assert "select" in result.error.lower()


class TestCreateWebdriver:
    """Tests for create_webdriver()."""

    def test_chrome_with_options(self):
        """Headless and extra arguments land on ChromeOptions."""
        settings = Settings(headless=True, browser_args=["--window-size=800,600"])
        with patch("browser_driver.webdriver.Chrome") as chrome:
            create_webdriver(settings)

        options = chrome.call_args.kwargs["options"]
        assert "--headless=new" in options.arguments
        assert "--window-size=800,600" in options.arguments

    def test_firefox(self):
        """firefox picks the Firefox driver."""
        with patch("browser_driver.webdriver.Firefox") as firefox:
            create_webdriver(Settings(browser="firefox", headless=True, browser_args=[]))

        options = firefox.call_args.kwargs["options"]
        assert options.arguments == ["--headless"]
