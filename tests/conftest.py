"""Shared fixtures: a recording stand-in for the browser capability surface."""

import pytest

from browser_driver import ActionResult
from cascade_commands import CascadeCommands


class FakeElement:
    def __init__(self, name):
        self.name = name

    def __repr__(self):
        return f"FakeElement({self.name!r})"


class FakeDriver:
    """BrowserDriver double.

    `elements` maps (strategy value, locator) to an element; anything else is
    "no such element". Actions listed in `failing` return a failure.
    """

    def __init__(self, elements=None, children=None, failing=None):
        self.elements = elements or {}
        self.children = children or {}
        self.failing = failing or {}
        self.calls = []

    def _result(self, name, value=None):
        if name in self.failing:
            return ActionResult.failure(self.failing[name])
        return ActionResult.success(value)

    def locate(self, strategy, value):
        self.calls.append(("locate", strategy.value, value))
        element = self.elements.get((strategy.value, value))
        if element is None:
            return ActionResult.failure(f"no such element: {value}")
        return ActionResult.success(element)

    def locate_within(self, element, strategy, value):
        self.calls.append(("locate_within", element, strategy.value, value))
        child = self.children.get((element.name, strategy.value, value))
        if child is None:
            return ActionResult.failure(f"no such element: {value}")
        return ActionResult.success(child)

    def clear(self, element):
        self.calls.append(("clear", element))
        return self._result("clear")

    def click(self, element):
        self.calls.append(("click", element))
        return self._result("click")

    def send_keys(self, element, text):
        self.calls.append(("send_keys", element, text))
        return self._result("send_keys")

    def submit(self, element):
        self.calls.append(("submit", element))
        return self._result("submit")

    def execute_script(self, script, element=None):
        self.calls.append(("execute_script", script, element))
        return self._result("execute_script", "script result")

    def select_by_text(self, element, text):
        self.calls.append(("select_by_text", element, text))
        return self._result("select_by_text")

    def select_by_value(self, element, value):
        self.calls.append(("select_by_value", element, value))
        return self._result("select_by_value")


@pytest.fixture
def box():
    return FakeElement("box")


@pytest.fixture
def driver(box):
    return FakeDriver(elements={("id", "box"): box})


@pytest.fixture
def session(driver):
    return CascadeCommands(driver)
