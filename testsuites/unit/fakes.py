"""
In-memory stand-ins for the Playwright objects the framework touches.

A FakePage holds FakeElements keyed by selector. Locators built from the
page look the selector up when awaited, so tests control visibility,
values and failures per element without a browser.
"""

from typing import Any, Dict, List, Optional

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from testsuites.ui_testing.framework.locator_catalog import LocatorCatalog


class FakeElement:
    def __init__(
        self,
        text: str = "",
        value: str = "",
        visible: bool = True,
        enabled: bool = True,
        checked: bool = False,
        attributes: Optional[Dict[str, str]] = None,
        styles: Optional[Dict[str, str]] = None,
        options: Optional[List[str]] = None,
        errors: Optional[Dict[str, Exception]] = None,
    ):
        self.text = text
        self.value = value
        self.visible = visible
        self.enabled = enabled
        self.checked = checked
        self.attributes = attributes or {}
        self.styles = styles or {}
        self.options = options or []
        # method name -> exception raised when that method is called
        self.errors = errors or {}
        self.events: List[str] = []


class FakeLocator:
    def __init__(self, page: "FakePage", selector: str):
        self.page = page
        self.selector = selector

    @property
    def element(self) -> Optional[FakeElement]:
        return self.page.elements.get(self.selector)

    @property
    def first(self) -> "FakeLocator":
        return self

    def locator(self, selector: str) -> "FakeLocator":
        return FakeLocator(self.page, f"{self.selector} >> {selector}")

    def _act(self, name: str, *args, **kwargs) -> FakeElement:
        self.page.calls.append((name, self.selector, args, kwargs))
        element = self.element
        if element is None:
            raise PlaywrightTimeoutError(f"Timeout exceeded waiting for {self.selector}")
        if name in element.errors:
            raise element.errors[name]
        return element

    async def wait_for(self, state: str = "visible", timeout: Optional[float] = None) -> None:
        self.page.calls.append(("wait_for", self.selector, (), {"state": state, "timeout": timeout}))
        element = self.element
        if element is not None and "wait_for" in element.errors:
            raise element.errors["wait_for"]
        reached = {
            "visible": element is not None and element.visible,
            "hidden": element is None or not element.visible,
            "attached": element is not None,
            "detached": element is None,
        }[state]
        if not reached:
            raise PlaywrightTimeoutError(
                f"Timeout {timeout}ms exceeded waiting for {self.selector} to be {state}"
            )

    async def scroll_into_view_if_needed(self, timeout: Optional[float] = None) -> None:
        self._act("scroll_into_view_if_needed", timeout=timeout)

    async def click(self, **kwargs) -> None:
        self._act("click", **kwargs)

    async def dblclick(self) -> None:
        self._act("dblclick")

    async def hover(self) -> None:
        self._act("hover")

    async def focus(self) -> None:
        self._act("focus")

    async def drag_to(self, target: "FakeLocator") -> None:
        self._act("drag_to", target.selector)

    async def fill(self, value: str) -> None:
        self._act("fill", value).value = value

    async def clear(self) -> None:
        self._act("clear").value = ""

    async def press_sequentially(self, text: str, delay: float = 0) -> None:
        element = self._act("press_sequentially", text, delay=delay)
        element.value += text

    async def evaluate(self, script: str, arg: Any = None) -> Any:
        element = self._act("evaluate", script, arg)
        if "dispatchEvent" in script:
            element.value = arg
            element.events.extend(["input", "change"])
            return None
        if "getComputedStyle" in script:
            return element.styles.get(arg, "")
        return None

    async def check(self) -> None:
        self._act("check").checked = True

    async def uncheck(self) -> None:
        self._act("uncheck").checked = False

    async def select_option(self, **kwargs) -> List[str]:
        self._act("select_option", **kwargs)
        return list(kwargs.values())

    async def set_input_files(self, files: Any) -> None:
        self._act("set_input_files", files)

    async def is_visible(self) -> bool:
        return self._act("is_visible").visible

    async def is_enabled(self) -> bool:
        return self._act("is_enabled").enabled

    async def is_checked(self) -> bool:
        return self._act("is_checked").checked

    async def get_attribute(self, name: str) -> Optional[str]:
        return self._act("get_attribute", name).attributes.get(name)

    async def text_content(self) -> str:
        return self._act("text_content").text

    async def input_value(self) -> str:
        return self._act("input_value").value

    async def count(self) -> int:
        self.page.calls.append(("count", self.selector, (), {}))
        if self.selector in self.page.counts:
            return self.page.counts[self.selector]
        return 1 if self.element is not None else 0

    async def all_text_contents(self) -> List[str]:
        self.page.calls.append(("all_text_contents", self.selector, (), {}))
        if self.selector in self.page.texts:
            return list(self.page.texts[self.selector])
        if self.selector.endswith(" >> option") and self.selector[:-10] in self.page.elements:
            return list(self.page.elements[self.selector[:-10]].options)
        return [self.element.text] if self.element is not None else []


class FakeFrameLocator:
    def __init__(self, page: "FakePage", selector: str):
        self.page = page
        self.selector = selector

    def locator(self, selector: str) -> FakeLocator:
        return FakeLocator(self.page, f"{self.selector} >> {selector}")


class FakeKeyboard:
    def __init__(self):
        self.pressed: List[str] = []

    async def press(self, keys: str) -> None:
        self.pressed.append(keys)


class FakeContext:
    def __init__(self):
        self.pages: List["FakePage"] = []


class FakePage:
    def __init__(
        self,
        elements: Optional[Dict[str, FakeElement]] = None,
        url: str = "https://pc.example.com/pc/",
        title: str = "Guidewire PolicyCenter",
        context: Optional[FakeContext] = None,
    ):
        self.elements: Dict[str, FakeElement] = elements or {}
        self.url = url
        self._title = title
        self.counts: Dict[str, int] = {}
        self.texts: Dict[str, List[str]] = {}
        self.frames: Dict[str, str] = {}
        self.main_frame = f"main-frame:{url}"
        self.calls: List[tuple] = []
        self.keyboard = FakeKeyboard()
        self.context = context or FakeContext()
        self.context.pages.append(self)
        self.load_state_error: Optional[Exception] = None
        self.function_error: Optional[Exception] = None

    def locator(self, selector: str) -> FakeLocator:
        return FakeLocator(self, selector)

    def frame_locator(self, selector: str) -> FakeFrameLocator:
        return FakeFrameLocator(self, selector)

    def frame(self, name: Optional[str] = None, url: Optional[str] = None) -> Optional[str]:
        return self.frames.get(name or url)

    async def title(self) -> str:
        return self._title

    async def goto(self, url: str, wait_until: str = "load") -> None:
        self.calls.append(("goto", url, (), {"wait_until": wait_until}))
        self.url = url

    async def wait_for_function(self, script: str, timeout: Optional[float] = None) -> None:
        self.calls.append(("wait_for_function", script, (), {"timeout": timeout}))
        if self.function_error is not None:
            raise self.function_error

    async def wait_for_load_state(self, state: str = "load", timeout: Optional[float] = None) -> None:
        self.calls.append(("wait_for_load_state", state, (), {"timeout": timeout}))
        if self.load_state_error is not None:
            raise self.load_state_error

    async def screenshot(self, path: Optional[str] = None, full_page: bool = False) -> bytes:
        self.calls.append(("screenshot", path, (), {"full_page": full_page}))
        return b"\x89PNG"

    def called(self, name: str) -> List[tuple]:
        """Recorded calls of one method, as (selector, args, kwargs)."""
        return [call[1:] for call in self.calls if call[0] == name]


class SpyCatalog(LocatorCatalog):
    """LocatorCatalog that records lookups."""

    def __init__(self, pages=None):
        super().__init__(pages)
        self.lookups: List[tuple] = []

    def selector_for(self, page_name: str, element_name: str) -> Optional[str]:
        self.lookups.append((page_name, element_name))
        return super().selector_for(page_name, element_name)


def playwright_error(message: str = "Element is not an <input>") -> PlaywrightError:
    return PlaywrightError(message)
