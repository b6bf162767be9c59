# ================================================================================
# Web Interactions Module
# ================================================================================
#
# User-level element operations addressed by "page.element" references.
#
# Key Features:
#   - Every action re-resolves its target through the LocatorResolver
#   - Uniform error wrapping (action + page + element, cause chained)
#   - Native fill with a DOM value-assignment fallback
#   - Boolean probes that fail closed instead of raising
#   - Tab / window / frame switching on a single active page reference
#   - Allure step integration
#
# ================================================================================

from __future__ import annotations

from contextlib import asynccontextmanager
from pathlib import Path
from typing import TYPE_CHECKING, AsyncIterator, Awaitable, Callable, List, Optional, Union

import allure
from loguru import logger
from playwright.async_api import Error as PlaywrightError
from playwright.async_api import Frame, Locator, Page

from .element_reference import ElementReference
from .exceptions import AutomationError, ContextSwitchError, InteractionError
from .locator_catalog import LocatorCatalog
from .locator_resolver import DEFAULT_TIMEOUT, FrameScope, LocatorResolver, PageContext

if TYPE_CHECKING:
    from .page_ready import ReadyPredicate


# Assigns the value directly and fires the events frameworks listen to.
SET_VALUE_SCRIPT = """(el, value) => {
    el.value = value;
    el.dispatchEvent(new Event('input', { bubbles: true }));
    el.dispatchEvent(new Event('change', { bubbles: true }));
}"""

COMPUTED_STYLE_SCRIPT = "(el, prop) => window.getComputedStyle(el).getPropertyValue(prop)"


class WebInteractions:
    """
    Interaction layer shared by all Page Objects of one scenario.

    Example:
        web = WebInteractions(page, catalog)
        await web.fill("login.username_input", "su")
        await web.click("login.login_button")
        if await web.is_visible("header.settings_button", timeout=5000):
            ...
    """

    def __init__(
        self,
        page: Page,
        catalog: LocatorCatalog,
        default_timeout: int = DEFAULT_TIMEOUT,
    ):
        """
        Args:
            page: Playwright Page that becomes the active page
            catalog: Locator catalog built at startup
            default_timeout: Element wait timeout in milliseconds
        """
        self.context = PageContext(page)
        self.catalog = catalog
        self.default_timeout = default_timeout
        self.resolver = LocatorResolver(catalog, self.context, default_timeout)

    @property
    def page(self) -> Page:
        """Currently active page."""
        return self.context.page

    # =========================================================================
    # Internals
    # =========================================================================

    async def _resolve(self, element: str, timeout: Optional[int] = None) -> Locator:
        return await self.resolver.resolve(element, "visible", timeout)

    @asynccontextmanager
    async def _action(
        self,
        action: str,
        element: Optional[str] = None,
        detail: str = "",
    ) -> AsyncIterator[None]:
        """
        Run an action inside an Allure step and normalise its failure.

        Framework errors already name the page and element and pass through;
        anything else is wrapped in InteractionError.
        """
        title = f"{action.capitalize()}: {element}" if element else action.capitalize()
        with allure.step(title):
            try:
                yield
            except AutomationError as e:
                logger.error(f"Failed to {action} {element or ''}: {e}")
                raise
            except Exception as e:
                error = InteractionError(action, element, detail)
                logger.error(f"{error}: {str(e)[:200]}")
                raise error from e

    async def _probe(
        self,
        description: str,
        element: str,
        check: Callable[[Locator], Awaitable[bool]],
        timeout: Optional[int] = None,
    ) -> bool:
        try:
            locator = await self._resolve(element, timeout)
            return bool(await check(locator))
        except (AutomationError, PlaywrightError) as e:
            logger.debug(f"Probe '{description}' on {element} returned False: {str(e)[:120]}")
            return False

    # =========================================================================
    # Waits
    # =========================================================================

    async def wait_for_element(
        self,
        element: str,
        state: str = "visible",
        timeout: Optional[int] = None,
    ) -> Locator:
        """
        Wait for an element to reach a state.

        Args:
            element: "page.element" reference
            state: 'visible', 'hidden', 'attached' or 'detached'
            timeout: Timeout in milliseconds
        """
        logger.debug(f"Waiting for {element} to be {state}")
        return await self.resolver.resolve(element, state, timeout)

    async def wait_for_network_idle(self, timeout: Optional[int] = None) -> None:
        """Wait until the active page has no network activity."""
        timeout = self.default_timeout if timeout is None else timeout
        async with self._action("wait for network idle"):
            await self.page.wait_for_load_state("networkidle", timeout=timeout)

    async def wait_for_page_ready(self, predicate: "ReadyPredicate") -> None:
        """Block until a page readiness predicate holds."""
        await predicate(self)

    # =========================================================================
    # Mouse Actions
    # =========================================================================

    async def click(self, element: str, timeout: Optional[int] = None, **kwargs) -> None:
        """
        Click an element.

        Args:
            element: "page.element" reference
            timeout: Resolution timeout in milliseconds
            **kwargs: Extra options for Locator.click (force, modifiers, ...)
        """
        logger.debug(f"Clicking on element: {element}")
        async with self._action("click", element):
            locator = await self._resolve(element, timeout)
            await locator.click(**kwargs)

    async def double_click(self, element: str, timeout: Optional[int] = None) -> None:
        logger.debug(f"Double clicking on element: {element}")
        async with self._action("double click", element):
            locator = await self._resolve(element, timeout)
            await locator.dblclick()

    async def right_click(self, element: str, timeout: Optional[int] = None) -> None:
        logger.debug(f"Right clicking on element: {element}")
        async with self._action("right click", element):
            locator = await self._resolve(element, timeout)
            await locator.click(button="right")

    async def hover(self, element: str, timeout: Optional[int] = None) -> None:
        logger.debug(f"Hovering over element: {element}")
        async with self._action("hover over", element):
            locator = await self._resolve(element, timeout)
            await locator.hover()

    async def focus(self, element: str, timeout: Optional[int] = None) -> None:
        logger.debug(f"Focusing on element: {element}")
        async with self._action("focus on", element):
            locator = await self._resolve(element, timeout)
            await locator.focus()

    async def scroll_to_element(self, element: str, timeout: Optional[int] = None) -> None:
        logger.debug(f"Scrolling to element: {element}")
        async with self._action("scroll to", element):
            locator = await self._resolve(element, timeout)
            await locator.scroll_into_view_if_needed()

    async def drag_and_drop(
        self,
        source: str,
        target: str,
        timeout: Optional[int] = None,
    ) -> None:
        """Drag ``source`` and drop it onto ``target``."""
        logger.debug(f"Dragging element: {source} onto element: {target}")
        async with self._action("drag and drop", source, detail=f"target: {target}"):
            source_locator = await self._resolve(source, timeout)
            target_locator = await self._resolve(target, timeout)
            await source_locator.drag_to(target_locator)

    # =========================================================================
    # Container-scoped Targets
    # =========================================================================

    async def wait_within(
        self,
        container: str,
        selector: str,
        state: str = "visible",
        timeout: Optional[int] = None,
    ) -> Locator:
        """
        Wait for a dynamic child of a declared container.

        Used for targets whose selector depends on test data, such as a
        table row holding a given account number.

        Args:
            container: "page.element" reference of the container
            selector: Selector relative to the container
            state: State the child must reach
            timeout: Timeout in milliseconds
        """
        timeout = self.default_timeout if timeout is None else timeout
        logger.debug(f"Waiting for '{selector}' within {container} to be {state}")
        async with self._action("find child of", container, detail=selector):
            parent = await self._resolve(container, timeout)
            child = parent.locator(selector).first
            await child.wait_for(state=state, timeout=timeout)
        return child

    async def click_within(
        self,
        container: str,
        selector: str,
        timeout: Optional[int] = None,
    ) -> None:
        """Click the first child of ``container`` matching ``selector``."""
        timeout = self.default_timeout if timeout is None else timeout
        logger.debug(f"Clicking '{selector}' within element: {container}")
        async with self._action("click child of", container, detail=selector):
            parent = await self._resolve(container, timeout)
            await parent.locator(selector).first.click(timeout=timeout)

    # =========================================================================
    # Keyboard / Text Input
    # =========================================================================

    async def fill(self, element: str, text: str, timeout: Optional[int] = None) -> None:
        """
        Fill an input with text.

        When Playwright's native fill is rejected by the element (custom
        styled Guidewire inputs), the value is assigned on the DOM node and
        ``input`` / ``change`` events are dispatched instead.

        Args:
            element: "page.element" reference
            text: Value to enter
            timeout: Resolution timeout in milliseconds
        """
        shown = "*" * len(text) if "password" in element.lower() else text
        logger.debug(f"Typing text: {shown} into element: {element}")
        async with self._action("type text into", element):
            locator = await self._resolve(element, timeout)
            try:
                await locator.fill(text)
            except PlaywrightError as e:
                logger.warning(
                    f"Native fill failed for {element}, assigning value via DOM: {str(e)[:120]}"
                )
                await locator.evaluate(SET_VALUE_SCRIPT, text)

    type = fill

    async def type_currency_field(self, element: str, value: str, timeout: Optional[int] = None) -> None:
        """Fill a currency input (same fallback behaviour as ``fill``)."""
        await self.fill(element, value, timeout)

    async def type_sequentially(
        self,
        element: str,
        text: str,
        delay: int = 50,
        timeout: Optional[int] = None,
    ) -> None:
        """Type character by character for inputs that react to key events."""
        logger.debug(f"Typing sequentially into element: {element}")
        async with self._action("type sequentially into", element):
            locator = await self._resolve(element, timeout)
            await locator.click()
            await locator.press_sequentially(text, delay=delay)

    async def clear(self, element: str, timeout: Optional[int] = None) -> None:
        logger.debug(f"Clearing text from element: {element}")
        async with self._action("clear text from", element):
            locator = await self._resolve(element, timeout)
            await locator.clear()

    async def press_key(
        self,
        element: Optional[str],
        keys: str,
        timeout: Optional[int] = None,
    ) -> None:
        """
        Press a key or chord ("Enter", "Control+A").

        Args:
            element: Reference to focus first, or None for the page
            keys: Key expression understood by Playwright's keyboard
        """
        logger.debug(f"Pressing key(s): {keys} on {element or 'the page'}")
        async with self._action("press key(s) on", element, detail=keys):
            if element:
                locator = await self._resolve(element, timeout)
                await locator.focus()
            await self.page.keyboard.press(keys)

    # =========================================================================
    # Checkbox / Dropdown
    # =========================================================================

    async def check(self, element: str, timeout: Optional[int] = None) -> None:
        logger.debug(f"Checking element: {element}")
        async with self._action("check", element):
            locator = await self._resolve(element, timeout)
            await locator.check()

    async def uncheck(self, element: str, timeout: Optional[int] = None) -> None:
        logger.debug(f"Unchecking element: {element}")
        async with self._action("uncheck", element):
            locator = await self._resolve(element, timeout)
            await locator.uncheck()

    async def toggle(self, element: str, timeout: Optional[int] = None) -> None:
        logger.debug(f"Toggling element: {element}")
        async with self._action("toggle", element):
            locator = await self._resolve(element, timeout)
            if await locator.is_checked():
                await locator.uncheck()
            else:
                await locator.check()

    async def set_checked(self, element: str, checked: bool, timeout: Optional[int] = None) -> None:
        """Check or uncheck depending on ``checked``."""
        if checked:
            await self.check(element, timeout)
        else:
            await self.uncheck(element, timeout)

    async def select_by_text(self, element: str, option: str, timeout: Optional[int] = None) -> None:
        logger.debug(f"Selecting option: {option} from dropdown: {element}")
        async with self._action("select option from", element, detail=f"label: {option}"):
            locator = await self._resolve(element, timeout)
            await locator.select_option(label=option)

    async def select_by_value(self, element: str, value: str, timeout: Optional[int] = None) -> None:
        logger.debug(f"Selecting value: {value} from dropdown: {element}")
        async with self._action("select value from", element, detail=f"value: {value}"):
            locator = await self._resolve(element, timeout)
            await locator.select_option(value=value)

    async def select_by_index(self, element: str, index: int, timeout: Optional[int] = None) -> None:
        logger.debug(f"Selecting index: {index} from dropdown: {element}")
        async with self._action("select index from", element, detail=f"index: {index}"):
            locator = await self._resolve(element, timeout)
            await locator.select_option(index=index)

    async def get_dropdown_options(self, element: str, timeout: Optional[int] = None) -> List[str]:
        """Return the visible labels of a <select> element's options."""
        async with self._action("get options from", element):
            locator = await self._resolve(element, timeout)
            options = await locator.locator("option").all_text_contents()
        return [option.strip() for option in options]

    # =========================================================================
    # File Inputs
    # =========================================================================

    async def upload_file(
        self,
        element: str,
        file_path: Union[str, Path],
        timeout: Optional[int] = None,
    ) -> None:
        resolved = Path(file_path).resolve()
        logger.debug(f"Uploading file: {resolved} to element: {element}")
        async with self._action("upload file to", element, detail=str(resolved)):
            locator = await self._resolve(element, timeout)
            await locator.set_input_files(str(resolved))

    async def clear_file_input(self, element: str, timeout: Optional[int] = None) -> None:
        logger.debug(f"Clearing file input for element: {element}")
        async with self._action("clear file input for", element):
            locator = await self._resolve(element, timeout)
            await locator.set_input_files([])

    # =========================================================================
    # Reads
    # =========================================================================

    async def get_text(self, element: str, timeout: Optional[int] = None) -> str:
        async with self._action("get text from", element):
            locator = await self._resolve(element, timeout)
            text = await locator.text_content()
        logger.debug(f"Got text from {element}: '{text}'")
        return text or ""

    async def get_input_value(self, element: str, timeout: Optional[int] = None) -> str:
        async with self._action("get value from", element):
            locator = await self._resolve(element, timeout)
            return await locator.input_value()

    async def get_attribute(
        self,
        element: str,
        attribute: str,
        timeout: Optional[int] = None,
    ) -> Optional[str]:
        async with self._action("get attribute from", element, detail=attribute):
            locator = await self._resolve(element, timeout)
            return await locator.get_attribute(attribute)

    async def get_css_value(
        self,
        element: str,
        css_property: str,
        timeout: Optional[int] = None,
    ) -> str:
        async with self._action("get CSS property from", element, detail=css_property):
            locator = await self._resolve(element, timeout)
            return await locator.evaluate(COMPUTED_STYLE_SCRIPT, css_property)

    async def get_element_count(self, element: str) -> int:
        """
        Count elements matching a reference.

        Does not wait: zero is a valid answer and multiple matches cannot
        satisfy a single-element wait.
        """
        async with self._action("count", element):
            return await self.resolver.locator(element).count()

    async def get_all_text_contents(self, element: str) -> List[str]:
        """Text content of every element matching a reference (no waiting)."""
        async with self._action("get all text contents from", element):
            return await self.resolver.locator(element).all_text_contents()

    # =========================================================================
    # Probes (fail closed)
    # =========================================================================

    async def is_visible(self, element: str, timeout: Optional[int] = None) -> bool:
        return await self._probe("visible", element, lambda loc: loc.is_visible(), timeout)

    async def is_enabled(self, element: str, timeout: Optional[int] = None) -> bool:
        return await self._probe("enabled", element, lambda loc: loc.is_enabled(), timeout)

    async def is_checked(self, element: str, timeout: Optional[int] = None) -> bool:
        return await self._probe("checked", element, lambda loc: loc.is_checked(), timeout)

    async def has_attribute(
        self,
        element: str,
        attribute: str,
        timeout: Optional[int] = None,
    ) -> bool:
        async def check(locator: Locator) -> bool:
            return await locator.get_attribute(attribute) is not None

        return await self._probe(f"has attribute {attribute}", element, check, timeout)

    async def has_class(self, element: str, class_name: str, timeout: Optional[int] = None) -> bool:
        async def check(locator: Locator) -> bool:
            classes = await locator.get_attribute("class")
            return bool(classes) and class_name in classes.split()

        return await self._probe(f"has class {class_name}", element, check, timeout)

    # =========================================================================
    # Tabs, Windows and Frames
    # =========================================================================

    def get_all_tabs(self) -> List[Page]:
        """Pages open in the active page's browser context."""
        return list(self.page.context.pages)

    get_all_windows = get_all_tabs

    def _switch_to_index(self, kind: str, index: int) -> Page:
        logger.debug(f"Switching to {kind} at index: {index}")
        pages = self.get_all_tabs()
        if index < 0 or index >= len(pages):
            error = ContextSwitchError(
                f"{kind.capitalize()} index out of bounds: {index} (open: {len(pages)})"
            )
            logger.error(str(error))
            raise error
        self.context.switch(pages[index])
        return pages[index]

    def switch_to_tab(self, index: int) -> Page:
        """Make the tab at ``index`` the active page."""
        return self._switch_to_index("tab", index)

    def switch_to_window(self, index: int) -> Page:
        """Make the window at ``index`` the active page."""
        return self._switch_to_index("window", index)

    async def switch_to_tab_by_title(self, title: str) -> Page:
        logger.debug(f"Switching to tab with title: {title}")
        for tab in self.get_all_tabs():
            if await tab.title() == title:
                self.context.switch(tab)
                return tab
        error = ContextSwitchError(f"No tab found with title: {title}")
        logger.error(str(error))
        raise error

    async def switch_to_window_by_url(self, url: str) -> Page:
        logger.debug(f"Switching to window with URL: {url}")
        for window in self.get_all_tabs():
            if window.url == url:
                self.context.switch(window)
                return window
        error = ContextSwitchError(f"No window found with URL: {url}")
        logger.error(str(error))
        raise error

    def switch_to_frame(self, frame: str) -> FrameScope:
        """
        Scope element resolution to an iframe.

        The active page is unchanged; resolve elements through the returned
        FrameScope.

        Args:
            frame: "page.element" reference of the <iframe>
        """
        selector = self.resolver.selector_for(ElementReference.parse(frame))
        logger.debug(f"Switching to frame: {frame} ({selector})")
        return FrameScope(self.resolver, self.page.frame_locator(selector), selector)

    def switch_to_frame_by_name_or_url(self, name_or_url: str) -> Frame:
        logger.debug(f"Switching to frame by name or URL: {name_or_url}")
        frame = self.page.frame(name=name_or_url) or self.page.frame(url=name_or_url)
        if frame is None:
            error = ContextSwitchError(f"Frame not found: {name_or_url}")
            logger.error(str(error))
            raise error
        return frame

    def switch_to_main_frame(self) -> Frame:
        logger.debug("Switching back to the main frame")
        return self.page.main_frame


__all__ = [
    "WebInteractions",
    "SET_VALUE_SCRIPT",
]
