"""
================================================================================
Locator Resolver
================================================================================

Binds symbolic element references ("login.username_input") to live
Playwright locators on the active page.

    - Reference parsing happens before any catalog lookup or browser call
    - Selectors come from an injected LocatorCatalog
    - Every call re-resolves a fresh Locator (PolicyCenter re-renders whole
      screen fragments on AJAX postbacks, so handles are never cached)
    - Waits for the requested state, then scrolls the element into view

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from typing import Optional, Union

from loguru import logger
from playwright.async_api import Error as PlaywrightError
from playwright.async_api import FrameLocator, Locator, Page
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from .element_reference import ElementReference
from .exceptions import InteractionError, LocatorNotFoundError, ResolutionTimeoutError
from .locator_catalog import LocatorCatalog


DEFAULT_TIMEOUT = 30000
ELEMENT_STATES = ("visible", "hidden", "attached", "detached")

# Upper bound for the post-resolution scroll
SCROLL_TIMEOUT = 2000


class PageContext:
    """
    Holds the single active page targeted by the interaction layer.

    Switching tabs or windows overwrites the reference; there is no history.
    """

    def __init__(self, page: Page):
        self.page = page

    def switch(self, page: Page) -> None:
        self.page = page

    def __repr__(self) -> str:
        return f"PageContext(url={getattr(self.page, 'url', None)!r})"


class LocatorResolver:
    """
    Resolves ``page.element`` references against a LocatorCatalog.

    Usage:
        >>> resolver = LocatorResolver(catalog, PageContext(page))
        >>> locator = await resolver.resolve("login.username_input")
        >>> await locator.fill("su")
    """

    def __init__(
        self,
        catalog: LocatorCatalog,
        context: PageContext,
        default_timeout: int = DEFAULT_TIMEOUT,
    ):
        """
        Args:
            catalog: Locator catalog built at startup
            context: Active page holder shared with the interaction layer
            default_timeout: Wait timeout in milliseconds when none is given
        """
        self.catalog = catalog
        self.context = context
        self.default_timeout = default_timeout

    @property
    def page(self) -> Page:
        return self.context.page

    def selector_for(self, reference: Union[str, ElementReference]) -> str:
        """
        Look up the raw selector of a reference without touching the browser.

        Raises:
            InvalidReferenceError: If the reference is malformed
            LocatorNotFoundError: If the catalog has no such element
        """
        ref = reference if isinstance(reference, ElementReference) else ElementReference.parse(reference)
        selector = self.catalog.selector_for(ref.page_name, ref.element_name)
        if selector is None:
            raise LocatorNotFoundError(ref.page_name, ref.element_name)
        return selector

    def locator(
        self,
        reference: Union[str, ElementReference],
        root: Optional[Union[Page, FrameLocator]] = None,
    ) -> Locator:
        """Build an unresolved Locator for a reference (no waiting)."""
        selector = self.selector_for(reference)
        return (root or self.page).locator(selector)

    async def resolve(
        self,
        reference: Union[str, ElementReference],
        state: str = "visible",
        timeout: Optional[int] = None,
        root: Optional[Union[Page, FrameLocator]] = None,
    ) -> Locator:
        """
        Resolve a reference to a Locator that has reached ``state``.

        Args:
            reference: "pageName.elementName" or a parsed ElementReference
            state: One of 'visible', 'hidden', 'attached', 'detached'
            timeout: Wait timeout in milliseconds (default_timeout if None)
            root: Page or FrameLocator to search in (active page if None)

        Returns:
            Playwright Locator bound to the element's selector

        Raises:
            InvalidReferenceError: Malformed reference (no browser call made)
            LocatorNotFoundError: Element not declared in the catalog
            ResolutionTimeoutError: Element did not reach the state in time
            InteractionError: The browser rejected the wait (strict mode
                violation, closed target)
        """
        if state not in ELEMENT_STATES:
            raise ValueError(f"Unknown element state: {state}. Expected one of {ELEMENT_STATES}")

        ref = reference if isinstance(reference, ElementReference) else ElementReference.parse(reference)
        timeout = self.default_timeout if timeout is None else timeout

        logger.debug(
            f"Getting locator for element: {ref.element_name} in page: {ref.page_name}"
        )
        locator = self.locator(ref, root=root)

        try:
            await locator.wait_for(state=state, timeout=timeout)
        except PlaywrightTimeoutError as e:
            error = ResolutionTimeoutError(str(ref), state, timeout)
            logger.error(str(error))
            raise error from e
        except PlaywrightError as e:
            error = InteractionError(
                "wait for", str(ref), detail=f"state {state}: {str(e)[:120]}"
            )
            logger.error(str(error))
            raise error from e

        if state == "visible":
            await self._scroll_into_view(locator, ref)

        return locator

    async def _scroll_into_view(self, locator: Locator, ref: ElementReference) -> None:
        """Best-effort scroll; the element is already usable without it."""
        try:
            await locator.scroll_into_view_if_needed(timeout=SCROLL_TIMEOUT)
        except PlaywrightError as e:
            logger.debug(f"Could not scroll {ref} into view: {str(e)[:80]}")


class FrameScope:
    """
    Resolves references inside an iframe without changing the active page.

    Returned by ``WebInteractions.switch_to_frame``.
    """

    def __init__(self, resolver: LocatorResolver, frame_locator: FrameLocator, frame_selector: str):
        self.resolver = resolver
        self.frame_locator = frame_locator
        self.frame_selector = frame_selector

    def locator(self, reference: Union[str, ElementReference]) -> Locator:
        return self.resolver.locator(reference, root=self.frame_locator)

    async def resolve(
        self,
        reference: Union[str, ElementReference],
        state: str = "visible",
        timeout: Optional[int] = None,
    ) -> Locator:
        return await self.resolver.resolve(reference, state, timeout, root=self.frame_locator)


__all__ = [
    "PageContext",
    "LocatorResolver",
    "FrameScope",
    "DEFAULT_TIMEOUT",
    "ELEMENT_STATES",
]
