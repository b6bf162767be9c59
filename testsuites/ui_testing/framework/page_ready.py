"""
Page readiness predicates.

PolicyCenter has no single "page loaded" signal: most screens are AJAX
postbacks that show a click overlay while the server renders, some
flows only settle once the network is idle, and a few are best detected
by a specific element appearing or disappearing. Each Page Object picks
the predicate that fits its screen (``BasePage.PAGE_READY``).

A predicate is an async callable taking the ``WebInteractions`` instance
and returning once the screen is settled; it raises on timeout.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Awaitable, Callable

from loguru import logger
from playwright.async_api import Error as PlaywrightError

from .exceptions import InteractionError

if TYPE_CHECKING:
    from .web_interactions import WebInteractions


ReadyPredicate = Callable[["WebInteractions"], Awaitable[None]]

# Guidewire renders these while a server round-trip is in flight
PROCESSING_SELECTORS = (".gw-click-overlay", ".gw-processing")

DEFAULT_READY_TIMEOUT = 30000


def no_processing_overlay(timeout: int = DEFAULT_READY_TIMEOUT) -> ReadyPredicate:
    """Ready when no Guidewire click overlay / processing indicator is present."""
    script = "() => " + " && ".join(
        f"!document.querySelector('{selector}')" for selector in PROCESSING_SELECTORS
    )

    async def predicate(web: "WebInteractions") -> None:
        try:
            await web.page.wait_for_function(script, timeout=timeout)
        except PlaywrightError as e:
            error = InteractionError(
                "wait for processing overlay to clear", detail=f"timeout={timeout}ms"
            )
            logger.error(f"{error}: {str(e)[:120]}")
            raise error from e

    predicate.__name__ = "no_processing_overlay"
    return predicate


def network_idle(timeout: int = DEFAULT_READY_TIMEOUT) -> ReadyPredicate:
    """Ready when the page has had no network connections for 500ms."""

    async def predicate(web: "WebInteractions") -> None:
        await web.wait_for_network_idle(timeout)

    predicate.__name__ = "network_idle"
    return predicate


def element_hidden(element: str, timeout: int = DEFAULT_READY_TIMEOUT) -> ReadyPredicate:
    """Ready when ``element`` (e.g. a spinner or success toast) is hidden."""

    async def predicate(web: "WebInteractions") -> None:
        await web.wait_for_element(element, state="hidden", timeout=timeout)

    predicate.__name__ = f"element_hidden({element})"
    return predicate


def element_visible(element: str, timeout: int = DEFAULT_READY_TIMEOUT) -> ReadyPredicate:
    """Ready when ``element`` (a screen-specific landmark) is visible."""

    async def predicate(web: "WebInteractions") -> None:
        await web.wait_for_element(element, state="visible", timeout=timeout)

    predicate.__name__ = f"element_visible({element})"
    return predicate


def all_of(*predicates: ReadyPredicate) -> ReadyPredicate:
    """Ready when every predicate holds, evaluated in order."""

    async def predicate(web: "WebInteractions") -> None:
        for sub in predicates:
            logger.debug(f"Waiting for readiness: {getattr(sub, '__name__', sub)}")
            await sub(web)

    predicate.__name__ = "all_of(" + ", ".join(getattr(p, "__name__", "?") for p in predicates) + ")"
    return predicate


__all__ = [
    "ReadyPredicate",
    "no_processing_overlay",
    "network_idle",
    "element_hidden",
    "element_visible",
    "all_of",
    "PROCESSING_SELECTORS",
]
