"""
================================================================================
UI Testing Framework
================================================================================

Playwright-based UI automation framework for Guidewire PolicyCenter.

Components:
    - locator_catalog: Per-page YAML locator definitions, loaded once
    - element_reference: "page.element" reference parsing
    - locator_resolver: Reference -> live Playwright Locator
    - web_interactions: Resilient element operations used by page objects
    - page_ready: Page readiness predicates
    - page_base: Base page object
    - browser_manager: Browser lifecycle management

Author: Automation Team
License: MIT
================================================================================
"""

from .browser_manager import BrowserManager
from .element_reference import ElementReference
from .exceptions import (
    AutomationError,
    ConfigurationError,
    ContextSwitchError,
    InteractionError,
    InvalidReferenceError,
    LocatorNotFoundError,
    ResolutionTimeoutError,
)
from .locator_catalog import LocatorCatalog, LocatorEntry
from .locator_resolver import FrameScope, LocatorResolver, PageContext
from .page_base import BasePage
from .web_interactions import WebInteractions

__all__ = [
    "AutomationError",
    "BasePage",
    "BrowserManager",
    "ConfigurationError",
    "ContextSwitchError",
    "ElementReference",
    "FrameScope",
    "InteractionError",
    "InvalidReferenceError",
    "LocatorCatalog",
    "LocatorEntry",
    "LocatorNotFoundError",
    "LocatorResolver",
    "PageContext",
    "ResolutionTimeoutError",
    "WebInteractions",
]
