"""
================================================================================
UI Framework Exceptions
================================================================================

Error taxonomy shared by the locator catalog, the resolver and the
interaction layer.

    AutomationError
    ├── ConfigurationError       locator definitions missing or malformed
    ├── InvalidReferenceError    element reference is not "page.element"
    ├── LocatorNotFoundError     reference well-formed but not in catalog
    ├── ResolutionTimeoutError   element never reached the desired state
    ├── InteractionError         action failed on a resolved element
    └── ContextSwitchError       tab / window / frame target not found

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from typing import Optional


class AutomationError(Exception):
    """Base class for all UI framework errors."""
    pass


class ConfigurationError(AutomationError):
    """Raised when locator definitions cannot be loaded or validated."""
    pass


class InvalidReferenceError(AutomationError):
    """Raised when an element reference is not in 'pageName.elementName' form."""

    def __init__(self, reference: str, reason: str = ""):
        self.reference = reference
        message = (
            f"Invalid element reference {reference!r}. "
            f"Expected 'pageName.elementName'"
        )
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class LocatorNotFoundError(AutomationError):
    """Raised when no locator is defined for an element reference."""

    def __init__(self, page_name: str, element_name: str):
        self.page_name = page_name
        self.element_name = element_name
        super().__init__(
            f"Locator not found for element: {element_name} in page: {page_name}"
        )


class ResolutionTimeoutError(AutomationError):
    """Raised when an element does not reach the desired state in time."""

    def __init__(self, reference: str, state: str, timeout: float):
        self.reference = reference
        self.state = state
        self.timeout = timeout
        page_name, _, element_name = reference.partition(".")
        self.page_name = page_name
        self.element_name = element_name
        super().__init__(
            f"Timeout waiting for element: {element_name} in page: {page_name} "
            f"to be in state: {state} (timeout={timeout}ms)"
        )


class InteractionError(AutomationError):
    """Raised when an action fails on an element that was resolved."""

    def __init__(self, action: str, reference: Optional[str] = None, detail: str = ""):
        self.action = action
        self.reference = reference
        if reference:
            page_name, _, element_name = reference.partition(".")
            message = f"Failed to {action} element: {element_name} in page: {page_name}"
        else:
            message = f"Failed to {action}"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)


class ContextSwitchError(AutomationError):
    """Raised when a tab, window or frame switch target does not exist."""
    pass


__all__ = [
    "AutomationError",
    "ConfigurationError",
    "InvalidReferenceError",
    "LocatorNotFoundError",
    "ResolutionTimeoutError",
    "InteractionError",
    "ContextSwitchError",
]
