"""
Element reference parsing.

Call sites address elements symbolically as ``"<pageName>.<elementName>"``
(for example ``"login.username_input"``) instead of raw selectors.
"""

from __future__ import annotations

from dataclasses import dataclass

from .exceptions import InvalidReferenceError


SEPARATOR = "."


@dataclass(frozen=True)
class ElementReference:
    """Parsed ``page.element`` reference."""

    page_name: str
    element_name: str

    @classmethod
    def parse(cls, reference: str) -> "ElementReference":
        """
        Parse a compound element reference.

        Args:
            reference: String in the form "pageName.elementName"

        Returns:
            ElementReference

        Raises:
            InvalidReferenceError: If the string is empty, does not contain
                exactly one separator, or either part is blank.
        """
        if not isinstance(reference, str) or not reference.strip():
            raise InvalidReferenceError(str(reference), "reference cannot be empty")

        parts = reference.split(SEPARATOR)
        if len(parts) != 2:
            raise InvalidReferenceError(
                reference, f"expected exactly one '{SEPARATOR}', found {len(parts) - 1}"
            )

        page_name, element_name = (part.strip() for part in parts)
        if not page_name or not element_name:
            raise InvalidReferenceError(reference, "page and element names must be non-empty")

        return cls(page_name=page_name, element_name=element_name)

    def __str__(self) -> str:
        return f"{self.page_name}{SEPARATOR}{self.element_name}"


__all__ = [
    "ElementReference",
]
