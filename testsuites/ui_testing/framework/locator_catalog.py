"""
================================================================================
Locator Catalog
================================================================================

Declarative locator storage for Page Objects.

Each logical screen owns one YAML file under ``testsuites/ui_testing/locators``:

    # login.yaml
    username_input:
      locator: "input[name='Login-LoginScreen-LoginDV-username']"
    login_button:
      locator: "div[id='Login-LoginScreen-LoginDV-submit']"

The catalog is built once (per test worker) and is read-only afterwards.
It is passed explicitly to the resolver instead of living in module state,
so parallel workers never share a registry.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional, Tuple, Union

import yaml
from loguru import logger

from .exceptions import ConfigurationError


LOCATOR_KEY = "locator"

# Default locator definitions directory
DEFAULT_LOCATORS_DIR = Path(__file__).parent.parent / "locators"


class DuplicateKeyError(yaml.constructor.ConstructorError):
    """A mapping in a locator file repeats a key."""

    def __init__(self, key: Any, mark: Any):
        super().__init__(None, None, f"found duplicate key '{key}'", mark)
        self.key = key


class UniqueKeyLoader(yaml.SafeLoader):
    """
    SafeLoader that rejects repeated mapping keys.

    ``safe_load`` keeps the last value of a repeated key; in a locator
    file that is an element declared twice.
    """

    def construct_mapping(self, node: yaml.MappingNode, deep: bool = False) -> Dict[Any, Any]:
        seen = set()
        for key_node, _ in node.value:
            key = self.construct_object(key_node, deep=deep)
            try:
                duplicate = key in seen
            except TypeError:
                # unhashable keys are reported by the base constructor
                continue
            if duplicate:
                raise DuplicateKeyError(key, key_node.start_mark)
            seen.add(key)
        return super().construct_mapping(node, deep=deep)


@dataclass(frozen=True)
class LocatorEntry:
    """
    A single declared element.

    Attributes:
        element_name: Name of the element within its page
        selector: Playwright selector string (CSS, text=, xpath=, ...)
    """
    element_name: str
    selector: str


def parse_page_definitions(page_name: str, data: Any) -> Dict[str, str]:
    """
    Validate a parsed locator document and flatten it to element -> selector.

    Args:
        page_name: Page the document belongs to (used in error messages)
        data: Parsed YAML content, expected ``{element: {locator: str}}``

    Returns:
        Mapping of element name to selector string

    Raises:
        ConfigurationError: If the document is empty, not a mapping of
            mappings, or any element has a missing or blank locator.
    """
    if not data:
        raise ConfigurationError(f"Locator definitions for page '{page_name}' are empty")
    if not isinstance(data, dict):
        raise ConfigurationError(
            f"Locator definitions for page '{page_name}' must be a mapping, "
            f"got {type(data).__name__}"
        )

    elements: Dict[str, str] = {}
    for element_name, element_data in data.items():
        if not isinstance(element_data, dict) or LOCATOR_KEY not in element_data:
            raise ConfigurationError(
                f"Missing '{LOCATOR_KEY}' field for element: {element_name} "
                f"in page: {page_name}"
            )

        selector = element_data[LOCATOR_KEY]
        if not isinstance(selector, str) or not selector.strip():
            raise ConfigurationError(
                f"'{LOCATOR_KEY}' field is null or empty for element: {element_name} "
                f"in page: {page_name}"
            )

        elements[str(element_name)] = selector

    return elements


def load_page_locators(
    page_name: str,
    locators_dir: Union[str, Path] = DEFAULT_LOCATORS_DIR,
) -> Dict[str, str]:
    """
    Load and validate the locator file of a single page.

    Args:
        page_name: Page name, i.e. the YAML file name without extension
        locators_dir: Directory holding the ``<page>.yaml`` files

    Returns:
        Mapping of element name to selector string

    Raises:
        ConfigurationError: If the file is missing, empty, not valid YAML,
            declares an element twice or fails validation.
    """
    if not page_name or not page_name.strip():
        raise ConfigurationError("Page name cannot be null or empty")

    path = Path(locators_dir) / f"{page_name}.yaml"
    if not path.is_file():
        raise ConfigurationError(f"Locator file not found: {path}")

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.load(f, Loader=UniqueKeyLoader)
    except DuplicateKeyError as e:
        logger.error(f"Duplicate key '{e.key}' in locator file: {path}")
        raise ConfigurationError(
            f"Duplicate key: {e.key} in page: {page_name} ({path}, line {e.problem_mark.line + 1})"
        ) from e
    except yaml.YAMLError as e:
        logger.error(f"Failed to parse locator file: {path} - {e}")
        raise ConfigurationError(f"Invalid YAML in locator file: {path}") from e

    elements = parse_page_definitions(page_name, data)
    logger.debug(f"Loaded {len(elements)} locators for page '{page_name}' from {path}")
    return elements


class LocatorCatalog:
    """
    Immutable symbol table of ``page -> element -> selector``.

    Usage:
        >>> catalog = LocatorCatalog.load()                    # every *.yaml file
        >>> catalog.selector_for("login", "username_input")
        "input[name='Login-LoginScreen-LoginDV-username']"

        >>> catalog = LocatorCatalog.from_definitions(
        ...     {"login": {"username_input": {"locator": "input#user"}}}
        ... )
    """

    def __init__(self, pages: Optional[Mapping[str, Mapping[str, str]]] = None):
        """
        Build a catalog from already validated ``page -> element -> selector`` data.

        Prefer the ``load`` / ``from_definitions`` constructors, which validate.
        """
        self._pages: Dict[str, Dict[str, LocatorEntry]] = {}
        for page_name, elements in (pages or {}).items():
            self._pages[page_name] = {
                element_name: LocatorEntry(element_name, selector)
                for element_name, selector in elements.items()
            }

    @classmethod
    def load(
        cls,
        locators_dir: Union[str, Path] = DEFAULT_LOCATORS_DIR,
        pages: Optional[Iterable[str]] = None,
    ) -> "LocatorCatalog":
        """
        Load locator files from a directory.

        Args:
            locators_dir: Directory containing ``<page>.yaml`` files
            pages: Page names to load. Loads every ``*.yaml`` file if None.

        Raises:
            ConfigurationError: If the directory is missing or any file is invalid
        """
        locators_dir = Path(locators_dir)
        if not locators_dir.is_dir():
            raise ConfigurationError(f"Locator directory not found: {locators_dir}")

        if pages is None:
            pages = sorted(path.stem for path in locators_dir.glob("*.yaml"))

        loaded = {page_name: load_page_locators(page_name, locators_dir) for page_name in pages}
        logger.info(
            f"Locator catalog initialized: {len(loaded)} pages, "
            f"{sum(len(e) for e in loaded.values())} elements"
        )
        return cls(loaded)

    @classmethod
    def from_definitions(cls, definitions: Mapping[str, Any]) -> "LocatorCatalog":
        """
        Build a catalog from one combined document ``{page: {element: {locator: str}}}``.

        Raises:
            ConfigurationError: If the document or any page fails validation
        """
        if not isinstance(definitions, Mapping) or not definitions:
            raise ConfigurationError("Locator definitions must be a non-empty mapping of pages")
        return cls({
            str(page_name): parse_page_definitions(str(page_name), data)
            for page_name, data in definitions.items()
        })

    def get(self, page_name: str, element_name: str) -> Optional[LocatorEntry]:
        """Return the entry for an element, or None if it is not declared."""
        return self._pages.get(page_name, {}).get(element_name)

    def selector_for(self, page_name: str, element_name: str) -> Optional[str]:
        """Return the raw selector for an element, or None if it is not declared."""
        entry = self.get(page_name, element_name)
        return entry.selector if entry else None

    def has_page(self, page_name: str) -> bool:
        return page_name in self._pages

    @property
    def page_names(self) -> List[str]:
        return sorted(self._pages)

    def elements(self, page_name: str) -> List[str]:
        """List element names declared for a page."""
        return sorted(self._pages.get(page_name, {}))

    def as_dict(self) -> Dict[str, Dict[str, str]]:
        """Plain copy of the catalog content."""
        return {
            page_name: {name: entry.selector for name, entry in elements.items()}
            for page_name, elements in self._pages.items()
        }

    def __iter__(self) -> Iterator[Tuple[str, LocatorEntry]]:
        for page_name, elements in self._pages.items():
            for entry in elements.values():
                yield page_name, entry

    def __len__(self) -> int:
        return sum(len(elements) for elements in self._pages.values())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, LocatorCatalog):
            return NotImplemented
        return self.as_dict() == other.as_dict()

    def __repr__(self) -> str:
        return f"LocatorCatalog(pages={self.page_names}, elements={len(self)})"


__all__ = [
    "LocatorEntry",
    "LocatorCatalog",
    "load_page_locators",
    "parse_page_definitions",
    "UniqueKeyLoader",
    "DEFAULT_LOCATORS_DIR",
]
