"""Page-scoped property store.

This module defines the PropertyStore interface the resolution engines read
through, and an in-memory implementation that the directive processor and
the snapshot loader write into. A store maps page identifiers to a set of
key/value properties plus the page's raw text.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Set

from .keys import ALL_KEYS

logger = logging.getLogger(__name__)


class PropertyStore(ABC):
    """Read-only view over page properties.

    Every page property is a key mapped to one or more string values.
    Single-valued reads return one value (or None), multi-valued reads
    return a set. The reverse query `find_by_property_value` is what the
    hierarchy uses to enumerate children of a page.
    """

    @abstractmethod
    def get(self, page_id: str, key: str) -> Optional[str]:
        """Return a single property value, or None if the key is unset."""

    @abstractmethod
    def get_multi(self, page_id: str, key: str) -> Set[str]:
        """Return all values stored under a key (empty set if unset)."""

    @abstractmethod
    def find_by_property_value(self, key: str, value: str) -> Set[str]:
        """Return the ids of all pages where `key` holds `value`."""

    @abstractmethod
    def exists(self, page_id: str) -> bool:
        """Return True if the page exists."""

    @abstractmethod
    def get_text(self, page_id: str) -> Optional[str]:
        """Return the raw text of a page, or None if it does not exist."""


@dataclass
class StoredPage:
    """A single page held by InMemoryPropertyStore.

    Attributes:
        page_id: Page identifier (e.g., "Foo/1.0/Guide/Intro")
        text: Raw page text
        properties: Mapping of property key to the set of stored values
    """
    page_id: str
    text: str = ""
    properties: Dict[str, Set[str]] = field(default_factory=dict)


class InMemoryPropertyStore(PropertyStore):
    """Dictionary-backed property store.

    Writes are performed by the directive processor (or the snapshot
    loader) before any read for the same page. Reads are deterministic:
    a single-valued read of a key holding several values returns the
    lexicographically smallest one.

    Example:
        >>> store = InMemoryPropertyStore()
        >>> store.create_page("Foo", text="{{#zdocs_product:}}")
        >>> store.set("Foo", "ZDocsPageType", "Product")
        >>> store.get("Foo", "ZDocsPageType")
        'Product'
    """

    def __init__(self, pages: Optional[Iterable[StoredPage]] = None):
        self._pages: Dict[str, StoredPage] = {}
        for page in pages or []:
            self._pages[page.page_id] = page

    def get(self, page_id: str, key: str) -> Optional[str]:
        page = self._pages.get(page_id)
        if page is None:
            return None
        values = page.properties.get(key)
        if not values:
            return None
        return min(values)

    def get_multi(self, page_id: str, key: str) -> Set[str]:
        page = self._pages.get(page_id)
        if page is None:
            return set()
        return set(page.properties.get(key, set()))

    def find_by_property_value(self, key: str, value: str) -> Set[str]:
        return {
            page.page_id
            for page in self._pages.values()
            if value in page.properties.get(key, set())
        }

    def exists(self, page_id: str) -> bool:
        return page_id in self._pages

    def get_text(self, page_id: str) -> Optional[str]:
        page = self._pages.get(page_id)
        if page is None:
            return None
        return page.text

    def page_ids(self) -> List[str]:
        """Return all page ids in sorted order."""
        return sorted(self._pages)

    def create_page(self, page_id: str, text: str = "") -> None:
        """Create a page, or replace the text of an existing one."""
        page = self._pages.get(page_id)
        if page is None:
            self._pages[page_id] = StoredPage(page_id=page_id, text=text)
            logger.debug(f"Created page {page_id}")
        else:
            page.text = text

    def set(self, page_id: str, key: str, value: str) -> None:
        """Replace all values of `key` with a single value."""
        self._require(page_id).properties[key] = {str(value)}

    def add(self, page_id: str, key: str, value: str) -> None:
        """Add one value to a multi-valued key (duplicates collapse)."""
        self._require(page_id).properties.setdefault(key, set()).add(str(value))

    def clear(self, page_id: str, keys: Optional[Iterable[str]] = None) -> None:
        """Remove properties from a page.

        Args:
            page_id: Page to clear
            keys: Keys to remove. Defaults to every ZDocs property key.
        """
        page = self._pages.get(page_id)
        if page is None:
            return
        for key in keys if keys is not None else ALL_KEYS:
            page.properties.pop(key, None)

    def _require(self, page_id: str) -> StoredPage:
        # Writing a property implicitly creates the page, as a page save would
        page = self._pages.get(page_id)
        if page is None:
            page = StoredPage(page_id=page_id)
            self._pages[page_id] = page
        return page
