"""Hierarchical page identifiers.

Page identifiers are slash-separated names: "Product/Version/Manual/Topic".
Product names may themselves contain slashes, so product and version
strings are located by counting segments back from the end according to
the page's structural level.
"""

from typing import List, Optional, Tuple

from src.models.page_type import PageType

SEPARATOR = '/'


def segments(page_id: str) -> List[str]:
    """Split a page identifier into its name segments."""
    return page_id.split(SEPARATOR)


def join_path(*parts: str) -> str:
    """Build a page identifier from name segments."""
    return SEPARATOR.join(part for part in parts if part)


def split_path(page_id: str) -> Tuple[Optional[str], str]:
    """Split a page identifier into (parent id, local name).

    Args:
        page_id: Page identifier

    Returns:
        Tuple of parent identifier (None for a top-level page) and local name

    Example:
        >>> split_path("Foo/1.0/Guide")
        ('Foo/1.0', 'Guide')
        >>> split_path("Foo")
        (None, 'Foo')
    """
    if SEPARATOR not in page_id:
        return None, page_id
    parent_id, local = page_id.rsplit(SEPARATOR, 1)
    return parent_id, local


def local_name(page_id: str) -> str:
    return split_path(page_id)[1]


def parent_of(page_id: str) -> Optional[str]:
    return split_path(page_id)[0]


def product_and_version_strings(page_id: str, page_type: PageType) -> Tuple[str, Optional[str]]:
    """Locate the product name and version string inside a page identifier.

    The page is `page_type.level` segments below its product, so the
    product name is everything before the last `level` segments and the
    version string is the segment right after it.

    Args:
        page_id: Identifier of a canonically nested page
        page_type: Declared type of the page

    Returns:
        Tuple of (product name, version string). The version string is
        None for Product pages.

    Raises:
        ValueError: If the identifier has too few segments for the type

    Example:
        >>> product_and_version_strings("Acme/Cloud/2.0/Guide", PageType.MANUAL)
        ('Acme/Cloud', '2.0')
    """
    level = page_type.level
    if level == 0:
        return page_id, None
    parts = segments(page_id)
    num_product_parts = len(parts) - level
    if num_product_parts < 1:
        raise ValueError(
            f"Page id '{page_id}' has too few segments for a {page_type.value} page"
        )
    product_name = SEPARATOR.join(parts[:num_product_parts])
    return product_name, parts[num_product_parts]
