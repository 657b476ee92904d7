"""Page type tags and version lifecycle statuses."""

from enum import Enum
from typing import Optional


class PageType(Enum):
    """The four fixed hierarchy levels, in structural order.

    The enum value is the tag stored under ZDocsPageType.
    """
    PRODUCT = 'Product'
    VERSION = 'Version'
    MANUAL = 'Manual'
    TOPIC = 'Topic'

    @property
    def level(self) -> int:
        """Structural depth: Product=0, Version=1, Manual=2, Topic=3."""
        return PAGE_TYPES_IN_ORDER.index(self)

    @property
    def expected_parent(self) -> Optional['PageType']:
        """Type the parent page must have, or None for Product."""
        if self is PageType.PRODUCT:
            return None
        return PAGE_TYPES_IN_ORDER[self.level - 1]

    @classmethod
    def from_tag(cls, tag: Optional[str]) -> Optional['PageType']:
        """Map a stored type tag to a PageType, or None if untyped/unknown."""
        if tag is None:
            return None
        try:
            return cls(tag.strip())
        except ValueError:
            return None


PAGE_TYPES_IN_ORDER = (
    PageType.PRODUCT,
    PageType.VERSION,
    PageType.MANUAL,
    PageType.TOPIC,
)


class VersionStatus(Enum):
    """Version lifecycle status.

    Any stored status other than the three known ones (including blank)
    maps to OTHER.
    """
    RELEASED = 'Released'
    UNRELEASED = 'Unreleased'
    CLOSED = 'Closed'
    OTHER = 'Other'

    @classmethod
    def from_value(cls, value: Optional[str]) -> 'VersionStatus':
        if value is None:
            return cls.OTHER
        value = value.strip()
        for status in (cls.RELEASED, cls.UNRELEASED, cls.CLOSED):
            if value == status.value:
                return status
        return cls.OTHER
