"""Data models for rendered content."""

from dataclasses import dataclass, field
from typing import Dict, Union


@dataclass(frozen=True)
class Link:
    """A link to a page.

    Attributes:
        page_id: Target page identifier
        text: Link text
        query: Query parameters appended to the link target
    """
    page_id: str
    text: str
    query: Dict[str, str] = field(default_factory=dict)

    def __hash__(self) -> int:
        return hash((self.page_id, self.text, tuple(sorted(self.query.items()))))


@dataclass
class BlockLine:
    """One line of bullet text, ready to be block-structured.

    Attributes:
        markers: Leading list markers ('*' for bullets, '#' for numbered
                 items, e.g. '**'); empty for a plain text line
        content: Plain text, or a Link to render in place of the label
    """
    markers: str
    content: Union[str, Link]

    @property
    def is_list_item(self) -> bool:
        return bool(self.markers)
