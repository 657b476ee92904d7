"""Typed page nodes of the documentation hierarchy.

A node is a computed view of one page: it is built on demand from a page
identifier by HierarchyResolver, reading the page's stored properties.
Nodes are never persisted; each render builds fresh ones.
"""

from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Optional, TYPE_CHECKING

from .page_type import PageType, VersionStatus

if TYPE_CHECKING:
    from ..toc.toc_builder import TocResult


@dataclass
class PageNode:
    """Common attributes of every hierarchy node.

    Attributes:
        page_id: Full page identifier (e.g., "Foo/1.0/Guide/Intro")
        page_type: Declared type tag read from the property store
        display_name: Stored display name, or the last path segment
        properties: Raw single-valued ZDocs properties of the page
        inherit: Whether the page declares inheritance from earlier versions
    """
    page_id: str
    page_type: PageType
    display_name: str = ""
    properties: Dict[str, str] = field(default_factory=dict)
    inherit: bool = False

    @property
    def local_name(self) -> str:
        """Last segment of the page identifier."""
        return self.page_id.rsplit('/', 1)[-1]


@dataclass
class ProductNode(PageNode):
    """Product page with its role lists.

    Role sets hold identity strings; order is irrelevant and duplicates
    collapse. A product never inherits.
    """
    page_type: PageType = PageType.PRODUCT
    admins: FrozenSet[str] = frozenset()
    editors: FrozenSet[str] = frozenset()
    previewers: FrozenSet[str] = frozenset()

    @property
    def local_name(self) -> str:
        # Product names may contain slashes
        return self.page_id

    def is_admin(self, name: Optional[str]) -> bool:
        return name is not None and name in self.admins

    def is_editor(self, name: Optional[str]) -> bool:
        return name is not None and name in self.editors

    def is_previewer(self, name: Optional[str]) -> bool:
        return name is not None and name in self.previewers


@dataclass
class VersionNode(PageNode):
    """Version page with lifecycle status and manuals-list template."""
    page_type: PageType = PageType.VERSION
    status: VersionStatus = VersionStatus.OTHER
    manuals_list: Optional[str] = None

    @property
    def version_string(self) -> str:
        return self.local_name


@dataclass
class ManualNode(PageNode):
    """Manual page with topics-list template and pagination flag.

    The table of contents built for this node is memoized on the instance
    (create-once, read-many) by TocBuilder.
    """
    page_type: PageType = PageType.MANUAL
    topics_list: Optional[str] = None
    pagination: bool = False
    toc_cache: Optional['TocResult'] = field(default=None, repr=False, compare=False)


@dataclass
class TopicNode(PageNode):
    """Topic page with its owning manual.

    Attributes:
        manual_id: Page id of the owning manual: the structural parent, or
                   the manual the topic was explicitly assigned to
        toc_name: Name shown for this topic in a table of contents
        standalone: True when the topic is addressed independently of its
                    structural parent
        invalid: True when the structural parent is missing or not a Manual
    """
    page_type: PageType = PageType.TOPIC
    manual_id: Optional[str] = None
    toc_name: Optional[str] = None
    standalone: bool = False
    invalid: bool = False

    @property
    def manual_local_name(self) -> Optional[str]:
        if self.manual_id is None:
            return None
        return self.manual_id.rsplit('/', 1)[-1]
