"""Manuals listing for Version pages.

A version declares the order of its manuals with a comma-separated
"manuals list". Declared names are matched against the Manual pages that
actually exist under the version. Unmatched names are still listed so the
problem is visible, and manuals missing from the list are reported.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from src.hierarchy.resolver import HierarchyResolver
from src.inheritance.inheritance_engine import InheritanceEngine
from src.models.page_node import ManualNode, VersionNode
from src.models.page_type import PageType
from src.models.viewer import ViewerContext
from src.property_store import keys
from src.rendering.html_renderer import Renderer
from src.rendering.models import Link

logger = logging.getLogger(__name__)

EXTRA_MANUALS_WARNING = "The following manuals are not in this version's manuals list: "


@dataclass
class ManualsListEntry:
    """One declared manual name and the manual it refers to (if any)."""
    name: str
    manual: Optional[ManualNode] = None

    @property
    def matched(self) -> bool:
        return self.manual is not None


@dataclass
class ManualsListing:
    """A version's manuals in declared order.

    Attributes:
        entries: Declared names, matched or not, in list order
        extra_manuals: Local names of existing manuals missing from the list
    """
    entries: List[ManualsListEntry] = field(default_factory=list)
    extra_manuals: List[str] = field(default_factory=list)

    @property
    def unmatched(self) -> List[str]:
        return [entry.name for entry in self.entries if not entry.matched]


class ManualsListBuilder:
    """Builds and renders the manuals listing of a Version page."""

    def __init__(
        self,
        resolver: HierarchyResolver,
        inheritance: InheritanceEngine,
        renderer: Renderer
    ):
        self.resolver = resolver
        self.inheritance = inheritance
        self.renderer = renderer

    def build(self, version: VersionNode, viewer: ViewerContext) -> ManualsListing:
        manuals = {
            manual.local_name: manual
            for manual in (
                self.resolver.build_manual(manual_id)
                for manual_id in self.resolver.children_of(version.page_id, PageType.MANUAL)
            )
        }
        manuals_list = self.inheritance.resolve_inherited_param(version, keys.MANUALS_LIST, viewer)

        listing = ManualsListing()
        for name in (manuals_list or "").split(','):
            name = name.strip()
            if not name:
                continue
            manual = manuals.pop(name, None)
            if manual is None:
                logger.warning(f"Manual '{name}' listed by version {version.page_id} does not exist")
            listing.entries.append(ManualsListEntry(name=name, manual=manual))

        listing.extra_manuals = sorted(manuals)
        if listing.extra_manuals:
            logger.warning(
                f"Version {version.page_id} has manuals missing from its manuals list: "
                f"{', '.join(listing.extra_manuals)}"
            )
        return listing

    def render(self, listing: ManualsListing) -> str:
        """Render the listing, preceded by a warning for extra manuals."""
        items = [
            Link(entry.manual.page_id, entry.manual.display_name) if entry.matched else entry.name
            for entry in listing.entries
        ]
        markup = self.renderer.render_list(items, css_class='ZDocsManualList')
        if listing.extra_manuals:
            markup = self.renderer.render_warning(EXTRA_MANUALS_WARNING, listing.extra_manuals) + markup
        return markup
