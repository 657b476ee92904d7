"""Inheritance of page content and parameters across versions.

A page that declares `inherit` takes its content, and any parameter it
does not set itself, from the same page in an earlier version of its
product. The same page in another version is its "equivalent": the page
with the same type and the same manual/topic suffix under that version.

Content and parameters follow different stopping rules:

- Content goes back to the most recent equivalent that does not inherit,
  and that page's content is authoritative. If every earlier equivalent
  inherits too, there is no source and resolution fails hard.
- Parameters stop at the most recent equivalent that either has the
  parameter set, or does not inherit. A non-inheriting equivalent without
  the parameter means the parameter is genuinely absent.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple

from src.hierarchy.errors import InheritanceChainExhaustedError
from src.hierarchy.path_model import join_path
from src.hierarchy.resolver import HierarchyResolver
from src.models.page_node import PageNode, TopicNode, VersionNode
from src.models.page_type import PageType
from src.models.viewer import ViewerContext
from src.property_store import keys
from src.versions.version_index import VersionIndex

logger = logging.getLogger(__name__)


class InheritanceOutcome(Enum):
    """How a content-inheritance lookup ended."""
    NOT_INHERITING = 'not_inheriting'
    FOUND = 'found'
    EXHAUSTED = 'exhausted'


@dataclass
class InheritanceLookup:
    """Result of searching the equivalent-page chain for a content source.

    Attributes:
        outcome: NOT_INHERITING if the page uses its own content, FOUND if a
                 source was located, EXHAUSTED if no source exists
        source: The non-inheriting equivalent page (only when FOUND)
        versions_checked: Version strings visited, most recent first
    """
    outcome: InheritanceOutcome
    source: Optional[PageNode] = None
    versions_checked: List[str] = field(default_factory=list)


class InheritanceEngine:
    """Resolves inherited content and parameters for hierarchy pages.

    Example:
        >>> engine = InheritanceEngine(resolver, VersionIndex(resolver))
        >>> source = engine.resolve_inherited_content(topic, viewer)
        >>> source.page_id
        'Foo/1.5/Guide/T'
    """

    def __init__(self, resolver: HierarchyResolver, version_index: Optional[VersionIndex] = None):
        self.resolver = resolver
        self.version_index = version_index or VersionIndex(resolver)

    @property
    def store(self):
        return self.resolver.store

    def equivalent_identifier_for_version(self, node: PageNode, version: VersionNode) -> Optional[str]:
        """Build the identifier of `node`'s equivalent under `version`.

        The version segment is replaced and the manual/topic names are kept.

        Returns:
            The equivalent page identifier, or None for Products and for
            topics without an owning manual
        """
        if node.page_type is PageType.PRODUCT:
            return None
        elif node.page_type is PageType.VERSION:
            return version.page_id
        elif node.page_type is PageType.MANUAL:
            return join_path(version.page_id, node.local_name)
        elif node.page_type is PageType.TOPIC:
            manual_name = node.manual_local_name if isinstance(node, TopicNode) else None
            if manual_name is None:
                return None
            return join_path(version.page_id, manual_name, node.local_name)
        raise ValueError(f"Unhandled page type: {node.page_type!r}")

    def equivalent_page_for_version(self, node: PageNode, version: VersionNode) -> Optional[str]:
        """Return the equivalent page id if it exists with the same type."""
        equivalent_id = self.equivalent_identifier_for_version(node, version)
        if equivalent_id is None:
            return None
        if not self.store.exists(equivalent_id):
            return None
        if self.resolver.type_of(equivalent_id) is not node.page_type:
            logger.debug(
                f"Page {equivalent_id} exists but is not a {node.page_type.value} page"
            )
            return None
        return equivalent_id

    def equivalents_before(self, node: PageNode, viewer: ViewerContext) -> List[Tuple[VersionNode, PageNode]]:
        """Return (version, equivalent node) pairs for earlier versions.

        Versions without a valid equivalent are skipped. Ordered most
        recent first.
        """
        if node.page_type is PageType.PRODUCT:
            return []
        try:
            product, version = self.resolver.product_and_version(node)
        except ValueError as e:
            logger.warning(f"Cannot locate version of {node.page_id}: {e}")
            return []

        equivalents = []
        for earlier in self.version_index.versions_before(product, viewer, version.version_string):
            equivalent_id = self.equivalent_page_for_version(node, earlier)
            if equivalent_id is None:
                continue
            equivalents.append(
                (earlier, self.resolver.build_as(equivalent_id, node.page_type))
            )
        return equivalents

    def find_inherited_source(self, node: PageNode, viewer: ViewerContext) -> InheritanceLookup:
        """Search earlier versions for the page whose content `node` inherits.

        Product and Version pages never inherit content.
        """
        if node.page_type in (PageType.PRODUCT, PageType.VERSION) or not node.inherit:
            return InheritanceLookup(InheritanceOutcome.NOT_INHERITING)

        checked = []
        for earlier, equivalent in self.equivalents_before(node, viewer):
            checked.append(earlier.version_string)
            if not equivalent.inherit:
                logger.debug(
                    f"{node.page_id} inherits content from {equivalent.page_id}"
                )
                return InheritanceLookup(InheritanceOutcome.FOUND, equivalent, checked)
        return InheritanceLookup(InheritanceOutcome.EXHAUSTED, None, checked)

    def resolve_inherited_content(self, node: PageNode, viewer: ViewerContext) -> Optional[PageNode]:
        """Return the page whose content `node` shows in place of its own.

        Returns:
            The most recent earlier equivalent that does not inherit, or
            None if `node` does not inherit content

        Raises:
            InheritanceChainExhaustedError: If `node` inherits but every
                earlier equivalent inherits as well
        """
        lookup = self.find_inherited_source(node, viewer)
        if lookup.outcome is InheritanceOutcome.EXHAUSTED:
            logger.error(
                f"No version to inherit content from for {node.page_id} "
                f"(checked {lookup.versions_checked})"
            )
            raise InheritanceChainExhaustedError(node.page_id, lookup.versions_checked)
        return lookup.source

    def inherited_text(self, node: PageNode, viewer: ViewerContext) -> Optional[str]:
        """Return the raw text `node` inherits, or None if it does not inherit.

        Raises:
            InheritanceChainExhaustedError: If no source exists
        """
        source = self.resolve_inherited_content(node, viewer)
        if source is None:
            return None
        return self.store.get_text(source.page_id)

    def resolve_inherited_param(self, node: PageNode, key: str, viewer: ViewerContext) -> Optional[str]:
        """Return a parameter value, looking back through versions if needed.

        A value set on `node` itself always wins. Otherwise, only inheriting
        nodes look back (see inherited_param).
        """
        value = self.store.get(node.page_id, key)
        if value is not None:
            return value
        if not node.inherit:
            return None
        return self.inherited_param(node, key, viewer)

    def inherited_param(self, node: PageNode, key: str, viewer: ViewerContext) -> Optional[str]:
        """Look back through earlier versions for a parameter value.

        Stops at the first equivalent that has the key set (returning it)
        or that does not inherit (returning None).
        """
        for earlier, equivalent in self.equivalents_before(node, viewer):
            value = self.store.get(equivalent.page_id, key)
            if value is not None:
                logger.debug(
                    f"{node.page_id} inherits {key} from {equivalent.page_id}"
                )
                return value
            if not keys.is_flag_set(self.store.get(equivalent.page_id, keys.INHERIT)):
                logger.debug(
                    f"{key} unset on non-inheriting {equivalent.page_id}; "
                    f"stopping lookup for {node.page_id}"
                )
                return None
        return None

    def equivalents_in_other_versions(self, node: PageNode, viewer: ViewerContext) -> List[Tuple[str, str]]:
        """Return (version string, page id) for the page in every other version.

        Only Manual and Topic pages have equivalents listed. Versions are in
        ascending order and the node's own version is excluded.
        """
        if node.page_type not in (PageType.MANUAL, PageType.TOPIC):
            return []
        try:
            product, version = self.resolver.product_and_version(node)
        except ValueError as e:
            logger.debug(f"Cannot locate version of {node.page_id}: {e}")
            return []
        equivalents = []
        for other in self.version_index.versions(product, viewer):
            if other.version_string == version.version_string:
                continue
            equivalent_id = self.equivalent_page_for_version(node, other)
            if equivalent_id is not None:
                equivalents.append((other.version_string, equivalent_id))
        return equivalents
