"""Hierarchy resolver for building typed page nodes.

This module turns page identifiers into typed nodes by reading the page's
stored type tag, and validates that a page may carry a given type
("eligibility") by checking its parent's type. It is the only place
nodes are constructed, so every reader sees the same view of a page.
"""

import logging
from typing import Iterable, List, Optional, Tuple

from src.models.page_node import (
    ManualNode,
    PageNode,
    ProductNode,
    TopicNode,
    VersionNode,
)
from src.models.page_type import PageType, VersionStatus
from src.models.viewer import ANONYMOUS, ViewerContext
from src.property_store import keys
from src.property_store.store import PropertyStore
from .errors import UnknownPageTypeError
from .path_model import local_name, parent_of, product_and_version_strings

logger = logging.getLogger(__name__)


class HierarchyResolver:
    """Builds typed nodes from page identifiers.

    The resolver reads through a PropertyStore and never writes to it.
    Node construction dispatches on the stored ZDocsPageType tag; pages
    without a known tag are not part of the hierarchy and build to None.

    Example:
        >>> resolver = HierarchyResolver(store, product_pages=["Foo"])
        >>> node = resolver.build("Foo/1.0")
        >>> node.page_type
        <PageType.VERSION: 'Version'>
    """

    def __init__(self, store: PropertyStore, product_pages: Optional[Iterable[str]] = None):
        """Initialize the resolver.

        Args:
            store: Property store to read page properties from
            product_pages: Registered product page names; only these may be
                           declared Product pages
        """
        self.store = store
        self.product_pages = frozenset(product_pages or [])

    def type_of(self, page_id: Optional[str]) -> Optional[PageType]:
        """Return the declared type of a page, or None if untyped."""
        if page_id is None:
            return None
        return PageType.from_tag(self.store.get(page_id, keys.PAGE_TYPE))

    def build(self, page_id: str, viewer: ViewerContext = ANONYMOUS) -> Optional[PageNode]:
        """Build the typed node for a page.

        Args:
            page_id: Page identifier
            viewer: Viewer context (its query string may make a topic standalone)

        Returns:
            ProductNode, VersionNode, ManualNode or TopicNode according to the
            stored type tag, or None if the page is untyped
        """
        page_type = self.type_of(page_id)
        if page_type is None:
            logger.debug(f"Page {page_id} is untyped; no node built")
            return None
        return self.build_as(page_id, page_type, viewer)

    def require(self, page_id: str, viewer: ViewerContext = ANONYMOUS) -> PageNode:
        """Build a node, raising if the page is untyped.

        Raises:
            UnknownPageTypeError: If the page has no valid type tag
        """
        node = self.build(page_id, viewer)
        if node is None:
            raise UnknownPageTypeError(page_id, self.store.get(page_id, keys.PAGE_TYPE))
        return node

    def build_as(
        self,
        page_id: str,
        page_type: PageType,
        viewer: ViewerContext = ANONYMOUS
    ) -> PageNode:
        """Build a node of the given type regardless of the stored tag."""
        if page_type is PageType.PRODUCT:
            return self.build_product(page_id)
        elif page_type is PageType.VERSION:
            return self.build_version(page_id)
        elif page_type is PageType.MANUAL:
            return self.build_manual(page_id)
        elif page_type is PageType.TOPIC:
            return self.build_topic(page_id, viewer)
        raise ValueError(f"Unhandled page type: {page_type!r}")

    def build_product(self, page_id: str) -> ProductNode:
        properties = self._read_properties(page_id)
        return ProductNode(
            page_id=page_id,
            display_name=properties.get(keys.DISPLAY_NAME) or page_id,
            properties=properties,
            inherit=False,
            admins=frozenset(self.store.get_multi(page_id, keys.PRODUCT_ADMIN)),
            editors=frozenset(self.store.get_multi(page_id, keys.PRODUCT_EDITOR)),
            previewers=frozenset(self.store.get_multi(page_id, keys.PRODUCT_PREVIEWER)),
        )

    def build_version(self, page_id: str) -> VersionNode:
        properties = self._read_properties(page_id)
        return VersionNode(
            page_id=page_id,
            # Versions are always shown by their version string
            display_name=local_name(page_id),
            properties=properties,
            inherit=keys.is_flag_set(properties.get(keys.INHERIT)),
            status=VersionStatus.from_value(properties.get(keys.STATUS)),
            manuals_list=properties.get(keys.MANUALS_LIST),
        )

    def build_manual(self, page_id: str) -> ManualNode:
        properties = self._read_properties(page_id)
        return ManualNode(
            page_id=page_id,
            display_name=properties.get(keys.DISPLAY_NAME) or local_name(page_id),
            properties=properties,
            inherit=keys.is_flag_set(properties.get(keys.INHERIT)),
            topics_list=properties.get(keys.TOPICS_LIST),
            pagination=keys.is_flag_set(properties.get(keys.PAGINATION)),
        )

    def build_topic(self, page_id: str, viewer: ViewerContext = ANONYMOUS) -> TopicNode:
        """Build a topic node and determine its owning manual.

        "Invalid" is a permanent aspect of a topic: its identifier does not
        sit under a Manual page. "Standalone" depends on how the topic is
        addressed: the viewer's query string names a manual that owns it
        for this request. The two are independent.
        """
        properties = self._read_properties(page_id)
        display_name = properties.get(keys.DISPLAY_NAME) or local_name(page_id)
        topic = TopicNode(
            page_id=page_id,
            display_name=display_name,
            properties=properties,
            inherit=keys.is_flag_set(properties.get(keys.INHERIT)),
            toc_name=properties.get(keys.TOC_NAME),
        )

        parent_id = parent_of(page_id)
        if parent_id is None or self.type_of(parent_id) is not PageType.MANUAL:
            topic.invalid = True
        else:
            topic.manual_id = parent_id

        query_manual_id = viewer.standalone_manual_id()
        if query_manual_id is not None and self.type_of(query_manual_id) is PageType.MANUAL:
            topic.manual_id = query_manual_id
            topic.standalone = True

        logger.debug(
            f"Built topic {page_id}: manual={topic.manual_id}, "
            f"standalone={topic.standalone}, invalid={topic.invalid}"
        )
        return topic

    def new_standalone_topic(self, page_id: str, manual: ManualNode) -> Optional[TopicNode]:
        """Build a topic explicitly owned by `manual`.

        Returns:
            The standalone topic, or None if the page is not Topic-typed
        """
        if self.type_of(page_id) is not PageType.TOPIC:
            return None
        topic = self.build_topic(page_id)
        topic.manual_id = manual.page_id
        topic.standalone = True
        return topic

    def check_eligibility(
        self,
        declared_type: PageType,
        parent_id: Optional[str],
        page_id: Optional[str] = None
    ) -> Optional[str]:
        """Check whether a page may be declared with the given type.

        Args:
            declared_type: Type the page declares
            parent_id: Identifier of the page's parent (None if top-level)
            page_id: The page's full identifier (checked against the
                     registered product pages)

        Returns:
            Human-readable error message, or None if the page is eligible.
            Callers show the message inline instead of aborting the render.
        """
        if declared_type is PageType.PRODUCT:
            if page_id not in self.product_pages:
                logger.warning(f"Page {page_id} is not a registered product page")
                return "Error: This page must first be registered as a product page."
            return None

        if parent_id is None:
            logger.warning(f"{declared_type.value} page has no parent page")
            return f"Error: A {declared_type.value} page must have a parent page."

        expected = declared_type.expected_parent
        found = self.type_of(parent_id)
        if found is not expected:
            found_label = found.value if found is not None else 'none'
            logger.warning(
                f"Invalid parent page {parent_id} for {declared_type.value} page: "
                f"type {found_label}, expected {expected.value}"
            )
            return (
                f"Error: The parent page, {parent_id}, is of type {found_label}; "
                f"it must be of type {expected.value}."
            )
        return None

    def children_of(self, page_id: str, child_type: PageType) -> List[str]:
        """Return ids of the children of a page that carry `child_type`.

        Children are found by the reverse "parent page" property query.
        The result is sorted so iteration order is reproducible.
        """
        child_ids = self.store.find_by_property_value(keys.PARENT_PAGE, page_id)
        return sorted(
            child_id for child_id in child_ids
            if self.type_of(child_id) is child_type
        )

    def product_and_version_ids(self, node: PageNode, structural: bool = False) -> Tuple[str, Optional[str]]:
        """Return (product id, version id) for a node.

        Topics with an owning manual are located through the manual, so a
        standalone topic belongs to the version of the manual showing it.
        With `structural`, a topic nested under a Manual is located by its
        own path regardless of the manual showing it.
        """
        if node.page_type is PageType.PRODUCT:
            return node.page_id, None
        located_by_manual = isinstance(node, TopicNode) and node.manual_id is not None
        if structural and isinstance(node, TopicNode) and not node.invalid:
            located_by_manual = False
        if located_by_manual:
            product_name, version_string = product_and_version_strings(
                node.manual_id, PageType.MANUAL
            )
        else:
            product_name, version_string = product_and_version_strings(
                node.page_id, node.page_type
            )
        return product_name, f"{product_name}/{version_string}"

    def product_and_version(
        self,
        node: PageNode,
        structural: bool = False
    ) -> Tuple[ProductNode, Optional[VersionNode]]:
        """Return the Product and Version nodes a node belongs to."""
        product_id, version_id = self.product_and_version_ids(node, structural)
        product = self.build_product(product_id)
        if version_id is None:
            return product, None
        return product, self.build_version(version_id)

    def manual_of(self, topic: TopicNode) -> Optional[ManualNode]:
        if topic.manual_id is None:
            return None
        return self.build_manual(topic.manual_id)

    def context_names(self, node: PageNode) -> Tuple[Optional[str], Optional[str], Optional[str]]:
        """Return the (product, version, manual) names shown on a page.

        The product and manual are given by display name, the version by its
        version string. A value is None for pages at or above its level: a
        Product gets none, a Version only the product, a Manual no manual.
        Product and version come from the page's own path; the manual is the
        owning manual, so a standalone topic names the manual showing it.
        """
        if node.page_type is PageType.PRODUCT:
            return None, None, None
        try:
            product, version = self.product_and_version(node, structural=True)
        except ValueError as e:
            logger.debug(f"No product or version for {node.page_id}: {e}")
            return None, None, None

        version_string = None
        if node.page_type is not PageType.VERSION and version is not None:
            version_string = version.version_string

        manual_name = None
        if isinstance(node, TopicNode):
            manual = self.manual_of(node)
            if manual is not None:
                manual_name = manual.display_name
        return product.display_name, version_string, manual_name

    def _read_properties(self, page_id: str) -> dict:
        properties = {}
        for key in keys.SINGLE_VALUED_KEYS:
            value = self.store.get(page_id, key)
            if value is not None:
                properties[key] = value
        return properties
