"""Version index for enumerating and ordering a product's versions.

This module lists the Version pages under a product, hides the ones the
viewer may not see, and orders the rest semantically by version string.
"""

import logging
from typing import Dict, List, Optional

from src.hierarchy.resolver import HierarchyResolver
from src.models.page_node import ProductNode, VersionNode
from src.models.page_type import PageType, VersionStatus
from src.models.viewer import ViewerContext
from src.permissions.permission_engine import RoleMembership, decide_view
from .version_compare import version_sort_key

logger = logging.getLogger(__name__)


class VersionIndex:
    """Enumerates, filters and sorts the versions of a product.

    Example:
        >>> index = VersionIndex(resolver)
        >>> [v.version_string for v in index.versions(product, viewer)]
        ['1.0', '1.5', '2.0']
    """

    def __init__(self, resolver: HierarchyResolver):
        self.resolver = resolver

    def versions(self, product: ProductNode, viewer: ViewerContext) -> List[VersionNode]:
        """Return the versions of `product` visible to `viewer`, ascending.

        The view decision is evaluated once per distinct status value.

        Args:
            product: Product node
            viewer: Viewer context

        Returns:
            Version nodes sorted by their version string
        """
        membership = RoleMembership.for_viewer(product, viewer)
        can_view_status: Dict[VersionStatus, bool] = {}
        visible: List[VersionNode] = []

        for version_id in self.resolver.children_of(product.page_id, PageType.VERSION):
            version = self.resolver.build_version(version_id)
            status = version.status
            if status not in can_view_status:
                can_view_status[status] = decide_view(
                    status, viewer.capabilities, membership
                ).allowed
            if not can_view_status[status]:
                logger.debug(
                    f"Hiding version {version_id} ({status.value}) from viewer {viewer.name}"
                )
                continue
            visible.append(version)

        # children_of() returns ids sorted, so equal versions keep a stable order
        visible.sort(key=lambda version: version_sort_key(version.version_string))
        logger.debug(
            f"Product {product.page_id} has versions "
            f"{[version.version_string for version in visible]}"
        )
        return visible

    def versions_before(
        self,
        product: ProductNode,
        viewer: ViewerContext,
        current_version: str
    ) -> List[VersionNode]:
        """Return the versions strictly before `current_version`, most recent first.

        Args:
            product: Product node
            viewer: Viewer context
            current_version: Version string to look back from

        Returns:
            Earlier versions in descending order, or an empty list if
            `current_version` is not among the visible versions
        """
        ordered = self.versions(product, viewer)
        position = self._index_of(ordered, current_version)
        if position is None:
            logger.debug(
                f"Version {current_version} not found in product {product.page_id}"
            )
            return []
        return list(reversed(ordered[:position]))

    @staticmethod
    def _index_of(ordered: List[VersionNode], version_string: str) -> Optional[int]:
        for position, version in enumerate(ordered):
            if version.version_string == version_string:
                return position
        return None
