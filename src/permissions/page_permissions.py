"""Permission hook over hierarchy pages.

Maps a (page, viewer, action) request onto the pure decisions in
permission_engine, resolving the page's version status and the product's
role lists through the hierarchy resolver.
"""

import logging
from typing import List

from src.hierarchy.resolver import HierarchyResolver
from src.models.page_node import PageNode, TopicNode
from src.models.page_type import PageType, VersionStatus
from src.models.viewer import ViewerContext
from .permission_engine import (
    PermissionDecision,
    PermissionResult,
    RoleMembership,
    decide_edit,
    decide_product_edit,
    decide_view,
)

logger = logging.getLogger(__name__)

READ_ACTIONS = frozenset({'read'})
EDIT_ACTIONS = frozenset({'edit', 'formedit'})


class PagePermissions:
    """Answers view/edit questions for hierarchy pages.

    Example:
        >>> permissions = PagePermissions(resolver)
        >>> permissions.check("Foo/2.0/Guide", viewer, "read")
        <PermissionResult.DENIED: 'denied'>
    """

    def __init__(self, resolver: HierarchyResolver):
        self.resolver = resolver

    def can_view(self, node: PageNode, viewer: ViewerContext) -> PermissionDecision:
        if node.page_type is PageType.PRODUCT:
            return PermissionDecision.allow()
        return self._strictest([
            decide_view(status, viewer.capabilities, membership)
            for status, membership in self._statuses_and_memberships(node, viewer)
        ])

    def can_edit(self, node: PageNode, viewer: ViewerContext) -> PermissionDecision:
        if node.page_type is PageType.PRODUCT:
            membership = RoleMembership.for_viewer(self.resolver.build_product(node.page_id), viewer)
            return decide_product_edit(viewer.capabilities, membership)
        return self._strictest([
            decide_edit(status, viewer.capabilities, membership)
            for status, membership in self._statuses_and_memberships(node, viewer)
        ])

    def check(self, page_id: str, viewer: ViewerContext, action: str) -> PermissionResult:
        """Permission hook entry point.

        Returns:
            ABSTAIN for pages outside the hierarchy and for actions other than
            read/edit, otherwise ALLOWED or DENIED
        """
        node = self.resolver.build(page_id, viewer)
        if node is None:
            return PermissionResult.ABSTAIN
        if action in READ_ACTIONS:
            decision = self.can_view(node, viewer)
        elif action in EDIT_ACTIONS:
            decision = self.can_edit(node, viewer)
        else:
            return PermissionResult.ABSTAIN

        if decision.denied:
            logger.info(f"Denied '{action}' on {page_id} for viewer {viewer.name}")
        return decision.as_result()

    def _statuses_and_memberships(self, node: PageNode, viewer: ViewerContext):
        """Version statuses governing a page, with the viewer's roles.

        A topic shown through another manual is governed both by the version
        it lives in and by the version of the manual showing it, so a query
        string can never loosen the restriction of its own version.
        """
        contexts = [self._status_and_membership(node, viewer, structural=False)]
        if isinstance(node, TopicNode) and node.standalone and not node.invalid:
            contexts.append(self._status_and_membership(node, viewer, structural=True))
        return contexts

    def _status_and_membership(self, node: PageNode, viewer: ViewerContext, structural: bool):
        try:
            product, version = self.resolver.product_and_version(node, structural)
        except ValueError as e:
            # Not nested deep enough to have a version; nothing to restrict
            logger.debug(f"No version for {node.page_id}: {e}")
            return VersionStatus.OTHER, RoleMembership()
        status = version.status if version is not None else VersionStatus.OTHER
        return status, RoleMembership.for_viewer(product, viewer)

    @staticmethod
    def _strictest(decisions: List[PermissionDecision]) -> PermissionDecision:
        for decision in decisions:
            if decision.denied:
                return decision
        return decisions[0]
