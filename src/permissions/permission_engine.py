"""Status-driven view/edit decisions.

The decision for a page depends only on its version's lifecycle status,
the viewer's global capabilities and the viewer's role membership on the
product. The functions in this module are pure: no store access, no
side effects.

| status     | view allowed when                 | edit allowed when            |
|------------|-----------------------------------|------------------------------|
| Released   | always                            | always                       |
| Unreleased | administer/edit/preview, or       | administer/edit, or          |
|            | product admin/editor/previewer    | product admin/editor         |
| Closed     | administer, or product admin      | same as view                 |
| Other      | always                            | always                       |
"""

from dataclasses import dataclass
from enum import Enum
from typing import FrozenSet, Optional

from src.models.page_node import ProductNode
from src.models.page_type import VersionStatus
from src.models.viewer import (
    CAPABILITY_ADMINISTER,
    CAPABILITY_EDIT,
    CAPABILITY_PREVIEW,
    ViewerContext,
)


class PermissionResult(Enum):
    """Outcome reported to a permission hook.

    ABSTAIN means "no opinion" and must never be read as a denial.
    """
    ALLOWED = 'allowed'
    DENIED = 'denied'
    ABSTAIN = 'abstain'


@dataclass(frozen=True)
class RoleMembership:
    """The viewer's roles on one product."""
    admin: bool = False
    editor: bool = False
    previewer: bool = False

    @classmethod
    def for_viewer(cls, product: Optional[ProductNode], viewer: ViewerContext) -> 'RoleMembership':
        if product is None:
            return cls()
        return cls(
            admin=product.is_admin(viewer.name),
            editor=product.is_editor(viewer.name),
            previewer=product.is_previewer(viewer.name),
        )


@dataclass(frozen=True)
class PermissionDecision:
    """A view or edit decision with an explicit deny signal.

    `denied` is set only for a negative outcome, so callers can tell an
    explicit denial apart from a default pass-through.
    """
    allowed: bool
    denied: bool

    @classmethod
    def allow(cls) -> 'PermissionDecision':
        return cls(allowed=True, denied=False)

    @classmethod
    def deny(cls) -> 'PermissionDecision':
        return cls(allowed=False, denied=True)

    def __bool__(self) -> bool:
        return self.allowed

    def as_result(self) -> PermissionResult:
        return PermissionResult.DENIED if self.denied else PermissionResult.ALLOWED


def _decision(allowed: bool) -> PermissionDecision:
    return PermissionDecision.allow() if allowed else PermissionDecision.deny()


def decide_view(
    status: VersionStatus,
    capabilities: FrozenSet[str],
    membership: RoleMembership
) -> PermissionDecision:
    """Decide whether a page of a version with `status` may be viewed."""
    if status is VersionStatus.UNRELEASED:
        return _decision(
            CAPABILITY_ADMINISTER in capabilities
            or CAPABILITY_EDIT in capabilities
            or CAPABILITY_PREVIEW in capabilities
            or membership.admin
            or membership.editor
            or membership.previewer
        )
    if status is VersionStatus.CLOSED:
        return _decision(CAPABILITY_ADMINISTER in capabilities or membership.admin)
    # Released, or any other/blank status
    return PermissionDecision.allow()


def decide_edit(
    status: VersionStatus,
    capabilities: FrozenSet[str],
    membership: RoleMembership
) -> PermissionDecision:
    """Decide whether a page of a version with `status` may be edited."""
    if status is VersionStatus.UNRELEASED:
        return _decision(
            CAPABILITY_ADMINISTER in capabilities
            or CAPABILITY_EDIT in capabilities
            or membership.admin
            or membership.editor
        )
    if status is VersionStatus.CLOSED:
        return _decision(CAPABILITY_ADMINISTER in capabilities or membership.admin)
    return PermissionDecision.allow()


def decide_product_edit(capabilities: FrozenSet[str], membership: RoleMembership) -> PermissionDecision:
    """Decide whether a Product page may be edited.

    Only administrators may edit a product page, since it holds the role
    lists themselves.
    """
    return _decision(CAPABILITY_ADMINISTER in capabilities or membership.admin)
