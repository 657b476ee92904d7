"""View/edit permission decisions keyed on version status and product roles."""

from .permission_engine import (
    PermissionDecision,
    PermissionResult,
    RoleMembership,
    decide_edit,
    decide_product_edit,
    decide_view,
)
from .page_permissions import PagePermissions

__all__ = [
    'PermissionDecision',
    'PermissionResult',
    'RoleMembership',
    'decide_edit',
    'decide_product_edit',
    'decide_view',
    'PagePermissions',
]
