"""Pure decision services."""

from tenantrbac.domain.services.authorizer import (
    Ownership,
    can_manage,
    check_manage,
    check_manage_tenants,
    check_mutate_target,
    check_permission_grantable,
    check_role_grantable,
    provisioning_ownership,
    resolve_ownership,
)
from tenantrbac.domain.services.classifier import build_actor, classify
from tenantrbac.domain.services.grants import GrantDiff, dedupe, diff_grants
from tenantrbac.domain.services.visibility import (
    VisibilityScope,
    can_view_permission,
    can_view_role,
    permission_scope,
    role_scope,
    scope_allows,
)

__all__ = [
    "GrantDiff",
    "Ownership",
    "VisibilityScope",
    "build_actor",
    "can_manage",
    "can_view_permission",
    "can_view_role",
    "check_manage",
    "check_manage_tenants",
    "check_mutate_target",
    "check_permission_grantable",
    "check_role_grantable",
    "classify",
    "dedupe",
    "diff_grants",
    "permission_scope",
    "provisioning_ownership",
    "resolve_ownership",
    "role_scope",
    "scope_allows",
]
