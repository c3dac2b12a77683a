"""Visibility filter - read-time scoping for Roles and Permissions.

Tenant actors see only their own tenant's roles (global roles are hidden),
but they see every system permission plus their own tenant's custom
permissions. The asymmetry is deliberate: system permissions must be
visible so tenant administrators can grant them to their roles.
"""

from dataclasses import dataclass
from uuid import UUID

from tenantrbac.domain.entities import Actor, Permission, Role
from tenantrbac.domain.exceptions import TenantRequired
from tenantrbac.domain.value_objects import ActorClass


@dataclass(frozen=True)
class VisibilityScope:
    """Scoping predicate for one actor over one catalog.

    unrestricted: no predicate at all.
    tenant_id: rows owned by this tenant are visible.
    include_system: system rows (tenant_id NULL, not custom) are visible.
    own_custom_only: tenant rows must additionally be custom.
    allow_tenant_override: caller's tenant_id filter is honoured.
    """

    unrestricted: bool
    tenant_id: UUID | None = None
    include_system: bool = False
    own_custom_only: bool = False
    allow_tenant_override: bool = False


def _require_standing(actor: Actor) -> None:
    if actor.actor_class is ActorClass.ORPHAN:
        raise TenantRequired("Access denied: user has no tenant association")


def role_scope(actor: Actor) -> VisibilityScope:
    """Scope for listing roles."""
    _require_standing(actor)
    if actor.actor_class is ActorClass.SUPER_ADMIN:
        return VisibilityScope(unrestricted=True, allow_tenant_override=True)
    if actor.actor_class is ActorClass.SYSTEM_OPERATOR:
        return VisibilityScope(unrestricted=True)
    return VisibilityScope(unrestricted=False, tenant_id=actor.tenant_id)


def permission_scope(actor: Actor) -> VisibilityScope:
    """Scope for listing permissions."""
    _require_standing(actor)
    if actor.actor_class is ActorClass.SUPER_ADMIN:
        return VisibilityScope(unrestricted=True, allow_tenant_override=True)
    if actor.actor_class is ActorClass.SYSTEM_OPERATOR:
        return VisibilityScope(unrestricted=True)
    return VisibilityScope(
        unrestricted=False,
        tenant_id=actor.tenant_id,
        include_system=True,
        own_custom_only=True,
    )


def scope_allows(
    scope: VisibilityScope, tenant_id: UUID | None, is_custom: bool
) -> bool:
    """Evaluate a scope against a single row."""
    if scope.unrestricted:
        return True
    if scope.include_system and tenant_id is None and not is_custom:
        return True
    if tenant_id is None or tenant_id != scope.tenant_id:
        return False
    return is_custom or not scope.own_custom_only


def can_view_role(actor: Actor, role: Role) -> bool:
    return scope_allows(role_scope(actor), role.tenant_id, role.is_custom)


def can_view_permission(actor: Actor, permission: Permission) -> bool:
    return scope_allows(
        permission_scope(actor), permission.tenant_id, permission.is_custom
    )
