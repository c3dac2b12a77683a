"""Mutation authorizer - who may write which Role or Permission row.

All checks are pure functions of (actor snapshot, target snapshot, action)
and raise domain exceptions on refusal.
"""

from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from tenantrbac.domain.entities import Actor, Permission, Role
from tenantrbac.domain.exceptions import (
    Immutable,
    NotFound,
    PermissionDenied,
    TenantRequired,
)
from tenantrbac.domain.services.visibility import can_view_permission
from tenantrbac.domain.value_objects import ActorClass, MutationAction


class CatalogRow(Protocol):
    """Shape shared by Role and Permission for ownership checks."""

    id: UUID
    tenant_id: UUID | None
    is_custom: bool


@dataclass(frozen=True)
class Ownership:
    """Tenant and custom flag a new row will be persisted with."""

    tenant_id: UUID | None
    is_custom: bool


def can_manage(actor: Actor) -> bool:
    """True for SuperAdmin, SystemOperator and TenantAdmin."""
    return actor.actor_class in (
        ActorClass.SUPER_ADMIN,
        ActorClass.SYSTEM_OPERATOR,
        ActorClass.TENANT_ADMIN,
    )


def check_manage(actor: Actor) -> None:
    """Gate every create/update/delete/assign/remove/bulk-grant call."""
    if actor.actor_class is ActorClass.ORPHAN:
        raise TenantRequired("Access denied: user has no tenant association")
    if not can_manage(actor):
        raise PermissionDenied("User is not allowed to manage roles and permissions")


def check_mutate_target(
    actor: Actor, target: CatalogRow, action: MutationAction
) -> None:
    """Check a write on an existing row, evaluated after check_manage."""
    if not target.is_custom:
        if action in (MutationAction.UPDATE, MutationAction.DELETE):
            raise Immutable("System resources cannot be modified or deleted")
        if action.is_status_change and not actor.is_super_admin:
            raise PermissionDenied(
                "Only SuperAdmin can change the status of system resources"
            )

    if target.tenant_id is None:
        if target.is_custom and not actor.is_super_admin:
            raise PermissionDenied("Only SuperAdmin can modify tenantless custom resources")
        return

    if actor.is_tenant_admin and target.tenant_id != actor.tenant_id:
        raise PermissionDenied("You can only modify resources of your tenant")


def check_role_grantable(actor: Actor, role: Role) -> None:
    """Non-SuperAdmin actors grant only on roles owned by their own tenant."""
    if actor.is_super_admin:
        return
    if role.tenant_id is None or role.tenant_id != actor.tenant_id:
        raise PermissionDenied("Unauthorized to modify this role")


def check_permission_grantable(actor: Actor, permission: Permission) -> None:
    """A permission can be granted only if the actor can see it."""
    if not can_view_permission(actor, permission):
        raise NotFound("Permission", permission.id)


def resolve_ownership(
    actor: Actor, requested_tenant_id: UUID | None, requested_is_custom: bool | None
) -> Ownership:
    """Privilege stripping for create.

    Only SuperAdmin chooses the owner; everyone else gets a custom row in
    their own tenant whatever the payload said.
    """
    if actor.is_super_admin:
        return Ownership(
            tenant_id=requested_tenant_id,
            is_custom=requested_is_custom is True,
        )
    if actor.is_orphan:
        raise TenantRequired("You must belong to a tenant to create roles or permissions")
    if actor.tenant_id is None:
        raise PermissionDenied("Only SuperAdmin can create tenantless roles or permissions")
    return Ownership(tenant_id=actor.tenant_id, is_custom=True)


def provisioning_ownership(tenant_id: UUID) -> Ownership:
    """Ownership of a tenant's seeded Administrator role: tenant-scoped, not custom."""
    return Ownership(tenant_id=tenant_id, is_custom=False)


def check_manage_tenants(actor: Actor) -> None:
    """Only SuperAdmin and SystemOperator provision tenants."""
    if actor.actor_class is ActorClass.ORPHAN:
        raise TenantRequired("Access denied: user has no tenant association")
    if actor.actor_class not in (ActorClass.SUPER_ADMIN, ActorClass.SYSTEM_OPERATOR):
        raise PermissionDenied("User is not allowed to manage tenants")
