"""Assign or remove a single permission on a role."""

import logging
from uuid import UUID

from tenantrbac.application.ports import AuditSink, UnitOfWork
from tenantrbac.application.services.audit import audit_denials, record_success
from tenantrbac.application.services.lookup import require_write_target
from tenantrbac.domain.entities import Actor, Permission, Role
from tenantrbac.domain.exceptions import NotFound
from tenantrbac.domain.services import (
    can_view_role,
    check_manage,
    check_permission_grantable,
    check_role_grantable,
)
from tenantrbac.domain.value_objects import ResourceKind

logger = logging.getLogger(__name__)


async def load_grant_targets(
    uow: UnitOfWork,
    audit: AuditSink,
    actor: Actor,
    action: str,
    role_id: UUID,
    permission_id: UUID,
) -> tuple[Role, Permission]:
    """Load and authorize the role and permission of a single grant."""
    found = await uow.roles.get_by_id(role_id)
    role = require_write_target(
        found, found is not None and can_view_role(actor, found), "Role", role_id
    )
    with audit_denials(audit, action, actor, ResourceKind.ROLE, role_id):
        check_role_grantable(actor, role)

    permission = await uow.permissions.get_by_id(permission_id)
    if permission is None:
        raise NotFound("Permission", permission_id)
    check_permission_grantable(actor, permission)
    return role, permission


class AssignPermissionToRoleUseCase:
    """Grant one permission to a role. Granting twice is a no-op."""

    def __init__(self, unit_of_work_factory: type, audit_sink: AuditSink) -> None:
        self._uow_factory = unit_of_work_factory
        self._audit = audit_sink

    async def execute(self, actor: Actor, role_id: UUID, permission_id: UUID) -> None:
        with audit_denials(self._audit, "assign", actor, ResourceKind.ROLE, role_id):
            check_manage(actor)

        async with self._uow_factory() as uow:
            role, permission = await load_grant_targets(
                uow, self._audit, actor, "assign", role_id, permission_id
            )
            await uow.roles.add_permissions(role.id, [permission.id])

        logger.info(
            "Permission assigned to role",
            extra={
                "permission_id": str(permission_id),
                "role_id": str(role_id),
                "assigned_by": str(actor.id),
            },
        )
        record_success(
            self._audit,
            "assign",
            actor,
            ResourceKind.ROLE,
            role_id,
            tenant_id=role.tenant_id,
            permission_id=str(permission_id),
        )


class RemovePermissionFromRoleUseCase:
    """Revoke one permission from a role."""

    def __init__(self, unit_of_work_factory: type, audit_sink: AuditSink) -> None:
        self._uow_factory = unit_of_work_factory
        self._audit = audit_sink

    async def execute(self, actor: Actor, role_id: UUID, permission_id: UUID) -> None:
        with audit_denials(self._audit, "remove", actor, ResourceKind.ROLE, role_id):
            check_manage(actor)

        async with self._uow_factory() as uow:
            role, permission = await load_grant_targets(
                uow, self._audit, actor, "remove", role_id, permission_id
            )
            await uow.roles.remove_permissions(role.id, [permission.id])

        logger.info(
            "Permission removed from role",
            extra={
                "permission_id": str(permission_id),
                "role_id": str(role_id),
                "removed_by": str(actor.id),
            },
        )
        record_success(
            self._audit,
            "remove",
            actor,
            ResourceKind.ROLE,
            role_id,
            tenant_id=role.tenant_id,
            permission_id=str(permission_id),
        )
