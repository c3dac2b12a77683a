"""Get permission use case."""

import logging
from uuid import UUID

from tenantrbac.application.dto.permission_dto import PermissionDetails
from tenantrbac.application.ports import AuditSink
from tenantrbac.application.services.audit import audit_denials
from tenantrbac.domain.entities import Actor
from tenantrbac.domain.exceptions import NotFound
from tenantrbac.domain.services import can_view_permission, permission_scope
from tenantrbac.domain.value_objects import ResourceKind

logger = logging.getLogger(__name__)


class GetPermissionUseCase:
    """Get a permission visible to the actor, with assignment counts."""

    def __init__(self, unit_of_work_factory: type, audit_sink: AuditSink) -> None:
        self._uow_factory = unit_of_work_factory
        self._audit = audit_sink

    async def execute(self, actor: Actor, permission_id: UUID) -> PermissionDetails:
        with audit_denials(self._audit, "view", actor, ResourceKind.PERMISSION, permission_id):
            permission_scope(actor)

        async with self._uow_factory() as uow:
            permission = await uow.permissions.get_by_id(permission_id)
            if permission is None:
                raise NotFound("Permission", permission_id)
            if not can_view_permission(actor, permission):
                logger.warning(
                    "Tenant user attempted to view unauthorized permission",
                    extra={
                        "actor_id": str(actor.id),
                        "actor_tenant_id": str(actor.tenant_id),
                        "permission_id": str(permission.id),
                        "permission_tenant_id": str(permission.tenant_id),
                    },
                )
                raise NotFound("Permission", permission_id)
            roles, users = await uow.permissions.count_assignments(permission.id)

        return PermissionDetails(
            permission=permission, assigned_to_roles=roles, assigned_to_users=users
        )
