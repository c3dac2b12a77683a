"""Get role use case."""

import logging
from uuid import UUID

from tenantrbac.application.dto.role_dto import RoleDetails
from tenantrbac.application.ports import AuditSink
from tenantrbac.application.services.audit import audit_denials
from tenantrbac.domain.entities import Actor
from tenantrbac.domain.exceptions import NotFound
from tenantrbac.domain.services import can_view_role, role_scope
from tenantrbac.domain.value_objects import ResourceKind

logger = logging.getLogger(__name__)


class GetRoleUseCase:
    """Get a role visible to the actor, with user counts."""

    def __init__(self, unit_of_work_factory: type, audit_sink: AuditSink) -> None:
        self._uow_factory = unit_of_work_factory
        self._audit = audit_sink

    async def execute(self, actor: Actor, role_id: UUID) -> RoleDetails:
        with audit_denials(self._audit, "view", actor, ResourceKind.ROLE, role_id):
            role_scope(actor)

        async with self._uow_factory() as uow:
            role = await uow.roles.get_by_id(role_id)
            if role is None:
                raise NotFound("Role", role_id)
            if not can_view_role(actor, role):
                logger.warning(
                    "Tenant user attempted to view unauthorized role",
                    extra={
                        "actor_id": str(actor.id),
                        "actor_tenant_id": str(actor.tenant_id),
                        "role_id": str(role.id),
                        "role_tenant_id": str(role.tenant_id),
                    },
                )
                raise NotFound("Role", role_id)
            total_users, active_users = await uow.roles.count_users(role.id)

        return RoleDetails(role=role, total_users=total_users, active_users=active_users)
