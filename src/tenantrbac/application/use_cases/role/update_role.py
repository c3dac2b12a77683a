"""Update role use case."""

import logging
from datetime import UTC, datetime
from uuid import UUID

from tenantrbac.application.dto.role_dto import RoleUpdateInput
from tenantrbac.application.ports import AuditSink
from tenantrbac.application.services.audit import audit_denials, record_success
from tenantrbac.application.services.lookup import require_write_target
from tenantrbac.domain.entities import Actor, Role
from tenantrbac.domain.exceptions import DuplicateName
from tenantrbac.domain.services import can_view_role, check_manage, check_mutate_target
from tenantrbac.domain.value_objects import MutationAction, ResourceKind

logger = logging.getLogger(__name__)


class UpdateRoleUseCase:
    """Update name, description, level or active flag of a custom role."""

    def __init__(self, unit_of_work_factory: type, audit_sink: AuditSink) -> None:
        self._uow_factory = unit_of_work_factory
        self._audit = audit_sink

    async def execute(self, actor: Actor, role_id: UUID, data: RoleUpdateInput) -> Role:
        with audit_denials(self._audit, "update", actor, ResourceKind.ROLE, role_id):
            check_manage(actor)
        data.validate()

        async with self._uow_factory() as uow:
            found = await uow.roles.get_by_id(role_id)
            role = require_write_target(
                found, found is not None and can_view_role(actor, found), "Role", role_id
            )
            with audit_denials(self._audit, "update", actor, ResourceKind.ROLE, role_id):
                check_mutate_target(actor, role, MutationAction.UPDATE)

            if data.name is not None and data.name != role.name:
                if await uow.roles.get_by_name(role.tenant_id, data.name):
                    raise DuplicateName("Role", data.name)

            data.apply(role)
            role.updated_at = datetime.now(UTC)
            await uow.roles.update(role)

        logger.info("Role updated", extra={"role_id": str(role.id), "updated_by": str(actor.id)})
        record_success(
            self._audit, "update", actor, ResourceKind.ROLE, role.id, tenant_id=role.tenant_id
        )
        return role
