"""Delete role use case."""

import logging
from datetime import UTC, datetime
from uuid import UUID

from tenantrbac.application.ports import AuditSink
from tenantrbac.application.services.audit import audit_denials, record_success
from tenantrbac.application.services.lookup import require_write_target
from tenantrbac.domain.entities import Actor
from tenantrbac.domain.exceptions import HasDependents
from tenantrbac.domain.services import can_view_role, check_manage, check_mutate_target
from tenantrbac.domain.value_objects import MutationAction, ResourceKind

logger = logging.getLogger(__name__)


class DeleteRoleUseCase:
    """Soft-delete a custom role that no user holds."""

    def __init__(self, unit_of_work_factory: type, audit_sink: AuditSink) -> None:
        self._uow_factory = unit_of_work_factory
        self._audit = audit_sink

    async def execute(self, actor: Actor, role_id: UUID) -> None:
        with audit_denials(self._audit, "delete", actor, ResourceKind.ROLE, role_id):
            check_manage(actor)

        async with self._uow_factory() as uow:
            found = await uow.roles.get_by_id(role_id)
            role = require_write_target(
                found, found is not None and can_view_role(actor, found), "Role", role_id
            )
            with audit_denials(self._audit, "delete", actor, ResourceKind.ROLE, role_id):
                check_mutate_target(actor, role, MutationAction.DELETE)

            total_users, _ = await uow.roles.count_users(role.id)
            if total_users > 0:
                logger.info(
                    "Role deletion blocked by assigned users",
                    extra={"role_id": str(role.id), "users": total_users},
                )
                raise HasDependents(
                    "Cannot delete role with assigned users. Please reassign users first."
                )

            await uow.roles.soft_delete(role.id, datetime.now(UTC))

        logger.warning("Role deleted", extra={"role_id": str(role_id), "deleted_by": str(actor.id)})
        record_success(
            self._audit, "delete", actor, ResourceKind.ROLE, role_id, tenant_id=role.tenant_id
        )
