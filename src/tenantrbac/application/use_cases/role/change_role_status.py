"""Activate, deactivate or restore a role."""

import logging
from datetime import UTC, datetime
from uuid import UUID

from tenantrbac.application.ports import AuditSink
from tenantrbac.application.services.audit import audit_denials, record_success
from tenantrbac.application.services.lookup import require_write_target
from tenantrbac.domain.entities import Actor, Role
from tenantrbac.domain.exceptions import DuplicateName, ValidationError
from tenantrbac.domain.services import can_view_role, check_manage, check_mutate_target
from tenantrbac.domain.value_objects import MutationAction, ResourceKind

logger = logging.getLogger(__name__)


class ChangeRoleStatusUseCase:
    """Touch only active / deleted_at of a role."""

    def __init__(self, unit_of_work_factory: type, audit_sink: AuditSink) -> None:
        self._uow_factory = unit_of_work_factory
        self._audit = audit_sink

    async def execute(self, actor: Actor, role_id: UUID, action: MutationAction) -> Role:
        if not action.is_status_change:
            raise ValidationError(f"Unsupported status action: {action}")
        with audit_denials(self._audit, action.value, actor, ResourceKind.ROLE, role_id):
            check_manage(actor)

        restoring = action is MutationAction.RESTORE
        async with self._uow_factory() as uow:
            found = await uow.roles.get_by_id(role_id, include_deleted=restoring)
            role = require_write_target(
                found, found is not None and can_view_role(actor, found), "Role", role_id
            )
            with audit_denials(self._audit, action.value, actor, ResourceKind.ROLE, role_id):
                check_mutate_target(actor, role, action)

            if restoring and not role.is_deleted:
                logger.debug("Role not deleted, nothing to restore", extra={"role_id": str(role_id)})
                return role

            now = datetime.now(UTC)
            if restoring:
                if await uow.roles.get_by_name(role.tenant_id, role.name):
                    raise DuplicateName("Role", role.name)
                await uow.roles.restore(role.id, now)
                role.deleted_at = None
            else:
                role.active = action is MutationAction.ACTIVATE
                role.updated_at = now
                await uow.roles.update(role)

        logger.info(
            "Role status changed",
            extra={"role_id": str(role_id), "action": action.value, "changed_by": str(actor.id)},
        )
        record_success(
            self._audit, action.value, actor, ResourceKind.ROLE, role_id, tenant_id=role.tenant_id
        )
        return role
