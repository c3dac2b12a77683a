"""Delete permission use case."""

import logging
from datetime import UTC, datetime
from uuid import UUID

from tenantrbac.application.ports import AuditSink
from tenantrbac.application.services.audit import audit_denials, record_success
from tenantrbac.application.services.lookup import require_write_target
from tenantrbac.domain.entities import Actor
from tenantrbac.domain.services import (
    can_view_permission,
    check_manage,
    check_mutate_target,
)
from tenantrbac.domain.value_objects import MutationAction, ResourceKind

logger = logging.getLogger(__name__)


class DeletePermissionUseCase:
    """Soft-delete a custom permission.

    Unlike roles there is no dependents guard: existing grants stay in the
    join tables and stop resolving while the row is deleted.
    """

    def __init__(self, unit_of_work_factory: type, audit_sink: AuditSink) -> None:
        self._uow_factory = unit_of_work_factory
        self._audit = audit_sink

    async def execute(self, actor: Actor, permission_id: UUID) -> None:
        with audit_denials(self._audit, "delete", actor, ResourceKind.PERMISSION, permission_id):
            check_manage(actor)

        async with self._uow_factory() as uow:
            found = await uow.permissions.get_by_id(permission_id)
            permission = require_write_target(
                found,
                found is not None and can_view_permission(actor, found),
                "Permission",
                permission_id,
            )
            with audit_denials(
                self._audit, "delete", actor, ResourceKind.PERMISSION, permission_id
            ):
                check_mutate_target(actor, permission, MutationAction.DELETE)

            await uow.permissions.soft_delete(permission.id, datetime.now(UTC))

        logger.warning(
            "Permission deleted",
            extra={"permission_id": str(permission_id), "deleted_by": str(actor.id)},
        )
        record_success(
            self._audit,
            "delete",
            actor,
            ResourceKind.PERMISSION,
            permission_id,
            tenant_id=permission.tenant_id,
        )
