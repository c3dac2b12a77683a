"""Update permission use case."""

import logging
from datetime import UTC, datetime
from uuid import UUID

from tenantrbac.application.dto.permission_dto import PermissionUpdateInput
from tenantrbac.application.ports import AuditSink
from tenantrbac.application.services.audit import audit_denials, record_success
from tenantrbac.application.services.lookup import require_write_target
from tenantrbac.domain.entities import Actor, Permission
from tenantrbac.domain.exceptions import DuplicateName
from tenantrbac.domain.services import (
    can_view_permission,
    check_manage,
    check_mutate_target,
)
from tenantrbac.domain.value_objects import MutationAction, ResourceKind

logger = logging.getLogger(__name__)


class UpdatePermissionUseCase:
    """Update a custom permission."""

    def __init__(self, unit_of_work_factory: type, audit_sink: AuditSink) -> None:
        self._uow_factory = unit_of_work_factory
        self._audit = audit_sink

    async def execute(
        self, actor: Actor, permission_id: UUID, data: PermissionUpdateInput
    ) -> Permission:
        with audit_denials(self._audit, "update", actor, ResourceKind.PERMISSION, permission_id):
            check_manage(actor)
        data.validate()

        async with self._uow_factory() as uow:
            found = await uow.permissions.get_by_id(permission_id)
            permission = require_write_target(
                found,
                found is not None and can_view_permission(actor, found),
                "Permission",
                permission_id,
            )
            with audit_denials(
                self._audit, "update", actor, ResourceKind.PERMISSION, permission_id
            ):
                check_mutate_target(actor, permission, MutationAction.UPDATE)

            if data.name is not None and data.name != permission.name:
                if await uow.permissions.get_by_name(data.name):
                    raise DuplicateName("Permission", data.name)

            data.apply(permission)
            permission.updated_at = datetime.now(UTC)
            await uow.permissions.update(permission)

        logger.info(
            "Permission updated",
            extra={"permission_id": str(permission.id), "updated_by": str(actor.id)},
        )
        record_success(
            self._audit,
            "update",
            actor,
            ResourceKind.PERMISSION,
            permission.id,
            tenant_id=permission.tenant_id,
        )
        return permission
