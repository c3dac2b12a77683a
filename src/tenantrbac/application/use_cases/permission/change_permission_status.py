"""Activate, deactivate or restore a permission."""

import logging
from datetime import UTC, datetime
from uuid import UUID

from tenantrbac.application.ports import AuditSink
from tenantrbac.application.services.audit import audit_denials, record_success
from tenantrbac.application.services.lookup import require_write_target
from tenantrbac.domain.entities import Actor, Permission
from tenantrbac.domain.exceptions import DuplicateName, ValidationError
from tenantrbac.domain.services import (
    can_view_permission,
    check_manage,
    check_mutate_target,
)
from tenantrbac.domain.value_objects import MutationAction, ResourceKind

logger = logging.getLogger(__name__)


class ChangePermissionStatusUseCase:
    """Touch only active / deleted_at of a permission."""

    def __init__(self, unit_of_work_factory: type, audit_sink: AuditSink) -> None:
        self._uow_factory = unit_of_work_factory
        self._audit = audit_sink

    async def execute(
        self, actor: Actor, permission_id: UUID, action: MutationAction
    ) -> Permission:
        if not action.is_status_change:
            raise ValidationError(f"Unsupported status action: {action}")
        with audit_denials(
            self._audit, action.value, actor, ResourceKind.PERMISSION, permission_id
        ):
            check_manage(actor)

        restoring = action is MutationAction.RESTORE
        async with self._uow_factory() as uow:
            found = await uow.permissions.get_by_id(permission_id, include_deleted=restoring)
            permission = require_write_target(
                found,
                found is not None and can_view_permission(actor, found),
                "Permission",
                permission_id,
            )
            with audit_denials(
                self._audit, action.value, actor, ResourceKind.PERMISSION, permission_id
            ):
                check_mutate_target(actor, permission, action)

            if restoring and not permission.is_deleted:
                logger.debug(
                    "Permission not deleted, nothing to restore",
                    extra={"permission_id": str(permission_id)},
                )
                return permission

            now = datetime.now(UTC)
            if restoring:
                if await uow.permissions.get_by_name(permission.name):
                    raise DuplicateName("Permission", permission.name)
                await uow.permissions.restore(permission.id, now)
                permission.deleted_at = None
            else:
                permission.active = action is MutationAction.ACTIVATE
                permission.updated_at = now
                await uow.permissions.update(permission)

        logger.info(
            "Permission status changed",
            extra={
                "permission_id": str(permission_id),
                "action": action.value,
                "changed_by": str(actor.id),
            },
        )
        record_success(
            self._audit,
            action.value,
            actor,
            ResourceKind.PERMISSION,
            permission_id,
            tenant_id=permission.tenant_id,
        )
        return permission
