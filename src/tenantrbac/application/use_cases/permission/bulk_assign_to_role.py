"""Bulk grant - replace a role's permission set atomically."""

import logging
from uuid import UUID

from tenantrbac.application.dto.permission_dto import BulkGrantResult
from tenantrbac.application.ports import AuditSink
from tenantrbac.application.services.audit import audit_denials, record_success
from tenantrbac.application.services.grant_sync import sync_role_permissions
from tenantrbac.application.services.lookup import require_write_target
from tenantrbac.domain.entities import Actor
from tenantrbac.domain.exceptions import ValidationError
from tenantrbac.domain.services import (
    can_view_permission,
    can_view_role,
    check_manage,
    check_role_grantable,
    dedupe,
)
from tenantrbac.domain.value_objects import MutationAction, ResourceKind

logger = logging.getLogger(__name__)


class BulkAssignToRoleUseCase:
    """Make a role's permissions exactly the given set.

    Ids missing from the set are revoked, new ones granted, all in one
    transaction. Any unknown or invisible id fails the whole call.
    """

    def __init__(self, unit_of_work_factory: type, audit_sink: AuditSink) -> None:
        self._uow_factory = unit_of_work_factory
        self._audit = audit_sink

    async def execute(
        self, actor: Actor, role_id: UUID, permission_ids: list[UUID]
    ) -> BulkGrantResult:
        action = MutationAction.BULK_GRANT.value
        with audit_denials(self._audit, action, actor, ResourceKind.ROLE, role_id):
            check_manage(actor)
        desired = dedupe(permission_ids)

        async with self._uow_factory() as uow:
            found = await uow.roles.get_by_id(role_id)
            role = require_write_target(
                found, found is not None and can_view_role(actor, found), "Role", role_id
            )
            with audit_denials(self._audit, action, actor, ResourceKind.ROLE, role_id):
                check_role_grantable(actor, role)

            visible = {
                p.id
                for p in await uow.permissions.get_many(desired)
                if can_view_permission(actor, p)
            }
            invisible = [pid for pid in desired if pid not in visible]
            if invisible:
                raise ValidationError(
                    "Validation failed",
                    {
                        "permission_ids": [
                            f"The selected permission id {pid} is invalid." for pid in invisible
                        ]
                    },
                )

            diff = await sync_role_permissions(uow, role.id, desired)

        logger.info(
            "Bulk permissions assigned to role",
            extra={
                "role_id": str(role_id),
                "permission_count": len(desired),
                "assigned_by": str(actor.id),
            },
        )
        record_success(
            self._audit,
            action,
            actor,
            ResourceKind.ROLE,
            role_id,
            tenant_id=role.tenant_id,
            permission_count=len(desired),
        )
        return BulkGrantResult(
            role_id=role.id,
            granted_count=len(desired),
            added=len(diff.to_add),
            revoked=len(diff.to_remove),
        )
