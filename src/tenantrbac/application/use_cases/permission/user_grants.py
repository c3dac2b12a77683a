"""Assign or remove a permission directly on a user."""

import logging
from uuid import UUID

from tenantrbac.application.ports import AuditSink, UnitOfWork
from tenantrbac.application.services.audit import audit_denials, record_success
from tenantrbac.domain.entities import Actor, Permission, User
from tenantrbac.domain.exceptions import NotFound
from tenantrbac.domain.services import check_manage, check_permission_grantable
from tenantrbac.domain.value_objects import ResourceKind

logger = logging.getLogger(__name__)


async def _load_targets(
    uow: UnitOfWork, actor: Actor, user_id: UUID, permission_id: UUID
) -> tuple[User, Permission]:
    user = await uow.users.get_by_id(user_id)
    if user is None:
        raise NotFound("User", user_id)
    if actor.is_tenant_scoped and user.tenant_id != actor.tenant_id:
        raise NotFound("User", user_id)

    permission = await uow.permissions.get_by_id(permission_id)
    if permission is None:
        raise NotFound("Permission", permission_id)
    check_permission_grantable(actor, permission)
    return user, permission


class AssignPermissionToUserUseCase:
    """Grant a permission to a user independently of their role."""

    def __init__(self, unit_of_work_factory: type, audit_sink: AuditSink) -> None:
        self._uow_factory = unit_of_work_factory
        self._audit = audit_sink

    async def execute(self, actor: Actor, user_id: UUID, permission_id: UUID) -> None:
        with audit_denials(self._audit, "assign", actor, ResourceKind.USER, user_id):
            check_manage(actor)

        async with self._uow_factory() as uow:
            user, permission = await _load_targets(uow, actor, user_id, permission_id)
            await uow.permissions.grant_to_user(user.id, permission.id)

        logger.info(
            "Permission assigned to user",
            extra={
                "permission_id": str(permission_id),
                "user_id": str(user_id),
                "assigned_by": str(actor.id),
            },
        )
        record_success(
            self._audit,
            "assign",
            actor,
            ResourceKind.USER,
            user_id,
            tenant_id=user.tenant_id,
            permission_id=str(permission_id),
        )


class RemovePermissionFromUserUseCase:
    """Revoke a directly granted permission from a user."""

    def __init__(self, unit_of_work_factory: type, audit_sink: AuditSink) -> None:
        self._uow_factory = unit_of_work_factory
        self._audit = audit_sink

    async def execute(self, actor: Actor, user_id: UUID, permission_id: UUID) -> None:
        with audit_denials(self._audit, "remove", actor, ResourceKind.USER, user_id):
            check_manage(actor)

        async with self._uow_factory() as uow:
            user, permission = await _load_targets(uow, actor, user_id, permission_id)
            await uow.permissions.revoke_from_user(user.id, permission.id)

        logger.info(
            "Permission removed from user",
            extra={
                "permission_id": str(permission_id),
                "user_id": str(user_id),
                "removed_by": str(actor.id),
            },
        )
        record_success(
            self._audit,
            "remove",
            actor,
            ResourceKind.USER,
            user_id,
            tenant_id=user.tenant_id,
            permission_id=str(permission_id),
        )
