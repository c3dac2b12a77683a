"""List the permissions granted to a role."""

from uuid import UUID

from tenantrbac.application.ports import AuditSink
from tenantrbac.application.services.audit import audit_denials
from tenantrbac.domain.entities import Actor, Permission
from tenantrbac.domain.exceptions import NotFound
from tenantrbac.domain.services import can_view_role, role_scope
from tenantrbac.domain.value_objects import ResourceKind


class ListRolePermissionsUseCase:
    """Permissions of a role visible to the actor; tenant actors never see global roles."""

    def __init__(self, unit_of_work_factory: type, audit_sink: AuditSink) -> None:
        self._uow_factory = unit_of_work_factory
        self._audit = audit_sink

    async def execute(self, actor: Actor, role_id: UUID) -> list[Permission]:
        with audit_denials(self._audit, "view_permissions", actor, ResourceKind.ROLE, role_id):
            role_scope(actor)

        async with self._uow_factory() as uow:
            role = await uow.roles.get_by_id(role_id)
            if role is None:
                raise NotFound("Role", role_id)
            if not can_view_role(actor, role):
                raise NotFound("Role", role_id)
            return await uow.permissions.list_for_role(role.id)
