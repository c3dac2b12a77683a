"""Create role use case."""

import logging
from datetime import UTC, datetime
from uuid import uuid4

from tenantrbac.application.dto.role_dto import RoleCreateInput
from tenantrbac.application.ports import AuditSink
from tenantrbac.application.services.audit import audit_denials, record_success
from tenantrbac.domain.entities import Actor, Role
from tenantrbac.domain.exceptions import DuplicateName, ValidationError
from tenantrbac.domain.services import check_manage, resolve_ownership
from tenantrbac.domain.value_objects import ResourceKind

logger = logging.getLogger(__name__)


class CreateRoleUseCase:
    """Create a role.

    SuperAdmin may create global or tenant roles and choose is_custom.
    Everyone else gets a custom role in their own tenant regardless of payload.
    """

    def __init__(self, unit_of_work_factory: type, audit_sink: AuditSink) -> None:
        self._uow_factory = unit_of_work_factory
        self._audit = audit_sink

    async def execute(self, actor: Actor, data: RoleCreateInput) -> Role:
        with audit_denials(self._audit, "create", actor, ResourceKind.ROLE):
            check_manage(actor)
            ownership = resolve_ownership(actor, data.tenant_id, data.is_custom)
        data.validate()

        async with self._uow_factory() as uow:
            if ownership.tenant_id is not None:
                tenant = await uow.tenants.get_by_id(ownership.tenant_id)
                if tenant is None:
                    raise ValidationError(
                        "Validation failed",
                        {"tenant_id": ["The selected tenant id is invalid."]},
                    )
            if await uow.roles.get_by_name(ownership.tenant_id, data.name):
                raise DuplicateName("Role", data.name)

            now = datetime.now(UTC)
            role = Role(
                id=uuid4(),
                name=data.name,
                description=data.description,
                level=data.resolved_level,
                tenant_id=ownership.tenant_id,
                is_custom=ownership.is_custom,
                active=True,
                created_at=now,
                updated_at=now,
            )
            await uow.roles.create(role)

        logger.info("Role created", extra={"role_id": str(role.id), "created_by": str(actor.id)})
        record_success(
            self._audit, "create", actor, ResourceKind.ROLE, role.id, tenant_id=role.tenant_id
        )
        return role
