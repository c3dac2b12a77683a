"""Create permission use case."""

import logging
from datetime import UTC, datetime
from uuid import uuid4

from tenantrbac.application.dto.permission_dto import PermissionCreateInput
from tenantrbac.application.ports import AuditSink
from tenantrbac.application.services.audit import audit_denials, record_success
from tenantrbac.domain.entities import Actor, Permission
from tenantrbac.domain.exceptions import DuplicateName, ValidationError
from tenantrbac.domain.services import check_manage, resolve_ownership
from tenantrbac.domain.value_objects import ResourceKind

logger = logging.getLogger(__name__)


class CreatePermissionUseCase:
    """Create a permission. Names are unique across the whole live catalog."""

    def __init__(self, unit_of_work_factory: type, audit_sink: AuditSink) -> None:
        self._uow_factory = unit_of_work_factory
        self._audit = audit_sink

    async def execute(self, actor: Actor, data: PermissionCreateInput) -> Permission:
        with audit_denials(self._audit, "create", actor, ResourceKind.PERMISSION):
            check_manage(actor)
            ownership = resolve_ownership(actor, data.tenant_id, data.is_custom)
        data.validate()

        async with self._uow_factory() as uow:
            if ownership.tenant_id is not None:
                if await uow.tenants.get_by_id(ownership.tenant_id) is None:
                    raise ValidationError(
                        "Validation failed",
                        {"tenant_id": ["The selected tenant id is invalid."]},
                    )
            if await uow.permissions.get_by_name(data.name):
                raise DuplicateName("Permission", data.name)

            now = datetime.now(UTC)
            permission = Permission(
                id=uuid4(),
                name=data.name,
                display_name=data.display_name,
                description=data.description,
                module=data.module,
                category=data.category,
                tenant_id=ownership.tenant_id,
                is_custom=ownership.is_custom,
                active=True,
                created_at=now,
                updated_at=now,
            )
            await uow.permissions.create(permission)

        logger.info(
            "Permission created",
            extra={"permission_id": str(permission.id), "created_by": str(actor.id)},
        )
        record_success(
            self._audit,
            "create",
            actor,
            ResourceKind.PERMISSION,
            permission.id,
            tenant_id=permission.tenant_id,
        )
        return permission
