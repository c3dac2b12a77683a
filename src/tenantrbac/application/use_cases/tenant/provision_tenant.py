"""Provision a tenant with its singleton Administrator role and first user."""

import logging
from datetime import UTC, datetime
from uuid import uuid4

from tenantrbac.application.dto.tenant_dto import ProvisionResult, TenantCreateInput
from tenantrbac.application.ports import AuditSink
from tenantrbac.application.services.audit import audit_denials, record_success
from tenantrbac.application.services.flagged_rows import set_exclusive_flag
from tenantrbac.application.services.grant_sync import sync_role_permissions
from tenantrbac.domain.entities import ADMINISTRATOR_ROLE_NAME, Actor, Role, Tenant, User
from tenantrbac.domain.exceptions import DuplicateName, ValidationError
from tenantrbac.domain.services import check_manage_tenants, provisioning_ownership
from tenantrbac.domain.value_objects import ResourceKind

logger = logging.getLogger(__name__)

ADMINISTRATOR_ROLE_LEVEL = 1


class ProvisionTenantUseCase:
    """Create tenant, Administrator role, its initial grant and the primary user.

    Everything happens in one unit of work: any failure rolls back all of it.
    The grant is a snapshot of the active system catalog at this instant;
    permissions added to the catalog later are not granted retroactively.
    """

    def __init__(self, unit_of_work_factory: type, audit_sink: AuditSink) -> None:
        self._uow_factory = unit_of_work_factory
        self._audit = audit_sink

    async def execute(self, actor: Actor, data: TenantCreateInput) -> ProvisionResult:
        with audit_denials(self._audit, "create", actor, ResourceKind.TENANT):
            check_manage_tenants(actor)
        data.validate()
        warnings: list[str] = []

        async with self._uow_factory() as uow:
            if await uow.tenants.get_by_slug(data.slug):
                raise ValidationError(
                    "Validation failed",
                    {"slug": [f"The slug '{data.slug}' has already been taken."]},
                )
            if await uow.users.get_by_email(data.primary_user_email):
                raise ValidationError(
                    "Validation failed",
                    {"primary_user_email": ["The primary user email has already been taken."]},
                )

            now = datetime.now(UTC)
            tenant = Tenant(
                id=uuid4(), name=data.name, slug=data.slug, active=True, created_at=now
            )
            await uow.tenants.create(tenant)

            ownership = provisioning_ownership(tenant.id)
            if await uow.roles.get_by_name(ownership.tenant_id, ADMINISTRATOR_ROLE_NAME):
                raise DuplicateName("Role", ADMINISTRATOR_ROLE_NAME)
            admin_role = Role(
                id=uuid4(),
                name=ADMINISTRATOR_ROLE_NAME,
                description=f"{tenant.name} Administrator",
                level=ADMINISTRATOR_ROLE_LEVEL,
                tenant_id=ownership.tenant_id,
                is_custom=ownership.is_custom,
                active=True,
                created_at=now,
                updated_at=now,
            )
            await uow.roles.create(admin_role)
            logger.info(
                "Administrator role created for tenant",
                extra={"tenant_id": str(tenant.id), "role_id": str(admin_role.id)},
            )

            system_ids = await uow.permissions.list_active_system_ids()
            if system_ids:
                await sync_role_permissions(uow, admin_role.id, system_ids)
                logger.info(
                    "Permissions assigned to Administrator role",
                    extra={
                        "tenant_id": str(tenant.id),
                        "role_id": str(admin_role.id),
                        "permissions_count": len(system_ids),
                    },
                )
            else:
                message = "No system permissions found to assign to Administrator role"
                warnings.append(message)
                logger.warning(
                    message,
                    extra={"tenant_id": str(tenant.id), "role_id": str(admin_role.id)},
                )

            primary_user = User(
                id=uuid4(),
                name=data.primary_user_name.strip(),
                email=data.primary_user_email,
                tenant_id=tenant.id,
                role_id=admin_role.id,
                active=True,
                created_at=now,
                subject=data.primary_user_subject,
            )
            await uow.users.create(primary_user)
            await set_exclusive_flag(uow.users.primary_admin_flags, tenant.id, primary_user.id)
            primary_user.is_primary_admin = True

        logger.info(
            "Tenant provisioned",
            extra={
                "tenant_id": str(tenant.id),
                "primary_user_id": str(primary_user.id),
                "created_by": str(actor.id),
            },
        )
        record_success(
            self._audit,
            "create",
            actor,
            ResourceKind.TENANT,
            tenant.id,
            tenant_id=tenant.id,
            administrator_role_id=str(admin_role.id),
            permissions_count=len(system_ids),
        )
        return ProvisionResult(
            tenant=tenant,
            administrator_role=admin_role,
            primary_user=primary_user,
            granted_permission_ids=list(system_ids),
            warnings=warnings,
        )
