"""Grant the current system catalog to existing tenant Administrator roles."""

import logging
from uuid import UUID

from tenantrbac.application.dto.tenant_dto import AdminSyncReport
from tenantrbac.application.ports import AuditSink
from tenantrbac.application.services.audit import record_success
from tenantrbac.domain.exceptions import ValidationError
from tenantrbac.domain.value_objects import ResourceKind

logger = logging.getLogger(__name__)


class SyncAdministratorPermissionsUseCase:
    """Operator action: add missing system permissions to Administrator roles.

    Additive only; grants a tenant added to its Administrator role stay.
    Each role is updated in its own unit of work so one failure does not
    undo the others.
    """

    def __init__(self, unit_of_work_factory: type, audit_sink: AuditSink) -> None:
        self._uow_factory = unit_of_work_factory
        self._audit = audit_sink

    async def execute(
        self, tenant_id: UUID | None = None, dry_run: bool = False
    ) -> list[AdminSyncReport]:
        async with self._uow_factory() as uow:
            system_ids = await uow.permissions.list_active_system_ids()
            roles = await uow.roles.list_administrator_roles(tenant_id)

        if not system_ids:
            raise ValidationError("No system permissions found")

        reports: list[AdminSyncReport] = []
        for role in roles:
            report = await self._sync_role(role.id, role.tenant_id, system_ids, dry_run)
            reports.append(report)
        return reports

    async def _sync_role(
        self, role_id: UUID, tenant_id: UUID, system_ids: list[UUID], dry_run: bool
    ) -> AdminSyncReport:
        try:
            async with self._uow_factory() as uow:
                current = set(await uow.roles.get_permission_ids(role_id))
                missing = [pid for pid in system_ids if pid not in current]
                if not missing:
                    status = AdminSyncReport.SKIPPED
                elif dry_run:
                    status = AdminSyncReport.WOULD_UPDATE
                else:
                    await uow.roles.add_permissions(role_id, missing)
                    status = AdminSyncReport.UPDATED
        except Exception:
            logger.exception(
                "Failed to assign permissions to Administrator role",
                extra={"role_id": str(role_id), "tenant_id": str(tenant_id)},
            )
            return AdminSyncReport(
                role_id=role_id,
                tenant_id=tenant_id,
                current_count=0,
                target_count=len(system_ids),
                status=AdminSyncReport.FAILED,
            )

        if status == AdminSyncReport.UPDATED:
            logger.info(
                "Permissions assigned to Administrator role via command",
                extra={
                    "role_id": str(role_id),
                    "tenant_id": str(tenant_id),
                    "added": len(missing),
                },
            )
            record_success(
                self._audit,
                "sync_admin_permissions",
                None,
                ResourceKind.ROLE,
                role_id,
                tenant_id=tenant_id,
                added=len(missing),
            )
        return AdminSyncReport(
            role_id=role_id,
            tenant_id=tenant_id,
            current_count=len(current),
            target_count=len(system_ids),
            status=status,
        )
