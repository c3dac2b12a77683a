"""Application entry point and composition root."""

import argparse
import asyncio
import logging
import sys
from uuid import UUID

from tenantrbac import __version__
from tenantrbac.application.use_cases.permission.bulk_assign_to_role import (
    BulkAssignToRoleUseCase,
)
from tenantrbac.application.use_cases.permission.change_permission_status import (
    ChangePermissionStatusUseCase,
)
from tenantrbac.application.use_cases.permission.create_permission import (
    CreatePermissionUseCase,
)
from tenantrbac.application.use_cases.permission.delete_permission import (
    DeletePermissionUseCase,
)
from tenantrbac.application.use_cases.permission.get_permission import GetPermissionUseCase
from tenantrbac.application.use_cases.permission.list_permissions import (
    ListPermissionsUseCase,
)
from tenantrbac.application.use_cases.permission.list_role_permissions import (
    ListRolePermissionsUseCase,
)
from tenantrbac.application.use_cases.permission.role_grants import (
    AssignPermissionToRoleUseCase,
    RemovePermissionFromRoleUseCase,
)
from tenantrbac.application.use_cases.permission.update_permission import (
    UpdatePermissionUseCase,
)
from tenantrbac.application.use_cases.permission.user_grants import (
    AssignPermissionToUserUseCase,
    RemovePermissionFromUserUseCase,
)
from tenantrbac.application.use_cases.role.change_role_status import ChangeRoleStatusUseCase
from tenantrbac.application.use_cases.role.create_role import CreateRoleUseCase
from tenantrbac.application.use_cases.role.delete_role import DeleteRoleUseCase
from tenantrbac.application.use_cases.role.get_role import GetRoleUseCase
from tenantrbac.application.use_cases.role.list_roles import ListRolesUseCase
from tenantrbac.application.use_cases.role.update_role import UpdateRoleUseCase
from tenantrbac.application.use_cases.tenant.provision_tenant import ProvisionTenantUseCase
from tenantrbac.application.use_cases.tenant.sync_admin_permissions import (
    SyncAdministratorPermissionsUseCase,
)
from tenantrbac.config import Settings, get_settings
from tenantrbac.domain.exceptions import ValidationError
from tenantrbac.infrastructure.audit.logging_audit_sink import LoggingAuditSink
from tenantrbac.infrastructure.auth.keycloak_provider import KeycloakProvider
from tenantrbac.infrastructure.persistence.postgres.connection import (
    close_pool,
    create_pool,
    open_pool,
)
from tenantrbac.infrastructure.persistence.postgres.unit_of_work import create_uow_factory
from tenantrbac.interfaces.api.app import Resources, create_app
from tenantrbac.interfaces.api.middleware.auth import AuthMiddleware
from tenantrbac.interfaces.api.middleware.cors import CORSMiddleware
from tenantrbac.interfaces.api.middleware.pool_lifespan import PoolLifespanMiddleware
from tenantrbac.interfaces.api.resources.health import HealthResource
from tenantrbac.interfaces.api.resources.permissions import (
    PermissionGrantsResource,
    PermissionResource,
    PermissionsResource,
    PermissionStatusResource,
)
from tenantrbac.interfaces.api.resources.roles import (
    RolePermissionsResource,
    RoleResource,
    RolesResource,
    RoleStatusResource,
)
from tenantrbac.interfaces.api.resources.tenants import TenantsResource
from tenantrbac.logging_config import configure_logging

logger = logging.getLogger(__name__)


def build_resources(uow_factory, audit_sink, settings: Settings) -> Resources:
    """Wire use cases into HTTP resources."""
    deps = {"unit_of_work_factory": uow_factory, "audit_sink": audit_sink}
    bulk_assign = BulkAssignToRoleUseCase(**deps)
    paging = {
        "default_per_page": settings.default_per_page,
        "max_per_page": settings.max_per_page,
    }
    return Resources(
        roles=RolesResource(ListRolesUseCase(**deps), CreateRoleUseCase(**deps), **paging),
        role=RoleResource(
            GetRoleUseCase(**deps), UpdateRoleUseCase(**deps), DeleteRoleUseCase(**deps)
        ),
        role_status=RoleStatusResource(ChangeRoleStatusUseCase(**deps)),
        role_permissions=RolePermissionsResource(
            ListRolePermissionsUseCase(**deps), bulk_assign
        ),
        permissions=PermissionsResource(
            ListPermissionsUseCase(**deps), CreatePermissionUseCase(**deps), **paging
        ),
        permission=PermissionResource(
            GetPermissionUseCase(**deps),
            UpdatePermissionUseCase(**deps),
            DeletePermissionUseCase(**deps),
        ),
        permission_status=PermissionStatusResource(ChangePermissionStatusUseCase(**deps)),
        permission_grants=PermissionGrantsResource(
            AssignPermissionToRoleUseCase(**deps),
            RemovePermissionFromRoleUseCase(**deps),
            AssignPermissionToUserUseCase(**deps),
            RemovePermissionFromUserUseCase(**deps),
            bulk_assign,
        ),
        tenants=TenantsResource(ProvisionTenantUseCase(**deps)),
        health=HealthResource(uow_factory),
    )


def create_tenantrbac_app():
    """Composition root - build Falcon app with all dependencies."""
    settings = get_settings()
    configure_logging(settings.log_level)
    pool = create_pool(
        settings.database_url,
        min_size=settings.database_pool_min_size,
        max_size=settings.database_pool_max_size,
    )
    uow_factory = create_uow_factory(pool)

    keycloak = (
        KeycloakProvider(
            server_url=settings.keycloak_url,
            realm=settings.keycloak_realm,
            client_id=settings.keycloak_client_id,
            client_secret=settings.keycloak_client_secret,
        )
        if settings.keycloak_client_secret
        else None
    )
    if keycloak is None:
        logger.warning("Keycloak client secret not set; every request is unauthenticated")

    cors_origins = [o.strip() for o in settings.cors_origins.split(",") if o.strip()]
    resources = build_resources(uow_factory, LoggingAuditSink(), settings)
    return create_app(
        resources,
        middleware=[
            CORSMiddleware(cors_origins),
            PoolLifespanMiddleware(pool, settings.database_pool_timeout),
            AuthMiddleware(keycloak, uow_factory),
        ],
    )


async def sync_admin_permissions(tenant_id: UUID | None, dry_run: bool) -> int:
    """Grant the current system catalog to tenant Administrator roles."""
    settings = get_settings()
    pool = create_pool(settings.database_url, min_size=1, max_size=2)
    await open_pool(pool, settings.database_pool_timeout)
    try:
        use_case = SyncAdministratorPermissionsUseCase(
            unit_of_work_factory=create_uow_factory(pool),
            audit_sink=LoggingAuditSink(),
        )
        try:
            reports = await use_case.execute(tenant_id=tenant_id, dry_run=dry_run)
        except ValidationError as e:
            print(f"error: {e}", file=sys.stderr)
            return 1
    finally:
        await close_pool(pool)

    if not reports:
        print("No Administrator roles found.")
        return 0
    for r in reports:
        print(
            f"{r.tenant_id}  role={r.role_id}  {r.current_count}/{r.target_count}  {r.status}"
        )
    failed = sum(1 for r in reports if r.status == r.FAILED)
    changed = sum(1 for r in reports if r.status in (r.UPDATED, r.WOULD_UPDATE))
    print(f"{len(reports)} roles, {changed} {'to update' if dry_run else 'updated'}, {failed} failed")
    return 1 if failed else 0


def run_server() -> None:
    """Run uvicorn server."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        create_tenantrbac_app(),
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


def main(argv: list[str] | None = None) -> int:
    """CLI entry point."""
    parser = argparse.ArgumentParser(prog="tenantrbac", description=f"TenantRBAC v{__version__}")
    parser.add_argument("--version", action="version", version=f"tenantrbac {__version__}")
    sub = parser.add_subparsers(dest="command", required=True)
    sub.add_parser("serve", help="Run the HTTP API")
    sync = sub.add_parser(
        "sync-admin-permissions",
        help="Grant missing system permissions to tenant Administrator roles",
    )
    sync.add_argument("--tenant-id", type=UUID, default=None, help="Only this tenant")
    sync.add_argument("--dry-run", action="store_true", help="Report without writing")
    args = parser.parse_args(argv)

    configure_logging(get_settings().log_level)
    if args.command == "serve":
        run_server()
        return 0
    return asyncio.run(sync_admin_permissions(args.tenant_id, args.dry_run))


if __name__ == "__main__":
    sys.exit(main())
