"""Falcon ASGI application."""

from dataclasses import dataclass

import falcon.asgi
from falcon.asgi import App

from tenantrbac.interfaces.api.errors import register_error_handlers
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


@dataclass
class Resources:
    """All HTTP resources the app routes to."""

    roles: RolesResource
    role: RoleResource
    role_status: RoleStatusResource
    role_permissions: RolePermissionsResource
    permissions: PermissionsResource
    permission: PermissionResource
    permission_status: PermissionStatusResource
    permission_grants: PermissionGrantsResource
    tenants: TenantsResource
    health: HealthResource


def create_app(resources: Resources, middleware: list | None = None) -> App:
    """Create Falcon ASGI app with routes and error handlers."""
    app = falcon.asgi.App(middleware=middleware or [])
    register_error_handlers(app)

    app.add_route("/v1/health", resources.health)
    app.add_route("/v1/health/ready", resources.health, suffix="ready")

    app.add_route("/v1/roles", resources.roles)
    app.add_route("/v1/roles/{role_id}", resources.role)
    for action in ("activate", "deactivate", "restore"):
        app.add_route(f"/v1/roles/{{role_id}}/{action}", resources.role_status, suffix=action)
    app.add_route("/v1/roles/{role_id}/permissions", resources.role_permissions)

    app.add_route("/v1/permissions", resources.permissions)
    for grant in ("assign-to-role", "remove-from-role", "assign-to-user", "remove-from-user", "bulk-assign-to-role"):
        app.add_route(
            f"/v1/permissions/{grant}",
            resources.permission_grants,
            suffix=grant.replace("-", "_"),
        )
    app.add_route("/v1/permissions/{permission_id}", resources.permission)
    for action in ("activate", "deactivate", "restore"):
        app.add_route(
            f"/v1/permissions/{{permission_id}}/{action}",
            resources.permission_status,
            suffix=action,
        )

    app.add_route("/v1/tenants", resources.tenants)
    return app
