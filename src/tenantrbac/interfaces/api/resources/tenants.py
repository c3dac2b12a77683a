"""Tenant API resources."""

import falcon
import falcon.asgi

from tenantrbac.application.dto.tenant_dto import TenantCreateInput
from tenantrbac.application.use_cases.tenant.provision_tenant import ProvisionTenantUseCase
from tenantrbac.interfaces.api.resources.common import read_body, require_actor, role_to_dict


class TenantsResource:
    """POST /v1/tenants - provision a tenant with its Administrator role and first user."""

    def __init__(self, provision_tenant: ProvisionTenantUseCase) -> None:
        self._provision = provision_tenant

    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        actor = require_actor(req)
        body = await read_body(req)
        data = TenantCreateInput(
            name=body.get("tenant_name") or body.get("name") or "",
            primary_user_name=body.get("primary_user_name") or "",
            primary_user_email=body.get("primary_user_email") or "",
            slug=body.get("slug"),
            primary_user_subject=body.get("primary_user_subject"),
        )
        result = await self._provision.execute(actor, data)
        tenant = result.tenant
        user = result.primary_user
        resp.media = {
            "success": True,
            "message": "Tenant created successfully",
            "data": {
                "id": str(tenant.id),
                "name": tenant.name,
                "slug": tenant.slug,
                "active": tenant.active,
                "created_at": tenant.created_at.isoformat(),
                "administrator_role": role_to_dict(result.administrator_role),
                "primary_user": {
                    "id": str(user.id),
                    "name": user.name,
                    "email": user.email,
                    "is_primary_admin": user.is_primary_admin,
                },
                "granted_permissions_count": len(result.granted_permission_ids),
            },
            "warnings": result.warnings,
        }
        resp.status = falcon.HTTP_201
