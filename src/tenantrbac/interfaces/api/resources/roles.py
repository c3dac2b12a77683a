"""Role API resources."""

import falcon
import falcon.asgi

from tenantrbac.application.dto.role_dto import RoleCreateInput, RoleUpdateInput
from tenantrbac.application.use_cases.permission.bulk_assign_to_role import (
    BulkAssignToRoleUseCase,
)
from tenantrbac.application.use_cases.permission.list_role_permissions import (
    ListRolePermissionsUseCase,
)
from tenantrbac.application.use_cases.role.change_role_status import ChangeRoleStatusUseCase
from tenantrbac.application.use_cases.role.create_role import CreateRoleUseCase
from tenantrbac.application.use_cases.role.delete_role import DeleteRoleUseCase
from tenantrbac.application.use_cases.role.get_role import GetRoleUseCase
from tenantrbac.application.use_cases.role.list_roles import ListRolesUseCase
from tenantrbac.application.use_cases.role.update_role import UpdateRoleUseCase
from tenantrbac.domain.value_objects import MutationAction
from tenantrbac.interfaces.api.resources.common import (
    body_uuid,
    body_uuid_list,
    list_query,
    page_body,
    path_uuid,
    permission_to_dict,
    read_body,
    require_actor,
    role_to_dict,
)


class RolesResource:
    """GET/POST /v1/roles - list and create roles."""

    def __init__(
        self,
        list_roles: ListRolesUseCase,
        create_role: CreateRoleUseCase,
        default_per_page: int = 15,
        max_per_page: int = 100,
    ) -> None:
        self._list = list_roles
        self._create = create_role
        self._default_per_page = default_per_page
        self._max_per_page = max_per_page

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        actor = require_actor(req)
        query = list_query(req, self._default_per_page, self._max_per_page)
        page = await self._list.execute(actor, query)
        resp.media = page_body(page, role_to_dict)
        resp.status = falcon.HTTP_200

    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        actor = require_actor(req)
        body = await read_body(req)
        data = RoleCreateInput(
            name=body.get("name") or "",
            description=body.get("description"),
            level=body.get("level"),
            tenant_id=body_uuid(body, "tenant_id", required=False),
            is_custom=body.get("is_custom"),
        )
        role = await self._create.execute(actor, data)
        resp.media = {
            "success": True,
            "message": "Role created successfully",
            "data": role_to_dict(role),
        }
        resp.status = falcon.HTTP_201


class RoleResource:
    """GET/PUT/PATCH/DELETE /v1/roles/{role_id}."""

    def __init__(
        self,
        get_role: GetRoleUseCase,
        update_role: UpdateRoleUseCase,
        delete_role: DeleteRoleUseCase,
    ) -> None:
        self._get = get_role
        self._update = update_role
        self._delete = delete_role

    async def on_get(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, role_id: str
    ) -> None:
        actor = require_actor(req)
        details = await self._get.execute(actor, path_uuid(role_id, "Role"))
        resp.media = {
            "success": True,
            "data": {
                **role_to_dict(details.role),
                "stats": {
                    "total_users": details.total_users,
                    "active_users": details.active_users,
                },
            },
        }
        resp.status = falcon.HTTP_200

    async def on_put(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, role_id: str
    ) -> None:
        actor = require_actor(req)
        body = await read_body(req)
        data = RoleUpdateInput(
            name=body.get("name"),
            description=body.get("description"),
            level=body.get("level"),
            active=body.get("active"),
            fields_set=frozenset(body),
        )
        role = await self._update.execute(actor, path_uuid(role_id, "Role"), data)
        resp.media = {
            "success": True,
            "message": "Role updated successfully",
            "data": role_to_dict(role),
        }
        resp.status = falcon.HTTP_200

    on_patch = on_put

    async def on_delete(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, role_id: str
    ) -> None:
        actor = require_actor(req)
        await self._delete.execute(actor, path_uuid(role_id, "Role"))
        resp.media = {"success": True, "message": "Role deleted successfully"}
        resp.status = falcon.HTTP_200


class RoleStatusResource:
    """POST /v1/roles/{role_id}/{activate|deactivate|restore}."""

    def __init__(self, change_status: ChangeRoleStatusUseCase) -> None:
        self._change = change_status

    async def _run(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, role_id: str, action: MutationAction
    ) -> None:
        actor = require_actor(req)
        role = await self._change.execute(actor, path_uuid(role_id, "Role"), action)
        resp.media = {
            "success": True,
            "message": f"Role {action.value}d successfully",
            "data": role_to_dict(role),
        }
        resp.status = falcon.HTTP_200

    async def on_post_activate(self, req, resp, role_id: str) -> None:
        await self._run(req, resp, role_id, MutationAction.ACTIVATE)

    async def on_post_deactivate(self, req, resp, role_id: str) -> None:
        await self._run(req, resp, role_id, MutationAction.DEACTIVATE)

    async def on_post_restore(self, req, resp, role_id: str) -> None:
        await self._run(req, resp, role_id, MutationAction.RESTORE)


class RolePermissionsResource:
    """GET/PUT /v1/roles/{role_id}/permissions - list grants or replace them."""

    def __init__(
        self,
        list_role_permissions: ListRolePermissionsUseCase,
        bulk_assign: BulkAssignToRoleUseCase,
    ) -> None:
        self._list = list_role_permissions
        self._bulk = bulk_assign

    async def on_get(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, role_id: str
    ) -> None:
        actor = require_actor(req)
        permissions = await self._list.execute(actor, path_uuid(role_id, "Role"))
        resp.media = {
            "success": True,
            "data": [permission_to_dict(p) for p in permissions],
            "total": len(permissions),
        }
        resp.status = falcon.HTTP_200

    async def on_put(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, role_id: str
    ) -> None:
        actor = require_actor(req)
        body = await read_body(req)
        result = await self._bulk.execute(
            actor, path_uuid(role_id, "Role"), body_uuid_list(body, "permission_ids")
        )
        resp.media = {
            "success": True,
            "message": "Permissions assigned successfully",
            "data": {
                "role_id": str(result.role_id),
                "granted_count": result.granted_count,
                "added": result.added,
                "revoked": result.revoked,
            },
        }
        resp.status = falcon.HTTP_200
