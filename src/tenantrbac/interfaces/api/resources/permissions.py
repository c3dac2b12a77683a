"""Permission API resources."""

import falcon
import falcon.asgi

from tenantrbac.application.dto.permission_dto import (
    PermissionCreateInput,
    PermissionUpdateInput,
)
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
)


class PermissionsResource:
    """GET/POST /v1/permissions - list and create permissions."""

    def __init__(
        self,
        list_permissions: ListPermissionsUseCase,
        create_permission: CreatePermissionUseCase,
        default_per_page: int = 15,
        max_per_page: int = 100,
    ) -> None:
        self._list = list_permissions
        self._create = create_permission
        self._default_per_page = default_per_page
        self._max_per_page = max_per_page

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        actor = require_actor(req)
        query = list_query(req, self._default_per_page, self._max_per_page)
        page = await self._list.execute(actor, query)
        resp.media = page_body(page, permission_to_dict)
        resp.status = falcon.HTTP_200

    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        actor = require_actor(req)
        body = await read_body(req)
        data = PermissionCreateInput(
            name=body.get("name") or "",
            display_name=body.get("display_name") or "",
            description=body.get("description"),
            module=body.get("module"),
            category=body.get("category"),
            tenant_id=body_uuid(body, "tenant_id", required=False),
            is_custom=body.get("is_custom"),
        )
        permission = await self._create.execute(actor, data)
        resp.media = {
            "success": True,
            "message": "Permission created successfully",
            "data": permission_to_dict(permission),
        }
        resp.status = falcon.HTTP_201


class PermissionResource:
    """GET/PUT/PATCH/DELETE /v1/permissions/{permission_id}."""

    def __init__(
        self,
        get_permission: GetPermissionUseCase,
        update_permission: UpdatePermissionUseCase,
        delete_permission: DeletePermissionUseCase,
    ) -> None:
        self._get = get_permission
        self._update = update_permission
        self._delete = delete_permission

    async def on_get(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, permission_id: str
    ) -> None:
        actor = require_actor(req)
        details = await self._get.execute(actor, path_uuid(permission_id, "Permission"))
        resp.media = {
            "success": True,
            "data": {
                **permission_to_dict(details.permission),
                "stats": {
                    "assigned_to_roles": details.assigned_to_roles,
                    "assigned_to_users": details.assigned_to_users,
                },
            },
        }
        resp.status = falcon.HTTP_200

    async def on_put(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, permission_id: str
    ) -> None:
        actor = require_actor(req)
        body = await read_body(req)
        data = PermissionUpdateInput(
            name=body.get("name"),
            display_name=body.get("display_name"),
            description=body.get("description"),
            module=body.get("module"),
            category=body.get("category"),
            active=body.get("active"),
            fields_set=frozenset(body),
        )
        permission = await self._update.execute(
            actor, path_uuid(permission_id, "Permission"), data
        )
        resp.media = {
            "success": True,
            "message": "Permission updated successfully",
            "data": permission_to_dict(permission),
        }
        resp.status = falcon.HTTP_200

    on_patch = on_put

    async def on_delete(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, permission_id: str
    ) -> None:
        actor = require_actor(req)
        await self._delete.execute(actor, path_uuid(permission_id, "Permission"))
        resp.media = {"success": True, "message": "Permission deleted successfully"}
        resp.status = falcon.HTTP_200


class PermissionStatusResource:
    """POST /v1/permissions/{permission_id}/{activate|deactivate|restore}."""

    def __init__(self, change_status: ChangePermissionStatusUseCase) -> None:
        self._change = change_status

    async def _run(self, req, resp, permission_id: str, action: MutationAction) -> None:
        actor = require_actor(req)
        permission = await self._change.execute(
            actor, path_uuid(permission_id, "Permission"), action
        )
        resp.media = {
            "success": True,
            "message": f"Permission {action.value}d successfully",
            "data": permission_to_dict(permission),
        }
        resp.status = falcon.HTTP_200

    async def on_post_activate(self, req, resp, permission_id: str) -> None:
        await self._run(req, resp, permission_id, MutationAction.ACTIVATE)

    async def on_post_deactivate(self, req, resp, permission_id: str) -> None:
        await self._run(req, resp, permission_id, MutationAction.DEACTIVATE)

    async def on_post_restore(self, req, resp, permission_id: str) -> None:
        await self._run(req, resp, permission_id, MutationAction.RESTORE)


class PermissionGrantsResource:
    """POST /v1/permissions/{assign-to-role|remove-from-role|assign-to-user|remove-from-user}
    and /v1/permissions/bulk-assign-to-role.
    """

    def __init__(
        self,
        assign_to_role: AssignPermissionToRoleUseCase,
        remove_from_role: RemovePermissionFromRoleUseCase,
        assign_to_user: AssignPermissionToUserUseCase,
        remove_from_user: RemovePermissionFromUserUseCase,
        bulk_assign: BulkAssignToRoleUseCase,
    ) -> None:
        self._assign_to_role = assign_to_role
        self._remove_from_role = remove_from_role
        self._assign_to_user = assign_to_user
        self._remove_from_user = remove_from_user
        self._bulk = bulk_assign

    async def on_post_assign_to_role(self, req, resp) -> None:
        actor = require_actor(req)
        body = await read_body(req)
        await self._assign_to_role.execute(
            actor, body_uuid(body, "role_id"), body_uuid(body, "permission_id")
        )
        resp.media = {"success": True, "message": "Permission assigned to role successfully"}
        resp.status = falcon.HTTP_200

    async def on_post_remove_from_role(self, req, resp) -> None:
        actor = require_actor(req)
        body = await read_body(req)
        await self._remove_from_role.execute(
            actor, body_uuid(body, "role_id"), body_uuid(body, "permission_id")
        )
        resp.media = {"success": True, "message": "Permission removed from role successfully"}
        resp.status = falcon.HTTP_200

    async def on_post_assign_to_user(self, req, resp) -> None:
        actor = require_actor(req)
        body = await read_body(req)
        await self._assign_to_user.execute(
            actor, body_uuid(body, "user_id"), body_uuid(body, "permission_id")
        )
        resp.media = {"success": True, "message": "Permission assigned to user successfully"}
        resp.status = falcon.HTTP_200

    async def on_post_remove_from_user(self, req, resp) -> None:
        actor = require_actor(req)
        body = await read_body(req)
        await self._remove_from_user.execute(
            actor, body_uuid(body, "user_id"), body_uuid(body, "permission_id")
        )
        resp.media = {"success": True, "message": "Permission removed from user successfully"}
        resp.status = falcon.HTTP_200

    async def on_post_bulk_assign_to_role(self, req, resp) -> None:
        actor = require_actor(req)
        body = await read_body(req)
        result = await self._bulk.execute(
            actor, body_uuid(body, "role_id"), body_uuid_list(body, "permission_ids")
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
