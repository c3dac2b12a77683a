"""Request parsing and response serialization shared by resources."""

from typing import Any
from uuid import UUID

import falcon.asgi

from tenantrbac.application.dto.listing import (
    DEFAULT_PER_PAGE,
    MAX_PER_PAGE,
    PER_PAGE_ALL,
    ListQuery,
    Page,
)
from tenantrbac.domain.entities import Actor, Permission, Role
from tenantrbac.domain.exceptions import NotFound, Unauthenticated, ValidationError


def require_actor(req: falcon.asgi.Request) -> Actor:
    actor = getattr(req.context, "actor", None)
    if actor is None:
        raise Unauthenticated("Unauthorized")
    return actor


def path_uuid(value: str, resource: str) -> UUID:
    """Malformed path ids are reported like unknown ones."""
    try:
        return UUID(value)
    except ValueError:
        raise NotFound(resource, value) from None


def body_uuid(body: dict, key: str, required: bool = True) -> UUID | None:
    value = body.get(key)
    if value is None:
        if required:
            raise ValidationError("Validation failed", {key: [f"The {key} field is required."]})
        return None
    try:
        return UUID(str(value))
    except ValueError:
        raise ValidationError(
            "Validation failed", {key: [f"The {key} must be a valid UUID."]}
        ) from None


def body_uuid_list(body: dict, key: str) -> list[UUID]:
    values = body.get(key)
    if not isinstance(values, list):
        raise ValidationError("Validation failed", {key: [f"The {key} must be an array."]})
    try:
        return [UUID(str(v)) for v in values]
    except ValueError:
        raise ValidationError(
            "Validation failed", {key: [f"The {key} must contain valid UUIDs."]}
        ) from None


async def read_body(req: falcon.asgi.Request) -> dict:
    body = await req.get_media(default_when_empty={})
    if not isinstance(body, dict):
        raise ValidationError("Validation failed", {"body": ["A JSON object is required."]})
    return body


def list_query(
    req: falcon.asgi.Request,
    default_per_page: int = DEFAULT_PER_PAGE,
    max_per_page: int = MAX_PER_PAGE,
) -> ListQuery:
    """Build ListQuery from query string parameters."""
    raw_per_page = req.get_param("per_page")
    if raw_per_page == PER_PAGE_ALL:
        per_page: int | str = PER_PAGE_ALL
    elif raw_per_page is None:
        per_page = default_per_page
    else:
        per_page = min(req.get_param_as_int("per_page", min_value=1), max_per_page)
    tenant_id = req.get_param("tenant_id")
    return ListQuery(
        active=req.get_param_as_bool("active"),
        is_custom=req.get_param_as_bool("is_custom"),
        module=req.get_param("module"),
        category=req.get_param("category"),
        tenant_id=body_uuid({"tenant_id": tenant_id}, "tenant_id", required=False),
        search=req.get_param("search"),
        page=req.get_param_as_int("page", min_value=1) or 1,
        per_page=per_page,
        include_deleted=req.get_param_as_bool("include_deleted") or False,
    )


def _ts(value) -> str | None:
    return value.isoformat() if value else None


def _id(value: UUID | None) -> str | None:
    return str(value) if value else None


def role_to_dict(role: Role) -> dict[str, Any]:
    return {
        "id": str(role.id),
        "name": role.name,
        "description": role.description,
        "level": role.level,
        "tenant_id": _id(role.tenant_id),
        "is_custom": role.is_custom,
        "active": role.active,
        "created_at": _ts(role.created_at),
        "updated_at": _ts(role.updated_at),
        "deleted_at": _ts(role.deleted_at),
    }


def permission_to_dict(permission: Permission) -> dict[str, Any]:
    return {
        "id": str(permission.id),
        "name": permission.name,
        "display_name": permission.display_name,
        "description": permission.description,
        "module": permission.module,
        "category": permission.category,
        "tenant_id": _id(permission.tenant_id),
        "is_custom": permission.is_custom,
        "active": permission.active,
        "created_at": _ts(permission.created_at),
        "updated_at": _ts(permission.updated_at),
        "deleted_at": _ts(permission.deleted_at),
    }


def page_body(page: Page, serialize) -> dict[str, Any]:
    return {"success": True, "data": [serialize(i) for i in page.items], **page.meta()}
