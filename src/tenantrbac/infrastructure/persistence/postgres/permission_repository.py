"""PostgreSQL permission repository implementation."""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from psycopg import AsyncConnection

from tenantrbac.application.dto.listing import ListQuery
from tenantrbac.domain.entities import Permission
from tenantrbac.domain.services import VisibilityScope
from tenantrbac.infrastructure.persistence.postgres.errors import unique_name_guard
from tenantrbac.infrastructure.persistence.postgres.filters import (
    PERMISSION_ORDER_BY,
    build_permission_conditions,
    page_clause,
    where_clause,
)

_COLUMNS = (
    "p.id, p.name, p.display_name, p.description, p.module, p.category, p.tenant_id, "
    "p.is_custom, p.active, p.created_at, p.updated_at, p.deleted_at"
)


def _row_to_permission(r: tuple) -> Permission:
    return Permission(
        id=r[0],
        name=r[1],
        display_name=r[2],
        description=r[3],
        module=r[4],
        category=r[5],
        tenant_id=r[6],
        is_custom=r[7],
        active=r[8],
        created_at=r[9],
        updated_at=r[10],
        deleted_at=r[11],
    )


class PostgresPermissionRepository:
    """Permission repository implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get_by_id(
        self, permission_id: UUID, include_deleted: bool = False
    ) -> Permission | None:
        """Get permission by id."""
        q = f"SELECT {_COLUMNS} FROM permissions p WHERE p.id = %s"
        if not include_deleted:
            q += " AND p.deleted_at IS NULL"
        cur = await self._conn.execute(q, (permission_id,))
        r = await cur.fetchone()
        return _row_to_permission(r) if r else None

    async def get_by_name(self, name: str) -> Permission | None:
        """Get live permission by name; names are unique across tenants."""
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM permissions p WHERE p.name = %s AND p.deleted_at IS NULL",
            (name,),
        )
        r = await cur.fetchone()
        return _row_to_permission(r) if r else None

    async def get_many(self, permission_ids: list[UUID]) -> list[Permission]:
        """Live permissions among ids; unknown ids are simply absent."""
        if not permission_ids:
            return []
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM permissions p "
            "WHERE p.id = ANY(%s) AND p.deleted_at IS NULL",
            (permission_ids,),
        )
        rows = await cur.fetchall()
        return [_row_to_permission(r) for r in rows]

    async def list(
        self, scope: VisibilityScope, query: ListQuery
    ) -> tuple[list[Permission], int]:
        """List permissions matching scope and filters. Returns (page items, total)."""
        conditions, params = build_permission_conditions(scope, query)
        where = where_clause(conditions)
        cur = await self._conn.execute(f"SELECT count(*) FROM permissions p{where}", params)
        total = (await cur.fetchone())[0]
        limit, limit_params = page_clause(query)
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM permissions p{where} {PERMISSION_ORDER_BY}{limit}",
            params + limit_params,
        )
        rows = await cur.fetchall()
        return [_row_to_permission(r) for r in rows], total

    async def list_for_role(self, role_id: UUID) -> list[Permission]:
        """Live permissions granted to role."""
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM permissions p "
            "JOIN role_permission rp ON rp.permission_id = p.id "
            f"WHERE rp.role_id = %s AND p.deleted_at IS NULL {PERMISSION_ORDER_BY}",
            (role_id,),
        )
        rows = await cur.fetchall()
        return [_row_to_permission(r) for r in rows]

    async def list_active_system_ids(self) -> list[UUID]:
        """Ids of the active system catalog at this instant."""
        cur = await self._conn.execute(
            "SELECT id FROM permissions "
            "WHERE tenant_id IS NULL AND is_custom = false AND active = true "
            "AND deleted_at IS NULL ORDER BY name"
        )
        rows = await cur.fetchall()
        return [r[0] for r in rows]

    async def create(self, permission: Permission) -> Permission:
        """Create permission."""
        with unique_name_guard("Permission", permission.name):
            await self._conn.execute(
                "INSERT INTO permissions (id, name, display_name, description, module, category, "
                "tenant_id, is_custom, active, created_at, updated_at) "
                "VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s)",
                (
                    permission.id,
                    permission.name,
                    permission.display_name,
                    permission.description,
                    permission.module,
                    permission.category,
                    permission.tenant_id,
                    permission.is_custom,
                    permission.active,
                    permission.created_at,
                    permission.updated_at,
                ),
            )
        return permission

    async def update(self, permission: Permission) -> None:
        """Update mutable fields of permission."""
        with unique_name_guard("Permission", permission.name):
            await self._conn.execute(
                "UPDATE permissions SET name=%s, display_name=%s, description=%s, module=%s, "
                "category=%s, active=%s, updated_at=%s WHERE id=%s",
                (
                    permission.name,
                    permission.display_name,
                    permission.description,
                    permission.module,
                    permission.category,
                    permission.active,
                    permission.updated_at,
                    permission.id,
                ),
            )

    async def soft_delete(self, permission_id: UUID, deleted_at: datetime) -> None:
        """Soft delete permission."""
        await self._conn.execute(
            "UPDATE permissions SET deleted_at=%s, updated_at=%s WHERE id=%s",
            (deleted_at, deleted_at, permission_id),
        )

    async def restore(self, permission_id: UUID, restored_at: datetime) -> None:
        """Clear the tombstone of a soft-deleted permission."""
        await self._conn.execute(
            "UPDATE permissions SET deleted_at=NULL, updated_at=%s WHERE id=%s",
            (restored_at, permission_id),
        )

    async def count_assignments(self, permission_id: UUID) -> tuple[int, int]:
        """Return (roles, users) holding the permission."""
        cur = await self._conn.execute(
            "SELECT "
            "(SELECT count(*) FROM role_permission WHERE permission_id = %s), "
            "(SELECT count(*) FROM user_permission WHERE permission_id = %s)",
            (permission_id, permission_id),
        )
        r = await cur.fetchone()
        return r[0], r[1]

    async def grant_to_user(self, user_id: UUID, permission_id: UUID) -> None:
        """Grant permission directly to user (idempotent)."""
        await self._conn.execute(
            "INSERT INTO user_permission (user_id, permission_id) VALUES (%s, %s) "
            "ON CONFLICT DO NOTHING",
            (user_id, permission_id),
        )

    async def revoke_from_user(self, user_id: UUID, permission_id: UUID) -> None:
        """Revoke a direct user grant."""
        await self._conn.execute(
            "DELETE FROM user_permission WHERE user_id = %s AND permission_id = %s",
            (user_id, permission_id),
        )
