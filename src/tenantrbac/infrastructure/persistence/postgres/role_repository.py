"""PostgreSQL role repository implementation."""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from psycopg import AsyncConnection

from tenantrbac.application.dto.listing import ListQuery
from tenantrbac.domain.entities import ADMINISTRATOR_ROLE_NAME, Role
from tenantrbac.domain.services import VisibilityScope
from tenantrbac.infrastructure.persistence.postgres.errors import unique_name_guard
from tenantrbac.infrastructure.persistence.postgres.filters import (
    ROLE_ORDER_BY,
    build_role_conditions,
    page_clause,
    where_clause,
)

_COLUMNS = (
    "r.id, r.name, r.description, r.level, r.tenant_id, r.is_custom, r.active, "
    "r.created_at, r.updated_at, r.deleted_at"
)


def _row_to_role(r: tuple) -> Role:
    return Role(
        id=r[0],
        name=r[1],
        description=r[2],
        level=r[3],
        tenant_id=r[4],
        is_custom=r[5],
        active=r[6],
        created_at=r[7],
        updated_at=r[8],
        deleted_at=r[9],
    )


class PostgresRoleRepository:
    """Role repository implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get_by_id(self, role_id: UUID, include_deleted: bool = False) -> Role | None:
        """Get role by id."""
        q = f"SELECT {_COLUMNS} FROM roles r WHERE r.id = %s"
        if not include_deleted:
            q += " AND r.deleted_at IS NULL"
        cur = await self._conn.execute(q, (role_id,))
        r = await cur.fetchone()
        return _row_to_role(r) if r else None

    async def get_by_name(self, tenant_id: UUID | None, name: str) -> Role | None:
        """Get live role by name within one tenant (None = global bucket)."""
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM roles r "
            "WHERE r.name = %s AND r.tenant_id IS NOT DISTINCT FROM %s AND r.deleted_at IS NULL",
            (name, tenant_id),
        )
        r = await cur.fetchone()
        return _row_to_role(r) if r else None

    async def list(self, scope: VisibilityScope, query: ListQuery) -> tuple[list[Role], int]:
        """List roles matching scope and filters. Returns (page items, total)."""
        conditions, params = build_role_conditions(scope, query)
        where = where_clause(conditions)
        cur = await self._conn.execute(f"SELECT count(*) FROM roles r{where}", params)
        total = (await cur.fetchone())[0]
        limit, limit_params = page_clause(query)
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM roles r{where} {ROLE_ORDER_BY}{limit}",
            params + limit_params,
        )
        rows = await cur.fetchall()
        return [_row_to_role(r) for r in rows], total

    async def list_administrator_roles(self, tenant_id: UUID | None = None) -> list[Role]:
        """Live tenant Administrator roles, optionally for one tenant."""
        q = (
            f"SELECT {_COLUMNS} FROM roles r "
            "WHERE r.name = %s AND r.is_custom = false "
            "AND r.tenant_id IS NOT NULL AND r.deleted_at IS NULL"
        )
        params: list[object] = [ADMINISTRATOR_ROLE_NAME]
        if tenant_id is not None:
            q += " AND r.tenant_id = %s"
            params.append(tenant_id)
        cur = await self._conn.execute(q + " ORDER BY r.created_at", params)
        rows = await cur.fetchall()
        return [_row_to_role(r) for r in rows]

    async def create(self, role: Role) -> Role:
        """Create role."""
        with unique_name_guard("Role", role.name):
            await self._conn.execute(
                "INSERT INTO roles (id, name, description, level, tenant_id, is_custom, active, "
                "created_at, updated_at) VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s)",
                (
                    role.id,
                    role.name,
                    role.description,
                    role.level,
                    role.tenant_id,
                    role.is_custom,
                    role.active,
                    role.created_at,
                    role.updated_at,
                ),
            )
        return role

    async def update(self, role: Role) -> None:
        """Update mutable fields of role."""
        with unique_name_guard("Role", role.name):
            await self._conn.execute(
                "UPDATE roles SET name=%s, description=%s, level=%s, active=%s, updated_at=%s "
                "WHERE id=%s",
                (role.name, role.description, role.level, role.active, role.updated_at, role.id),
            )

    async def soft_delete(self, role_id: UUID, deleted_at: datetime) -> None:
        """Soft delete role."""
        await self._conn.execute(
            "UPDATE roles SET deleted_at=%s, updated_at=%s WHERE id=%s",
            (deleted_at, deleted_at, role_id),
        )

    async def restore(self, role_id: UUID, restored_at: datetime) -> None:
        """Clear the tombstone of a soft-deleted role."""
        await self._conn.execute(
            "UPDATE roles SET deleted_at=NULL, updated_at=%s WHERE id=%s",
            (restored_at, role_id),
        )

    async def count_users(self, role_id: UUID) -> tuple[int, int]:
        """Return (total, active) users assigned to role."""
        cur = await self._conn.execute(
            "SELECT count(*), count(*) FILTER (WHERE active) FROM users WHERE role_id = %s",
            (role_id,),
        )
        r = await cur.fetchone()
        return r[0], r[1]

    async def get_permission_ids(self, role_id: UUID) -> list[UUID]:
        """Permission ids granted to role."""
        cur = await self._conn.execute(
            "SELECT permission_id FROM role_permission WHERE role_id = %s",
            (role_id,),
        )
        rows = await cur.fetchall()
        return [r[0] for r in rows]

    async def add_permissions(self, role_id: UUID, permission_ids: list[UUID]) -> None:
        """Grant permissions to role; existing grants are left alone."""
        for permission_id in permission_ids:
            await self._conn.execute(
                "INSERT INTO role_permission (role_id, permission_id) VALUES (%s, %s) "
                "ON CONFLICT DO NOTHING",
                (role_id, permission_id),
            )

    async def remove_permissions(self, role_id: UUID, permission_ids: list[UUID]) -> None:
        """Revoke permissions from role."""
        if not permission_ids:
            return
        await self._conn.execute(
            "DELETE FROM role_permission WHERE role_id = %s AND permission_id = ANY(%s)",
            (role_id, permission_ids),
        )
