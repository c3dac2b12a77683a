"""PostgreSQL tenant repository implementation."""

from uuid import UUID

from psycopg import AsyncConnection

from tenantrbac.domain.entities import Tenant


class PostgresTenantRepository:
    """Tenant repository implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get_by_id(self, tenant_id: UUID) -> Tenant | None:
        cur = await self._conn.execute(
            "SELECT id, name, slug, active, created_at FROM tenants WHERE id = %s",
            (tenant_id,),
        )
        r = await cur.fetchone()
        if not r:
            return None
        return Tenant(id=r[0], name=r[1], slug=r[2], active=r[3], created_at=r[4])

    async def get_by_slug(self, slug: str) -> Tenant | None:
        cur = await self._conn.execute(
            "SELECT id, name, slug, active, created_at FROM tenants WHERE slug = %s",
            (slug,),
        )
        r = await cur.fetchone()
        if not r:
            return None
        return Tenant(id=r[0], name=r[1], slug=r[2], active=r[3], created_at=r[4])

    async def create(self, tenant: Tenant) -> Tenant:
        await self._conn.execute(
            "INSERT INTO tenants (id, name, slug, active, created_at) VALUES (%s, %s, %s, %s, %s)",
            (tenant.id, tenant.name, tenant.slug, tenant.active, tenant.created_at),
        )
        return tenant
