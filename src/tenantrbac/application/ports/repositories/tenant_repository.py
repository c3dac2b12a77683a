"""Tenant repository port."""

from typing import Protocol
from uuid import UUID

from tenantrbac.domain.entities import Tenant


class TenantRepository(Protocol):
    """Port for tenant persistence."""

    async def get_by_id(self, tenant_id: UUID) -> Tenant | None: ...

    async def get_by_slug(self, slug: str) -> Tenant | None: ...

    async def create(self, tenant: Tenant) -> Tenant: ...
