"""Role repository port."""

from __future__ import annotations

from datetime import datetime
from typing import Protocol
from uuid import UUID

from tenantrbac.application.dto.listing import ListQuery
from tenantrbac.domain.entities import Role
from tenantrbac.domain.services import VisibilityScope


class RoleRepository(Protocol):
    """Port for role persistence and role-permission grants."""

    async def get_by_id(self, role_id: UUID, include_deleted: bool = False) -> Role | None: ...

    async def get_by_name(self, tenant_id: UUID | None, name: str) -> Role | None: ...

    async def list(self, scope: VisibilityScope, query: ListQuery) -> tuple[list[Role], int]: ...

    async def list_administrator_roles(self, tenant_id: UUID | None = None) -> list[Role]: ...

    async def create(self, role: Role) -> Role: ...

    async def update(self, role: Role) -> None: ...

    async def soft_delete(self, role_id: UUID, deleted_at: datetime) -> None: ...

    async def restore(self, role_id: UUID, restored_at: datetime) -> None: ...

    async def count_users(self, role_id: UUID) -> tuple[int, int]: ...

    async def get_permission_ids(self, role_id: UUID) -> list[UUID]: ...

    async def add_permissions(self, role_id: UUID, permission_ids: list[UUID]) -> None: ...

    async def remove_permissions(self, role_id: UUID, permission_ids: list[UUID]) -> None: ...
