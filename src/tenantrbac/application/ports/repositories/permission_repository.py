"""Permission repository port."""

from __future__ import annotations

from datetime import datetime
from typing import Protocol
from uuid import UUID

from tenantrbac.application.dto.listing import ListQuery
from tenantrbac.domain.entities import Permission
from tenantrbac.domain.services import VisibilityScope


class PermissionRepository(Protocol):
    """Port for permission persistence and direct user grants."""

    async def get_by_id(
        self, permission_id: UUID, include_deleted: bool = False
    ) -> Permission | None: ...

    async def get_by_name(self, name: str) -> Permission | None: ...

    async def get_many(self, permission_ids: list[UUID]) -> list[Permission]: ...

    async def list(
        self, scope: VisibilityScope, query: ListQuery
    ) -> tuple[list[Permission], int]: ...

    async def list_for_role(self, role_id: UUID) -> list[Permission]: ...

    async def list_active_system_ids(self) -> list[UUID]: ...

    async def create(self, permission: Permission) -> Permission: ...

    async def update(self, permission: Permission) -> None: ...

    async def soft_delete(self, permission_id: UUID, deleted_at: datetime) -> None: ...

    async def restore(self, permission_id: UUID, restored_at: datetime) -> None: ...

    async def count_assignments(self, permission_id: UUID) -> tuple[int, int]: ...

    async def grant_to_user(self, user_id: UUID, permission_id: UUID) -> None: ...

    async def revoke_from_user(self, user_id: UUID, permission_id: UUID) -> None: ...
