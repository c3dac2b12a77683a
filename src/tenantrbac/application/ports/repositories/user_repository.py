"""User repository port."""

from typing import Protocol
from uuid import UUID

from tenantrbac.domain.entities import User


class FlaggedRowStore(Protocol):
    """At most one flagged row per owner."""

    async def clear_flag(self, owner_id: UUID, except_id: UUID | None = None) -> None: ...

    async def set_flag(self, row_id: UUID) -> None: ...


class UserRepository(Protocol):
    """Port for identity records."""

    @property
    def primary_admin_flags(self) -> FlaggedRowStore: ...

    async def get_by_id(self, user_id: UUID) -> User | None: ...

    async def get_by_subject(self, subject: str) -> User | None: ...

    async def get_by_email(self, email: str) -> User | None: ...

    async def create(self, user: User) -> User: ...
