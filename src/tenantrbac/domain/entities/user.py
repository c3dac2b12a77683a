"""User entity - identity record as stored."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass
class User:
    """User - optional tenant, optional role, system-level flags."""

    id: UUID
    name: str
    email: str
    tenant_id: UUID | None
    role_id: UUID | None
    active: bool
    created_at: datetime
    is_primary_admin: bool = False
    is_super_admin: bool = False
    is_system_admin: bool = False
    is_system_manager: bool = False
    subject: str | None = None
