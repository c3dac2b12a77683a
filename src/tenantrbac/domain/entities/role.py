"""Role entity for RBAC."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

ADMINISTRATOR_ROLE_NAME = "Administrator"
DEFAULT_ROLE_LEVEL = 5
MIN_ROLE_LEVEL = 1
MAX_ROLE_LEVEL = 10


@dataclass
class Role:
    """Role - global system role (tenant_id None) or tenant-owned custom role."""

    id: UUID
    name: str
    description: str | None
    level: int
    tenant_id: UUID | None
    is_custom: bool
    active: bool
    created_at: datetime
    updated_at: datetime
    deleted_at: datetime | None = None

    @property
    def is_system(self) -> bool:
        return self.tenant_id is None and not self.is_custom

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None

    @property
    def is_tenant_administrator(self) -> bool:
        """The singleton role seeded for a tenant at provisioning time."""
        return (
            self.tenant_id is not None
            and not self.is_custom
            and self.name == ADMINISTRATOR_ROLE_NAME
        )
