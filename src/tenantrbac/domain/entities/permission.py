"""Permission entity - a named capability in the shared catalog."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass
class Permission:
    """Permission - system row (tenant_id None, not custom) or tenant custom row."""

    id: UUID
    name: str
    display_name: str
    description: str | None
    module: str | None
    category: str | None
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
