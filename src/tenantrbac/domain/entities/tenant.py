"""Tenant entity."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass
class Tenant:
    """Tenant - an isolated organisation owning custom roles and permissions."""

    id: UUID
    name: str
    slug: str
    active: bool
    created_at: datetime
