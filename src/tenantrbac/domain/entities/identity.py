"""Identity snapshot fed to the actor classifier."""

from dataclasses import dataclass
from uuid import UUID

from tenantrbac.domain.entities.role import Role


@dataclass(frozen=True)
class Identity:
    """Raw identity: tenant, already-loaded role and system flags."""

    id: UUID
    tenant_id: UUID | None = None
    role: Role | None = None
    is_super_admin: bool = False
    is_system_admin: bool = False
    is_system_manager: bool = False
    email: str | None = None
