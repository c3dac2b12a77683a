"""Repository ports."""

from tenantrbac.application.ports.repositories.permission_repository import (
    PermissionRepository,
)
from tenantrbac.application.ports.repositories.role_repository import RoleRepository
from tenantrbac.application.ports.repositories.tenant_repository import TenantRepository
from tenantrbac.application.ports.repositories.user_repository import (
    FlaggedRowStore,
    UserRepository,
)

__all__ = [
    "FlaggedRowStore",
    "PermissionRepository",
    "RoleRepository",
    "TenantRepository",
    "UserRepository",
]
