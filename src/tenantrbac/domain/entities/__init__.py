"""Domain entities."""

from tenantrbac.domain.entities.actor import Actor
from tenantrbac.domain.entities.audit_event import AuditEvent
from tenantrbac.domain.entities.identity import Identity
from tenantrbac.domain.entities.permission import Permission
from tenantrbac.domain.entities.role import (
    ADMINISTRATOR_ROLE_NAME,
    DEFAULT_ROLE_LEVEL,
    MAX_ROLE_LEVEL,
    MIN_ROLE_LEVEL,
    Role,
)
from tenantrbac.domain.entities.tenant import Tenant
from tenantrbac.domain.entities.user import User

__all__ = [
    "ADMINISTRATOR_ROLE_NAME",
    "DEFAULT_ROLE_LEVEL",
    "MAX_ROLE_LEVEL",
    "MIN_ROLE_LEVEL",
    "Actor",
    "AuditEvent",
    "Identity",
    "Permission",
    "Role",
    "Tenant",
    "User",
]
