"""Tenant provisioning DTOs."""

import re
from dataclasses import dataclass, field
from uuid import UUID

from tenantrbac.domain.entities import Role, Tenant, User
from tenantrbac.domain.exceptions import ValidationError

_SLUG_STRIP = re.compile(r"[^a-z0-9]+")
_EMAIL = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def slugify(value: str) -> str:
    return _SLUG_STRIP.sub("-", value.lower()).strip("-")


@dataclass
class TenantCreateInput:
    """Input for provisioning a tenant and its first administrator."""

    name: str
    primary_user_name: str
    primary_user_email: str
    slug: str | None = None
    primary_user_subject: str | None = None

    def validate(self) -> None:
        errors: dict[str, list[str]] = {}
        if not isinstance(self.name, str) or not self.name.strip():
            errors["tenant_name"] = ["The tenant name field is required."]
        if not isinstance(self.primary_user_name, str) or not self.primary_user_name.strip():
            errors["primary_user_name"] = ["The primary user name field is required."]
        if not isinstance(self.primary_user_email, str) or not _EMAIL.match(self.primary_user_email):
            errors["primary_user_email"] = ["The primary user email must be a valid email address."]
        if self.slug is not None and not isinstance(self.slug, str):
            errors["slug"] = ["The slug must be a string."]
        if errors:
            raise ValidationError("Validation failed", errors)
        self.name = self.name.strip()
        self.slug = slugify(self.slug or self.name)
        if not self.slug:
            raise ValidationError("Validation failed", {"slug": ["The slug is invalid."]})


@dataclass
class ProvisionResult:
    """Tenant plus its Administrator role and first user."""

    tenant: Tenant
    administrator_role: Role
    primary_user: User
    granted_permission_ids: list[UUID]
    warnings: list[str] = field(default_factory=list)


@dataclass
class AdminSyncReport:
    """Per-role outcome of re-granting the system catalog to Administrator roles."""

    role_id: UUID
    tenant_id: UUID
    current_count: int
    target_count: int
    status: str

    UPDATED = "updated"
    SKIPPED = "skipped"
    WOULD_UPDATE = "would_update"
    FAILED = "failed"
