"""Permission DTOs."""

from dataclasses import dataclass, field
from uuid import UUID

from tenantrbac.domain.entities import Permission
from tenantrbac.domain.exceptions import ValidationError

FIELD_MAX_LENGTH = 255


def _check_text(
    errors: dict[str, list[str]], key: str, value: str | None, required: bool
) -> None:
    if value is not None and not isinstance(value, str):
        errors.setdefault(key, []).append(f"The {key} must be a string.")
        return
    if value is None or not value.strip():
        if required or value is not None:
            errors.setdefault(key, []).append(f"The {key} field is required.")
        return
    if len(value) > FIELD_MAX_LENGTH:
        errors.setdefault(key, []).append(
            f"The {key} may not be greater than {FIELD_MAX_LENGTH} characters."
        )


def _check_optional(errors: dict[str, list[str]], key: str, value: str | None) -> None:
    if value is None:
        return
    if not isinstance(value, str):
        errors.setdefault(key, []).append(f"The {key} must be a string.")
    elif len(value) > FIELD_MAX_LENGTH:
        errors.setdefault(key, []).append(
            f"The {key} may not be greater than {FIELD_MAX_LENGTH} characters."
        )


def _check_string(errors: dict[str, list[str]], key: str, value: object) -> None:
    if value is not None and not isinstance(value, str):
        errors.setdefault(key, []).append(f"The {key} must be a string.")


def _check_flag(errors: dict[str, list[str]], key: str, value: object) -> None:
    if value is not None and not isinstance(value, bool):
        errors.setdefault(key, []).append(f"The {key} field must be true or false.")


@dataclass
class PermissionCreateInput:
    """Input for creating a permission. tenant_id and is_custom are honoured for SuperAdmin only."""

    name: str
    display_name: str
    description: str | None = None
    module: str | None = None
    category: str | None = None
    tenant_id: UUID | None = None
    is_custom: bool | None = None

    def validate(self) -> None:
        errors: dict[str, list[str]] = {}
        _check_text(errors, "name", self.name, required=True)
        _check_text(errors, "display_name", self.display_name, required=True)
        _check_optional(errors, "module", self.module)
        _check_optional(errors, "category", self.category)
        _check_string(errors, "description", self.description)
        _check_flag(errors, "is_custom", self.is_custom)
        if errors:
            raise ValidationError("Validation failed", errors)
        self.name = self.name.strip()
        self.display_name = self.display_name.strip()


@dataclass
class PermissionUpdateInput:
    """Partial update - None means unchanged unless the key is in fields_set."""

    name: str | None = None
    display_name: str | None = None
    description: str | None = None
    module: str | None = None
    category: str | None = None
    active: bool | None = None
    fields_set: frozenset[str] = field(default_factory=frozenset)

    def validate(self) -> None:
        errors: dict[str, list[str]] = {}
        _check_text(errors, "name", self.name, required=False)
        _check_text(errors, "display_name", self.display_name, required=False)
        _check_optional(errors, "module", self.module)
        _check_optional(errors, "category", self.category)
        _check_string(errors, "description", self.description)
        _check_flag(errors, "active", self.active)
        if errors:
            raise ValidationError("Validation failed", errors)
        if self.name is not None:
            self.name = self.name.strip()

    def apply(self, permission: Permission) -> None:
        if self.name is not None:
            permission.name = self.name
        if self.display_name is not None:
            permission.display_name = self.display_name
        for key in ("description", "module", "category"):
            value = getattr(self, key)
            if value is not None or key in self.fields_set:
                setattr(permission, key, value)
        if self.active is not None:
            permission.active = self.active


@dataclass
class PermissionDetails:
    """Permission with assignment stats."""

    permission: Permission
    assigned_to_roles: int
    assigned_to_users: int


@dataclass
class BulkGrantResult:
    """Outcome of a replace-the-set grant."""

    role_id: UUID
    granted_count: int
    added: int
    revoked: int
