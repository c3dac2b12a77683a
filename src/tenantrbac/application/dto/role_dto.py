"""Role DTOs."""

from dataclasses import dataclass, field
from uuid import UUID

from tenantrbac.domain.entities import DEFAULT_ROLE_LEVEL, MAX_ROLE_LEVEL, MIN_ROLE_LEVEL, Role
from tenantrbac.domain.exceptions import ValidationError

NAME_MAX_LENGTH = 255


def _check_name(errors: dict[str, list[str]], name: str | None, required: bool) -> None:
    if name is None:
        if required:
            errors.setdefault("name", []).append("The name field is required.")
        return
    if not isinstance(name, str):
        errors.setdefault("name", []).append("The name must be a string.")
    elif not name.strip():
        errors.setdefault("name", []).append("The name field is required.")
    elif len(name) > NAME_MAX_LENGTH:
        errors.setdefault("name", []).append(
            f"The name may not be greater than {NAME_MAX_LENGTH} characters."
        )


def _check_level(errors: dict[str, list[str]], level: int | None) -> None:
    if level is None:
        return
    if isinstance(level, bool) or not isinstance(level, int):
        errors.setdefault("level", []).append("The level must be an integer.")
    elif not MIN_ROLE_LEVEL <= level <= MAX_ROLE_LEVEL:
        errors.setdefault("level", []).append(
            f"The level must be between {MIN_ROLE_LEVEL} and {MAX_ROLE_LEVEL}."
        )


def _check_string(errors: dict[str, list[str]], key: str, value: object) -> None:
    if value is not None and not isinstance(value, str):
        errors.setdefault(key, []).append(f"The {key} must be a string.")


def _check_flag(errors: dict[str, list[str]], key: str, value: object) -> None:
    if value is not None and not isinstance(value, bool):
        errors.setdefault(key, []).append(f"The {key} field must be true or false.")


@dataclass
class RoleCreateInput:
    """Input for creating a role. tenant_id and is_custom are honoured for SuperAdmin only."""

    name: str
    description: str | None = None
    level: int | None = None
    tenant_id: UUID | None = None
    is_custom: bool | None = None

    def validate(self) -> None:
        errors: dict[str, list[str]] = {}
        _check_name(errors, self.name, required=True)
        _check_level(errors, self.level)
        _check_string(errors, "description", self.description)
        _check_flag(errors, "is_custom", self.is_custom)
        if errors:
            raise ValidationError("Validation failed", errors)
        self.name = self.name.strip()

    @property
    def resolved_level(self) -> int:
        return self.level if self.level is not None else DEFAULT_ROLE_LEVEL


@dataclass
class RoleUpdateInput:
    """Partial update - None means unchanged."""

    name: str | None = None
    description: str | None = None
    level: int | None = None
    active: bool | None = None
    fields_set: frozenset[str] = field(default_factory=frozenset)

    def validate(self) -> None:
        errors: dict[str, list[str]] = {}
        _check_name(errors, self.name, required=False)
        _check_level(errors, self.level)
        _check_string(errors, "description", self.description)
        _check_flag(errors, "active", self.active)
        if errors:
            raise ValidationError("Validation failed", errors)
        if self.name is not None:
            self.name = self.name.strip()

    def apply(self, role: Role) -> None:
        if self.name is not None:
            role.name = self.name
        if self.description is not None or "description" in self.fields_set:
            role.description = self.description
        if self.level is not None:
            role.level = self.level
        if self.active is not None:
            role.active = self.active


@dataclass
class RoleDetails:
    """Role with usage stats."""

    role: Role
    total_users: int
    active_users: int
