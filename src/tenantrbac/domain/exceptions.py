"""Domain exceptions."""


class TenantRBACError(Exception):
    """Base exception for TenantRBAC."""

    code = "error"


class Unauthenticated(TenantRBACError):
    """No valid identity is attached to the call."""

    code = "unauthenticated"


class TenantRequired(TenantRBACError):
    """Authenticated identity has neither a tenant nor a system-level role."""

    code = "tenant_required"


class PermissionDenied(TenantRBACError):
    """Actor has standing but lacks authority for this action or target."""

    code = "forbidden"


class NotFound(TenantRBACError):
    """Requested resource was not found or is outside the actor's scope."""

    code = "not_found"

    def __init__(self, resource: str, identifier: object) -> None:
        super().__init__(f"{resource} not found: {identifier}")
        self.resource = resource
        self.identifier = identifier


class ValidationError(TenantRBACError):
    """Validation failed for input data."""

    code = "validation_error"

    def __init__(self, message: str, errors: dict[str, list[str]] | None = None) -> None:
        super().__init__(message)
        self.errors = errors or {}


class DuplicateName(ValidationError):
    """A live row with the same name already exists in the uniqueness scope."""

    def __init__(self, resource: str, name: str) -> None:
        super().__init__(
            f"{resource} '{name}' already exists",
            {"name": [f"The name '{name}' has already been taken."]},
        )
        self.resource = resource
        self.name = name


class Immutable(TenantRBACError):
    """Write attempted on a system resource."""

    code = "immutable"


class HasDependents(TenantRBACError):
    """Role deletion blocked by assigned users."""

    code = "has_dependents"
