"""Catalog resource kinds."""

from enum import StrEnum


class ResourceKind(StrEnum):
    """Shared catalogs governed by the engine."""

    ROLE = "role"
    PERMISSION = "permission"
    TENANT = "tenant"
    USER = "user"
