"""Closed set of actor classes."""

from enum import StrEnum


class ActorClass(StrEnum):
    """Classification of an identity, computed once per request."""

    SUPER_ADMIN = "super_admin"
    SYSTEM_OPERATOR = "system_operator"
    TENANT_ADMIN = "tenant_admin"
    TENANT_USER = "tenant_user"
    ORPHAN = "orphan"
