"""Target lookup for write paths without leaking foreign tenants' rows."""

from typing import TypeVar

from tenantrbac.domain.exceptions import NotFound

RowT = TypeVar("RowT")


def require_write_target(row: RowT | None, visible: bool, resource: str, identifier: object) -> RowT:
    """Return row or raise NotFound.

    A row owned by some tenant that the actor cannot see is reported exactly
    like a missing id. Tenantless rows fall through so the authorizer can
    answer Immutable or Forbidden for the shared catalog.
    """
    if row is None:
        raise NotFound(resource, identifier)
    if getattr(row, "tenant_id", None) is not None and not visible:
        raise NotFound(resource, identifier)
    return row
