"""Audit helpers shared by use cases."""

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any
from uuid import UUID

from tenantrbac.application.ports import AuditSink
from tenantrbac.domain.entities import Actor, AuditEvent
from tenantrbac.domain.exceptions import (
    Immutable,
    PermissionDenied,
    TenantRequired,
    Unauthenticated,
)
from tenantrbac.domain.value_objects import ResourceKind

logger = logging.getLogger(__name__)

DENIALS = (Unauthenticated, TenantRequired, PermissionDenied, Immutable)


def record_success(
    audit: AuditSink,
    action: str,
    actor: Actor | None,
    resource: ResourceKind,
    target_id: UUID | None,
    tenant_id: UUID | None = None,
    **detail: Any,
) -> None:
    audit.emit(
        AuditEvent(
            action=f"{resource.value}.{action}",
            actor_id=actor.id if actor else None,
            outcome=AuditEvent.SUCCESS,
            resource=resource.value,
            target_id=target_id,
            tenant_id=tenant_id if tenant_id is not None else (actor.tenant_id if actor else None),
            detail=detail,
        )
    )


@contextmanager
def audit_denials(
    audit: AuditSink,
    action: str,
    actor: Actor,
    resource: ResourceKind,
    target_id: UUID | None = None,
) -> Iterator[None]:
    """Emit a denied event for any authorization failure raised in the block."""
    try:
        yield
    except DENIALS as e:
        if isinstance(e, TenantRequired) and actor.is_orphan:
            logger.warning(
                "Orphan actor refused",
                extra={"actor_id": str(actor.id), "action": action},
            )
        audit.emit(
            AuditEvent(
                action=f"{resource.value}.{action}",
                actor_id=actor.id,
                outcome=AuditEvent.DENIED,
                resource=resource.value,
                target_id=target_id,
                tenant_id=actor.tenant_id,
                detail={"reason": e.code, "message": str(e)},
            )
        )
        raise
