"""Audit event emitted on denials and successful writes."""

from dataclasses import dataclass, field
from typing import Any
from uuid import UUID


@dataclass(frozen=True)
class AuditEvent:
    """Structured audit record."""

    action: str
    actor_id: UUID | None
    outcome: str
    resource: str | None = None
    target_id: UUID | None = None
    tenant_id: UUID | None = None
    detail: dict[str, Any] = field(default_factory=dict)

    SUCCESS = "success"
    DENIED = "denied"
