"""Audit sink port."""

from typing import Protocol

from tenantrbac.domain.entities import AuditEvent


class AuditSink(Protocol):
    """Receives one structured event per denial or successful write."""

    def emit(self, event: AuditEvent) -> None: ...
