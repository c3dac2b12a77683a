"""Audit sink that writes events to a dedicated logger."""

import logging

from tenantrbac.domain.entities import AuditEvent

audit_logger = logging.getLogger("tenantrbac.audit")


class LoggingAuditSink:
    """Emit audit events on the tenantrbac.audit logger.

    Successful mutations go out at INFO, denials at WARNING so they can be
    routed separately by logging configuration.
    """

    def emit(self, event: AuditEvent) -> None:
        level = logging.WARNING if event.outcome == AuditEvent.DENIED else logging.INFO
        audit_logger.log(
            level,
            "%s %s",
            event.action,
            event.outcome,
            extra={
                "audit_action": event.action,
                "audit_outcome": event.outcome,
                "actor_id": str(event.actor_id) if event.actor_id else None,
                "resource": event.resource,
                "target_id": str(event.target_id) if event.target_id else None,
                "tenant_id": str(event.tenant_id) if event.tenant_id else None,
                "detail": event.detail,
            },
        )
