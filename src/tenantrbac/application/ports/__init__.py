"""Application ports - interfaces for external adapters."""

from tenantrbac.application.ports.audit_sink import AuditSink
from tenantrbac.application.ports.unit_of_work import UnitOfWork, UnitOfWorkFactory

__all__ = [
    "AuditSink",
    "UnitOfWork",
    "UnitOfWorkFactory",
]
