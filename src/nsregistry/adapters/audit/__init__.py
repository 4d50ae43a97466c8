"""Audit logging adapters."""

from nsregistry.adapters.audit.recorder import AuditRecorder
from nsregistry.adapters.audit.repository import AuditRepository
from nsregistry.adapters.audit.types import AuditLogCreate, AuditLogEntry

__all__ = [
    "AuditLogCreate",
    "AuditLogEntry",
    "AuditRecorder",
    "AuditRepository",
]
