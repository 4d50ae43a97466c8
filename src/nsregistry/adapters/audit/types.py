"""Audit log types."""

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict


class AuditLogCreate(BaseModel):
    """Request to create an audit log entry."""

    model_config = ConfigDict(frozen=True)

    actor_id: UUID | None = None
    actor_name: str | None = None
    action: str
    namespace: str
    host: str
    subject_name: str | None = None
    message: str | None = None
    metadata: dict[str, Any] | None = None


class AuditLogEntry(BaseModel):
    """Audit log entry from database."""

    model_config = ConfigDict(frozen=True)

    id: UUID
    timestamp: datetime
    actor_id: UUID | None = None
    actor_name: str | None = None
    action: str
    namespace: str
    host: str
    subject_name: str | None = None
    message: str | None = None
    metadata: dict[str, Any] | None = None
