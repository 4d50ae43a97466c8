"""Namespace audit log API routes."""

from __future__ import annotations

from datetime import datetime
from typing import Annotated, Any
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, ConfigDict

from nsregistry.adapters.audit import AuditRepository
from nsregistry.core.exceptions import NsRegistryError
from nsregistry.entrypoints.api.deps import get_audit_repo
from nsregistry.entrypoints.api.middleware.jwt_auth import CallerDep
from nsregistry.entrypoints.api.routes.namespaces import (
    NAMESPACE_PATH,
    GuardDep,
    to_http_error,
)

router = APIRouter(prefix="/namespaces", tags=["audit"])

# Annotated type for dependency injection
AuditRepoDep = Annotated[AuditRepository, Depends(get_audit_repo)]


class AuditLogResponse(BaseModel):
    """Response for a single audit log entry."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    timestamp: datetime
    actor_name: str | None = None
    action: str
    subject_name: str | None = None
    message: str | None = None
    metadata: dict[str, Any] | None = None


class AuditLogListResponse(BaseModel):
    """Paginated list of audit logs."""

    items: list[AuditLogResponse]
    total: int
    page: int
    pages: int
    limit: int


@router.get(NAMESPACE_PATH + "/audit-logs", response_model=AuditLogListResponse)
async def list_audit_logs(
    namespace: str,
    host: str,
    caller: CallerDep,
    guard: GuardDep,
    audit_repo: AuditRepoDep,
    page: Annotated[int, Query(ge=1)] = 1,
    limit: Annotated[int, Query(ge=1, le=100)] = 50,
    action: str | None = None,
) -> AuditLogListResponse:
    """List a namespace's membership audit trail, newest first.

    The caller must be an active member of the namespace.

    Args:
        namespace: Namespace name.
        host: Host the namespace lives under.
        caller: Authenticated caller.
        guard: Authorization guard dependency.
        audit_repo: Audit repository dependency.
        page: Page number (1-indexed).
        limit: Number of items per page.
        action: Filter by action type.

    Returns:
        Paginated list of audit log entries.
    """
    try:
        ctx = await guard.authorize(caller, namespace, host)
    except NsRegistryError as e:
        raise to_http_error(e) from None

    offset = (page - 1) * limit
    entries, total = await audit_repo.list_for_namespace(
        ctx.namespace.name,
        ctx.namespace.host,
        limit=limit,
        offset=offset,
        action=action,
    )

    pages = (total + limit - 1) // limit if total > 0 else 1

    return AuditLogListResponse(
        items=[AuditLogResponse.model_validate(e) for e in entries],
        total=total,
        page=page,
        pages=pages,
        limit=limit,
    )
