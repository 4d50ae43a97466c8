"""Dependency injection and application lifespan management."""

from __future__ import annotations

import os
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, Annotated

import structlog
from fastapi import Depends, Request

from nsregistry.adapters.audit import AuditRecorder, AuditRepository
from nsregistry.adapters.db.app_db import AppDatabase
from nsregistry.adapters.membership import PostgresNamespaceRepository
from nsregistry.core.interfaces import AuditSink
from nsregistry.core.membership import (
    AuthorizationGuard,
    ListingService,
    MaintainershipService,
    MembershipService,
    NamespaceRepository,
)

if TYPE_CHECKING:
    from fastapi import FastAPI

logger = structlog.get_logger()


def _env_flag(name: str, default: str) -> bool:
    """Read a boolean environment variable."""
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes")


class Settings:
    """Application settings loaded from environment."""

    def __init__(self) -> None:
        """Load settings from environment variables."""
        self.database_url = os.getenv("DATABASE_URL", "postgresql://localhost:5432/nsregistry")
        self.db_pool_min_size = int(os.getenv("DB_POOL_MIN_SIZE", "2"))
        self.db_pool_max_size = int(os.getenv("DB_POOL_MAX_SIZE", "10"))
        self.audit_enabled = _env_flag("AUDIT_ENABLED", "true")
        self.init_schema = _env_flag("NSREGISTRY_INIT_SCHEMA", "false")


settings = Settings()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan - setup and teardown.

    This context manager handles:
    - Database connection pool setup
    - Optional schema creation
    - Repository and audit sink wiring
    """
    app_db = AppDatabase(
        settings.database_url,
        min_size=settings.db_pool_min_size,
        max_size=settings.db_pool_max_size,
    )
    await app_db.connect()

    if settings.init_schema:
        await app_db.init_schema()

    app.state.app_db = app_db
    app.state.namespace_repo = PostgresNamespaceRepository(app_db)
    app.state.audit_repo = AuditRepository(pool=app_db.pool)
    app.state.audit_sink = AuditRecorder(
        app.state.audit_repo,
        enabled=settings.audit_enabled,
    )
    logger.info("nsregistry_started", audit_enabled=settings.audit_enabled)

    yield

    await app_db.close()


def get_repository(request: Request) -> NamespaceRepository:
    """Get the namespace repository from app state."""
    repo: NamespaceRepository = request.app.state.namespace_repo
    return repo


def get_audit_repo(request: Request) -> AuditRepository:
    """Get the audit repository from app state."""
    repo: AuditRepository = request.app.state.audit_repo
    return repo


def get_audit_sink(request: Request) -> AuditSink | None:
    """Get the audit sink from app state, if one is configured."""
    return getattr(request.app.state, "audit_sink", None)


def get_guard(
    repo: Annotated[NamespaceRepository, Depends(get_repository)],
) -> AuthorizationGuard:
    """Get authorization guard for the current request."""
    return AuthorizationGuard(repo)


def get_membership_service(
    repo: Annotated[NamespaceRepository, Depends(get_repository)],
    audit: Annotated[AuditSink | None, Depends(get_audit_sink)],
) -> MembershipService:
    """Get membership service for the current request."""
    return MembershipService(repo, audit=audit)


def get_listing_service(
    repo: Annotated[NamespaceRepository, Depends(get_repository)],
) -> ListingService:
    """Get listing service for the current request."""
    return ListingService(repo)


def get_maintainership_service(
    repo: Annotated[NamespaceRepository, Depends(get_repository)],
) -> MaintainershipService:
    """Get maintainership service for the current request."""
    return MaintainershipService(repo)
