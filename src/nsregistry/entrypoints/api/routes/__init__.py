"""API route modules."""

from fastapi import APIRouter

from nsregistry.entrypoints.api.routes.audit import router as audit_router
from nsregistry.entrypoints.api.routes.namespaces import router as namespaces_router
from nsregistry.entrypoints.api.routes.users import router as users_router

# Create main API router
api_router = APIRouter()

# Include all route modules
api_router.include_router(namespaces_router)
api_router.include_router(audit_router)
api_router.include_router(users_router)

__all__ = ["api_router"]
