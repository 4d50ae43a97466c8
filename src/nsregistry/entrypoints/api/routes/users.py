"""User membership API routes."""

from __future__ import annotations

from fastapi import APIRouter

from nsregistry.core.exceptions import NsRegistryError
from nsregistry.entrypoints.api.middleware.jwt_auth import CallerDep
from nsregistry.entrypoints.api.routes.namespaces import (
    ListingDep,
    ObjectsResponse,
    to_http_error,
)

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/me/memberships/pending", response_model=ObjectsResponse)
async def pending_memberships(caller: CallerDep, listing: ListingDep) -> ObjectsResponse:
    """List namespaces the caller has been invited to join."""
    try:
        names = await listing.list_pending_memberships(caller)
    except NsRegistryError as e:
        raise to_http_error(e) from None
    return ObjectsResponse(objects=names)


@router.get("/user/{name}/memberships", response_model=ObjectsResponse)
async def memberships(name: str, listing: ListingDep) -> ObjectsResponse:
    """List namespaces a user is a member of."""
    try:
        names = await listing.list_memberships(name)
    except NsRegistryError as e:
        raise to_http_error(e) from None
    return ObjectsResponse(objects=names)
