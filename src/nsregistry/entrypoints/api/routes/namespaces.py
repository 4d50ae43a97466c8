"""Namespace membership and maintainership API routes."""

from __future__ import annotations

from typing import Annotated, Any

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from nsregistry.core.exceptions import NsRegistryError
from nsregistry.core.membership import (
    AuthorizationGuard,
    ListingService,
    MaintainershipService,
    MembershipService,
)
from nsregistry.entrypoints.api.deps import (
    get_guard,
    get_listing_service,
    get_maintainership_service,
    get_membership_service,
)
from nsregistry.entrypoints.api.middleware.jwt_auth import CallerDep

router = APIRouter(prefix="/namespaces", tags=["namespaces"])

# Annotated types for dependency injection
GuardDep = Annotated[AuthorizationGuard, Depends(get_guard)]
MembershipDep = Annotated[MembershipService, Depends(get_membership_service)]
ListingDep = Annotated[ListingService, Depends(get_listing_service)]
MaintainershipDep = Annotated[MaintainershipService, Depends(get_maintainership_service)]

NAMESPACE_PATH = "/namespace/{namespace}@{host}"


class MessageResponse(BaseModel):
    """Informational or confirmation message."""

    message: str


class ObjectsResponse(BaseModel):
    """List response."""

    objects: list[Any]


def to_http_error(error: NsRegistryError) -> HTTPException:
    """Translate a domain error into an HTTP error response."""
    return HTTPException(status_code=error.status_code, detail=error.message)


@router.get("", response_model=ObjectsResponse)
async def list_namespaces(listing: ListingDep) -> ObjectsResponse:
    """List the names of all active namespaces."""
    return ObjectsResponse(objects=await listing.list_namespaces())


@router.get(NAMESPACE_PATH + "/members", response_model=ObjectsResponse)
async def list_members(namespace: str, host: str, listing: ListingDep) -> ObjectsResponse:
    """List active members of a namespace."""
    try:
        names = await listing.list_members(namespace, host)
    except NsRegistryError as e:
        raise to_http_error(e) from None
    return ObjectsResponse(objects=names)


# The invitation routes must be registered before the {invitee} routes so
# that "invitation" is not taken for a user name.
@router.post(NAMESPACE_PATH + "/members/invitation", response_model=MessageResponse)
async def accept_invitation(
    namespace: str,
    host: str,
    caller: CallerDep,
    service: MembershipDep,
) -> MessageResponse:
    """Accept the caller's invitation to join a namespace."""
    try:
        message = await service.accept(caller, namespace, host)
    except NsRegistryError as e:
        raise to_http_error(e) from None
    return MessageResponse(message=message)


@router.delete(NAMESPACE_PATH + "/members/invitation", response_model=MessageResponse)
async def decline_invitation(
    namespace: str,
    host: str,
    caller: CallerDep,
    service: MembershipDep,
) -> MessageResponse:
    """Decline the caller's invitation to join a namespace."""
    try:
        message = await service.decline(caller, namespace, host)
    except NsRegistryError as e:
        raise to_http_error(e) from None
    return MessageResponse(message=message)


@router.post(NAMESPACE_PATH + "/members/{invitee}", response_model=MessageResponse)
async def invite_member(
    namespace: str,
    host: str,
    invitee: str,
    caller: CallerDep,
    guard: GuardDep,
    service: MembershipDep,
) -> MessageResponse:
    """Invite a user to join a namespace.

    The caller must be an active member of the namespace.
    """
    try:
        ctx = await guard.authorize(caller, namespace, host)
        message = await service.invite(ctx, invitee)
    except NsRegistryError as e:
        raise to_http_error(e) from None
    return MessageResponse(message=message)


@router.delete(NAMESPACE_PATH + "/members/{invitee}", response_model=MessageResponse)
async def remove_member(
    namespace: str,
    host: str,
    invitee: str,
    caller: CallerDep,
    guard: GuardDep,
    service: MembershipDep,
) -> MessageResponse:
    """Remove a member from a namespace.

    The caller must be an active member of the namespace.
    """
    try:
        ctx = await guard.authorize(caller, namespace, host)
        message = await service.remove(ctx, invitee)
    except NsRegistryError as e:
        raise to_http_error(e) from None
    return MessageResponse(message=message)


@router.delete(NAMESPACE_PATH + "/invitations/{invitee}", response_model=MessageResponse)
async def revoke_invitation(
    namespace: str,
    host: str,
    invitee: str,
    caller: CallerDep,
    guard: GuardDep,
    service: MembershipDep,
) -> MessageResponse:
    """Withdraw a pending invitation.

    The caller must be an active member of the namespace.
    """
    try:
        ctx = await guard.authorize(caller, namespace, host)
        message = await service.revoke(ctx, invitee)
    except NsRegistryError as e:
        raise to_http_error(e) from None
    return MessageResponse(message=message)


@router.get(NAMESPACE_PATH + "/maintainerships/pending", response_model=ObjectsResponse)
async def pending_maintainerships(
    namespace: str,
    host: str,
    caller: CallerDep,
    guard: GuardDep,
    maintainers: MaintainershipDep,
) -> ObjectsResponse:
    """List packages offering the namespace maintainership.

    The caller must be an active member of the namespace.
    """
    try:
        ctx = await guard.authorize(caller, namespace, host)
        packages = await maintainers.pending(ctx)
    except NsRegistryError as e:
        raise to_http_error(e) from None
    return ObjectsResponse(objects=packages)


@router.get(NAMESPACE_PATH + "/maintainerships", response_model=ObjectsResponse)
async def maintainerships(
    namespace: str,
    host: str,
    maintainers: MaintainershipDep,
) -> ObjectsResponse:
    """List packages the namespace maintains."""
    try:
        packages = await maintainers.confirmed(namespace, host)
    except NsRegistryError as e:
        raise to_http_error(e) from None
    return ObjectsResponse(objects=packages)
