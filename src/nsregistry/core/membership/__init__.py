"""Namespace membership domain."""

from nsregistry.core.membership.guard import AuthorizationGuard
from nsregistry.core.membership.listing import ListingService
from nsregistry.core.membership.maintainers import MaintainershipService
from nsregistry.core.membership.repository import NamespaceRepository
from nsregistry.core.membership.service import MembershipService
from nsregistry.core.membership.transitions import (
    TRANSITIONS,
    can_transition,
    ensure_transition,
    is_terminal,
)
from nsregistry.core.membership.types import (
    MaintainerGrant,
    MaintainerState,
    MembershipState,
    Namespace,
    NamespaceContext,
    NamespaceMember,
    Package,
    User,
)

__all__ = [
    "TRANSITIONS",
    "AuthorizationGuard",
    "ListingService",
    "MaintainerGrant",
    "MaintainerState",
    "MaintainershipService",
    "MembershipService",
    "MembershipState",
    "Namespace",
    "NamespaceContext",
    "NamespaceMember",
    "NamespaceRepository",
    "Package",
    "User",
    "can_transition",
    "ensure_transition",
    "is_terminal",
]
