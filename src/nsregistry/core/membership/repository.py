"""Namespace repository protocol for storage operations."""

from typing import Protocol, runtime_checkable
from uuid import UUID

from nsregistry.core.membership.types import (
    MaintainerState,
    MembershipState,
    Namespace,
    NamespaceMember,
    Package,
    User,
)


@runtime_checkable
class NamespaceRepository(Protocol):
    """Protocol for membership storage operations.

    Implementations provide actual storage access (PostgreSQL, in-memory).
    Lookups return None on a miss instead of raising.

    ``create_pending_member`` and ``transition_member`` are the only writes.
    Both must be atomic with respect to concurrent callers:

    - at most one live (pending or active) row may exist per
      (user, namespace) pair, so a losing concurrent insert returns None;
    - ``transition_member`` is a compare-and-swap on the row's state, so of
      two concurrent identical transitions exactly one reports success.
    """

    # User operations
    async def get_active_user(self, name: str) -> User | None:
        """Get an active user by name."""
        ...

    # Namespace operations
    async def get_active_namespace(self, name: str, host: str) -> Namespace | None:
        """Get an active namespace under an active host."""
        ...

    async def get_namespace_for_active_member(
        self, name: str, host: str, user_id: UUID
    ) -> Namespace | None:
        """Get an active namespace only if the user is an active member of it."""
        ...

    async def list_active_namespace_names(self) -> list[str]:
        """List names of all active namespaces."""
        ...

    # Membership operations
    async def get_live_member(self, user_id: UUID, namespace_id: UUID) -> NamespaceMember | None:
        """Get the pending or active membership row for a pair, if any."""
        ...

    async def create_pending_member(
        self, namespace_id: UUID, user_id: UUID
    ) -> NamespaceMember | None:
        """Create a pending membership, or return None if a live row already exists."""
        ...

    async def transition_member(
        self,
        user_id: UUID,
        namespace_id: UUID,
        from_state: MembershipState,
        to_state: MembershipState,
    ) -> bool:
        """Move at most one row from ``from_state`` to ``to_state``.

        Returns:
            True if a row was updated.
        """
        ...

    async def list_member_names(self, namespace_id: UUID, state: MembershipState) -> list[str]:
        """List names of active users whose membership is in ``state``."""
        ...

    async def list_namespace_names_for_user(
        self, user_id: UUID, state: MembershipState
    ) -> list[str]:
        """List names of active namespaces where the user's membership is in ``state``."""
        ...

    # Maintainer operations
    async def list_packages_by_grant(
        self, namespace_id: UUID, state: MaintainerState
    ) -> list[Package]:
        """List active packages with a maintainer grant in ``state`` for the namespace.

        Packages whose owning namespace or host is inactive are excluded.
        """
        ...
