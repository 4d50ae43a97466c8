"""Read paths over namespaces and memberships."""

from nsregistry.core.auth.types import CallerIdentity
from nsregistry.core.exceptions import NotFound, Unauthenticated
from nsregistry.core.membership.repository import NamespaceRepository
from nsregistry.core.membership.types import MembershipState


class ListingService:
    """Namespace, member and membership listings. All results are sorted."""

    def __init__(self, repo: NamespaceRepository) -> None:
        """Initialize with namespace repository."""
        self._repo = repo

    async def list_namespaces(self) -> list[str]:
        """List the names of all active namespaces."""
        return sorted(await self._repo.list_active_namespace_names())

    async def list_members(self, namespace: str, host: str) -> list[str]:
        """List the names of a namespace's active members.

        Raises:
            NotFound: If the namespace does not exist or is inactive.
        """
        ns = await self._repo.get_active_namespace(namespace, host)
        if ns is None:
            raise NotFound(f"{namespace}@{host} does not exist.")

        names = await self._repo.list_member_names(ns.id, MembershipState.ACTIVE)
        return sorted(names)

    async def list_pending_memberships(self, caller: CallerIdentity | None) -> list[str]:
        """List namespaces the caller has been invited to but not yet joined.

        Raises:
            Unauthenticated: If the request is anonymous.
        """
        if caller is None:
            raise Unauthenticated()

        names = await self._repo.list_namespace_names_for_user(caller.id, MembershipState.PENDING)
        return sorted(names)

    async def list_memberships(self, user_name: str) -> list[str]:
        """List namespaces a user is an active member of.

        Raises:
            NotFound: If no active user has that name.
        """
        user = await self._repo.get_active_user(user_name)
        if user is None:
            raise NotFound(f"{user_name} not found.")

        names = await self._repo.list_namespace_names_for_user(user.id, MembershipState.ACTIVE)
        return sorted(names)
