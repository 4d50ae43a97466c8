"""Tests for ListingService."""

import pytest

from nsregistry.core.exceptions import NotFound, Unauthenticated
from nsregistry.core.membership import ListingService, MembershipState
from fixtures.registry import Registry, caller_for


@pytest.fixture
def listing(registry: Registry) -> ListingService:
    """Create a listing service over the seeded registry."""
    return ListingService(registry.repo)


class TestListNamespaces:
    """Tests for list_namespaces."""

    async def test_sorted_ascending(self, repo) -> None:
        """Namespace names come back in ascending order."""
        for name in ("zeta", "alpha", "mu"):
            repo.add_namespace(name, "npmjs")

        names = await ListingService(repo).list_namespaces()

        assert names == ["alpha", "mu", "zeta"]

    async def test_excludes_inactive(self, repo) -> None:
        """Inactive namespaces and namespaces under inactive hosts are hidden."""
        repo.add_namespace("alpha", "npmjs")
        repo.add_namespace("beta", "npmjs", active=False)
        repo.add_namespace("gamma", "legacy")
        repo.inactive_hosts.add("legacy")

        assert await ListingService(repo).list_namespaces() == ["alpha"]

    async def test_empty(self, repo) -> None:
        """No namespaces yields an empty list."""
        assert await ListingService(repo).list_namespaces() == []


class TestListMembers:
    """Tests for list_members."""

    async def test_active_members_only(self, registry: Registry, listing: ListingService) -> None:
        """Pending and removed members are not listed."""
        registry.repo.add_member(registry.carol, registry.acme)
        registry.repo.add_member(registry.bob, registry.acme, MembershipState.PENDING)

        assert await listing.list_members("acme", "npmjs") == ["alice", "carol"]

    async def test_inactive_users_hidden(
        self, registry: Registry, listing: ListingService
    ) -> None:
        """Members whose account is inactive are not listed."""
        registry.repo.add_member(registry.carol, registry.acme)
        registry.carol.active = False

        assert await listing.list_members("acme", "npmjs") == ["alice"]

    async def test_unknown_namespace(self, listing: ListingService) -> None:
        """Unknown namespaces raise NotFound."""
        with pytest.raises(NotFound) as exc_info:
            await listing.list_members("nope", "npmjs")

        assert exc_info.value.message == "nope@npmjs does not exist."


class TestListPendingMemberships:
    """Tests for list_pending_memberships."""

    async def test_pending_namespaces(self, registry: Registry, listing: ListingService) -> None:
        """Only namespaces with a pending invitation are listed."""
        beta = registry.repo.add_namespace("beta", "npmjs")
        registry.repo.add_member(registry.bob, beta, MembershipState.PENDING)
        registry.repo.add_member(registry.bob, registry.acme, MembershipState.PENDING)
        gamma = registry.repo.add_namespace("gamma", "npmjs")
        registry.repo.add_member(registry.bob, gamma)

        names = await listing.list_pending_memberships(caller_for(registry.bob))

        assert names == ["acme", "beta"]

    async def test_anonymous(self, listing: ListingService) -> None:
        """Anonymous callers are rejected."""
        with pytest.raises(Unauthenticated):
            await listing.list_pending_memberships(None)


class TestListMemberships:
    """Tests for list_memberships."""

    async def test_active_memberships(self, registry: Registry, listing: ListingService) -> None:
        """Only namespaces with an active membership are listed."""
        beta = registry.repo.add_namespace("beta", "npmjs")
        registry.repo.add_member(registry.alice, beta)
        gamma = registry.repo.add_namespace("gamma", "npmjs")
        registry.repo.add_member(registry.alice, gamma, MembershipState.REMOVED)

        assert await listing.list_memberships("alice") == ["acme", "beta"]

    async def test_user_without_memberships(self, listing: ListingService) -> None:
        """Users with no memberships get an empty list."""
        assert await listing.list_memberships("bob") == []

    async def test_unknown_user(self, listing: ListingService) -> None:
        """Unknown users raise NotFound."""
        with pytest.raises(NotFound) as exc_info:
            await listing.list_memberships("mallory")

        assert exc_info.value.message == "mallory not found."
