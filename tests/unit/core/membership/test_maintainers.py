"""Tests for MaintainershipService."""

import pytest

from nsregistry.core.exceptions import NotFound
from nsregistry.core.membership import MaintainershipService, MaintainerState, NamespaceContext
from fixtures.registry import Registry


@pytest.fixture
def maintainers(registry: Registry) -> MaintainershipService:
    """Create a maintainership service over the seeded registry."""
    return MaintainershipService(registry.repo)


@pytest.fixture
def widgets(registry: Registry):
    """Seed a second namespace owning packages that offer acme grants."""
    widgets = registry.repo.add_namespace("widgets", "npmjs")
    left_pad = registry.repo.add_package("left-pad", widgets)
    right_pad = registry.repo.add_package("right-pad", widgets)
    registry.repo.add_grant(right_pad, registry.acme, MaintainerState.PENDING)
    registry.repo.add_grant(left_pad, registry.acme, MaintainerState.ACTIVE)
    return widgets


class TestPending:
    """Tests for pending maintainerships."""

    async def test_lists_pending_grants(
        self,
        widgets,
        maintainers: MaintainershipService,
        alice_ctx: NamespaceContext,
    ) -> None:
        """Only pending grants are listed, serialized."""
        packages = await maintainers.pending(alice_ctx)

        assert [p["name"] for p in packages] == ["right-pad"]
        assert packages[0]["namespace"] == "widgets@npmjs"
        assert set(packages[0]) == {"name", "namespace", "created", "modified"}

    async def test_inactive_owner_hidden(
        self,
        widgets,
        maintainers: MaintainershipService,
        alice_ctx: NamespaceContext,
    ) -> None:
        """Packages of an inactive namespace are hidden."""
        widgets.active = False

        assert await maintainers.pending(alice_ctx) == []


class TestConfirmed:
    """Tests for confirmed maintainerships."""

    async def test_lists_active_grants(
        self, widgets, maintainers: MaintainershipService
    ) -> None:
        """Only active grants are listed."""
        packages = await maintainers.confirmed("acme", "npmjs")

        assert [p["name"] for p in packages] == ["left-pad"]

    async def test_inactive_package_hidden(
        self, registry: Registry, widgets, maintainers: MaintainershipService
    ) -> None:
        """Inactive packages are hidden."""
        for pkg in registry.repo.packages.values():
            pkg.active = False

        assert await maintainers.confirmed("acme", "npmjs") == []

    async def test_unknown_namespace(self, maintainers: MaintainershipService) -> None:
        """Unknown namespaces raise NotFound."""
        with pytest.raises(NotFound) as exc_info:
            await maintainers.confirmed("nope", "npmjs")

        assert exc_info.value.message == "nope@npmjs does not exist."

    async def test_no_grants(self, maintainers: MaintainershipService) -> None:
        """A namespace with no grants maintains nothing."""
        assert await maintainers.confirmed("acme", "npmjs") == []
