"""Tests for membership domain types."""

from datetime import UTC, datetime
from uuid import uuid4

from nsregistry.core.membership import (
    MembershipState,
    Namespace,
    NamespaceMember,
    Package,
)


def make_member(state: MembershipState, accepted: bool = False) -> NamespaceMember:
    """Create a membership row in a given state."""
    now = datetime.now(UTC)
    return NamespaceMember(
        id=uuid4(),
        user_id=uuid4(),
        namespace_id=uuid4(),
        state=state,
        accepted=accepted,
        created=now,
        modified=now,
    )


class TestMembershipState:
    """Tests for MembershipState."""

    def test_live_states(self) -> None:
        """Only pending and active block a fresh invitation."""
        assert MembershipState.PENDING.is_live
        assert MembershipState.ACTIVE.is_live
        assert not MembershipState.DECLINED.is_live
        assert not MembershipState.REMOVED.is_live

    def test_values(self) -> None:
        """States are stored by their lowercase names."""
        assert MembershipState("pending") is MembershipState.PENDING
        assert MembershipState.REMOVED.value == "removed"


class TestNamespaceMember:
    """Tests for NamespaceMember."""

    def test_active_follows_state(self) -> None:
        """The active flag is derived from the state."""
        assert make_member(MembershipState.ACTIVE, accepted=True).active
        assert not make_member(MembershipState.PENDING).active
        assert not make_member(MembershipState.REMOVED, accepted=True).active

    def test_removed_keeps_accepted(self) -> None:
        """A removed member still shows it once accepted."""
        member = make_member(MembershipState.REMOVED, accepted=True)

        assert member.accepted is True
        assert member.active is False


class TestNamespace:
    """Tests for Namespace."""

    def test_qualified_name(self) -> None:
        """Namespaces render as name@host."""
        ns = Namespace(id=uuid4(), name="acme", host="npmjs")

        assert ns.qualified_name == "acme@npmjs"


class TestPackage:
    """Tests for Package."""

    def test_serialize(self) -> None:
        """Packages serialize to plain records."""
        created = datetime(2024, 1, 15, 12, 0, tzinfo=UTC)
        pkg = Package(
            id=uuid4(),
            name="left-pad",
            namespace="acme",
            host="npmjs",
            created=created,
            modified=created,
        )

        assert pkg.serialize() == {
            "name": "left-pad",
            "namespace": "acme@npmjs",
            "created": "2024-01-15T12:00:00+00:00",
            "modified": "2024-01-15T12:00:00+00:00",
        }
