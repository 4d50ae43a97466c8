"""In-memory implementation of NamespaceRepository."""

from __future__ import annotations

import asyncio
from dataclasses import replace
from datetime import UTC, datetime
from uuid import UUID, uuid4

from nsregistry.core.membership.types import (
    MaintainerGrant,
    MaintainerState,
    MembershipState,
    Namespace,
    NamespaceMember,
    Package,
    User,
)


class InMemoryNamespaceRepository:
    """In-memory repository for tests and local development.

    Writes take an asyncio lock around each check-and-set so the
    atomicity guarantees match the PostgreSQL repository. The lock is
    never held across an await of another component.

    Attributes:
        users: Users by id.
        namespaces: Namespaces by id.
        members: Every membership row ever created, including terminal ones.
        packages: Packages by id.
        grants: Maintainer grants.
        inactive_hosts: Names of hosts whose namespaces are hidden.
    """

    def __init__(self) -> None:
        """Initialize an empty repository."""
        self.users: dict[UUID, User] = {}
        self.namespaces: dict[UUID, Namespace] = {}
        self.members: list[NamespaceMember] = []
        self.packages: dict[UUID, Package] = {}
        self.grants: list[MaintainerGrant] = []
        self.inactive_hosts: set[str] = set()
        self._package_namespace: dict[UUID, UUID] = {}
        self._lock = asyncio.Lock()

    # Seeding helpers
    def add_user(self, name: str, active: bool = True) -> User:
        """Add a user."""
        user = User(id=uuid4(), name=name, active=active)
        self.users[user.id] = user
        return user

    def add_namespace(self, name: str, host: str, active: bool = True) -> Namespace:
        """Add a namespace under a host."""
        ns = Namespace(id=uuid4(), name=name, host=host, active=active)
        self.namespaces[ns.id] = ns
        return ns

    def add_member(
        self,
        user: User,
        ns: Namespace,
        state: MembershipState = MembershipState.ACTIVE,
    ) -> NamespaceMember:
        """Add a membership row in any state."""
        now = datetime.now(UTC)
        member = NamespaceMember(
            id=uuid4(),
            user_id=user.id,
            namespace_id=ns.id,
            state=state,
            accepted=state is MembershipState.ACTIVE,
            created=now,
            modified=now,
        )
        self.members.append(member)
        return member

    def add_package(self, name: str, owner: Namespace, active: bool = True) -> Package:
        """Add a package owned by a namespace."""
        now = datetime.now(UTC)
        pkg = Package(
            id=uuid4(),
            name=name,
            namespace=owner.name,
            host=owner.host,
            created=now,
            modified=now,
            active=active,
        )
        self.packages[pkg.id] = pkg
        self._package_namespace[pkg.id] = owner.id
        return pkg

    def add_grant(self, pkg: Package, ns: Namespace, state: MaintainerState) -> MaintainerGrant:
        """Grant a namespace maintainership of a package."""
        grant = MaintainerGrant(package_id=pkg.id, namespace_id=ns.id, state=state)
        self.grants.append(grant)
        return grant

    def members_for(self, user_id: UUID, namespace_id: UUID) -> list[NamespaceMember]:
        """Get every row for a pair, oldest first."""
        return [
            m for m in self.members if m.user_id == user_id and m.namespace_id == namespace_id
        ]

    def _is_visible(self, ns: Namespace) -> bool:
        """Check whether a namespace and its host are both active."""
        return ns.active and ns.host not in self.inactive_hosts

    # User operations
    async def get_active_user(self, name: str) -> User | None:
        """Get an active user by name."""
        for user in self.users.values():
            if user.name == name and user.active:
                return user
        return None

    # Namespace operations
    async def get_active_namespace(self, name: str, host: str) -> Namespace | None:
        """Get an active namespace under an active host."""
        for ns in self.namespaces.values():
            if ns.name == name and ns.host == host and self._is_visible(ns):
                return ns
        return None

    async def get_namespace_for_active_member(
        self, name: str, host: str, user_id: UUID
    ) -> Namespace | None:
        """Get an active namespace only if the user is an active member of it."""
        ns = await self.get_active_namespace(name, host)
        if ns is None:
            return None
        if any(m.active for m in self.members_for(user_id, ns.id)):
            return ns
        return None

    async def list_active_namespace_names(self) -> list[str]:
        """List names of all active namespaces."""
        return sorted(ns.name for ns in self.namespaces.values() if self._is_visible(ns))

    # Membership operations
    async def get_live_member(self, user_id: UUID, namespace_id: UUID) -> NamespaceMember | None:
        """Get the pending or active membership row for a pair, if any."""
        for member in self.members_for(user_id, namespace_id):
            if member.state.is_live:
                return member
        return None

    async def create_pending_member(
        self, namespace_id: UUID, user_id: UUID
    ) -> NamespaceMember | None:
        """Create a pending membership, or return None if a live row already exists."""
        async with self._lock:
            if any(m.state.is_live for m in self.members_for(user_id, namespace_id)):
                return None
            now = datetime.now(UTC)
            member = NamespaceMember(
                id=uuid4(),
                user_id=user_id,
                namespace_id=namespace_id,
                state=MembershipState.PENDING,
                accepted=False,
                created=now,
                modified=now,
            )
            self.members.append(member)
            return member

    async def transition_member(
        self,
        user_id: UUID,
        namespace_id: UUID,
        from_state: MembershipState,
        to_state: MembershipState,
    ) -> bool:
        """Move at most one row from ``from_state`` to ``to_state``."""
        async with self._lock:
            for index, member in enumerate(self.members):
                if (
                    member.user_id == user_id
                    and member.namespace_id == namespace_id
                    and member.state is from_state
                ):
                    self.members[index] = replace(
                        member,
                        state=to_state,
                        accepted=member.accepted or to_state is MembershipState.ACTIVE,
                        modified=datetime.now(UTC),
                    )
                    return True
            return False

    async def list_member_names(self, namespace_id: UUID, state: MembershipState) -> list[str]:
        """List names of active users whose membership is in ``state``."""
        names = []
        for member in self.members:
            if member.namespace_id != namespace_id or member.state is not state:
                continue
            user = self.users.get(member.user_id)
            if user is not None and user.active:
                names.append(user.name)
        return sorted(names)

    async def list_namespace_names_for_user(
        self, user_id: UUID, state: MembershipState
    ) -> list[str]:
        """List names of active namespaces where the user's membership is in ``state``."""
        names = []
        for member in self.members:
            if member.user_id != user_id or member.state is not state:
                continue
            ns = self.namespaces.get(member.namespace_id)
            if ns is not None and self._is_visible(ns):
                names.append(ns.name)
        return sorted(names)

    # Maintainer operations
    async def list_packages_by_grant(
        self, namespace_id: UUID, state: MaintainerState
    ) -> list[Package]:
        """List active packages with a maintainer grant in ``state`` for the namespace."""
        packages = []
        for grant in self.grants:
            if grant.namespace_id != namespace_id or grant.state is not state:
                continue
            pkg = self.packages.get(grant.package_id)
            if pkg is None or not pkg.active:
                continue
            owner = self.namespaces.get(self._package_namespace[pkg.id])
            if owner is not None and self._is_visible(owner):
                packages.append(pkg)
        return sorted(packages, key=lambda p: p.name)
