"""Membership domain types."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any
from uuid import UUID

from nsregistry.core.auth.types import CallerIdentity


class MembershipState(str, Enum):
    """Lifecycle of a user's membership in a namespace."""

    PENDING = "pending"
    ACTIVE = "active"
    DECLINED = "declined"
    REMOVED = "removed"

    @property
    def is_live(self) -> bool:
        """Whether the state still blocks a fresh invitation."""
        return self in (MembershipState.PENDING, MembershipState.ACTIVE)


class MaintainerState(str, Enum):
    """Lifecycle of a namespace's maintainer grant on a package."""

    PENDING = "pending"
    ACTIVE = "active"
    DECLINED = "declined"
    REMOVED = "removed"


@dataclass
class User:
    """A registry user."""

    id: UUID
    name: str
    active: bool = True


@dataclass
class Namespace:
    """A named ownership scope for packages, unique per host."""

    id: UUID
    name: str
    host: str
    active: bool = True

    @property
    def qualified_name(self) -> str:
        """Get the ``name@host`` form used in messages."""
        return f"{self.name}@{self.host}"


@dataclass
class NamespaceMember:
    """A user's membership row in a namespace."""

    id: UUID
    user_id: UUID
    namespace_id: UUID
    state: MembershipState
    # Set once by the pending -> active transition and kept afterwards.
    accepted: bool
    created: datetime
    modified: datetime

    @property
    def active(self) -> bool:
        """Whether the membership currently grants rights."""
        return self.state is MembershipState.ACTIVE


@dataclass
class Package:
    """A package owned by a namespace."""

    id: UUID
    name: str
    namespace: str
    host: str
    created: datetime
    modified: datetime
    active: bool = True

    def serialize(self) -> dict[str, Any]:
        """Serialize to a plain record for API responses."""
        return {
            "name": self.name,
            "namespace": f"{self.namespace}@{self.host}",
            "created": self.created.isoformat(),
            "modified": self.modified.isoformat(),
        }


@dataclass
class MaintainerGrant:
    """A namespace-level permission to co-maintain a package."""

    package_id: UUID
    namespace_id: UUID
    state: MaintainerState


@dataclass(frozen=True)
class NamespaceContext:
    """Result of a successful authorization check.

    Passed explicitly to the operations that need an authorized caller.
    """

    caller: CallerIdentity
    namespace: Namespace
