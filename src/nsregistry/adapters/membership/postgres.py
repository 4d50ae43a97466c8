"""PostgreSQL implementation of NamespaceRepository."""

from typing import Any
from uuid import UUID

from nsregistry.adapters.db.app_db import AppDatabase
from nsregistry.core.membership.types import (
    MaintainerState,
    MembershipState,
    Namespace,
    NamespaceMember,
    Package,
    User,
)

_NAMESPACE_COLUMNS = "n.id, n.name, h.name AS host, n.active"
_MEMBER_COLUMNS = "id, user_id, namespace_id, state, accepted, created, modified"


class PostgresNamespaceRepository:
    """PostgreSQL implementation of namespace repository.

    Namespaces under an inactive host are treated as inactive.
    """

    def __init__(self, db: AppDatabase) -> None:
        """Initialize with database connection.

        Args:
            db: Application database instance.
        """
        self._db = db

    def _row_to_user(self, row: dict[str, Any]) -> User:
        """Convert database row to User model."""
        return User(id=row["id"], name=row["name"], active=row.get("active", True))

    def _row_to_namespace(self, row: dict[str, Any]) -> Namespace:
        """Convert database row to Namespace model."""
        return Namespace(
            id=row["id"],
            name=row["name"],
            host=row["host"],
            active=row.get("active", True),
        )

    def _row_to_member(self, row: dict[str, Any]) -> NamespaceMember:
        """Convert database row to NamespaceMember model."""
        return NamespaceMember(
            id=row["id"],
            user_id=row["user_id"],
            namespace_id=row["namespace_id"],
            state=MembershipState(row["state"]),
            accepted=row["accepted"],
            created=row["created"],
            modified=row["modified"],
        )

    def _row_to_package(self, row: dict[str, Any]) -> Package:
        """Convert database row to Package model."""
        return Package(
            id=row["id"],
            name=row["name"],
            namespace=row["namespace"],
            host=row["host"],
            created=row["created"],
            modified=row["modified"],
            active=row.get("active", True),
        )

    # User operations
    async def get_active_user(self, name: str) -> User | None:
        """Get an active user by name."""
        row = await self._db.fetch_one(
            "SELECT id, name, active FROM users WHERE name = $1 AND active = true",
            name,
        )
        return self._row_to_user(row) if row else None

    # Namespace operations
    async def get_active_namespace(self, name: str, host: str) -> Namespace | None:
        """Get an active namespace under an active host."""
        row = await self._db.fetch_one(
            f"""
            SELECT {_NAMESPACE_COLUMNS}
            FROM namespaces n
            JOIN hosts h ON h.id = n.host_id
            WHERE n.name = $1 AND h.name = $2
              AND n.active = true AND h.active = true
            """,
            name,
            host,
        )
        return self._row_to_namespace(row) if row else None

    async def get_namespace_for_active_member(
        self, name: str, host: str, user_id: UUID
    ) -> Namespace | None:
        """Get an active namespace only if the user is an active member of it."""
        row = await self._db.fetch_one(
            f"""
            SELECT {_NAMESPACE_COLUMNS}
            FROM namespaces n
            JOIN hosts h ON h.id = n.host_id
            JOIN namespace_members m ON m.namespace_id = n.id
            WHERE n.name = $1 AND h.name = $2
              AND n.active = true AND h.active = true
              AND m.user_id = $3 AND m.state = 'active'
            LIMIT 1
            """,
            name,
            host,
            user_id,
        )
        return self._row_to_namespace(row) if row else None

    async def list_active_namespace_names(self) -> list[str]:
        """List names of all active namespaces."""
        rows = await self._db.fetch_all(
            """
            SELECT n.name
            FROM namespaces n
            JOIN hosts h ON h.id = n.host_id
            WHERE n.active = true AND h.active = true
            ORDER BY n.name
            """
        )
        return [row["name"] for row in rows]

    # Membership operations
    async def get_live_member(self, user_id: UUID, namespace_id: UUID) -> NamespaceMember | None:
        """Get the pending or active membership row for a pair, if any."""
        row = await self._db.fetch_one(
            f"""
            SELECT {_MEMBER_COLUMNS}
            FROM namespace_members
            WHERE user_id = $1 AND namespace_id = $2
              AND state IN ('pending', 'active')
            LIMIT 1
            """,
            user_id,
            namespace_id,
        )
        return self._row_to_member(row) if row else None

    async def create_pending_member(
        self, namespace_id: UUID, user_id: UUID
    ) -> NamespaceMember | None:
        """Create a pending membership, or return None if a live row already exists."""
        row = await self._db.execute_returning(
            f"""
            INSERT INTO namespace_members (namespace_id, user_id, state, accepted)
            VALUES ($1, $2, 'pending', false)
            ON CONFLICT (namespace_id, user_id) WHERE state IN ('pending', 'active')
            DO NOTHING
            RETURNING {_MEMBER_COLUMNS}
            """,
            namespace_id,
            user_id,
        )
        return self._row_to_member(row) if row else None

    async def transition_member(
        self,
        user_id: UUID,
        namespace_id: UUID,
        from_state: MembershipState,
        to_state: MembershipState,
    ) -> bool:
        """Move at most one row from ``from_state`` to ``to_state``.

        The state predicate is re-checked in the UPDATE itself, and rows
        locked by a concurrent writer are skipped, so a second concurrent
        identical transition updates nothing.
        """
        row = await self._db.execute_returning(
            """
            UPDATE namespace_members
            SET state = $4,
                accepted = accepted OR $4 = 'active',
                modified = NOW()
            WHERE id = (
                SELECT id FROM namespace_members
                WHERE user_id = $1 AND namespace_id = $2 AND state = $3
                LIMIT 1
                FOR UPDATE SKIP LOCKED
            )
              AND state = $3
            RETURNING id
            """,
            user_id,
            namespace_id,
            from_state.value,
            to_state.value,
        )
        return row is not None

    async def list_member_names(self, namespace_id: UUID, state: MembershipState) -> list[str]:
        """List names of active users whose membership is in ``state``."""
        rows = await self._db.fetch_all(
            """
            SELECT u.name
            FROM users u
            JOIN namespace_members m ON m.user_id = u.id
            WHERE m.namespace_id = $1 AND m.state = $2 AND u.active = true
            ORDER BY u.name
            """,
            namespace_id,
            state.value,
        )
        return [row["name"] for row in rows]

    async def list_namespace_names_for_user(
        self, user_id: UUID, state: MembershipState
    ) -> list[str]:
        """List names of active namespaces where the user's membership is in ``state``."""
        rows = await self._db.fetch_all(
            """
            SELECT n.name
            FROM namespaces n
            JOIN hosts h ON h.id = n.host_id
            JOIN namespace_members m ON m.namespace_id = n.id
            WHERE m.user_id = $1 AND m.state = $2
              AND n.active = true AND h.active = true
            ORDER BY n.name
            """,
            user_id,
            state.value,
        )
        return [row["name"] for row in rows]

    # Maintainer operations
    async def list_packages_by_grant(
        self, namespace_id: UUID, state: MaintainerState
    ) -> list[Package]:
        """List active packages with a maintainer grant in ``state`` for the namespace."""
        rows = await self._db.fetch_all(
            """
            SELECT p.id, p.name, n.name AS namespace, h.name AS host,
                   p.active, p.created, p.modified
            FROM packages p
            JOIN namespaces n ON n.id = p.namespace_id
            JOIN hosts h ON h.id = n.host_id
            JOIN package_maintainers pm ON pm.package_id = p.id
            WHERE pm.namespace_id = $1 AND pm.state = $2
              AND p.active = true AND n.active = true AND h.active = true
            ORDER BY p.name
            """,
            namespace_id,
            state.value,
        )
        return [self._row_to_package(row) for row in rows]
