"""Audit log repository."""

import json
from typing import Any
from uuid import UUID

from asyncpg import Pool

from nsregistry.adapters.audit.types import AuditLogCreate, AuditLogEntry


class AuditRepository:
    """Repository for audit log operations."""

    def __init__(self, pool: Pool) -> None:
        """Initialize the repository.

        Args:
            pool: Database connection pool.
        """
        self._pool = pool

    async def record(self, entry: AuditLogCreate) -> UUID:
        """Record an audit log entry.

        Args:
            entry: Audit log entry to record.

        Returns:
            ID of the created entry.
        """
        query = """
            INSERT INTO audit_logs (
                actor_id, actor_name, action, namespace, host,
                subject_name, message, metadata
            ) VALUES ($1, $2, $3, $4, $5, $6, $7, $8)
            RETURNING id
        """
        async with self._pool.acquire() as conn:
            row = await conn.fetchrow(
                query,
                entry.actor_id,
                entry.actor_name,
                entry.action,
                entry.namespace,
                entry.host,
                entry.subject_name,
                entry.message,
                json.dumps(entry.metadata) if entry.metadata is not None else None,
            )
            result: UUID = row["id"]
            return result

    async def list_for_namespace(
        self,
        namespace: str,
        host: str,
        limit: int = 50,
        offset: int = 0,
        action: str | None = None,
    ) -> tuple[list[AuditLogEntry], int]:
        """List audit log entries for a namespace, newest first.

        Args:
            namespace: Namespace name.
            host: Host the namespace lives under.
            limit: Maximum entries to return.
            offset: Number of entries to skip.
            action: Filter by action type.

        Returns:
            Tuple of (entries, total_count).
        """
        conditions = ["namespace = $1", "host = $2"]
        params: list[Any] = [namespace, host]
        param_idx = 3

        if action:
            conditions.append(f"action = ${param_idx}")
            params.append(action)
            param_idx += 1

        where_clause = " AND ".join(conditions)

        count_query = f"SELECT COUNT(*) FROM audit_logs WHERE {where_clause}"
        list_query = f"""
            SELECT * FROM audit_logs
            WHERE {where_clause}
            ORDER BY timestamp DESC
            LIMIT ${param_idx} OFFSET ${param_idx + 1}
        """
        params.extend([limit, offset])

        async with self._pool.acquire() as conn:
            total = await conn.fetchval(count_query, *params[:-2])
            rows = await conn.fetch(list_query, *params)

        entries = [self._row_to_entry(dict(row)) for row in rows]
        total_count: int = total or 0
        return entries, total_count

    def _row_to_entry(self, row: dict[str, Any]) -> AuditLogEntry:
        """Convert database row to AuditLogEntry."""
        metadata = row.get("metadata")
        if isinstance(metadata, str):
            metadata = json.loads(metadata)
        return AuditLogEntry(
            id=row["id"],
            timestamp=row["timestamp"],
            actor_id=row.get("actor_id"),
            actor_name=row.get("actor_name"),
            action=row["action"],
            namespace=row["namespace"],
            host=row["host"],
            subject_name=row.get("subject_name"),
            message=row.get("message"),
            metadata=metadata,
        )
