"""Protocol definitions for external dependencies of the core.

The core domain only depends on these protocols, never on concrete
implementations. Storage lives in ``core.membership.repository``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from nsregistry.core.auth.types import CallerIdentity
    from nsregistry.core.membership.types import Namespace


@runtime_checkable
class AuditSink(Protocol):
    """Interface for recording membership changes.

    Callers treat recording as best-effort: a failing sink must never
    change the outcome of the operation being audited.
    """

    async def record(
        self,
        actor: CallerIdentity,
        action: str,
        namespace: Namespace,
        subject_name: str,
        message: str,
    ) -> None:
        """Record one audited action.

        Args:
            actor: User who performed the action.
            action: Action identifier (e.g., "namespace.member.invite").
            namespace: Namespace the action applied to.
            subject_name: Name of the user the action applied to.
            message: Human-readable description of the action.
        """
        ...
