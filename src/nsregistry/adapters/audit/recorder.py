"""Audit sink that writes membership changes to the audit log."""

import structlog

from nsregistry.adapters.audit.repository import AuditRepository
from nsregistry.adapters.audit.types import AuditLogCreate
from nsregistry.core.auth.types import CallerIdentity
from nsregistry.core.membership.types import Namespace

logger = structlog.get_logger()


class AuditRecorder:
    """Turns membership actions into audit log entries.

    Attributes:
        enabled: When False, actions are only logged, never stored.
    """

    def __init__(self, repo: AuditRepository, enabled: bool = True) -> None:
        """Initialize the recorder.

        Args:
            repo: Audit repository to write to.
            enabled: Whether entries are stored.
        """
        self._repo = repo
        self.enabled = enabled

    async def record(
        self,
        actor: CallerIdentity,
        action: str,
        namespace: Namespace,
        subject_name: str,
        message: str,
    ) -> None:
        """Record one audited action."""
        if not self.enabled:
            logger.debug("audit_disabled_skipping", action=action)
            return

        entry = AuditLogCreate(
            actor_id=actor.id,
            actor_name=actor.name,
            action=action,
            namespace=namespace.name,
            host=namespace.host,
            subject_name=subject_name,
            message=message,
        )
        entry_id = await self._repo.record(entry)
        logger.debug("audit_recorded", action=action, entry_id=str(entry_id))
