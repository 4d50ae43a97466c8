"""Membership service: invitation, acceptance and removal of namespace members."""

from uuid import UUID

import structlog

from nsregistry.core.auth.types import CallerIdentity
from nsregistry.core.exceptions import NotFound
from nsregistry.core.interfaces import AuditSink
from nsregistry.core.membership.guard import AuthorizationGuard
from nsregistry.core.membership.repository import NamespaceRepository
from nsregistry.core.membership.transitions import ensure_transition
from nsregistry.core.membership.types import (
    MembershipState,
    Namespace,
    NamespaceContext,
)

logger = structlog.get_logger()

INVITATION_NOT_FOUND = "invitation not found"


class MembershipService:
    """Drives the membership lifecycle of a (user, namespace) pair.

    Operations that act on another user take a NamespaceContext produced by
    AuthorizationGuard.authorize. Operations the invitee performs on their
    own invitation only need an authenticated caller.

    Every successful or no-op call returns a human-readable message. Errors
    are raised only when the referenced user or invitation does not exist.
    """

    def __init__(
        self,
        repo: NamespaceRepository,
        audit: AuditSink | None = None,
    ) -> None:
        """Initialize with namespace repository.

        Args:
            repo: Repository for membership storage.
            audit: Optional sink for audit records.
        """
        self._repo = repo
        self._audit = audit
        self._guard = AuthorizationGuard(repo)

    async def invite(self, ctx: NamespaceContext, invitee: str) -> str:
        """Invite a user to join the context's namespace.

        Re-inviting a pending or active member is reported, not rejected.

        Args:
            ctx: Authorized caller and namespace.
            invitee: Name of the user to invite.

        Returns:
            Confirmation or informational message.

        Raises:
            NotFound: If no active user has that name.
        """
        ns = ctx.namespace
        user = await self._repo.get_active_user(invitee)
        if user is None:
            raise NotFound(f"{invitee} not found.")

        already_invited = f"{invitee} has already been invited to join {ns.qualified_name}."

        existing = await self._repo.get_live_member(user.id, ns.id)
        if existing is not None:
            if existing.active:
                return f"{invitee} is already a member of {ns.qualified_name}."
            return already_invited

        created = await self._repo.create_pending_member(ns.id, user.id)
        if created is None:
            # A concurrent invite for the same pair won the insert.
            return already_invited

        logger.info(
            "namespace_member_invited",
            message=f"{invitee} invited to join {ns.qualified_name} by {ctx.caller.name}",
            invitee=invitee,
            inviter=ctx.caller.name,
            namespace=ns.name,
            host=ns.host,
        )
        message = f"{invitee} invited to join {ns.qualified_name}."
        await self._record(ctx.caller, "namespace.member.invite", ns, invitee, message)
        return message

    async def remove(self, ctx: NamespaceContext, invitee: str) -> str:
        """Remove an active member from the context's namespace.

        Args:
            ctx: Authorized caller and namespace.
            invitee: Name of the member to remove.

        Returns:
            Confirmation, or a message saying the user was not a member.

        Raises:
            NotFound: If no active user has that name.
        """
        ns = ctx.namespace
        user = await self._repo.get_active_user(invitee)
        if user is None:
            raise NotFound(f"{invitee} does not exist.")

        removed = await self._transition(
            user.id, ns, MembershipState.ACTIVE, MembershipState.REMOVED
        )
        if not removed:
            return f"{invitee} was not a member of {ns.qualified_name}."

        logger.info(
            "namespace_member_removed",
            message=f"{invitee} removed from {ns.qualified_name} by {ctx.caller.name}",
            invitee=invitee,
            remover=ctx.caller.name,
            namespace=ns.name,
            host=ns.host,
        )
        message = f"{invitee} removed from {ns.qualified_name}."
        await self._record(ctx.caller, "namespace.member.remove", ns, invitee, message)
        return message

    async def revoke(self, ctx: NamespaceContext, invitee: str) -> str:
        """Withdraw a pending invitation before the invitee answers it.

        Args:
            ctx: Authorized caller and namespace.
            invitee: Name of the invited user.

        Returns:
            Confirmation, or a message saying there was nothing to revoke.

        Raises:
            NotFound: If no active user has that name.
        """
        ns = ctx.namespace
        user = await self._repo.get_active_user(invitee)
        if user is None:
            raise NotFound(f"{invitee} does not exist.")

        revoked = await self._transition(
            user.id, ns, MembershipState.PENDING, MembershipState.REMOVED
        )
        if not revoked:
            return f"{invitee} has no pending invitation to join {ns.qualified_name}."

        logger.info(
            "namespace_invitation_revoked",
            invitee=invitee,
            revoker=ctx.caller.name,
            namespace=ns.name,
            host=ns.host,
        )
        message = f"invitation for {invitee} to join {ns.qualified_name} revoked."
        await self._record(ctx.caller, "namespace.member.revoke", ns, invitee, message)
        return message

    async def accept(self, caller: CallerIdentity | None, namespace: str, host: str) -> str:
        """Accept the caller's pending invitation to a namespace.

        Args:
            caller: Authenticated caller.
            namespace: Namespace name.
            host: Host the namespace lives under.

        Returns:
            Confirmation message.

        Raises:
            Unauthenticated: If the request is anonymous.
            NotFound: If the caller has no pending invitation there.
        """
        caller = self._guard.require_caller(caller)
        ns = await self._repo.get_active_namespace(namespace, host)
        if ns is None:
            raise NotFound(INVITATION_NOT_FOUND)

        accepted = await self._transition(
            caller.id, ns, MembershipState.PENDING, MembershipState.ACTIVE
        )
        if not accepted:
            raise NotFound(INVITATION_NOT_FOUND)

        logger.info(
            "namespace_invitation_accepted",
            message=f"{caller.name} accepted the invitation to join {ns.qualified_name}",
            user=caller.name,
            namespace=ns.name,
            host=ns.host,
        )
        message = f"{caller.name} is now a member of {ns.qualified_name}."
        await self._record(caller, "namespace.member.accept", ns, caller.name, message)
        return message

    async def decline(self, caller: CallerIdentity | None, namespace: str, host: str) -> str:
        """Decline the caller's pending invitation to a namespace.

        The invitation row is kept in the declined state; active
        memberships are never affected.

        Args:
            caller: Authenticated caller.
            namespace: Namespace name.
            host: Host the namespace lives under.

        Returns:
            Confirmation message.

        Raises:
            Unauthenticated: If the request is anonymous.
            NotFound: If the caller has no pending invitation there.
        """
        caller = self._guard.require_caller(caller)
        ns = await self._repo.get_active_namespace(namespace, host)
        if ns is None:
            raise NotFound(INVITATION_NOT_FOUND)

        declined = await self._transition(
            caller.id, ns, MembershipState.PENDING, MembershipState.DECLINED
        )
        if not declined:
            raise NotFound(INVITATION_NOT_FOUND)

        logger.info(
            "namespace_invitation_declined",
            user=caller.name,
            namespace=ns.name,
            host=ns.host,
        )
        message = f"{caller.name} declined the invitation to join {ns.qualified_name}."
        await self._record(caller, "namespace.member.decline", ns, caller.name, message)
        return message

    async def _transition(
        self,
        user_id: UUID,
        ns: Namespace,
        from_state: MembershipState,
        to_state: MembershipState,
    ) -> bool:
        """Validate a transition and apply it as a compare-and-swap."""
        ensure_transition(from_state, to_state)
        return await self._repo.transition_member(user_id, ns.id, from_state, to_state)

    async def _record(
        self,
        actor: CallerIdentity,
        action: str,
        ns: Namespace,
        subject_name: str,
        message: str,
    ) -> None:
        """Record an audit entry without letting failures escape."""
        if self._audit is None:
            return
        try:
            await self._audit.record(actor, action, ns, subject_name, message)
        except Exception as e:
            # Log but don't fail the operation
            logger.error("audit_record_failed", action=action, error=str(e))
