"""Authorization guard for acting on behalf of a namespace."""

import structlog

from nsregistry.core.auth.types import CallerIdentity
from nsregistry.core.exceptions import Forbidden, Unauthenticated
from nsregistry.core.membership.repository import NamespaceRepository
from nsregistry.core.membership.types import NamespaceContext

logger = structlog.get_logger()


class AuthorizationGuard:
    """Decides whether a caller may act on behalf of a namespace."""

    def __init__(self, repo: NamespaceRepository) -> None:
        """Initialize with namespace repository.

        Args:
            repo: Repository for namespace and membership lookups.
        """
        self._repo = repo

    def require_caller(self, caller: CallerIdentity | None) -> CallerIdentity:
        """Return the caller, or fail if the request is anonymous.

        Raises:
            Unauthenticated: If no caller identity was supplied.
        """
        if caller is None:
            raise Unauthenticated()
        return caller

    async def authorize(
        self,
        caller: CallerIdentity | None,
        namespace: str,
        host: str,
    ) -> NamespaceContext:
        """Resolve a namespace the caller is an active member of.

        A missing namespace and a namespace the caller does not belong to
        produce the same Forbidden error.

        Args:
            caller: Authenticated caller, or None for anonymous requests.
            namespace: Namespace name.
            host: Host the namespace lives under.

        Returns:
            Context binding the caller to the resolved namespace.

        Raises:
            Unauthenticated: If the request is anonymous.
            Forbidden: If the caller cannot act on behalf of namespace@host.
        """
        caller = self.require_caller(caller)

        if not namespace or not host:
            raise Forbidden.for_namespace(namespace, host)

        ns = await self._repo.get_namespace_for_active_member(namespace, host, caller.id)
        if ns is None:
            logger.info(
                "namespace_guard_denied",
                user=caller.name,
                namespace=namespace,
                host=host,
            )
            raise Forbidden.for_namespace(namespace, host)

        return NamespaceContext(caller=caller, namespace=ns)
