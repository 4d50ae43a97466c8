"""Maintainership queries: packages a namespace co-maintains."""

from typing import Any

from nsregistry.core.exceptions import NotFound
from nsregistry.core.membership.repository import NamespaceRepository
from nsregistry.core.membership.types import MaintainerState, NamespaceContext


class MaintainershipService:
    """Read-only views over package maintainer grants held by a namespace."""

    def __init__(self, repo: NamespaceRepository) -> None:
        """Initialize with namespace repository.

        Args:
            repo: Repository for package and grant lookups.
        """
        self._repo = repo

    async def pending(self, ctx: NamespaceContext) -> list[dict[str, Any]]:
        """List packages offering the namespace a maintainer grant it has not accepted.

        Args:
            ctx: Authorized caller and namespace.

        Returns:
            Serialized packages.
        """
        packages = await self._repo.list_packages_by_grant(
            ctx.namespace.id, MaintainerState.PENDING
        )
        return [pkg.serialize() for pkg in packages]

    async def confirmed(self, namespace: str, host: str) -> list[dict[str, Any]]:
        """List packages the namespace maintains.

        Maintainer records are public, so no membership is required.

        Args:
            namespace: Namespace name.
            host: Host the namespace lives under.

        Returns:
            Serialized packages.

        Raises:
            NotFound: If the namespace does not exist or is inactive.
        """
        ns = await self._repo.get_active_namespace(namespace, host)
        if ns is None:
            raise NotFound(f"{namespace}@{host} does not exist.")

        packages = await self._repo.list_packages_by_grant(ns.id, MaintainerState.ACTIVE)
        return [pkg.serialize() for pkg in packages]
