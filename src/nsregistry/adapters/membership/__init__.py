"""Namespace repository adapters."""

from nsregistry.adapters.membership.memory import InMemoryNamespaceRepository
from nsregistry.adapters.membership.postgres import PostgresNamespaceRepository

__all__ = [
    "InMemoryNamespaceRepository",
    "PostgresNamespaceRepository",
]
