"""Core domain for namespace membership and maintainership."""

from nsregistry.core.exceptions import (
    Forbidden,
    InvalidTransition,
    NotFound,
    NsRegistryError,
    Unauthenticated,
)

__all__ = [
    "Forbidden",
    "InvalidTransition",
    "NotFound",
    "NsRegistryError",
    "Unauthenticated",
]
