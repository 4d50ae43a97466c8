"""Domain-specific exceptions.

All exceptions in the nsregistry system inherit from NsRegistryError,
making it easy to catch every domain failure at the transport boundary
while still being able to handle specific error types.

Each error carries the status code the transport layer reports. Messages
are shown to users verbatim, so they only ever mention user, namespace
and host names.
"""

from __future__ import annotations


class NsRegistryError(Exception):
    """Base exception for all nsregistry errors.

    Attributes:
        message: User-visible description of the failure.
        status_code: Status the transport layer should respond with.
    """

    status_code: int = 500

    def __init__(self, message: str) -> None:
        """Initialize NsRegistryError.

        Args:
            message: User-visible description of the failure.
        """
        super().__init__(message)
        self.message = message


class Unauthenticated(NsRegistryError):
    """No caller identity was supplied for an operation that needs one."""

    status_code = 403

    def __init__(self, message: str = "You must be logged in to perform this action") -> None:
        """Initialize Unauthenticated with the standard message."""
        super().__init__(message)


class Forbidden(NsRegistryError):
    """Caller may not act on behalf of a namespace.

    Raised both when the namespace does not exist and when the caller is
    not an active member of it, with the same message.
    """

    status_code = 403

    @classmethod
    def for_namespace(cls, namespace: str, host: str) -> Forbidden:
        """Build the standard response for a namespace the caller cannot act on."""
        return cls(f"You cannot act on behalf of {namespace}@{host}")


class NotFound(NsRegistryError):
    """A referenced user, namespace or invitation does not exist."""

    status_code = 404


class InvalidTransition(NsRegistryError):
    """A lifecycle transition outside the transition table was requested.

    Attributes:
        current: State the record is in.
        target: State that was requested.
    """

    status_code = 409

    def __init__(self, current: str, target: str) -> None:
        """Initialize InvalidTransition.

        Args:
            current: State the record is in.
            target: State that was requested.
        """
        super().__init__(f"Cannot transition from {current} to {target}")
        self.current = current
        self.target = target
