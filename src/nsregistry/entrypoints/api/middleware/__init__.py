"""API middleware."""

from nsregistry.entrypoints.api.middleware.jwt_auth import CallerDep, optional_caller

__all__ = ["CallerDep", "optional_caller"]
