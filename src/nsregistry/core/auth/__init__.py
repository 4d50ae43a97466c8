"""Auth domain types and utilities."""

from nsregistry.core.auth.jwt import TokenError, decode_token
from nsregistry.core.auth.types import CallerIdentity, TokenPayload

__all__ = [
    "CallerIdentity",
    "TokenError",
    "TokenPayload",
    "decode_token",
]
