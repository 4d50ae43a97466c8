"""JWT authentication middleware.

Resolves the calling user from a bearer token. Anonymous requests are
allowed through as ``None``; the authorization guard decides whether an
operation needs a caller.
"""

from typing import Annotated

import structlog
from fastapi import Depends, HTTPException, Security
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from nsregistry.core.auth.jwt import TokenError, decode_token
from nsregistry.core.auth.types import CallerIdentity

logger = structlog.get_logger()

# Use Bearer token authentication
bearer_scheme = HTTPBearer(auto_error=False)


async def optional_caller(
    credentials: HTTPAuthorizationCredentials | None = Security(bearer_scheme),  # noqa: B008
) -> CallerIdentity | None:
    """Resolve the caller from a bearer token, if one was sent.

    Args:
        credentials: Bearer token credentials.

    Returns:
        The caller identity, or None for anonymous requests.

    Raises:
        HTTPException: 401 if a token was sent but is invalid.
    """
    if not credentials:
        return None

    try:
        payload = decode_token(credentials.credentials)
    except TokenError as e:
        logger.warning("jwt_validation_failed", error=str(e))
        raise HTTPException(
            status_code=401,
            detail=str(e),
            headers={"WWW-Authenticate": "Bearer"},
        ) from None

    caller = payload.to_caller()
    logger.debug("jwt_verified", user_id=str(caller.id), user=caller.name)

    return caller


CallerDep = Annotated[CallerIdentity | None, Depends(optional_caller)]
