"""JWT token validation.

Tokens are issued by the identity service; this module only verifies them.
"""

import os
from uuid import UUID

import jwt

from nsregistry.core.auth.types import TokenPayload


class TokenError(Exception):
    """Raised when token validation fails."""

    pass


# Configuration
SECRET_KEY = os.environ.get("JWT_SECRET_KEY", "dev-secret-change-in-production")
ALGORITHM = os.environ.get("JWT_ALGORITHM", "HS256")


def decode_token(token: str) -> TokenPayload:
    """Decode and validate a JWT token.

    Args:
        token: Encoded JWT string

    Returns:
        Decoded token payload

    Raises:
        TokenError: If token is invalid, expired or missing claims
    """
    try:
        payload = jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
        UUID(str(payload["sub"]))
        return TokenPayload(
            sub=payload["sub"],
            name=payload["name"],
            exp=payload["exp"],
            iat=payload["iat"],
        )
    except jwt.ExpiredSignatureError:
        raise TokenError("Token has expired") from None
    except jwt.InvalidTokenError as e:
        raise TokenError(f"Invalid token: {e}") from None
    except KeyError as e:
        raise TokenError(f"Token missing claim: {e}") from None
    except ValueError:
        raise TokenError("Invalid token claims") from None
