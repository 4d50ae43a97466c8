"""Tests for JWT token validation."""

import time
import uuid

import jwt
import pytest

from nsregistry.core.auth.jwt import ALGORITHM, SECRET_KEY, TokenError, decode_token


def make_token(claims: dict, secret: str = SECRET_KEY) -> str:
    """Encode claims the way the identity service does."""
    return jwt.encode(claims, secret, algorithm=ALGORITHM)


def valid_claims(**overrides: object) -> dict:
    """Build a complete, unexpired claim set."""
    now = int(time.time())
    claims = {
        "sub": str(uuid.uuid4()),
        "name": "alice",
        "iat": now,
        "exp": now + 900,
    }
    claims.update(overrides)
    return claims


class TestDecodeToken:
    """Tests for decode_token."""

    def test_decodes_valid_token(self) -> None:
        """Should return payload for a valid token."""
        claims = valid_claims()

        payload = decode_token(make_token(claims))

        assert payload.sub == claims["sub"]
        assert payload.name == "alice"

    def test_to_caller(self) -> None:
        """Should build a caller identity from the claims."""
        claims = valid_claims()

        caller = decode_token(make_token(claims)).to_caller()

        assert caller.id == uuid.UUID(claims["sub"])
        assert caller.name == "alice"

    def test_expired_token(self) -> None:
        """Should reject an expired token."""
        past = int(time.time()) - 3600
        token = make_token(valid_claims(iat=past - 900, exp=past))

        with pytest.raises(TokenError, match="expired"):
            decode_token(token)

    def test_wrong_secret(self) -> None:
        """Should reject a token signed with another key."""
        token = make_token(valid_claims(), secret="some-other-secret-key-of-enough-length")

        with pytest.raises(TokenError, match="Invalid token"):
            decode_token(token)

    def test_garbage_token(self) -> None:
        """Should reject a malformed token."""
        with pytest.raises(TokenError):
            decode_token("invalid.token.here")

    def test_missing_name_claim(self) -> None:
        """Should reject a token without a user name."""
        claims = valid_claims()
        del claims["name"]

        with pytest.raises(TokenError, match="missing claim"):
            decode_token(make_token(claims))

    def test_subject_must_be_user_id(self) -> None:
        """Should reject a subject that is not a UUID."""
        with pytest.raises(TokenError):
            decode_token(make_token(valid_claims(sub="user-123")))
