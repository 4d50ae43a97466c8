"""Auth domain types."""

from uuid import UUID

from pydantic import BaseModel, ConfigDict


class CallerIdentity(BaseModel):
    """The authenticated user making a request."""

    model_config = ConfigDict(frozen=True)

    id: UUID
    name: str


class TokenPayload(BaseModel):
    """JWT token payload claims."""

    sub: str  # user_id
    name: str
    exp: int  # expiration timestamp
    iat: int  # issued at timestamp

    def to_caller(self) -> CallerIdentity:
        """Build the caller identity these claims describe."""
        return CallerIdentity(id=UUID(self.sub), name=self.name)
