"""Auth schemas and data structures.

These are simple data classes used for transferring results from the
engine to the transport layer.
"""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from sentinel_auth.domain.credential import CredentialRecord


@dataclass(frozen=True)
class TokenPayload:
    """Decoded bearer token payload.

    Attributes
    ----------
    user_id
        The subject the token was issued for
    email
        The subject's email address, if embedded
    issued_at
        Token issue timestamp
    exp
        Token expiration timestamp
    token_type
        Always "access" for tokens issued by this package
    """

    user_id: UUID
    email: str | None
    issued_at: datetime
    exp: datetime
    token_type: str = "access"

    def is_expired(self, now: datetime) -> bool:
        """Check if the token has expired at ``now``."""
        return now >= self.exp


@dataclass(frozen=True)
class UserInfo:
    """Public view of a credential record. Never carries the password hash."""

    id: UUID
    email: str
    is_verified: bool
    created_at: datetime
    last_login: datetime | None

    @classmethod
    def from_record(cls, record: CredentialRecord) -> "UserInfo":
        return cls(
            id=record.id,
            email=record.email,
            is_verified=record.is_verified,
            created_at=record.created_at,
            last_login=record.last_login,
        )


@dataclass(frozen=True)
class AuthResponse:
    """Result of a successful login or token refresh."""

    access_token: str
    expires_in: int
    expires_at: datetime
    user: UserInfo
    token_type: str = "Bearer"


@dataclass(frozen=True)
class MessageResponse:
    message: str
