"""JWT token service.

Provides stateless bearer token creation and verification. Tokens are not
tracked server-side, so they stay valid until they expire.
"""

from datetime import datetime, timedelta, timezone
from uuid import UUID

import jwt

from sentinel_auth.domain.shared.clock import Clock, utc_now
from sentinel_auth.exceptions import (
    BadSignatureError,
    MalformedTokenError,
    TokenExpiredError,
)
from sentinel_auth.schemas import TokenPayload


class JWTService:
    """Service for JWT token creation and verification.

    Examples
    --------
    >>> service = JWTService(secret_key="x" * 32)
    >>> token = service.issue(user_id, email="user@example.com")
    >>> payload = service.verify(token)
    >>> print(payload.user_id)
    """

    DEFAULT_TTL_SECONDS = 3600
    MIN_SECRET_BYTES = 32
    ALGORITHM = "HS256"
    TOKEN_TYPE = "access"

    def __init__(
        self,
        secret_key: str,
        ttl_seconds: int = DEFAULT_TTL_SECONDS,
        clock: Clock = utc_now,
    ):
        """Initialize the JWT service.

        Parameters
        ----------
        secret_key
            Secret key for signing tokens. Must be at least 32 bytes.
        ttl_seconds
            Seconds until an issued token expires (default 3600)
        clock
            Source of the current time, replaceable in tests

        Raises
        ------
        ValueError
            If the secret is too short or the TTL is not positive. This is
            a startup-time misconfiguration, not a per-request error.
        """
        if len(secret_key.encode("utf-8")) < self.MIN_SECRET_BYTES:
            msg = f"JWT secret key must be at least {self.MIN_SECRET_BYTES} bytes"
            raise ValueError(msg)
        if ttl_seconds <= 0:
            msg = "Token TTL must be positive"
            raise ValueError(msg)

        self._secret_key = secret_key
        self._ttl_seconds = ttl_seconds
        self._clock = clock

    @property
    def ttl_seconds(self) -> int:
        return self._ttl_seconds

    def issue(
        self,
        subject_id: UUID,
        issued_at: datetime | None = None,
        ttl_seconds: int | None = None,
        email: str | None = None,
    ) -> str:
        """Create a signed access token.

        Parameters
        ----------
        subject_id
            The user's unique identifier
        issued_at
            Issue time (defaults to the service clock)
        ttl_seconds
            Custom lifetime (defaults to the configured TTL)
        email
            Optional email claim

        Returns
        -------
        The encoded JWT token string

        Raises
        ------
        ValueError
            If an explicit ``ttl_seconds`` is not positive
        """
        ttl = self._ttl_seconds if ttl_seconds is None else ttl_seconds
        if ttl <= 0:
            msg = "Token TTL must be positive"
            raise ValueError(msg)

        # Encoded claims carry whole seconds only
        issued_at = (issued_at or self._clock()).replace(microsecond=0)
        expires_at = issued_at + timedelta(seconds=ttl)

        payload = {
            "sub": str(subject_id),
            "type": self.TOKEN_TYPE,
            "iat": issued_at,
            "exp": expires_at,
        }
        if email is not None:
            payload["email"] = email

        return jwt.encode(payload, self._secret_key, algorithm=self.ALGORITHM)

    def verify(self, token: str, now: datetime | None = None) -> TokenPayload:
        """Verify and decode a JWT token.

        Expiry is checked against ``now`` (or the service clock) rather than
        the wall clock so that tests can move time.

        Raises
        ------
        BadSignatureError
            If the signature does not match the configured secret
        MalformedTokenError
            If the token cannot be decoded or lacks required claims
        TokenExpiredError
            If the token is past its expiry
        """
        try:
            payload = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self.ALGORITHM],
                options={
                    "require": ["sub", "iat", "exp"],
                    "verify_exp": False,
                    "verify_iat": False,
                },
            )
        except jwt.InvalidSignatureError as e:
            raise BadSignatureError from e
        except jwt.InvalidTokenError as e:
            raise MalformedTokenError(f"Malformed token: {e}") from e

        try:
            user_id = UUID(payload["sub"])
            issued_at = datetime.fromtimestamp(payload["iat"], tz=timezone.utc)
            exp = datetime.fromtimestamp(payload["exp"], tz=timezone.utc)
        except (KeyError, TypeError, ValueError, OverflowError, OSError) as e:
            raise MalformedTokenError(f"Malformed token payload: {e}") from e

        token_payload = TokenPayload(
            user_id=user_id,
            email=payload.get("email"),
            issued_at=issued_at,
            exp=exp,
            token_type=payload.get("type", self.TOKEN_TYPE),
        )
        if token_payload.is_expired(now or self._clock()):
            raise TokenExpiredError

        return token_payload
