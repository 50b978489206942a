"""Credential record aggregate.

One record exists per registered email. It owns the password hash, the
verification state, the brute-force counters and the one-time token
digests. Lockout arithmetic lives in ``LockoutPolicy``; the record only
stores the outcome.
"""

import copy
from datetime import datetime
from typing import Union
from uuid import UUID, uuid4

from sentinel_auth.domain.credential.email import Email
from sentinel_auth.domain.shared.clock import utc_now


class CredentialRecord:
    """
    Credential record aggregate root.

    Every mutating method refreshes ``updated_at``. ``version`` is owned by
    the store: it is the value the record had when it was read and is used
    for the conditional update.
    """

    def __init__(  # noqa: PLR0913
        self,
        email: Union[str, Email],
        password_hash: str,
        id: UUID | None = None,
        is_active: bool = True,
        is_verified: bool = False,
        created_at: datetime | None = None,
        updated_at: datetime | None = None,
        last_login: datetime | None = None,
        failed_login_attempts: int = 0,
        locked_until: datetime | None = None,
        verification_token_hash: str | None = None,
        reset_token_hash: str | None = None,
        reset_token_expires: datetime | None = None,
        version: int = 0,
    ):
        if failed_login_attempts < 0:
            msg = "failed_login_attempts cannot be negative"
            raise ValueError(msg)

        self._email = email if isinstance(email, Email) else Email(email)
        self._id = id or uuid4()
        self._password_hash = password_hash
        self._is_active = is_active
        self._is_verified = is_verified
        self._created_at = created_at or utc_now()
        self._updated_at = updated_at or self._created_at
        self._last_login = last_login
        self._failed_login_attempts = failed_login_attempts
        self._locked_until = locked_until
        self._verification_token_hash = verification_token_hash
        self._reset_token_hash = reset_token_hash
        self._reset_token_expires = reset_token_expires
        self._version = version

    @property
    def id(self) -> UUID:
        return self._id

    @property
    def email(self) -> str:
        return self._email.value

    @property
    def password_hash(self) -> str:
        return self._password_hash

    @property
    def is_active(self) -> bool:
        return self._is_active

    @property
    def is_verified(self) -> bool:
        return self._is_verified

    @property
    def created_at(self) -> datetime:
        return self._created_at

    @property
    def updated_at(self) -> datetime:
        return self._updated_at

    @property
    def last_login(self) -> datetime | None:
        return self._last_login

    @property
    def failed_login_attempts(self) -> int:
        return self._failed_login_attempts

    @property
    def locked_until(self) -> datetime | None:
        return self._locked_until

    @property
    def verification_token_hash(self) -> str | None:
        return self._verification_token_hash

    @property
    def reset_token_hash(self) -> str | None:
        return self._reset_token_hash

    @property
    def reset_token_expires(self) -> datetime | None:
        return self._reset_token_expires

    @property
    def version(self) -> int:
        return self._version

    def is_locked(self, now: datetime) -> bool:
        return self._locked_until is not None and self._locked_until > now

    def can_login(self, now: datetime) -> bool:
        return self._is_active and not self.is_locked(now)

    def apply_lockout_state(
        self,
        failed_login_attempts: int,
        locked_until: datetime | None,
        now: datetime,
    ) -> None:
        """Store the outcome of a lockout policy decision."""
        if locked_until is not None and locked_until <= now:
            msg = "locked_until must be in the future when set"
            raise ValueError(msg)
        self._failed_login_attempts = failed_login_attempts
        self._locked_until = locked_until
        self._updated_at = now

    def record_login(self, now: datetime) -> None:
        self._last_login = now
        self._updated_at = now

    def change_password_hash(self, password_hash: str, now: datetime) -> None:
        """Replace the password hash; any outstanding reset token dies with it."""
        self._password_hash = password_hash
        self._reset_token_hash = None
        self._reset_token_expires = None
        self._updated_at = now

    def issue_reset_token(
        self,
        token_hash: str,
        expires_at: datetime,
        now: datetime,
    ) -> None:
        self._reset_token_hash = token_hash
        self._reset_token_expires = expires_at
        self._updated_at = now

    def clear_reset_token(self, now: datetime) -> None:
        self._reset_token_hash = None
        self._reset_token_expires = None
        self._updated_at = now

    def is_reset_token_valid(self, token_hash: str, now: datetime) -> bool:
        if self._reset_token_hash is None or self._reset_token_expires is None:
            return False
        return self._reset_token_hash == token_hash and now < self._reset_token_expires

    def mark_verified(self, now: datetime) -> None:
        self._is_verified = True
        self._verification_token_hash = None
        self._updated_at = now

    def with_version(self, version: int) -> "CredentialRecord":
        """Return a detached copy carrying the given store version."""
        clone = copy.copy(self)
        clone._version = version
        return clone

    @classmethod
    def create(
        cls,
        email: Union[str, Email],
        password_hash: str,
        verification_token_hash: str | None = None,
        now: datetime | None = None,
    ) -> "CredentialRecord":
        created_at = now or utc_now()
        return cls(
            email=email,
            password_hash=password_hash,
            created_at=created_at,
            updated_at=created_at,
            verification_token_hash=verification_token_hash,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CredentialRecord):
            return NotImplemented
        return self._id == other._id

    def __hash__(self) -> int:
        return hash(self._id)

    def __repr__(self) -> str:
        return f"CredentialRecord(id={self._id}, email={self._email.value})"
