"""SQLAlchemy model for credential records.

Table: auth_users
"""

from datetime import datetime
from uuid import UUID

from sqlalchemy import Boolean, CheckConstraint, DateTime, Integer, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from sentinel_auth.domain.shared.clock import utc_now
from sentinel_auth.infrastructure.persistence.sqlalchemy.base import AuthBase


class CredentialRecordModel(AuthBase):
    """
    SQLAlchemy model for one identity's authentication state.

    Security features:
    - failed_login_attempts / locked_until: brute-force lockout
    - verification_token_hash / reset_token_hash: SHA-256 digests of
      single-use tokens, never the raw token
    - version: optimistic concurrency counter for conditional updates
    """

    __tablename__ = "auth_users"
    __table_args__ = (
        CheckConstraint(
            "failed_login_attempts >= 0",
            name="chk_failed_attempts_non_negative",
        ),
    )

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True)
    email: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        nullable=False,
        index=True,
    )

    # Password hash (bcrypt format, ~60 chars)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)

    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    is_verified: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    # Audit timestamps
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utc_now,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utc_now,
    )
    last_login: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )

    # Security metadata
    failed_login_attempts: Mapped[int] = mapped_column(
        Integer,
        default=0,
        nullable=False,
    )
    locked_until: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )

    # One-time token digests
    verification_token_hash: Mapped[str | None] = mapped_column(
        String(64),
        nullable=True,
        index=True,
    )
    reset_token_hash: Mapped[str | None] = mapped_column(
        String(64),
        nullable=True,
        index=True,
    )
    reset_token_expires: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )

    version: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    def __repr__(self) -> str:
        """String representation for debugging."""
        return f"<CredentialRecordModel(id={self.id}, email={self.email})>"
