"""Unit tests for the CredentialRecord aggregate."""

from datetime import timedelta
from uuid import uuid4

import pytest

from sentinel_auth.domain import CredentialRecord
from tests.shared.fakes import FakeClock

TEST_EMAIL = "test@example.com"
HASH = "$2b$04$hash"


class TestCredentialRecordCreate:
    """Tests for record creation."""

    def setup_method(self):
        """Set up test fixtures."""
        self.clock = FakeClock()

    def test_create_defaults(self):
        """New records are active, unverified and unlocked."""
        record = CredentialRecord.create(TEST_EMAIL, HASH, now=self.clock.now)

        assert record.email == TEST_EMAIL
        assert record.password_hash == HASH
        assert record.is_active is True
        assert record.is_verified is False
        assert record.failed_login_attempts == 0
        assert record.locked_until is None
        assert record.last_login is None
        assert record.created_at == self.clock.now
        assert record.updated_at == self.clock.now
        assert record.version == 0

    def test_create_normalizes_email(self):
        """Email is stored normalized."""
        record = CredentialRecord.create("Test@Example.COM", HASH)

        assert record.email == TEST_EMAIL

    def test_create_stores_verification_digest(self):
        """The verification token digest is kept as given."""
        record = CredentialRecord.create(TEST_EMAIL, HASH, verification_token_hash="d")

        assert record.verification_token_hash == "d"

    def test_negative_failed_attempts_rejected(self):
        """The failure counter cannot go below zero."""
        with pytest.raises(ValueError, match="negative"):
            CredentialRecord(TEST_EMAIL, HASH, failed_login_attempts=-1)

    def test_equality_by_id(self):
        """Records with the same id are equal."""
        record_id = uuid4()
        a = CredentialRecord(TEST_EMAIL, HASH, id=record_id)
        b = CredentialRecord("other@example.com", "x", id=record_id)

        assert a == b
        assert hash(a) == hash(b)


class TestCredentialRecordLockState:
    """Tests for lock evaluation and lockout state storage."""

    def setup_method(self):
        """Set up test fixtures."""
        self.clock = FakeClock()
        self.record = CredentialRecord.create(TEST_EMAIL, HASH, now=self.clock.now)

    def test_can_login_when_active_and_unlocked(self):
        """Active, unlocked records can log in."""
        assert self.record.can_login(self.clock.now) is True

    def test_locked_record_cannot_login(self):
        """An active lock blocks login until it lapses."""
        until = self.clock.now + timedelta(minutes=15)
        self.record.apply_lockout_state(5, until, self.clock.now)

        assert self.record.is_locked(self.clock.now) is True
        assert self.record.can_login(self.clock.now) is False
        assert self.record.can_login(until) is True

    def test_inactive_record_cannot_login(self):
        """Inactive records never log in."""
        record = CredentialRecord(TEST_EMAIL, HASH, is_active=False)

        assert record.can_login(self.clock.now) is False

    def test_apply_lockout_state_rejects_past_lock(self):
        """A lock timestamp must lie in the future."""
        with pytest.raises(ValueError, match="future"):
            self.record.apply_lockout_state(5, self.clock.now, self.clock.now)

    def test_apply_lockout_state_touches_updated_at(self):
        """Storing lockout state refreshes updated_at."""
        self.clock.advance(minutes=1)
        self.record.apply_lockout_state(1, None, self.clock.now)

        assert self.record.failed_login_attempts == 1
        assert self.record.updated_at == self.clock.now


class TestCredentialRecordTokens:
    """Tests for password and one-time token handling."""

    def setup_method(self):
        """Set up test fixtures."""
        self.clock = FakeClock()
        self.record = CredentialRecord.create(
            TEST_EMAIL,
            HASH,
            verification_token_hash="verify-digest",
            now=self.clock.now,
        )

    def test_reset_token_valid_before_expiry(self):
        """An issued token matches until its expiry."""
        expires = self.clock.now + timedelta(hours=1)
        self.record.issue_reset_token("reset-digest", expires, self.clock.now)

        assert self.record.is_reset_token_valid("reset-digest", self.clock.now)
        assert not self.record.is_reset_token_valid("other", self.clock.now)
        assert not self.record.is_reset_token_valid("reset-digest", expires)

    def test_no_reset_token_is_never_valid(self):
        """Without an issued token nothing matches."""
        assert not self.record.is_reset_token_valid("anything", self.clock.now)

    def test_change_password_clears_reset_token(self):
        """Changing the hash invalidates an outstanding reset token."""
        self.record.issue_reset_token(
            "reset-digest",
            self.clock.now + timedelta(hours=1),
            self.clock.now,
        )

        self.record.change_password_hash("$2b$04$new", self.clock.now)

        assert self.record.password_hash == "$2b$04$new"
        assert self.record.reset_token_hash is None
        assert self.record.reset_token_expires is None

    def test_clear_reset_token(self):
        """Clearing drops both digest and expiry."""
        self.record.issue_reset_token(
            "reset-digest",
            self.clock.now + timedelta(hours=1),
            self.clock.now,
        )

        self.record.clear_reset_token(self.clock.now)

        assert self.record.reset_token_hash is None
        assert self.record.reset_token_expires is None

    def test_mark_verified_consumes_token(self):
        """Verification flips the flag and drops the digest."""
        self.record.mark_verified(self.clock.now)

        assert self.record.is_verified is True
        assert self.record.verification_token_hash is None

    def test_record_login(self):
        """Successful logins are timestamped."""
        self.clock.advance(minutes=5)
        self.record.record_login(self.clock.now)

        assert self.record.last_login == self.clock.now

    def test_with_version_is_detached_copy(self):
        """with_version copies; the source record keeps its version."""
        clone = self.record.with_version(3)
        clone.mark_verified(self.clock.now)

        assert clone.version == 3
        assert self.record.version == 0
        assert self.record.is_verified is False
