"""Unit tests for PasswordHashingService."""

import pytest

from sentinel_auth.exceptions import WeakPasswordError
from sentinel_auth.services import PasswordHashingService, PasswordPolicy

VALID_PASSWORD = "Valid123!"
TEST_PASSWORD_SHORT = "Valid1234!"


class TestPasswordHashingServiceInit:
    """Tests for work factor validation."""

    def test_default_rounds(self):
        """Default work factor is 12."""
        assert PasswordHashingService().rounds == 12

    @pytest.mark.parametrize("rounds", [3, 32])
    def test_out_of_range_rounds_raise(self, rounds):
        """Work factors outside 4..31 are rejected at construction."""
        with pytest.raises(ValueError, match="between 4 and 31"):
            PasswordHashingService(rounds=rounds)


class TestPasswordHashing:
    """Tests for hashing and verification."""

    def setup_method(self):
        """Use minimum rounds to keep the suite fast."""
        self.service = PasswordHashingService(rounds=4)

    def test_hash_produces_bcrypt_string(self):
        """Hash is a bcrypt string carrying the configured cost."""
        hashed = self.service.hash(VALID_PASSWORD)

        assert hashed.startswith("$2b$04$")
        assert VALID_PASSWORD not in hashed

    def test_hash_is_salted(self):
        """Two hashes of the same password differ."""
        assert self.service.hash(VALID_PASSWORD) != self.service.hash(VALID_PASSWORD)

    def test_verify_correct_password(self):
        """Correct password verifies."""
        hashed = self.service.hash(VALID_PASSWORD)

        assert self.service.verify(VALID_PASSWORD, hashed) is True

    def test_verify_wrong_password(self):
        """Wrong password does not verify."""
        hashed = self.service.hash(VALID_PASSWORD)

        assert self.service.verify("Wrong123!", hashed) is False

    def test_verify_malformed_hash_returns_false(self):
        """A garbage hash is a mismatch, not an exception."""
        assert self.service.verify(VALID_PASSWORD, "not-a-bcrypt-hash") is False

    def test_hash_rejects_weak_password(self):
        """Hashing enforces the strength policy."""
        with pytest.raises(WeakPasswordError):
            self.service.hash("weak")

    def test_dummy_verify_never_matches(self):
        """The stand-in check costs a bcrypt round and always fails."""
        assert self.service.dummy_verify(VALID_PASSWORD) is False
        assert self.service.dummy_verify("\ud800") is False

    def test_verify_unencodable_password_returns_false(self):
        """A password that cannot be UTF-8 encoded never matches."""
        hashed = self.service.hash(VALID_PASSWORD)

        assert self.service.verify("Valid123!\ud800", hashed) is False

    def test_needs_rehash_detects_cost_change(self):
        """Hashes made with another cost are flagged."""
        hashed = self.service.hash(VALID_PASSWORD)

        assert self.service.needs_rehash(hashed) is False
        assert PasswordHashingService(rounds=5).needs_rehash(hashed) is True

    def test_needs_rehash_on_garbage(self):
        """Unparseable hashes always need a rehash."""
        assert self.service.needs_rehash("garbage") is True


class TestPasswordStrength:
    """Tests for the complexity policy."""

    def setup_method(self):
        """Set up test fixtures."""
        self.service = PasswordHashingService(rounds=4)

    @pytest.mark.parametrize(
        "password",
        [
            "Valid123!",
            "Aa1@aaaa",
            "Str0ng&Secure",
            "Ünïcödé1?x",
        ],
    )
    def test_accepts_strong_passwords(self, password):
        """Passwords meeting every rule pass."""
        self.service.validate_strength(password)

    @pytest.mark.parametrize(
        ("password", "reason"),
        [
            ("", "empty"),
            ("Va1!", "at least 8"),
            ("valid123!", "uppercase"),
            ("VALID123!", "lowercase"),
            ("Validabc!", "digit"),
            ("Valid1234", "special"),
            ("Valid123#", "special"),
        ],
    )
    def test_rejects_weak_passwords(self, password, reason):
        """Each missing rule yields a WeakPasswordError naming it."""
        with pytest.raises(WeakPasswordError, match=reason):
            self.service.validate_strength(password)

    def test_rejects_password_over_72_bytes(self):
        """bcrypt's 72-byte ceiling is enforced on the encoded form."""
        password = "Aa1!" + "a" * 69  # 73 bytes

        with pytest.raises(WeakPasswordError, match="72 bytes"):
            self.service.validate_strength(password)

    def test_multibyte_characters_count_as_bytes(self):
        """Fewer than 72 characters can still exceed 72 bytes."""
        password = "Aa1!" + "é" * 35  # 39 chars, 74 bytes

        with pytest.raises(WeakPasswordError, match="72 bytes"):
            self.service.validate_strength(password)

    def test_accepts_exactly_72_bytes(self):
        """The boundary itself is allowed."""
        self.service.validate_strength("Aa1!" + "a" * 68)

    def test_rejects_unencodable_password(self):
        """Lone surrogates are a weak password, not an encoding crash."""
        with pytest.raises(WeakPasswordError, match="encoded"):
            self.service.validate_strength("Valid123!\ud800")


class TestPasswordPolicy:
    """Tests for the rule table itself."""

    def test_reports_every_violation(self):
        """All broken rules are listed, in order."""
        violations = PasswordPolicy().violations("abc")

        assert len(violations) == 4
        assert "at least 8" in violations[0]
        assert "special" in violations[-1]

    def test_custom_minimum_length(self):
        """A stricter policy is honoured by the hashing service."""
        service = PasswordHashingService(rounds=4, policy=PasswordPolicy(min_length=12))

        with pytest.raises(WeakPasswordError, match="at least 12"):
            service.validate_strength(TEST_PASSWORD_SHORT)
