"""bcrypt credential hashing and the password complexity policy."""

import re
import secrets
from collections.abc import Callable
from dataclasses import dataclass

import bcrypt

from sentinel_auth.exceptions import WeakPasswordError

SPECIAL_CHARACTERS = "@$!%*?&"

# $2b$12$<53 chars of salt+digest>
_BCRYPT_COST = re.compile(r"^\$2[abxy]\$(\d{2})\$")


@dataclass(frozen=True)
class PasswordPolicy:
    """Complexity rules every new password must satisfy.

    Length is counted in characters for the minimum and in UTF-8 bytes for
    the maximum, since bcrypt only ever sees the first 72 bytes.
    """

    min_length: int = 8
    max_bytes: int = 72

    def violations(self, password: str) -> list[str]:
        if not password:
            return ["Password cannot be empty"]
        try:
            password.encode("utf-8")
        except UnicodeEncodeError:
            return ["Password contains characters that cannot be encoded"]

        rules: list[tuple[Callable[[str], bool], str]] = [
            (
                lambda p: len(p) >= self.min_length,
                f"Password must be at least {self.min_length} characters",
            ),
            (
                lambda p: len(p.encode("utf-8")) <= self.max_bytes,
                f"Password cannot exceed {self.max_bytes} bytes",
            ),
            (
                lambda p: any(c.islower() for c in p),
                "Password must contain a lowercase letter",
            ),
            (
                lambda p: any(c.isupper() for c in p),
                "Password must contain an uppercase letter",
            ),
            (
                lambda p: any(c.isdigit() for c in p),
                "Password must contain a digit",
            ),
            (
                lambda p: any(c in SPECIAL_CHARACTERS for c in p),
                f"Password must contain a special character ({SPECIAL_CHARACTERS})",
            ),
        ]
        return [message for check, message in rules if not check(password)]


class PasswordHashingService:
    """Hashes and checks passwords with bcrypt.

    Every path that stores a new password goes through ``hash``, which
    enforces the ``PasswordPolicy`` first.

    Examples
    --------
    >>> service = PasswordHashingService(rounds=4)
    >>> digest = service.hash("Valid123!")
    >>> service.verify("Valid123!", digest)
    True
    >>> service.verify("Wrong123!", digest)
    False
    """

    MIN_ROUNDS = 4
    MAX_ROUNDS = 31

    def __init__(self, rounds: int = 12, policy: PasswordPolicy | None = None):
        """
        Parameters
        ----------
        rounds
            bcrypt cost (log2 of the key expansion rounds). 12 in
            production, 4 keeps test suites fast.
        policy
            Complexity rules; defaults to ``PasswordPolicy()``
        """
        if not self.MIN_ROUNDS <= rounds <= self.MAX_ROUNDS:
            msg = f"bcrypt cost must be between {self.MIN_ROUNDS} and {self.MAX_ROUNDS}"
            raise ValueError(msg)
        self._rounds = rounds
        self._policy = policy or PasswordPolicy()
        self._dummy_hash: bytes | None = None

    @property
    def rounds(self) -> int:
        return self._rounds

    def hash(self, password: str) -> str:
        """Validate ``password`` and return its salted bcrypt hash.

        Raises
        ------
        WeakPasswordError
            With the first violated rule as message
        """
        self.validate_strength(password)
        digest = bcrypt.hashpw(
            password.encode("utf-8"),
            bcrypt.gensalt(rounds=self._rounds),
        )
        return digest.decode("ascii")

    def verify(self, password: str, password_hash: str) -> bool:
        """Check ``password`` against a stored hash in constant time.

        A malformed stored hash counts as a mismatch.
        """
        try:
            return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("ascii"))
        except (ValueError, TypeError, UnicodeEncodeError):
            return False

    def dummy_verify(self, password: str) -> bool:
        """Spend one bcrypt check at the configured cost and return False.

        Used when there is no stored hash to compare against, so that an
        unknown account costs as much time as a wrong password.
        """
        if self._dummy_hash is None:
            self._dummy_hash = bcrypt.hashpw(
                secrets.token_bytes(16),
                bcrypt.gensalt(rounds=self._rounds),
            )
        try:
            bcrypt.checkpw(password.encode("utf-8"), self._dummy_hash)
        except (ValueError, TypeError):
            pass
        return False

    def validate_strength(self, password: str) -> None:
        violations = self._policy.violations(password)
        if violations:
            raise WeakPasswordError(violations[0])

    def needs_rehash(self, password_hash: str) -> bool:
        """True if the hash was made with a different cost than configured."""
        match = _BCRYPT_COST.match(password_hash)
        if match is None:
            return True
        return int(match.group(1)) != self._rounds
