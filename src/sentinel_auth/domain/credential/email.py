"""Email value object.

An account's natural key. Two spellings that differ only in case or
surrounding whitespace name the same account.
"""

import re
from dataclasses import dataclass

from sentinel_auth.domain.credential.exceptions import InvalidEmailError

# local@domain.tld, checked after normalization
EMAIL_PATTERN = re.compile(r"^[a-z0-9._%+-]+@[a-z0-9.-]+\.[a-z]{2,}$")
MAX_EMAIL_LENGTH = 254


def normalize_email(raw: str) -> str:
    return raw.strip().lower()


@dataclass(frozen=True)
class Email:
    """Validated, normalized email address.

    Raises
    ------
    InvalidEmailError
        If the address is empty, too long or not of the form local@domain.tld
    """

    value: str

    def __post_init__(self) -> None:
        normalized = normalize_email(self.value or "")
        if not normalized:
            msg = "Email cannot be empty"
            raise InvalidEmailError(msg)
        if len(normalized) > MAX_EMAIL_LENGTH:
            msg = f"Email cannot exceed {MAX_EMAIL_LENGTH} characters"
            raise InvalidEmailError(msg)
        if EMAIL_PATTERN.fullmatch(normalized) is None:
            msg = f"Invalid email format: {self.value!r}"
            raise InvalidEmailError(msg)

        object.__setattr__(self, "value", normalized)

    def __str__(self) -> str:
        return self.value
