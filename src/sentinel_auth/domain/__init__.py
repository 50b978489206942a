"""Credential domain: the persisted authentication state of one identity."""

from sentinel_auth.domain.credential import (
    CredentialRecord,
    Email,
    EmailAlreadyExistsError,
    InvalidEmailError,
)

__all__ = [
    "CredentialRecord",
    "Email",
    "EmailAlreadyExistsError",
    "InvalidEmailError",
]
