from sentinel_auth.domain.credential.credential_record import CredentialRecord
from sentinel_auth.domain.credential.email import Email, normalize_email
from sentinel_auth.domain.credential.exceptions import (
    EmailAlreadyExistsError,
    InvalidEmailError,
)

__all__ = [
    "CredentialRecord",
    "Email",
    "EmailAlreadyExistsError",
    "InvalidEmailError",
    "normalize_email",
]
