"""Credential domain exceptions."""

from sentinel_auth.exceptions import AuthError, ValidationError


class InvalidEmailError(ValidationError):
    """Raised when email format is invalid."""

    def __init__(self, message: str) -> None:
        super().__init__(message)


class EmailAlreadyExistsError(AuthError):
    """Email already registered."""

    def __init__(self, email: str) -> None:
        self.email = email
        super().__init__("User already exists")
