"""Authentication exceptions.

These exceptions are raised by the sentinel_auth package and form the
typed outcome taxonomy handed to the transport layer. Several of them
are deliberately conflated (unknown email vs. wrong password, locked
account vs. bad token, expired vs. unknown one-time token) so that
callers cannot enumerate accounts.
"""


class AuthError(Exception):
    """Base exception for all authentication errors."""

    def __init__(self, message: str = "Authentication error"):
        self.message = message
        super().__init__(self.message)


class ValidationError(AuthError):
    """Raised when input is malformed. No state is changed."""

    def __init__(self, message: str = "Validation failed"):
        super().__init__(message)


class WeakPasswordError(ValidationError):
    """Raised when a password doesn't meet strength requirements."""

    def __init__(self, message: str = "Password does not meet requirements"):
        super().__init__(message)


class InvalidCredentialsError(AuthError):
    """Raised when email or password is incorrect."""

    def __init__(self, message: str = "Invalid email or password"):
        super().__init__(message)


class UnauthorizedError(AuthError):
    """Raised for missing/invalid bearer tokens and locked or inactive accounts."""

    def __init__(self, message: str = "Authentication failed"):
        super().__init__(message)


class InvalidTokenError(AuthError):
    """Raised when a verification or password reset token is invalid or expired."""

    def __init__(self, message: str = "Invalid or expired token"):
        super().__init__(message)


class TokenVerificationError(AuthError):
    """Base exception for bearer token verification failures."""

    def __init__(self, message: str = "Invalid bearer token"):
        super().__init__(message)


class TokenExpiredError(TokenVerificationError):
    """Raised when a bearer token is past its expiry."""

    def __init__(self, message: str = "Token has expired"):
        super().__init__(message)


class MalformedTokenError(TokenVerificationError):
    """Raised when a bearer token cannot be decoded or lacks required claims."""

    def __init__(self, message: str = "Malformed token"):
        super().__init__(message)


class BadSignatureError(TokenVerificationError):
    """Raised when a bearer token signature does not match."""

    def __init__(self, message: str = "Token signature verification failed"):
        super().__init__(message)


class InternalError(AuthError):
    """Raised when a collaborator (store, notification sink) fails.

    The message never carries collaborator details; those are logged.
    """

    def __init__(self, message: str = "An internal error occurred"):
        super().__init__(message)


class ServiceUnavailableError(InternalError):
    """Raised when the notification sink cannot deliver a message."""

    def __init__(self, message: str = "Service temporarily unavailable"):
        super().__init__(message)
