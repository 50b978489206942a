"""Sentinel Auth - credential authentication and account security.

This package handles:
- Registration with email verification
- Login with brute-force lockout
- Stateless bearer tokens (JWT)
- Password change and token-based password reset

Architecture:
    sentinel_auth/
    ├── domain/             # CredentialRecord aggregate, Email value object
    ├── services/           # Pure logic (bcrypt, JWT, lockout policy)
    ├── repositories/       # Abstract credential store
    ├── notifications/      # Abstract notification sink
    ├── application/        # AuthenticationService and its wiring
    ├── infrastructure/     # SQLAlchemy / in-memory stores, SMTP sink
    ├── schemas.py          # Result data classes
    └── exceptions.py       # Auth exceptions

Usage:
    from sentinel_auth import AuthenticationService, build_authentication_service
    from sentinel_auth.infrastructure.persistence.sqlalchemy import (
        CredentialRepositorySQLAlchemy,
    )
"""

from sentinel_auth.application import (
    AuthenticationService,
    build_authentication_service,
)
from sentinel_auth.domain import (
    CredentialRecord,
    Email,
    EmailAlreadyExistsError,
    InvalidEmailError,
)
from sentinel_auth.exceptions import (
    AuthError,
    BadSignatureError,
    InternalError,
    InvalidCredentialsError,
    InvalidTokenError,
    MalformedTokenError,
    ServiceUnavailableError,
    TokenExpiredError,
    TokenVerificationError,
    UnauthorizedError,
    ValidationError,
    WeakPasswordError,
)
from sentinel_auth.notifications import NotificationError, NotificationSink
from sentinel_auth.repositories import (
    CredentialRepository,
    RepositoryError,
    StaleRecordError,
)
from sentinel_auth.schemas import AuthResponse, MessageResponse, TokenPayload, UserInfo
from sentinel_auth.services import (
    JWTService,
    LockoutDecision,
    LockoutPolicy,
    LockoutState,
    PasswordHashingService,
)

__all__ = [
    # Application
    "AuthenticationService",
    "build_authentication_service",
    # Domain
    "CredentialRecord",
    "Email",
    "EmailAlreadyExistsError",
    "InvalidEmailError",
    # Exceptions
    "AuthError",
    "BadSignatureError",
    "InternalError",
    "InvalidCredentialsError",
    "InvalidTokenError",
    "MalformedTokenError",
    "ServiceUnavailableError",
    "TokenExpiredError",
    "TokenVerificationError",
    "UnauthorizedError",
    "ValidationError",
    "WeakPasswordError",
    # Collaborator contracts
    "CredentialRepository",
    "NotificationError",
    "NotificationSink",
    "RepositoryError",
    "StaleRecordError",
    # Schemas
    "AuthResponse",
    "MessageResponse",
    "TokenPayload",
    "UserInfo",
    # Services
    "JWTService",
    "LockoutDecision",
    "LockoutPolicy",
    "LockoutState",
    "PasswordHashingService",
]
