"""Authentication services.

Pure logic: password hashing, JWT tokens, lockout decisions and
single-use token generation. Nothing here performs I/O.
"""

from sentinel_auth.services.jwt_service import JWTService
from sentinel_auth.services.lockout_policy import (
    LockoutDecision,
    LockoutPolicy,
    LockoutState,
)
from sentinel_auth.services.password_service import (
    PasswordHashingService,
    PasswordPolicy,
)

__all__ = [
    "JWTService",
    "LockoutDecision",
    "LockoutPolicy",
    "LockoutState",
    "PasswordHashingService",
    "PasswordPolicy",
]
