"""Application layer: the authentication engine and its wiring."""

from sentinel_auth.application.factory import (
    build_authentication_service,
    build_jwt_service,
    build_lockout_policy,
    build_password_service,
)
from sentinel_auth.application.services import AuthenticationService

__all__ = [
    "AuthenticationService",
    "build_authentication_service",
    "build_jwt_service",
    "build_lockout_policy",
    "build_password_service",
]
