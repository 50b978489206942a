"""Construct the engine from settings.

The engine never reads settings itself; everything it needs is passed in
here, once, at startup.
"""

from datetime import timedelta

from sentinel_auth.application.services.authentication_service import (
    AuthenticationService,
)
from sentinel_auth.domain.shared.clock import Clock, utc_now
from sentinel_auth.notifications import NotificationSink
from sentinel_auth.repositories import CredentialRepository
from sentinel_auth.services import JWTService, LockoutPolicy, PasswordHashingService
from sentinel_config.settings import Settings


def build_jwt_service(
    settings: Settings,
    clock: Clock = utc_now,
) -> JWTService:
    """Get JWT service configured with the signing secret and TTL."""
    return JWTService(
        secret_key=settings.jwt_secret_key.get_secret_value(),
        ttl_seconds=settings.jwt_expiration_seconds,
        clock=clock,
    )


def build_password_service(settings: Settings) -> PasswordHashingService:
    return PasswordHashingService(rounds=settings.bcrypt_cost)


def build_lockout_policy(settings: Settings) -> LockoutPolicy:
    return LockoutPolicy(
        threshold=settings.lockout_threshold,
        duration=timedelta(seconds=settings.lockout_duration_seconds),
    )


def build_authentication_service(
    settings: Settings,
    credential_repository: CredentialRepository,
    notification_sink: NotificationSink,
    clock: Clock = utc_now,
) -> AuthenticationService:
    return AuthenticationService(
        credential_repository=credential_repository,
        password_service=build_password_service(settings),
        jwt_service=build_jwt_service(settings, clock=clock),
        notification_sink=notification_sink,
        lockout_policy=build_lockout_policy(settings),
        reset_token_ttl=timedelta(hours=settings.reset_token_expiry_hours),
        clock=clock,
    )
