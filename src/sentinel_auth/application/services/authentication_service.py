"""Authentication service: the account-security engine.

Orchestrates password hashing, bearer tokens, the lockout policy, the
credential store and the notification sink for registration, login,
token refresh, password change/reset and email verification.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from datetime import datetime, timedelta
from typing import TypeVar
from uuid import UUID

from sentinel_auth.domain.credential import (
    CredentialRecord,
    Email,
    EmailAlreadyExistsError,
    InvalidEmailError,
)
from sentinel_auth.domain.shared.clock import Clock, utc_now
from sentinel_auth.exceptions import (
    InternalError,
    InvalidCredentialsError,
    InvalidTokenError,
    ServiceUnavailableError,
    TokenVerificationError,
    UnauthorizedError,
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
    LockoutPolicy,
    LockoutState,
    PasswordHashingService,
)
from sentinel_auth.services.one_time_tokens import generate_token, hash_token

logger = logging.getLogger(__name__)

T = TypeVar("T")

REGISTERED_MESSAGE = (
    "User registered successfully. Please check your email for verification."
)
RESET_REQUESTED_MESSAGE = "If the email exists, a password reset link has been sent."
PASSWORD_RESET_MESSAGE = "Password reset successfully."
PASSWORD_CHANGED_MESSAGE = "Password changed successfully."
EMAIL_VERIFIED_MESSAGE = "Email verified successfully."
LOGGED_OUT_MESSAGE = "Logged out successfully."


class AuthenticationService:
    """
    Application service for credential authentication.

    Provides:
    - Registration with email verification
    - Login with brute-force lockout
    - Token refresh and logout
    - Password change and token-based password reset

    Every mutation is written through ``CredentialRepository.update``, a
    conditional update on the record version. When it loses against a
    concurrent request the whole operation is re-run once on fresh state;
    a second conflict surfaces as ``InternalError``.

    Logout is advisory: issued tokens are stateless and remain valid until
    they expire.
    """

    MAX_UPDATE_ATTEMPTS = 2
    DEFAULT_RESET_TOKEN_TTL = timedelta(hours=1)

    def __init__(  # noqa: PLR0913
        self,
        credential_repository: CredentialRepository,
        password_service: PasswordHashingService,
        jwt_service: JWTService,
        notification_sink: NotificationSink,
        lockout_policy: LockoutPolicy | None = None,
        reset_token_ttl: timedelta = DEFAULT_RESET_TOKEN_TTL,
        clock: Clock = utc_now,
    ):
        self._credential_repo = credential_repository
        self._password_service = password_service
        self._jwt_service = jwt_service
        self._notification_sink = notification_sink
        self._lockout = lockout_policy or LockoutPolicy()
        self._reset_token_ttl = reset_token_ttl
        self._clock = clock

    async def register(self, email: str, password: str) -> MessageResponse:
        email_obj = Email(email)

        async def attempt() -> tuple[CredentialRecord, str]:
            existing = await self._credential_repo.find_by_email(email_obj.value)
            if existing is not None:
                raise EmailAlreadyExistsError(email_obj.value)

            password_hash = self._password_service.hash(password)
            raw_token = generate_token()
            record = CredentialRecord.create(
                email_obj,
                password_hash,
                verification_token_hash=hash_token(raw_token),
                now=self._clock(),
            )
            return await self._credential_repo.add(record), raw_token

        record, raw_token = await self._with_store("register", attempt)
        logger.info("User registered: %s", record.id)

        try:
            await self._notification_sink.send_verification_email(
                record.email,
                raw_token,
            )
        except NotificationError as e:
            logger.exception("Failed to deliver verification email for %s", record.id)
            raise ServiceUnavailableError from e

        return MessageResponse(REGISTERED_MESSAGE)

    async def login(self, email: str, password: str) -> AuthResponse:
        try:
            normalized = Email(email).value
        except InvalidEmailError as e:
            self._password_service.dummy_verify(password)
            raise InvalidCredentialsError from e

        async def attempt() -> AuthResponse:
            now = self._clock()
            record = await self._credential_repo.find_by_email(normalized)
            if record is None:
                # Same bcrypt cost as a wrong password
                self._password_service.dummy_verify(password)
                raise InvalidCredentialsError

            if not record.is_active or self._lockout.is_blocked(record.locked_until, now):
                logger.warning("Login refused for locked or inactive user %s", record.id)
                raise UnauthorizedError

            if not self._password_service.verify(password, record.password_hash):
                await self._register_failed_attempt(record, now)
                raise InvalidCredentialsError

            state = self._lockout.register_success()
            record.apply_lockout_state(state.failed_attempts, state.locked_until, now)
            record.record_login(now)
            record = await self._credential_repo.update(record)

            logger.info("User logged in: %s", record.id)
            return self._create_auth_response(record, now)

        return await self._with_store("login", attempt)

    async def refresh_token(self, subject_id: UUID) -> AuthResponse:
        async def attempt() -> AuthResponse:
            now = self._clock()
            record = await self._credential_repo.find_by_id(subject_id)
            if record is None or not record.can_login(now):
                raise UnauthorizedError

            logger.debug("Token refreshed for user: %s", record.id)
            return self._create_auth_response(record, now)

        return await self._with_store("refresh_token", attempt)

    async def change_password(
        self,
        subject_id: UUID,
        current_password: str,
        new_password: str,
    ) -> MessageResponse:
        self._password_service.validate_strength(new_password)

        async def attempt() -> None:
            now = self._clock()
            record = await self._credential_repo.find_by_id(subject_id)
            if record is None or not record.is_active:
                raise InvalidCredentialsError

            if self._lockout.is_blocked(record.locked_until, now):
                logger.warning("Password change refused for locked user %s", record.id)
                raise InvalidCredentialsError

            if not self._password_service.verify(current_password, record.password_hash):
                await self._register_failed_attempt(record, now)
                msg = "Current password is incorrect"
                raise InvalidCredentialsError(msg)

            record.change_password_hash(self._password_service.hash(new_password), now)
            await self._credential_repo.update(record)

        await self._with_store("change_password", attempt)
        logger.info("Password changed for user: %s", subject_id)
        return MessageResponse(PASSWORD_CHANGED_MESSAGE)

    async def request_password_reset(self, email: str) -> MessageResponse:
        """Start a password reset.

        The response is identical whether or not the email is registered.
        """
        try:
            normalized = Email(email).value
        except InvalidEmailError:
            logger.debug("Password reset requested for malformed email")
            return MessageResponse(RESET_REQUESTED_MESSAGE)

        async def attempt() -> tuple[CredentialRecord, str] | None:
            now = self._clock()
            record = await self._credential_repo.find_by_email(normalized)
            if record is None:
                return None

            raw_token = generate_token()
            record.issue_reset_token(
                hash_token(raw_token),
                expires_at=now + self._reset_token_ttl,
                now=now,
            )
            return await self._credential_repo.update(record), raw_token

        issued = await self._with_store("request_password_reset", attempt)
        if issued is None:
            # Silent to prevent email enumeration
            logger.debug("Password reset requested for unknown email")
            return MessageResponse(RESET_REQUESTED_MESSAGE)

        record, raw_token = issued
        try:
            await self._notification_sink.send_password_reset_email(
                record.email,
                raw_token,
            )
            logger.info("Password reset token issued for user: %s", record.id)
        except NotificationError:
            # The token is stored; a delivery failure must not change the response
            logger.exception("Failed to deliver password reset email for %s", record.id)

        return MessageResponse(RESET_REQUESTED_MESSAGE)

    async def confirm_password_reset(
        self,
        token: str,
        new_password: str,
    ) -> MessageResponse:
        self._password_service.validate_strength(new_password)
        token_hash = hash_token(token)

        async def attempt() -> UUID:
            now = self._clock()
            record = await self._credential_repo.find_by_reset_token_hash(token_hash)
            if record is None:
                raise InvalidTokenError

            if not record.is_reset_token_valid(token_hash, now):
                record.clear_reset_token(now)
                await self._credential_repo.update(record)
                raise InvalidTokenError

            # Clears the reset token in the same conditional write
            record.change_password_hash(self._password_service.hash(new_password), now)
            await self._credential_repo.update(record)
            return record.id

        user_id = await self._with_store("confirm_password_reset", attempt)
        logger.info("Password reset completed for user: %s", user_id)
        return MessageResponse(PASSWORD_RESET_MESSAGE)

    async def verify_email(self, token: str) -> MessageResponse:
        token_hash = hash_token(token)

        async def attempt() -> UUID:
            record = await self._credential_repo.find_by_verification_token_hash(
                token_hash,
            )
            if record is None:
                raise InvalidTokenError

            record.mark_verified(self._clock())
            await self._credential_repo.update(record)
            return record.id

        user_id = await self._with_store("verify_email", attempt)
        logger.info("Email verified for user: %s", user_id)
        return MessageResponse(EMAIL_VERIFIED_MESSAGE)

    async def logout(self, subject_id: UUID) -> MessageResponse:
        """Acknowledge a logout.

        Nothing is persisted and the presented token is not revoked.
        """
        record = await self._with_store(
            "logout",
            lambda: self._credential_repo.find_by_id(subject_id),
        )
        if record is None or not record.is_active:
            raise UnauthorizedError

        logger.info("User logged out: %s", record.id)
        return MessageResponse(LOGGED_OUT_MESSAGE)

    async def get_user_info(self, subject_id: UUID) -> UserInfo:
        record = await self._with_store(
            "get_user_info",
            lambda: self._credential_repo.find_by_id(subject_id),
        )
        if record is None:
            raise UnauthorizedError
        return UserInfo.from_record(record)

    def authenticate(self, token: str) -> TokenPayload:
        """Verify a bearer token, collapsing every failure into ``UnauthorizedError``."""
        try:
            return self._jwt_service.verify(token, now=self._clock())
        except TokenVerificationError as e:
            logger.debug("Bearer token rejected: %s", e.message)
            raise UnauthorizedError from e

    async def _register_failed_attempt(
        self,
        record: CredentialRecord,
        now: datetime,
    ) -> None:
        decision = self._lockout.register_failure(
            LockoutState(record.failed_login_attempts, record.locked_until),
            now,
        )
        record.apply_lockout_state(
            decision.state.failed_attempts,
            decision.state.locked_until,
            now,
        )
        await self._credential_repo.update(record)

        if decision.locked_now:
            logger.warning(
                "Account locked for user %s until %s due to %d failed attempts",
                record.id,
                decision.state.locked_until.isoformat(),
                decision.state.failed_attempts,
            )

    def _create_auth_response(self, record: CredentialRecord, now: datetime) -> AuthResponse:
        ttl = self._jwt_service.ttl_seconds
        # JWT timestamps are whole seconds; advertise the same expiry the token carries
        issued_at = now.replace(microsecond=0)
        access_token = self._jwt_service.issue(
            record.id,
            issued_at=issued_at,
            ttl_seconds=ttl,
            email=record.email,
        )
        return AuthResponse(
            access_token=access_token,
            expires_in=ttl,
            expires_at=issued_at + timedelta(seconds=ttl),
            user=UserInfo.from_record(record),
        )

    async def _with_store(
        self,
        operation: str,
        attempt: Callable[[], Awaitable[T]],
    ) -> T:
        """Run ``attempt``, re-running it once after a lost conditional update.

        Store faults are logged with context and surfaced as a generic
        ``InternalError``.
        """
        for attempt_number in range(1, self.MAX_UPDATE_ATTEMPTS + 1):
            try:
                return await attempt()
            except StaleRecordError as e:
                logger.warning(
                    "Concurrent update during %s (attempt %d): %s",
                    operation,
                    attempt_number,
                    e,
                )
            except RepositoryError as e:
                logger.exception("Credential store failure during %s", operation)
                raise InternalError from e

        logger.error(
            "Giving up on %s after %d conflicting updates",
            operation,
            self.MAX_UPDATE_ATTEMPTS,
        )
        raise InternalError
