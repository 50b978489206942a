"""Test doubles shared across test modules."""

from datetime import datetime, timedelta, timezone

from sentinel_auth.notifications import NotificationError, NotificationSink


class FakeClock:
    """Manually advanced clock."""

    def __init__(self, start: datetime | None = None):
        self.now = start or datetime(2026, 1, 15, 12, 0, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now = self.now + timedelta(**kwargs)


class RecordingNotificationSink(NotificationSink):
    """Captures raw tokens instead of delivering them."""

    def __init__(self) -> None:
        self.verification_emails: list[tuple[str, str]] = []
        self.reset_emails: list[tuple[str, str]] = []
        self.fail = False

    async def send_verification_email(self, to_email: str, token: str) -> None:
        if self.fail:
            msg = "SMTP server unreachable"
            raise NotificationError(msg)
        self.verification_emails.append((to_email, token))

    async def send_password_reset_email(self, to_email: str, token: str) -> None:
        if self.fail:
            msg = "SMTP server unreachable"
            raise NotificationError(msg)
        self.reset_emails.append((to_email, token))

    @property
    def last_verification_token(self) -> str:
        return self.verification_emails[-1][1]

    @property
    def last_reset_token(self) -> str:
        return self.reset_emails[-1][1]
