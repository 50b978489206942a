"""Outbound notification contract.

The engine produces the raw one-time token and the intent; delivery
(email, queue, log) belongs to the sink.
"""

from abc import ABC, abstractmethod


class NotificationError(Exception):
    """Raised by sinks when a message could not be delivered."""


class NotificationSink(ABC):
    @abstractmethod
    async def send_verification_email(self, to_email: str, token: str) -> None:
        """Deliver an email verification token."""

    @abstractmethod
    async def send_password_reset_email(self, to_email: str, token: str) -> None:
        """Deliver a password reset token."""
