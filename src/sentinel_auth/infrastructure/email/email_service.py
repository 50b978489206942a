"""SMTP-backed notification sink."""

import asyncio
import logging
import smtplib
import ssl
from collections.abc import Iterator
from contextlib import contextmanager
from email.message import EmailMessage
from email.utils import formataddr
from urllib.parse import urlencode

from sentinel_auth.infrastructure.email.templates import (
    RenderedEmail,
    password_reset_email,
    verification_email,
)
from sentinel_auth.notifications import NotificationError, NotificationSink
from sentinel_config.settings import Settings

logger = logging.getLogger(__name__)


class EmailNotificationSink(NotificationSink):
    """Delivers one-time tokens as links into the frontend.

    With ``SMTP_ENABLED=false`` nothing is sent and the link is logged at
    WARNING instead, which is how local development picks tokens up.
    """

    def __init__(self, settings: Settings):
        self._settings = settings
        self._frontend_base_url = settings.frontend_base_url.rstrip("/")

    async def send_verification_email(self, to_email: str, token: str) -> None:
        link = self._link("verify-email", token)
        await self._deliver(to_email, verification_email(self._settings.app_name, link), link)

    async def send_password_reset_email(self, to_email: str, token: str) -> None:
        link = self._link("reset-password", token)
        rendered = password_reset_email(
            self._settings.app_name,
            link,
            expiry_hours=self._settings.reset_token_expiry_hours,
        )
        await self._deliver(to_email, rendered, link)

    def _link(self, path: str, token: str) -> str:
        return f"{self._frontend_base_url}/{path}?{urlencode({'token': token})}"

    async def _deliver(self, to_email: str, rendered: RenderedEmail, link: str) -> None:
        if not self._settings.smtp_enabled:
            logger.warning("SMTP disabled, not emailing %s (link: %s)", to_email, link)
            return

        message = self._build_message(to_email, rendered)
        # smtplib blocks; keep the event loop free
        await asyncio.to_thread(self._send, to_email, message)

    def _build_message(self, to_email: str, rendered: RenderedEmail) -> EmailMessage:
        message = EmailMessage()
        message["Subject"] = rendered.subject
        message["From"] = formataddr(
            (self._settings.smtp_from_name, self._settings.smtp_from_email),
        )
        message["To"] = to_email
        message.set_content(rendered.text)
        message.add_alternative(rendered.html, subtype="html")
        return message

    @contextmanager
    def _connect(self) -> Iterator[smtplib.SMTP]:
        settings = self._settings
        implicit_tls = settings.smtp_use_tls and not settings.smtp_starttls

        if implicit_tls:
            server: smtplib.SMTP = smtplib.SMTP_SSL(
                settings.smtp_host,
                settings.smtp_port,
                context=ssl.create_default_context(),
            )
        else:
            server = smtplib.SMTP(settings.smtp_host, settings.smtp_port)

        with server as connection:
            if not implicit_tls and settings.smtp_starttls:
                connection.starttls(context=ssl.create_default_context())
            if settings.smtp_user:
                password = settings.smtp_password
                connection.login(
                    settings.smtp_user,
                    password.get_secret_value() if password else "",
                )
            yield connection

    def _send(self, to_email: str, message: EmailMessage) -> None:
        if not self._settings.smtp_host:
            msg = "SMTP host not configured"
            raise NotificationError(msg)

        try:
            with self._connect() as server:
                server.send_message(message)
        except (smtplib.SMTPException, OSError) as e:
            logger.error("Failed to send email to %s: %s", to_email, e)
            raise NotificationError(str(e)) from e

        logger.info("Email sent to %s", to_email)
