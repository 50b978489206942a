from sentinel_auth.infrastructure.email.email_service import EmailNotificationSink

__all__ = ["EmailNotificationSink"]
