from sentinel_auth.notifications.notification_sink import (
    NotificationError,
    NotificationSink,
)

__all__ = ["NotificationError", "NotificationSink"]
