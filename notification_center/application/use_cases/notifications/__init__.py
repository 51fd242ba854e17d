"""Use cases covering the notification lifecycle."""

from .formatter import format_notification, time_ago
from .manager import NotificationManager
from .samples import sample_notifications

__all__ = [
    "NotificationManager",
    "format_notification",
    "sample_notifications",
    "time_ago",
]
