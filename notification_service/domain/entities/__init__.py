"""Domain entities exposed by the application."""

from .fanout import FanoutFailure, FanoutResult
from .notification import (
    MESSAGE_MAX_LENGTH,
    TITLE_MAX_LENGTH,
    Notification,
    NotificationPayload,
    NotificationTemplate,
    NotificationType,
)
from .scheduled_item import ScheduledItem, ScheduledItemKind
from .user import User

__all__ = [
    "FanoutFailure",
    "FanoutResult",
    "MESSAGE_MAX_LENGTH",
    "TITLE_MAX_LENGTH",
    "Notification",
    "NotificationPayload",
    "NotificationTemplate",
    "NotificationType",
    "ScheduledItem",
    "ScheduledItemKind",
    "User",
]
