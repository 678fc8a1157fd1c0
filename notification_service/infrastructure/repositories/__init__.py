"""Repository implementations for infrastructure layer."""

from .notification_repository import NotificationRepository, validate_notification
from .scheduled_item_repository import ScheduledItemRepository
from .user_repository import UserRepository

__all__ = [
    "NotificationRepository",
    "ScheduledItemRepository",
    "UserRepository",
    "validate_notification",
]
