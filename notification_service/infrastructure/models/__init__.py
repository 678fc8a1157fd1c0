"""ORM models used by the application infrastructure."""

from .user import UserModel
from .scheduled_item import ScheduledItemModel, scheduled_item_assignee_table
from .notification import NotificationModel

__all__ = [
    "UserModel",
    "ScheduledItemModel",
    "scheduled_item_assignee_table",
    "NotificationModel",
]
