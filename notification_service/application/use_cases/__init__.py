"""Aggregate application use cases."""

from .notifications import (
    create_schedule_notifications,
    list_notifications,
    mark_notification_read,
)

__all__ = [
    "create_schedule_notifications",
    "list_notifications",
    "mark_notification_read",
]
