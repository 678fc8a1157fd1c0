"""Use cases for creating, reading and managing notifications."""

from .delete_notification import delete_notification
from .events import create_event_notifications
from .fanout import fan_out, raise_for_result
from .query import NotificationPage, list_notifications
from .read_state import (
    get_unread_count,
    mark_all_notifications_read,
    mark_notification_read,
)
from .schedule import (
    ScheduleNotificationOutcome,
    build_schedule_phrase,
    build_schedule_template,
    create_schedule_notifications,
    notify_schedule,
)

__all__ = [
    "NotificationPage",
    "ScheduleNotificationOutcome",
    "build_schedule_phrase",
    "build_schedule_template",
    "create_event_notifications",
    "create_schedule_notifications",
    "delete_notification",
    "fan_out",
    "get_unread_count",
    "list_notifications",
    "mark_all_notifications_read",
    "mark_notification_read",
    "notify_schedule",
    "raise_for_result",
]
