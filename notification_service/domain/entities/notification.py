"""Domain entity representing a user notification."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field, fields
from datetime import datetime
from enum import Enum
from typing import Any, Mapping

TITLE_MAX_LENGTH = 200
MESSAGE_MAX_LENGTH = 1000


class NotificationType(str, Enum):
    """Closed set of events that produce notifications."""

    SCHEDULE_REMINDER = "schedule_reminder"
    CHAT_MESSAGE = "chat_message"
    TASK_UPDATE = "task_update"
    SCENE_UPDATE = "scene_update"


@dataclass(frozen=True)
class NotificationPayload:
    """Event specific fields attached to a notification.

    Every field is optional. Only the keys declared here are accepted so the
    stored JSON cannot drift between event kinds.
    """

    item_id: str | None = None
    item_type: str | None = None
    item_title: str | None = None
    scheduled_date: str | None = None
    scheduled_time: str | None = None
    schedule_info: str | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> "NotificationPayload":
        """Build a payload from ``data`` rejecting unknown keys."""

        if not data:
            return cls()
        allowed = {item.name for item in fields(cls)}
        unknown = sorted(set(data) - allowed)
        if unknown:
            raise ValueError(f"Unsupported payload fields: {', '.join(unknown)}")
        values = {
            key: None if value is None else str(value) for key, value in data.items()
        }
        return cls(**values)

    def to_dict(self) -> dict[str, str]:
        """Return the populated fields only."""

        return {key: value for key, value in asdict(self).items() if value is not None}


@dataclass
class Notification:
    """Message delivered to exactly one recipient."""

    id: int | None
    type: NotificationType
    title: str
    message: str
    recipient_id: int
    sent_by_id: int
    project_id: int | None = None
    payload: NotificationPayload = field(default_factory=NotificationPayload)
    read: bool = False
    read_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass(frozen=True)
class NotificationTemplate:
    """Recipient independent content replicated by the fan-out creator."""

    type: NotificationType
    title: str
    message: str
    sent_by_id: int
    project_id: int | None = None
    payload: NotificationPayload = field(default_factory=NotificationPayload)

    def for_recipient(self, recipient_id: int) -> Notification:
        """Return a fresh unread notification addressed to ``recipient_id``."""

        return Notification(
            id=None,
            type=self.type,
            title=self.title,
            message=self.message,
            recipient_id=recipient_id,
            sent_by_id=self.sent_by_id,
            project_id=self.project_id,
            payload=self.payload,
        )


__all__ = [
    "MESSAGE_MAX_LENGTH",
    "TITLE_MAX_LENGTH",
    "Notification",
    "NotificationPayload",
    "NotificationTemplate",
    "NotificationType",
]
