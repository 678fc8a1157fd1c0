"""Pydantic models describing notification payloads."""

from __future__ import annotations

from datetime import datetime
from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from notification_service.domain.entities import (
    MESSAGE_MAX_LENGTH,
    TITLE_MAX_LENGTH,
    NotificationType,
)

# Largest value an INTEGER primary key column can hold.
MAX_DATABASE_ID = 2**63 - 1

DatabaseId = Annotated[int, Field(ge=1, le=MAX_DATABASE_ID)]


class CamelModel(BaseModel):
    """Base model exchanging camelCase keys with the web client."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class NotificationPayloadRead(CamelModel):
    item_id: str | None = None
    item_type: str | None = None
    item_title: str | None = None
    scheduled_date: str | None = None
    scheduled_time: str | None = None
    schedule_info: str | None = None


class SenderRead(CamelModel):
    id: int
    username: str


class NotificationRead(CamelModel):
    """Representation of a notification delivered to the client."""

    id: int
    type: NotificationType
    title: str
    message: str
    recipient_id: int
    sent_by_id: int
    sent_by: SenderRead | None = None
    project_id: int | None = None
    payload: NotificationPayloadRead = Field(default_factory=NotificationPayloadRead)
    read: bool
    read_at: datetime | None = None
    created_at: datetime
    updated_at: datetime
    formatted_date: str | None = None
    formatted_time: str | None = None


class PaginationRead(CamelModel):
    page: int
    pages: int
    total: int
    limit: int


class NotificationListResponse(CamelModel):
    success: bool = True
    data: list[NotificationRead]
    pagination: PaginationRead
    unread_count: int


class NotificationResponse(CamelModel):
    success: bool = True
    message: str
    data: NotificationRead


class MessageResponse(CamelModel):
    success: bool = True
    message: str


class MarkAllReadResponse(MessageResponse):
    modified_count: int


class UnreadCountResponse(CamelModel):
    success: bool = True
    unread_count: int


class ScheduleNotificationRequest(CamelModel):
    """Trigger a schedule reminder for a scene or task."""

    item_id: DatabaseId
    item_type: str = Field(..., min_length=1, description="'scene' or 'task'")
    project_id: DatabaseId


class FailedRecipientRead(CamelModel):
    recipient_id: int
    reason: str


class ScheduleNotificationData(CamelModel):
    notification_count: int
    item_title: str
    item_type: str
    failed_recipients: list[FailedRecipientRead] = Field(default_factory=list)


class ScheduleNotificationResponse(CamelModel):
    success: bool = True
    message: str
    data: ScheduleNotificationData


class EventNotificationRequest(CamelModel):
    """Fan a chat, task or scene update out to several recipients."""

    type: NotificationType
    title: str = Field(..., min_length=1, max_length=TITLE_MAX_LENGTH)
    message: str = Field(..., min_length=1, max_length=MESSAGE_MAX_LENGTH)
    recipient_ids: list[DatabaseId] = Field(..., min_length=1)
    sent_by_id: DatabaseId
    project_id: DatabaseId | None = None
    payload: dict[str, Any] | None = None


class EventNotificationData(CamelModel):
    notification_count: int
    failed_recipients: list[FailedRecipientRead] = Field(default_factory=list)


class EventNotificationResponse(CamelModel):
    success: bool = True
    message: str
    data: EventNotificationData


class ErrorResponse(CamelModel):
    success: bool = False
    message: str
    error: str
    details: list[dict[str, Any]] | None = None


__all__ = [
    "CamelModel",
    "DatabaseId",
    "ErrorResponse",
    "EventNotificationData",
    "EventNotificationRequest",
    "EventNotificationResponse",
    "FailedRecipientRead",
    "MAX_DATABASE_ID",
    "MarkAllReadResponse",
    "MessageResponse",
    "NotificationListResponse",
    "NotificationPayloadRead",
    "NotificationRead",
    "NotificationResponse",
    "PaginationRead",
    "ScheduleNotificationData",
    "ScheduleNotificationRequest",
    "ScheduleNotificationResponse",
    "SenderRead",
    "UnreadCountResponse",
]
