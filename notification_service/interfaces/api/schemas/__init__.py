from .notification import (
    MAX_DATABASE_ID,
    ErrorResponse,
    EventNotificationData,
    EventNotificationRequest,
    EventNotificationResponse,
    FailedRecipientRead,
    MarkAllReadResponse,
    MessageResponse,
    NotificationListResponse,
    NotificationPayloadRead,
    NotificationRead,
    NotificationResponse,
    PaginationRead,
    ScheduleNotificationData,
    ScheduleNotificationRequest,
    ScheduleNotificationResponse,
    SenderRead,
    UnreadCountResponse,
)

__all__ = [
    "MAX_DATABASE_ID",
    "ErrorResponse",
    "EventNotificationData",
    "EventNotificationRequest",
    "EventNotificationResponse",
    "FailedRecipientRead",
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
