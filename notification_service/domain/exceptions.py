"""Errors raised by the notification use cases and repositories."""

from __future__ import annotations

from typing import Any

from .entities import FanoutResult


class NotificationServiceError(Exception):
    """Base class for every error the service reports to callers."""

    error_code = "NOTIFICATION_ERROR"

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class NotificationValidationError(NotificationServiceError):
    """Input is malformed or violates a notification invariant."""

    error_code = "VALIDATION_ERROR"


class NotFoundError(NotificationServiceError):
    """A referenced resource does not exist."""

    error_code = "NOT_FOUND"

    def __init__(self, resource: str, identifier: Any) -> None:
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} {identifier} not found")


class NotificationNotFoundError(NotFoundError):
    def __init__(self, notification_id: Any) -> None:
        super().__init__("Notification", notification_id)


class UserNotFoundError(NotFoundError):
    def __init__(self, user_id: Any) -> None:
        super().__init__("User", user_id)


class ScheduledItemNotFoundError(NotFoundError):
    def __init__(self, kind: str, item_id: Any) -> None:
        super().__init__(kind.capitalize(), item_id)


class NotificationForbiddenError(NotificationServiceError):
    """The calling identity may not act on the requested recipient."""

    error_code = "FORBIDDEN"


class TransientStoreError(NotificationServiceError):
    """The store was unavailable or timed out; the caller may retry."""

    error_code = "STORE_UNAVAILABLE"


class PartialFanoutFailure(NotificationServiceError):
    """Some, but not all, recipient writes of a fan-out failed."""

    error_code = "PARTIAL_FANOUT_FAILURE"

    def __init__(self, result: FanoutResult) -> None:
        self.result = result
        super().__init__(
            f"Created {len(result.created)} notifications, "
            f"{len(result.failures)} recipients failed"
        )


__all__ = [
    "NotFoundError",
    "NotificationForbiddenError",
    "NotificationNotFoundError",
    "NotificationServiceError",
    "NotificationValidationError",
    "PartialFanoutFailure",
    "ScheduledItemNotFoundError",
    "TransientStoreError",
    "UserNotFoundError",
]
