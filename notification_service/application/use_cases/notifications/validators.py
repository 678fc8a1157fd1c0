"""Common validation helpers for notification use cases."""

from __future__ import annotations

from collections.abc import Iterable

from sqlalchemy.orm import Session

from notification_service.config import get_settings
from notification_service.domain.exceptions import (
    NotificationForbiddenError,
    NotificationValidationError,
    UserNotFoundError,
)
from notification_service.infrastructure.repositories import UserRepository


def ensure_pagination(page: int | None, limit: int | None) -> tuple[int, int]:
    """Return ``(page, limit)`` with defaults applied, rejecting non-positive values."""

    settings = get_settings()
    page = 1 if page is None else page
    limit = settings.default_page_size if limit is None else limit
    if page < 1:
        raise NotificationValidationError("page must be greater than or equal to 1")
    if limit < 1:
        raise NotificationValidationError("limit must be greater than or equal to 1")
    if limit > settings.max_page_size:
        raise NotificationValidationError(
            f"limit cannot exceed {settings.max_page_size}"
        )
    return page, limit


def unique_recipients(recipient_ids: Iterable[int]) -> list[int]:
    """Return ``recipient_ids`` without duplicates preserving order."""

    unique: list[int] = []
    seen: set[int] = set()
    for recipient_id in recipient_ids:
        if recipient_id is None or recipient_id in seen:
            continue
        seen.add(recipient_id)
        unique.append(recipient_id)
    return unique


def ensure_user_exists(session: Session, user_id: int) -> None:
    if not UserRepository(session).exists(user_id):
        raise UserNotFoundError(user_id)


def ensure_actor_matches(actor_id: int | None, recipient_id: int) -> None:
    """Reject callers acting on another user's inbox.

    A missing ``actor_id`` is accepted unless ``ENFORCE_ACTOR_IDENTITY`` is on.
    """

    if actor_id is None:
        if get_settings().enforce_actor_identity:
            raise NotificationForbiddenError("The X-User-Id header is required")
        return
    if actor_id != recipient_id:
        raise NotificationForbiddenError(
            "You are not allowed to access notifications of another user"
        )


__all__ = [
    "ensure_actor_matches",
    "ensure_pagination",
    "ensure_user_exists",
    "unique_recipients",
]
