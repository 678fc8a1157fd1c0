"""Read-state transitions and unread counters."""

from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from notification_service.domain.entities import Notification
from notification_service.infrastructure.repositories import NotificationRepository
from notification_service.utils import now_in_app_timezone

from .validators import ensure_actor_matches, ensure_user_exists

logger = logging.getLogger(__name__)


def mark_notification_read(
    session: Session, notification_id: int, *, actor_id: int | None = None
) -> Notification:
    """Mark a notification as read.

    Marking an already read notification succeeds and keeps its original
    ``read_at``.
    """

    repository = NotificationRepository(session)
    notification = repository.get(notification_id)
    ensure_actor_matches(actor_id, notification.recipient_id)
    if notification.read:
        return notification
    return repository.mark_read(notification_id, read_at=now_in_app_timezone())


def mark_all_notifications_read(
    session: Session,
    recipient_id: int,
    *,
    project_id: int | None = None,
    actor_id: int | None = None,
) -> int:
    """Mark every unread notification of ``recipient_id`` as read in one update."""

    ensure_actor_matches(actor_id, recipient_id)
    ensure_user_exists(session, recipient_id)
    modified = NotificationRepository(session).mark_all_read(
        recipient_id, project_id=project_id, read_at=now_in_app_timezone()
    )
    logger.info(
        "Marked %d notifications as read for user %s (project=%s)",
        modified,
        recipient_id,
        project_id,
    )
    return modified


def get_unread_count(
    session: Session,
    recipient_id: int,
    *,
    project_id: int | None = None,
    actor_id: int | None = None,
) -> int:
    """Return the live number of unread notifications in scope."""

    ensure_actor_matches(actor_id, recipient_id)
    ensure_user_exists(session, recipient_id)
    return NotificationRepository(session).count_for_recipient(
        recipient_id, project_id=project_id, unread_only=True
    )


__all__ = [
    "get_unread_count",
    "mark_all_notifications_read",
    "mark_notification_read",
]
