"""Paginated inbox listing."""

from __future__ import annotations

import math
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field

from sqlalchemy.orm import Session

from notification_service.domain.entities import Notification, User
from notification_service.infrastructure.repositories import (
    NotificationRepository,
    UserRepository,
)

from .validators import ensure_actor_matches, ensure_pagination, ensure_user_exists


@dataclass
class NotificationPage:
    """One page of a recipient's inbox plus the counters the client renders."""

    items: Sequence[Notification]
    page: int
    limit: int
    total: int
    unread_count: int
    senders: Mapping[int, User] = field(default_factory=dict)

    @property
    def pages(self) -> int:
        return math.ceil(self.total / self.limit)


def list_notifications(
    session: Session,
    recipient_id: int,
    *,
    project_id: int | None = None,
    unread_only: bool = False,
    page: int | None = None,
    limit: int | None = None,
    actor_id: int | None = None,
) -> NotificationPage:
    """Return the requested page, newest first.

    ``unread_count`` ignores ``unread_only`` so the badge stays accurate while
    the client browses any subset of the inbox. Pages past the end are empty
    and never reach the store, whatever their number.
    """

    page, limit = ensure_pagination(page, limit)
    ensure_actor_matches(actor_id, recipient_id)
    ensure_user_exists(session, recipient_id)

    repository = NotificationRepository(session)
    total = repository.count_for_recipient(
        recipient_id, project_id=project_id, unread_only=unread_only
    )
    offset = (page - 1) * limit
    items: Sequence[Notification] = []
    if offset < total:
        items = repository.list_for_recipient(
            recipient_id,
            project_id=project_id,
            unread_only=unread_only,
            offset=offset,
            limit=limit,
        )
    unread_count = repository.count_for_recipient(
        recipient_id, project_id=project_id, unread_only=True
    )
    senders = UserRepository(session).get_map_by_ids(item.sent_by_id for item in items)
    return NotificationPage(
        items=items,
        page=page,
        limit=limit,
        total=total,
        unread_count=unread_count,
        senders=senders,
    )


__all__ = ["NotificationPage", "list_notifications"]
