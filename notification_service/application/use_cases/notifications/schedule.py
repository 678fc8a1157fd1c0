"""Schedule reminders: the scene/task instantiation of the fan-out creator."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from sqlalchemy.orm import Session

from notification_service.domain.entities import (
    FanoutResult,
    Notification,
    NotificationPayload,
    NotificationTemplate,
    NotificationType,
    ScheduledItem,
    ScheduledItemKind,
)
from notification_service.domain.exceptions import (
    NotFoundError,
    NotificationValidationError,
    ScheduledItemNotFoundError,
    UserNotFoundError,
)
from notification_service.infrastructure.repositories import (
    ScheduledItemRepository,
    UserRepository,
)

from .fanout import SessionFactory, fan_out, raise_for_result

logger = logging.getLogger(__name__)

_UNSCHEDULED_PHRASE = "soon"


@dataclass
class ScheduleNotificationOutcome:
    """Item that triggered a schedule fan-out and what the fan-out produced."""

    item: ScheduledItem
    result: FanoutResult


def build_schedule_phrase(
    scheduled_date: str | None, scheduled_time: str | None = None
) -> str:
    """Describe when an item happens, e.g. ``on 2025-10-07 at 09:00``."""

    if not scheduled_date:
        return _UNSCHEDULED_PHRASE
    phrase = f"on {scheduled_date}"
    if scheduled_time:
        phrase = f"{phrase} at {scheduled_time}"
    return phrase


def build_schedule_template(
    item: ScheduledItem,
    *,
    sender_id: int,
    project_id: int | None = None,
) -> NotificationTemplate:
    kind = ScheduledItemKind(item.kind)
    noun = kind.value
    schedule_info = build_schedule_phrase(item.scheduled_date, item.scheduled_time)
    return NotificationTemplate(
        type=NotificationType.SCHEDULE_REMINDER,
        title=f"{noun.capitalize()} Schedule Reminder",
        message=f'You are assigned to {noun} "{item.title}" {schedule_info}',
        sent_by_id=sender_id,
        project_id=project_id,
        payload=NotificationPayload(
            item_id=None if item.id is None else str(item.id),
            item_type=noun,
            item_title=item.title,
            scheduled_date=item.scheduled_date,
            scheduled_time=item.scheduled_time,
            schedule_info=schedule_info,
        ),
    )


def create_schedule_notifications(
    item: ScheduledItem,
    recipient_ids: Iterable[int],
    *,
    sender_id: int,
    project_id: int | None = None,
    session_factory: SessionFactory,
    max_workers: int | None = None,
) -> list[Notification]:
    """Create one schedule reminder per recipient and return them.

    Raises :class:`PartialFanoutFailure` when only some recipients could be
    written; the exception carries both the created notifications and the
    failed recipients.
    """

    template = build_schedule_template(item, sender_id=sender_id, project_id=project_id)
    result = fan_out(
        template,
        recipient_ids,
        session_factory=session_factory,
        max_workers=max_workers,
    )
    return raise_for_result(result)


def notify_schedule(
    session: Session,
    *,
    item_id: int,
    item_type: str,
    project_id: int,
    session_factory: SessionFactory,
    sender_id: int | None = None,
) -> ScheduleNotificationOutcome:
    """Notify everyone assigned to a scene or task about its schedule.

    Items without assignees reach every active user. The sender is the
    calling user when known, otherwise the item's creator.
    """

    try:
        kind = ScheduledItemKind(item_type)
    except ValueError as exc:
        raise NotificationValidationError("itemType must be 'scene' or 'task'") from exc

    item = ScheduledItemRepository(session).get(item_id, kind)
    if item is None:
        raise ScheduledItemNotFoundError(kind.value, item_id)
    if item.project_id is not None and item.project_id != project_id:
        raise NotificationValidationError(
            f"{kind.value.capitalize()} {item_id} does not belong to project {project_id}"
        )

    users = UserRepository(session)
    recipients = list(item.assignee_ids) or users.list_active_ids()
    if not recipients:
        raise NotFoundError("Recipients for", f"{kind.value} {item_id}")

    if sender_id is not None and not users.exists(sender_id):
        raise UserNotFoundError(sender_id)
    sender = sender_id or item.created_by or recipients[0]

    template = build_schedule_template(item, sender_id=sender, project_id=project_id)
    result = fan_out(template, recipients, session_factory=session_factory)
    logger.info(
        "Schedule reminder for %s %s sent to %d of %d recipients",
        kind.value,
        item_id,
        len(result.created),
        len(recipients),
    )
    return ScheduleNotificationOutcome(item=item, result=result)


__all__ = [
    "ScheduleNotificationOutcome",
    "build_schedule_phrase",
    "build_schedule_template",
    "create_schedule_notifications",
    "notify_schedule",
]
