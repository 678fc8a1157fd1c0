"""Tests for the schedule reminder fan-out."""

from __future__ import annotations

import pytest

from notification_service.application.use_cases.notifications import (
    build_schedule_phrase,
    build_schedule_template,
    create_schedule_notifications,
    notify_schedule,
)
from notification_service.domain.entities import (
    NotificationType,
    ScheduledItem,
    ScheduledItemKind,
)
from notification_service.domain.exceptions import (
    NotFoundError,
    NotificationValidationError,
    PartialFanoutFailure,
    ScheduledItemNotFoundError,
    UserNotFoundError,
)
from notification_service.infrastructure.repositories import NotificationRepository


def _item(**overrides) -> ScheduledItem:
    values = dict(
        id=42,
        kind=ScheduledItemKind.SCENE,
        title="Kitchen Scene",
        scheduled_date="2025-10-07",
        scheduled_time="09:00",
    )
    values.update(overrides)
    return ScheduledItem(**values)


@pytest.mark.parametrize(
    ("scheduled_date", "scheduled_time", "expected"),
    [
        ("2025-10-07", "09:00", "on 2025-10-07 at 09:00"),
        ("2025-10-07", None, "on 2025-10-07"),
        (None, "09:00", "soon"),
        ("", None, "soon"),
    ],
)
def test_build_schedule_phrase(scheduled_date, scheduled_time, expected):
    assert build_schedule_phrase(scheduled_date, scheduled_time) == expected


def test_build_schedule_template_for_task():
    template = build_schedule_template(
        _item(kind=ScheduledItemKind.TASK, title="Build set", scheduled_date=None),
        sender_id=5,
        project_id=9,
    )

    assert template.type is NotificationType.SCHEDULE_REMINDER
    assert template.title == "Task Schedule Reminder"
    assert template.message == 'You are assigned to task "Build set" soon'
    assert template.payload.to_dict() == {
        "item_id": "42",
        "item_type": "task",
        "item_title": "Build set",
        "scheduled_time": "09:00",
        "schedule_info": "soon",
    }


def test_kitchen_scene_reaches_each_recipient_once(session, session_factory, make_user):
    crew_a = make_user()
    crew_b = make_user()

    created = create_schedule_notifications(
        _item(),
        [crew_a.id, crew_b.id, crew_a.id],
        sender_id=crew_a.id,
        project_id=1,
        session_factory=session_factory,
    )

    assert sorted(n.recipient_id for n in created) == [crew_a.id, crew_b.id]
    assert len({n.id for n in created}) == 2
    repository = NotificationRepository(session)
    for crew in (crew_a, crew_b):
        (notification,) = repository.list_for_recipient(crew.id)
        assert notification.title == "Scene Schedule Reminder"
        assert notification.message == (
            'You are assigned to scene "Kitchen Scene" on 2025-10-07 at 09:00'
        )
        assert notification.payload.schedule_info == "on 2025-10-07 at 09:00"
        assert notification.sent_by_id == crew_a.id
        assert notification.project_id == 1
        assert notification.read is False


def test_missing_date_ends_message_with_soon(session_factory, make_user):
    crew = make_user()

    (notification,) = create_schedule_notifications(
        _item(scheduled_date=None),
        [crew.id],
        sender_id=crew.id,
        session_factory=session_factory,
    )

    assert notification.message.endswith("soon")


def test_failed_recipient_does_not_block_the_others(session, session_factory, make_user):
    crew_a = make_user()
    crew_b = make_user()

    with pytest.raises(PartialFanoutFailure) as excinfo:
        create_schedule_notifications(
            _item(),
            [crew_a.id, 9999, crew_b.id],
            sender_id=crew_a.id,
            session_factory=session_factory,
        )

    result = excinfo.value.result
    assert [n.recipient_id for n in result.created] == [crew_a.id, crew_b.id]
    assert result.failed_recipient_ids == [9999]
    repository = NotificationRepository(session)
    assert repository.count_for_recipient(crew_a.id) == 1
    assert repository.count_for_recipient(crew_b.id) == 1


def test_notify_schedule_targets_item_assignees(session, session_factory, make_user, make_item):
    director = make_user("director")
    crew = make_user()
    bystander = make_user()
    item = make_item(created_by=director.id, assignee_ids=[director.id, crew.id])

    outcome = notify_schedule(
        session,
        item_id=item.id,
        item_type="scene",
        project_id=1,
        session_factory=session_factory,
    )

    assert outcome.item.title == "Kitchen Scene"
    assert sorted(n.recipient_id for n in outcome.result.created) == [director.id, crew.id]
    assert all(n.sent_by_id == director.id for n in outcome.result.created)
    assert NotificationRepository(session).count_for_recipient(bystander.id) == 0


def test_notify_schedule_without_assignees_reaches_active_users(
    session, session_factory, make_user, make_item
):
    active = make_user()
    make_user(is_active=False)
    item = make_item(kind="task", title="Strike set", project_id=None)

    outcome = notify_schedule(
        session,
        item_id=item.id,
        item_type="task",
        project_id=3,
        sender_id=active.id,
        session_factory=session_factory,
    )

    (notification,) = outcome.result.created
    assert notification.recipient_id == active.id
    assert notification.project_id == 3
    assert notification.title == "Task Schedule Reminder"


def test_notify_schedule_validation_and_lookup_errors(
    session, session_factory, make_user, make_item
):
    crew = make_user()
    item = make_item(assignee_ids=[crew.id])

    with pytest.raises(NotificationValidationError, match="itemType"):
        notify_schedule(
            session, item_id=item.id, item_type="shot", project_id=1,
            session_factory=session_factory,
        )
    with pytest.raises(ScheduledItemNotFoundError):
        notify_schedule(
            session, item_id=item.id, item_type="task", project_id=1,
            session_factory=session_factory,
        )
    with pytest.raises(NotificationValidationError, match="does not belong"):
        notify_schedule(
            session, item_id=item.id, item_type="scene", project_id=2,
            session_factory=session_factory,
        )
    with pytest.raises(UserNotFoundError):
        notify_schedule(
            session, item_id=item.id, item_type="scene", project_id=1,
            sender_id=9999, session_factory=session_factory,
        )


def test_notify_schedule_with_nobody_to_notify(session, session_factory, make_item):
    item = make_item()

    with pytest.raises(NotFoundError, match="Recipients"):
        notify_schedule(
            session, item_id=item.id, item_type="scene", project_id=1,
            session_factory=session_factory,
        )
