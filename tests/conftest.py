"""Shared fixtures backed by a throwaway SQLite database per test."""

from __future__ import annotations

import itertools
import os
import sys
from pathlib import Path

import pytest

# Ensure the project root (which contains the ``notification_service`` package) is importable
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("LOG_LEVEL", "WARNING")


@pytest.fixture()
def database(tmp_path):
    """Bind the application engine to a fresh database file."""

    from notification_service.config import reset_settings_cache
    from notification_service.infrastructure import database as database_module

    reset_settings_cache()
    database_module.configure_engine(f"sqlite:///{tmp_path / 'notifications.db'}")
    database_module.initialize_database()
    yield database_module
    database_module.engine.dispose()
    reset_settings_cache()


@pytest.fixture()
def session_factory(database):
    return database.SessionLocal


@pytest.fixture()
def session(session_factory):
    db = session_factory()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture()
def make_user(session):
    """Return a helper that inserts users into the directory."""

    from notification_service.domain.entities import User
    from notification_service.infrastructure.repositories import UserRepository

    counter = itertools.count(1)
    repository = UserRepository(session)

    def _make_user(username: str | None = None, *, is_active: bool = True) -> User:
        name = username or f"crew{next(counter)}"
        return repository.create(
            User(id=None, username=name, email=f"{name}@example.com", is_active=is_active)
        )

    return _make_user


@pytest.fixture()
def make_item(session):
    """Return a helper that inserts scenes and tasks with their assignees."""

    from notification_service.domain.entities import ScheduledItem, ScheduledItemKind
    from notification_service.infrastructure.repositories import ScheduledItemRepository

    repository = ScheduledItemRepository(session)

    def _make_item(
        title: str = "Kitchen Scene",
        *,
        kind: str = "scene",
        project_id: int | None = 1,
        scheduled_date: str | None = "2025-10-07",
        scheduled_time: str | None = "09:00",
        created_by: int | None = None,
        assignee_ids: list[int] | None = None,
    ) -> ScheduledItem:
        return repository.create(
            ScheduledItem(
                id=None,
                kind=ScheduledItemKind(kind),
                title=title,
                project_id=project_id,
                scheduled_date=scheduled_date,
                scheduled_time=scheduled_time,
                created_by=created_by,
                assignee_ids=list(assignee_ids or []),
            )
        )

    return _make_item


@pytest.fixture()
def make_notification(session):
    """Return a helper that stores a single notification directly."""

    from notification_service.domain.entities import Notification, NotificationType
    from notification_service.infrastructure.repositories import NotificationRepository

    repository = NotificationRepository(session)

    def _make_notification(
        recipient_id: int,
        *,
        sent_by_id: int | None = None,
        project_id: int | None = None,
        title: str = "Task Update",
        message: str = "Lighting rig moved to stage B",
        notification_type: NotificationType = NotificationType.TASK_UPDATE,
    ) -> Notification:
        return repository.create(
            Notification(
                id=None,
                type=notification_type,
                title=title,
                message=message,
                recipient_id=recipient_id,
                sent_by_id=sent_by_id or recipient_id,
                project_id=project_id,
            )
        )

    return _make_notification
