"""Persistence helpers for notification entities."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import replace
from datetime import datetime
from typing import Iterable

from sqlalchemy.orm import Query, Session

from notification_service.domain.entities import (
    MESSAGE_MAX_LENGTH,
    TITLE_MAX_LENGTH,
    Notification,
    NotificationPayload,
    NotificationType,
)
from notification_service.domain.exceptions import (
    NotificationNotFoundError,
    NotificationValidationError,
)
from notification_service.infrastructure.models import NotificationModel
from notification_service.utils import (
    ensure_app_naive_datetime,
    ensure_app_timezone,
    now_in_app_timezone,
)

from .errors import translate_store_errors


def validate_notification(notification: Notification) -> Notification:
    """Return a trimmed copy of ``notification`` or raise a validation error."""

    try:
        notification_type = NotificationType(notification.type)
    except ValueError as exc:
        raise NotificationValidationError(
            f"Unsupported notification type: {notification.type!r}"
        ) from exc

    title = (notification.title or "").strip()
    message = (notification.message or "").strip()
    if not title:
        raise NotificationValidationError("Notification title is required")
    if len(title) > TITLE_MAX_LENGTH:
        raise NotificationValidationError(
            f"Notification title cannot exceed {TITLE_MAX_LENGTH} characters"
        )
    if not message:
        raise NotificationValidationError("Notification message is required")
    if len(message) > MESSAGE_MAX_LENGTH:
        raise NotificationValidationError(
            f"Notification message cannot exceed {MESSAGE_MAX_LENGTH} characters"
        )
    if not notification.recipient_id:
        raise NotificationValidationError("Notification recipient is required")
    if not notification.sent_by_id:
        raise NotificationValidationError("Notification sender is required")
    if notification.read != (notification.read_at is not None):
        raise NotificationValidationError(
            "read_at must be set if and only if the notification is read"
        )

    return replace(notification, type=notification_type, title=title, message=message)


class NotificationRepository:
    """Provide CRUD operations for :class:`Notification` objects."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def create(self, notification: Notification) -> Notification:
        return self.create_many([notification])[0]

    def create_many(self, notifications: Iterable[Notification]) -> list[Notification]:
        """Insert ``notifications`` in a single transaction."""

        validated = [validate_notification(item) for item in notifications]
        models = []
        for notification in validated:
            model = NotificationModel()
            self._apply_entity_to_model(model, notification)
            models.append(model)

        with translate_store_errors(self.session, "store notifications"):
            self.session.add_all(models)
            self.session.commit()
            for model in models:
                self.session.refresh(model)
        return [self._to_entity(model) for model in models]

    def get(self, notification_id: int) -> Notification:
        with translate_store_errors(self.session, "load the notification"):
            model = self.session.get(NotificationModel, notification_id)
        if model is None:
            raise NotificationNotFoundError(notification_id)
        return self._to_entity(model)

    def delete(self, notification_id: int) -> None:
        with translate_store_errors(self.session, "delete the notification"):
            deleted = (
                self.session.query(NotificationModel)
                .filter(NotificationModel.id == notification_id)
                .delete(synchronize_session=False)
            )
            self.session.commit()
        if not deleted:
            raise NotificationNotFoundError(notification_id)

    def list_for_recipient(
        self,
        recipient_id: int,
        *,
        project_id: int | None = None,
        unread_only: bool = False,
        offset: int = 0,
        limit: int | None = 20,
    ) -> Sequence[Notification]:
        query = self._scoped_query(
            recipient_id, project_id=project_id, unread_only=unread_only
        ).order_by(NotificationModel.created_at.desc(), NotificationModel.id.desc())
        if offset:
            query = query.offset(offset)
        if limit is not None:
            query = query.limit(limit)
        with translate_store_errors(self.session, "list notifications"):
            models = query.all()
        return [self._to_entity(model) for model in models]

    def count_for_recipient(
        self,
        recipient_id: int,
        *,
        project_id: int | None = None,
        unread_only: bool = False,
    ) -> int:
        query = self._scoped_query(
            recipient_id, project_id=project_id, unread_only=unread_only
        )
        with translate_store_errors(self.session, "count notifications"):
            return query.count()

    def mark_read(self, notification_id: int, *, read_at: datetime) -> Notification:
        """Flag one notification as read unless it already is."""

        stamp = ensure_app_naive_datetime(read_at)
        with translate_store_errors(self.session, "mark the notification as read"):
            self.session.query(NotificationModel).filter(
                NotificationModel.id == notification_id,
                NotificationModel.read.is_(False),
            ).update(
                {
                    NotificationModel.read: True,
                    NotificationModel.read_at: stamp,
                    NotificationModel.updated_at: stamp,
                },
                synchronize_session=False,
            )
            self.session.commit()
        return self.get(notification_id)

    def mark_all_read(
        self,
        recipient_id: int,
        *,
        project_id: int | None = None,
        read_at: datetime,
    ) -> int:
        """Flag every unread notification in scope with one conditional update."""

        stamp = ensure_app_naive_datetime(read_at)
        query = self._scoped_query(recipient_id, project_id=project_id, unread_only=True)
        with translate_store_errors(self.session, "mark notifications as read"):
            modified = query.update(
                {
                    NotificationModel.read: True,
                    NotificationModel.read_at: stamp,
                    NotificationModel.updated_at: stamp,
                },
                synchronize_session=False,
            )
            self.session.commit()
        return int(modified or 0)

    def _scoped_query(
        self,
        recipient_id: int,
        *,
        project_id: int | None,
        unread_only: bool,
    ) -> Query:
        query = self.session.query(NotificationModel).filter(
            NotificationModel.recipient_id == recipient_id
        )
        if project_id is not None:
            query = query.filter(NotificationModel.project_id == project_id)
        if unread_only:
            query = query.filter(NotificationModel.read.is_(False))
        return query

    @staticmethod
    def _apply_entity_to_model(
        model: NotificationModel, notification: Notification
    ) -> None:
        created_at = ensure_app_naive_datetime(
            notification.created_at or now_in_app_timezone()
        )
        model.type = notification.type.value
        model.title = notification.title
        model.message = notification.message
        model.recipient_id = notification.recipient_id
        model.sent_by_id = notification.sent_by_id
        model.project_id = notification.project_id
        model.payload = notification.payload.to_dict()
        model.read = notification.read
        model.read_at = ensure_app_naive_datetime(notification.read_at)
        model.created_at = created_at
        model.updated_at = created_at

    @staticmethod
    def _to_entity(model: NotificationModel) -> Notification:
        return Notification(
            id=model.id,
            type=NotificationType(model.type),
            title=model.title,
            message=model.message,
            recipient_id=model.recipient_id,
            sent_by_id=model.sent_by_id,
            project_id=model.project_id,
            payload=NotificationPayload.from_dict(model.payload),
            read=bool(model.read),
            read_at=ensure_app_timezone(model.read_at),
            created_at=ensure_app_timezone(model.created_at),
            updated_at=ensure_app_timezone(model.updated_at),
        )


__all__ = ["NotificationRepository", "validate_notification"]
