"""Use case for deleting a notification."""

from sqlalchemy.orm import Session

from notification_service.infrastructure.repositories import NotificationRepository

from .validators import ensure_actor_matches


def delete_notification(
    session: Session, notification_id: int, *, actor_id: int | None = None
) -> None:
    """Permanently delete the notification identified by ``notification_id``."""

    repository = NotificationRepository(session)
    notification = repository.get(notification_id)
    ensure_actor_matches(actor_id, notification.recipient_id)
    repository.delete(notification_id)
