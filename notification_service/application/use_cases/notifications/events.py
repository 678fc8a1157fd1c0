"""Entry point for chat, task and scene update notifications."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from notification_service.domain.entities import (
    FanoutResult,
    NotificationPayload,
    NotificationTemplate,
    NotificationType,
)
from notification_service.domain.exceptions import NotificationValidationError

from .fanout import SessionFactory, fan_out
from .validators import ensure_actor_matches


def create_event_notifications(
    *,
    notification_type: str | NotificationType,
    title: str,
    message: str,
    recipient_ids: Iterable[int],
    sender_id: int,
    session_factory: SessionFactory,
    project_id: int | None = None,
    payload: Mapping[str, Any] | None = None,
    actor_id: int | None = None,
) -> FanoutResult:
    """Fan an event defined by its source out to ``recipient_ids``.

    When ``actor_id`` is known it must be the declared sender.
    """

    ensure_actor_matches(actor_id, sender_id)

    try:
        resolved_type = NotificationType(notification_type)
        resolved_payload = NotificationPayload.from_dict(payload)
    except ValueError as exc:
        raise NotificationValidationError(str(exc)) from exc

    template = NotificationTemplate(
        type=resolved_type,
        title=title,
        message=message,
        sent_by_id=sender_id,
        project_id=project_id,
        payload=resolved_payload,
    )
    return fan_out(template, recipient_ids, session_factory=session_factory)


__all__ = ["create_event_notifications"]
