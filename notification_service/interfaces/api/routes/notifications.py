"""Endpoints for the notification inbox."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Body, Depends, Path, Query, status
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session, sessionmaker

from notification_service.application.use_cases.notifications import (
    create_event_notifications,
    delete_notification as delete_notification_uc,
    get_unread_count as get_unread_count_uc,
    list_notifications as list_notifications_uc,
    mark_all_notifications_read as mark_all_notifications_read_uc,
    mark_notification_read as mark_notification_read_uc,
    notify_schedule,
    raise_for_result,
)
from notification_service.domain.entities import FanoutResult, Notification, User
from notification_service.infrastructure.database import get_db, get_session_factory
from notification_service.interfaces.api.dependencies import get_actor_id
from notification_service.interfaces.api.schemas import (
    MAX_DATABASE_ID,
    EventNotificationData,
    EventNotificationRequest,
    EventNotificationResponse,
    FailedRecipientRead,
    MarkAllReadResponse,
    MessageResponse,
    NotificationListResponse,
    NotificationPayloadRead,
    NotificationRead,
    NotificationResponse,
    PaginationRead,
    ScheduleNotificationData,
    ScheduleNotificationRequest,
    ScheduleNotificationResponse,
    SenderRead,
    UnreadCountResponse,
)
from notification_service.utils import format_app_date, format_app_time

router = APIRouter(prefix="/notifications", tags=["notifications"])

UserIdPath = Annotated[int, Path(ge=1, le=MAX_DATABASE_ID)]
NotificationIdPath = Annotated[int, Path(ge=1, le=MAX_DATABASE_ID)]
ProjectIdQuery = Annotated[int | None, Query(alias="projectId", ge=1, le=MAX_DATABASE_ID)]


def _notification_to_schema(
    notification: Notification, sender: User | None = None
) -> NotificationRead:
    return NotificationRead(
        id=notification.id or 0,
        type=notification.type,
        title=notification.title,
        message=notification.message,
        recipient_id=notification.recipient_id,
        sent_by_id=notification.sent_by_id,
        sent_by=SenderRead(id=sender.id, username=sender.username) if sender else None,
        project_id=notification.project_id,
        payload=NotificationPayloadRead(**notification.payload.to_dict()),
        read=notification.read,
        read_at=notification.read_at,
        created_at=notification.created_at,
        updated_at=notification.updated_at,
        formatted_date=format_app_date(notification.created_at),
        formatted_time=format_app_time(notification.created_at),
    )


def _failed_recipients(result: FanoutResult) -> list[FailedRecipientRead]:
    return [
        FailedRecipientRead(recipient_id=failure.recipient_id, reason=failure.reason)
        for failure in result.failures
    ]


def _fanout_response(model, result: FanoutResult):
    """Return ``model`` as-is, or as a 207 response when some recipients failed."""

    if not result.is_partial:
        return model
    return JSONResponse(
        status_code=status.HTTP_207_MULTI_STATUS,
        content=model.model_dump(mode="json", by_alias=True),
    )


@router.get("/user/{user_id}", response_model=NotificationListResponse)
def list_notifications(
    user_id: UserIdPath,
    project_id: ProjectIdQuery = None,
    page: int | None = Query(None),
    limit: int | None = Query(None),
    unread_only: bool = Query(False, alias="unreadOnly"),
    db: Session = Depends(get_db),
    actor_id: int | None = Depends(get_actor_id),
) -> NotificationListResponse:
    """Return a page of the user's notifications, most recent first."""

    result = list_notifications_uc(
        db,
        user_id,
        project_id=project_id,
        unread_only=unread_only,
        page=page,
        limit=limit,
        actor_id=actor_id,
    )
    return NotificationListResponse(
        data=[
            _notification_to_schema(item, result.senders.get(item.sent_by_id))
            for item in result.items
        ],
        pagination=PaginationRead(
            page=result.page, pages=result.pages, total=result.total, limit=result.limit
        ),
        unread_count=result.unread_count,
    )


@router.patch("/{notification_id}/read", response_model=NotificationResponse)
def mark_notification_read(
    notification_id: NotificationIdPath,
    db: Session = Depends(get_db),
    actor_id: int | None = Depends(get_actor_id),
) -> NotificationResponse:
    """Mark a single notification as read."""

    notification = mark_notification_read_uc(db, notification_id, actor_id=actor_id)
    return NotificationResponse(
        message="Notification marked as read",
        data=_notification_to_schema(notification),
    )


@router.patch("/user/{user_id}/read-all", response_model=MarkAllReadResponse)
def mark_all_notifications_read(
    user_id: UserIdPath,
    project_id: ProjectIdQuery = None,
    db: Session = Depends(get_db),
    actor_id: int | None = Depends(get_actor_id),
) -> MarkAllReadResponse:
    """Mark every unread notification of the user as read."""

    modified = mark_all_notifications_read_uc(
        db, user_id, project_id=project_id, actor_id=actor_id
    )
    return MarkAllReadResponse(
        message=f"Marked {modified} notifications as read", modified_count=modified
    )


@router.post("/schedule", response_model=ScheduleNotificationResponse)
def send_schedule_notification(
    request: ScheduleNotificationRequest = Body(...),
    db: Session = Depends(get_db),
    session_factory: sessionmaker = Depends(get_session_factory),
    actor_id: int | None = Depends(get_actor_id),
):
    """Notify the users assigned to a scene or task about its schedule."""

    outcome = notify_schedule(
        db,
        item_id=request.item_id,
        item_type=request.item_type,
        project_id=request.project_id,
        sender_id=actor_id,
        session_factory=session_factory,
    )
    result = outcome.result
    if not result.created:
        raise_for_result(result)

    response = ScheduleNotificationResponse(
        message=f"Schedule notification sent to {len(result.created)} users",
        data=ScheduleNotificationData(
            notification_count=len(result.created),
            item_title=outcome.item.title,
            item_type=outcome.item.kind.value,
            failed_recipients=_failed_recipients(result),
        ),
    )
    return _fanout_response(response, result)


@router.post("/events", response_model=EventNotificationResponse)
def send_event_notification(
    request: EventNotificationRequest = Body(...),
    session_factory: sessionmaker = Depends(get_session_factory),
    actor_id: int | None = Depends(get_actor_id),
):
    """Deliver a chat, task or scene update to every listed recipient.

    A supplied ``X-User-Id`` must match ``sentById``.
    """

    result = create_event_notifications(
        notification_type=request.type,
        title=request.title,
        message=request.message,
        recipient_ids=request.recipient_ids,
        sender_id=request.sent_by_id,
        project_id=request.project_id,
        payload=request.payload,
        session_factory=session_factory,
        actor_id=actor_id,
    )
    if not result.created:
        raise_for_result(result)

    response = EventNotificationResponse(
        message=f"Notification sent to {len(result.created)} users",
        data=EventNotificationData(
            notification_count=len(result.created),
            failed_recipients=_failed_recipients(result),
        ),
    )
    return _fanout_response(response, result)


@router.delete("/{notification_id}", response_model=MessageResponse)
def delete_notification(
    notification_id: NotificationIdPath,
    db: Session = Depends(get_db),
    actor_id: int | None = Depends(get_actor_id),
) -> MessageResponse:
    """Permanently delete a notification."""

    delete_notification_uc(db, notification_id, actor_id=actor_id)
    return MessageResponse(message="Notification deleted successfully")


@router.get("/user/{user_id}/unread-count", response_model=UnreadCountResponse)
def get_unread_count(
    user_id: UserIdPath,
    project_id: ProjectIdQuery = None,
    db: Session = Depends(get_db),
    actor_id: int | None = Depends(get_actor_id),
) -> UnreadCountResponse:
    """Return the number of unread notifications for the user."""

    count = get_unread_count_uc(db, user_id, project_id=project_id, actor_id=actor_id)
    return UnreadCountResponse(unread_count=count)
