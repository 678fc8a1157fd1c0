"""SQLAlchemy model for persisted notifications."""

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
)
from sqlalchemy.sql import expression

from notification_service.domain.entities import MESSAGE_MAX_LENGTH, TITLE_MAX_LENGTH
from notification_service.infrastructure.database import Base
from notification_service.utils import now_in_app_naive_datetime


class NotificationModel(Base):
    """Database representation for user notifications."""

    __tablename__ = "notification"
    __table_args__ = (
        Index(
            "ix_notification_recipient_read_created",
            "recipient_id",
            "read",
            "created_at",
        ),
        Index(
            "ix_notification_recipient_project_created",
            "recipient_id",
            "project_id",
            "created_at",
        ),
        Index(
            "ix_notification_project_type_created",
            "project_id",
            "type",
            "created_at",
        ),
    )

    id = Column(Integer, primary_key=True, index=True)
    type = Column(String(32), nullable=False, index=True)
    title = Column(String(TITLE_MAX_LENGTH), nullable=False)
    message = Column(Text(MESSAGE_MAX_LENGTH), nullable=False)
    recipient_id = Column(
        Integer,
        ForeignKey("user.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    sent_by_id = Column(Integer, ForeignKey("user.id"), nullable=False)
    project_id = Column(Integer, nullable=True)
    payload = Column(JSON, nullable=False, default=dict)
    read = Column(
        Boolean,
        nullable=False,
        default=False,
        server_default=expression.false(),
        index=True,
    )
    read_at = Column(DateTime(), nullable=True)
    created_at = Column(DateTime(), nullable=False, default=now_in_app_naive_datetime)
    updated_at = Column(
        DateTime(),
        nullable=False,
        default=now_in_app_naive_datetime,
        onupdate=now_in_app_naive_datetime,
    )


__all__ = ["NotificationModel"]
