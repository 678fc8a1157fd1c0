"""SQLAlchemy models for scenes and tasks owned by the scheduling feature."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Table, func
from sqlalchemy.orm import relationship

from notification_service.infrastructure.database import Base

scheduled_item_assignee_table = Table(
    "scheduled_item_assignee",
    Base.metadata,
    Column(
        "item_id",
        Integer,
        ForeignKey("scheduled_item.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "user_id",
        Integer,
        ForeignKey("user.id", ondelete="CASCADE"),
        primary_key=True,
    ),
)


class ScheduledItemModel(Base):
    """A scene or task with an optional date and time slot."""

    __tablename__ = "scheduled_item"

    id = Column(Integer, primary_key=True, index=True)
    kind = Column(String(10), nullable=False, index=True)
    title = Column(String(200), nullable=False)
    project_id = Column(Integer, nullable=True, index=True)
    scheduled_date = Column(String(10), nullable=True)
    scheduled_time = Column(String(5), nullable=True)
    created_by = Column(Integer, ForeignKey("user.id"), nullable=True)
    created_at = Column(DateTime, nullable=False, server_default=func.now())

    assignees = relationship(
        "UserModel",
        secondary=scheduled_item_assignee_table,
        lazy="selectin",
        order_by="UserModel.id",
    )


__all__ = ["ScheduledItemModel", "scheduled_item_assignee_table"]
