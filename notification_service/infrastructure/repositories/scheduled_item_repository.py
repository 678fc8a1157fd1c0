"""Read access to scenes and tasks published by the scheduling feature."""

from __future__ import annotations

from sqlalchemy.orm import Session

from notification_service.domain.entities import ScheduledItem, ScheduledItemKind
from notification_service.infrastructure.models import ScheduledItemModel, UserModel

from .errors import translate_store_errors


class ScheduledItemRepository:
    """Look up schedulable items and the users assigned to them."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, item_id: int, kind: ScheduledItemKind | None = None) -> ScheduledItem | None:
        query = self.session.query(ScheduledItemModel).filter(
            ScheduledItemModel.id == item_id
        )
        if kind is not None:
            query = query.filter(ScheduledItemModel.kind == ScheduledItemKind(kind).value)
        with translate_store_errors(self.session, "load the scheduled item"):
            model = query.first()
        return self._to_entity(model) if model else None

    def create(self, item: ScheduledItem) -> ScheduledItem:
        model = ScheduledItemModel(
            kind=ScheduledItemKind(item.kind).value,
            title=item.title,
            project_id=item.project_id,
            scheduled_date=item.scheduled_date,
            scheduled_time=item.scheduled_time,
            created_by=item.created_by,
        )
        with translate_store_errors(self.session, "create the scheduled item"):
            if item.assignee_ids:
                model.assignees = (
                    self.session.query(UserModel)
                    .filter(UserModel.id.in_(item.assignee_ids))
                    .all()
                )
            self.session.add(model)
            self.session.commit()
            self.session.refresh(model)
        return self._to_entity(model)

    @staticmethod
    def _to_entity(model: ScheduledItemModel) -> ScheduledItem:
        return ScheduledItem(
            id=model.id,
            kind=ScheduledItemKind(model.kind),
            title=model.title,
            project_id=model.project_id,
            scheduled_date=model.scheduled_date,
            scheduled_time=model.scheduled_time,
            created_by=model.created_by,
            assignee_ids=[user.id for user in model.assignees],
        )


__all__ = ["ScheduledItemRepository"]
