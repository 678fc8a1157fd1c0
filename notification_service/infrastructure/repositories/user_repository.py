"""Read access to the user directory."""

from __future__ import annotations

from collections.abc import Iterable

from sqlalchemy.orm import Session

from notification_service.domain.entities import User
from notification_service.infrastructure.models import UserModel

from .errors import translate_store_errors


class UserRepository:
    """Resolve user identities referenced by notifications."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def exists(self, user_id: int) -> bool:
        with translate_store_errors(self.session, "look up the user"):
            found = (
                self.session.query(UserModel.id).filter(UserModel.id == user_id).first()
            )
        return found is not None

    def list_active_ids(self) -> list[int]:
        query = (
            self.session.query(UserModel.id)
            .filter(UserModel.is_active.is_(True))
            .order_by(UserModel.id)
        )
        with translate_store_errors(self.session, "list users"):
            return [user_id for (user_id,) in query.all()]

    def get_map_by_ids(self, user_ids: Iterable[int]) -> dict[int, User]:
        unique_ids = {int(user_id) for user_id in user_ids if user_id is not None}
        if not unique_ids:
            return {}

        query = self.session.query(UserModel).filter(UserModel.id.in_(unique_ids))
        with translate_store_errors(self.session, "look up users"):
            models = query.all()
        return {model.id: self._to_entity(model) for model in models}

    def create(self, user: User) -> User:
        model = UserModel(username=user.username, email=user.email, is_active=user.is_active)
        with translate_store_errors(self.session, "create the user"):
            self.session.add(model)
            self.session.commit()
            self.session.refresh(model)
        return self._to_entity(model)

    @staticmethod
    def _to_entity(model: UserModel) -> User:
        return User(
            id=model.id,
            username=model.username,
            email=model.email,
            is_active=model.is_active,
            created_at=model.created_at,
        )


__all__ = ["UserRepository"]
