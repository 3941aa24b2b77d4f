"""Persistence layer for user data."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy import func
from sqlalchemy.orm import Session

from app.domain.entities import User
from app.infrastructure.models import UserModel
from app.utils import ensure_app_timezone


class UserRepository:
    """Provide CRUD operations for user entities.

    Also acts as the directory used to resolve ``@mentions``: display names
    are compared case-insensitively after trimming.
    """

    def __init__(self, session: Session) -> None:
        self.session = session

    def list(self, skip: int = 0, limit: int = 100) -> Sequence[User]:
        query = (
            self.session.query(UserModel)
            .filter(UserModel.deleted.is_(False))
            .order_by(UserModel.name.asc(), UserModel.id.asc())
            .offset(skip)
            .limit(limit)
        )
        return [self._to_entity(model) for model in query.all()]

    def get(self, user_id: int) -> User | None:
        model = self.session.get(UserModel, user_id)
        return self._to_entity(model) if model else None

    def get_by_email(self, email: str) -> User | None:
        model = (
            self.session.query(UserModel)
            .filter(func.lower(UserModel.email) == email.strip().lower())
            .first()
        )
        return self._to_entity(model) if model else None

    def find_by_display_name(self, display_name: str) -> Sequence[User]:
        normalized = display_name.strip().lower()
        if not normalized:
            return []
        query = (
            self.session.query(UserModel)
            .filter(func.lower(func.trim(UserModel.name)) == normalized)
            .filter(UserModel.deleted.is_(False))
            .order_by(UserModel.id.asc())
        )
        return [self._to_entity(model) for model in query.all()]

    def create(self, user: User) -> User:
        model = UserModel()
        self._apply_entity_to_model(model, user)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    @staticmethod
    def _apply_entity_to_model(model: UserModel, user: User) -> None:
        model.name = user.name.strip()
        model.email = user.email.strip().lower()
        model.is_active = user.is_active
        model.deleted = user.deleted

    @staticmethod
    def _to_entity(model: UserModel) -> User:
        return User(
            id=model.id,
            name=model.name,
            email=model.email,
            is_active=model.is_active,
            deleted=model.deleted,
            created_at=ensure_app_timezone(model.created_at),
        )


__all__ = ["UserRepository"]
