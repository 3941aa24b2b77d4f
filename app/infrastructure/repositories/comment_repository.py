"""Persistence helpers for client comments."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy.orm import Session

from app.domain.entities import Comment
from app.infrastructure.models import CommentModel
from app.utils import ensure_app_naive_datetime, ensure_app_timezone, now_in_app_timezone


class CommentRepository:
    """Provide CRUD operations for :class:`Comment` objects."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def list_for_client(self, client_id: int, *, limit: int | None = 50) -> Sequence[Comment]:
        query = (
            self.session.query(CommentModel)
            .filter(CommentModel.client_id == client_id)
            .order_by(CommentModel.created_at.desc())
        )
        if limit is not None:
            query = query.limit(limit)
        return [self._to_entity(model) for model in query.all()]

    def get(self, comment_id: str) -> Comment | None:
        model = self.session.get(CommentModel, comment_id)
        return self._to_entity(model) if model else None

    def create(self, comment: Comment) -> Comment:
        model = CommentModel(
            client_id=comment.client_id,
            user_id=comment.user_id,
            content=comment.content,
            origin=comment.origin,
            created_at=ensure_app_naive_datetime(comment.created_at or now_in_app_timezone()),
        )
        if comment.id is not None:
            model.id = comment.id
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def update_content(self, comment_id: str, content: str) -> Comment:
        model = self.session.get(CommentModel, comment_id)
        if model is None:
            msg = f"Comment with id {comment_id} not found"
            raise ValueError(msg)
        model.content = content
        model.updated_at = ensure_app_naive_datetime(now_in_app_timezone())
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def delete(self, comment_id: str) -> None:
        model = self.session.get(CommentModel, comment_id)
        if model is None:
            msg = f"Comment with id {comment_id} not found"
            raise ValueError(msg)
        self.session.delete(model)
        self.session.commit()

    @staticmethod
    def _to_entity(model: CommentModel) -> Comment:
        return Comment(
            id=model.id,
            client_id=model.client_id,
            user_id=model.user_id,
            content=model.content,
            origin=model.origin or "manual",
            author_name=model.user.name if model.user is not None else None,
            created_at=ensure_app_timezone(model.created_at),
            updated_at=ensure_app_timezone(model.updated_at),
        )


__all__ = ["CommentRepository"]
