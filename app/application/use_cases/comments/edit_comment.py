"""Use cases for editing and removing comments."""

from __future__ import annotations

from sqlalchemy.orm import Session

from app.domain.entities import Comment, FeedChange, User
from app.infrastructure.notifications import publish_comment_change
from app.infrastructure.repositories import CommentRepository


def _get_owned_comment(
    repository: CommentRepository, *, client_id: int, comment_id: str, user: User
) -> Comment:
    comment = repository.get(comment_id)
    if comment is None or comment.client_id != client_id:
        raise ValueError("Comentario no encontrado")
    if comment.user_id != user.id:
        raise PermissionError("Solo el autor puede modificar el comentario")
    return comment


def update_comment(
    session: Session, *, client_id: int, comment_id: str, user: User, content: str
) -> Comment:
    """Replace the text of a comment and push the change to open timelines.

    Mentions are not processed again on edit.
    """

    text = content.strip()
    if not text:
        raise ValueError("El comentario no puede estar vacío")

    repository = CommentRepository(session)
    _get_owned_comment(repository, client_id=client_id, comment_id=comment_id, user=user)
    updated = repository.update_content(comment_id, text)
    publish_comment_change(client_id, FeedChange.update(updated.to_timeline_event()))
    return updated


def delete_comment(session: Session, *, client_id: int, comment_id: str, user: User) -> None:
    """Remove a comment and push its removal to open timelines."""

    repository = CommentRepository(session)
    _get_owned_comment(repository, client_id=client_id, comment_id=comment_id, user=user)
    repository.delete(comment_id)
    publish_comment_change(client_id, FeedChange.delete(comment_id))
