"""Use case for writing a comment on a client timeline."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.application.use_cases.notifications import notify_comment_mentions
from app.config import Settings
from app.domain.entities import (
    COMMENT_ORIGIN_MANUAL,
    Comment,
    FeedChange,
    Notification,
    TimelineEvent,
    User,
)
from app.domain.errors import CommentPersistError, NotificationDispatchError
from app.infrastructure.notifications import publish_comment_change
from app.infrastructure.repositories import ClientRepository, CommentRepository
from app.utils import now_in_app_timezone

logger = logging.getLogger(__name__)


@dataclass
class CommentSubmission:
    """Outcome of a submitted comment."""

    comment: Comment
    event: TimelineEvent
    notifications: list[Notification] = field(default_factory=list)
    notification_error: str | None = None


def submit_comment(
    session: Session,
    *,
    client_id: int,
    author: User,
    content: str,
    origin: str = COMMENT_ORIGIN_MANUAL,
    settings: Settings | None = None,
) -> CommentSubmission:
    """Store a comment, push it to open timelines and notify its mentions.

    The comment is stored before any mention is looked at. When storing it
    fails :class:`CommentPersistError` is raised and nobody is notified. A
    failure while storing the notifications does not undo the comment; it is
    reported through ``notification_error``.
    """

    text = content.strip()
    if not text:
        raise ValueError("El comentario no puede estar vacío")
    if author.id is None:
        raise ValueError("El autor del comentario no existe")
    if ClientRepository(session).get(client_id) is None:
        msg = f"Client with id {client_id} not found"
        raise ValueError(msg)

    try:
        saved = CommentRepository(session).create(
            Comment(
                id=None,
                client_id=client_id,
                user_id=author.id,
                content=text,
                origin=origin or COMMENT_ORIGIN_MANUAL,
                author_name=author.name,
                created_at=now_in_app_timezone(),
            )
        )
    except SQLAlchemyError as exc:
        session.rollback()
        logger.error("Could not store comment for client %s: %s", client_id, exc)
        raise CommentPersistError("No se pudo guardar el comentario") from exc

    event = saved.to_timeline_event()
    publish_comment_change(client_id, FeedChange.insert(event))

    submission = CommentSubmission(comment=saved, event=event)
    try:
        submission.notifications = notify_comment_mentions(
            session, comment=saved, author=author, settings=settings
        )
    except NotificationDispatchError as exc:
        session.rollback()
        logger.warning("Comment %s stored without notifications: %s", saved.id, exc)
        submission.notification_error = str(exc)
    return submission
