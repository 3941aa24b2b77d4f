"""Create, store and push the notifications produced by a comment."""

from __future__ import annotations

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.application.timeline import AmbiguousMentionPolicy, route_comment_mentions
from app.config import Settings, get_settings
from app.domain.entities import Comment, Notification, User
from app.domain.errors import NotificationDispatchError
from app.infrastructure.notifications import dispatch_notification
from app.infrastructure.repositories import NotificationRepository, UserRepository

logger = logging.getLogger(__name__)


def notify_comment_mentions(
    session: Session,
    *,
    comment: Comment,
    author: User,
    settings: Settings | None = None,
) -> list[Notification]:
    """Notify every user mentioned in ``comment``.

    Resolving the mentioned users and storing their notifications share one
    transaction; if either step fails none is delivered and
    :class:`NotificationDispatchError` is raised.
    """

    if comment.id is None:
        raise ValueError("Only persisted comments can trigger notifications")

    settings = settings or get_settings()
    try:
        notifications = route_comment_mentions(
            comment.content,
            comment.id,
            author.id,
            comment.client_id,
            directory=UserRepository(session),
            author_name=author.name,
            policy=AmbiguousMentionPolicy(settings.mention_ambiguity_policy),
            body_limit=settings.notification_body_limit,
            anchor_base_path=settings.anchor_base_path,
        )
        if not notifications:
            return []
        saved = NotificationRepository(session).create_many(notifications)
    except SQLAlchemyError as exc:
        msg = f"No se pudieron registrar las notificaciones del comentario {comment.id}"
        raise NotificationDispatchError(msg) from exc

    for notification in saved:
        dispatch_notification(notification)
    logger.info(
        "Comment %s mentioned %d user(s) on client %s",
        comment.id,
        len(saved),
        comment.client_id,
    )
    return saved
