"""Use cases for reading and acknowledging notifications."""

from collections.abc import Iterable, Sequence

from sqlalchemy.orm import Session

from app.domain.entities import Notification
from app.infrastructure.repositories import NotificationRepository


def list_notifications(
    session: Session,
    *,
    user_id: int,
    unread_only: bool = False,
    limit: int | None = 50,
) -> Sequence[Notification]:
    """Return the most recent notifications addressed to ``user_id``."""

    repository = NotificationRepository(session)
    if unread_only:
        return repository.list_unread_for_user(user_id, limit=limit)
    return repository.list_for_user(user_id, limit=limit)


def mark_notifications_read(
    session: Session, *, user_id: int, notification_ids: Iterable[int]
) -> None:
    """Mark the given notifications of ``user_id`` as read."""

    NotificationRepository(session).mark_as_read(notification_ids, user_id=user_id)
