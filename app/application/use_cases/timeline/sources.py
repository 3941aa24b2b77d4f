"""Collect the event batches that make up a client timeline."""

from __future__ import annotations

from sqlalchemy.orm import Session

from app.application.timeline.aggregator import EventLike
from app.infrastructure.repositories import ClientEventRepository, CommentRepository


def load_timeline_batches(
    session: Session, *, client_id: int, limit: int | None = 50
) -> list[list[EventLike]]:
    """Return one batch per source, comments first.

    Collaborator rows are returned unparsed; malformed ones are discarded
    during the merge.
    """

    comments = CommentRepository(session).list_for_client(client_id, limit=limit)
    comment_batch: list[EventLike] = [comment.to_timeline_event() for comment in comments]
    external_batch: list[EventLike] = list(
        ClientEventRepository(session).list_for_client(client_id, limit=limit)
    )
    return [comment_batch, external_batch]


__all__ = ["load_timeline_batches"]
