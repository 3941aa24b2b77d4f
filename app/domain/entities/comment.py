"""Domain entity representing a free-text comment on a client."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from .timeline_event import COMMENT_ORIGIN_MANUAL, TimelineEvent, TimelineEventKind

COMMENT_TITLE = "Comentario"


@dataclass
class Comment:
    """Comment written by a team member (or a detection job) on a client."""

    id: str | None
    client_id: int
    user_id: int
    content: str
    origin: str = COMMENT_ORIGIN_MANUAL
    author_name: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def to_timeline_event(self) -> TimelineEvent:
        """Return the feed entry that represents this comment."""

        if self.id is None or self.created_at is None:
            raise ValueError("Only persisted comments can be placed on a timeline")
        return TimelineEvent(
            id=self.id,
            kind=TimelineEventKind.COMMENT.value,
            title=COMMENT_TITLE,
            timestamp=self.created_at,
            description=self.content,
            metadata={
                "user_id": self.user_id,
                "user_name": self.author_name or "Usuario",
                "origin": self.origin,
                "client_id": self.client_id,
                "edited": self.updated_at is not None,
            },
        )


__all__ = ["COMMENT_TITLE", "Comment"]
