"""Domain entity representing a user notification."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

NOTIFICATION_SOURCE_COMMENT = "comment"
NOTIFICATION_EVENT_MENTION = "comment.mention"


@dataclass
class Notification:
    """Information message delivered to a specific user."""

    id: int | None
    recipient_id: int
    title: str
    body: str
    anchor: str
    triggered_by_user_id: int | None
    source_type: str = NOTIFICATION_SOURCE_COMMENT
    source_id: str | None = None
    event_type: str = NOTIFICATION_EVENT_MENTION
    created_at: datetime | None = None
    read_at: datetime | None = None

    @property
    def is_read(self) -> bool:
        return self.read_at is not None


__all__ = [
    "NOTIFICATION_EVENT_MENTION",
    "NOTIFICATION_SOURCE_COMMENT",
    "Notification",
]
