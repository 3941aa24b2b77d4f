"""Pydantic models describing notification payloads."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field


class NotificationMarkReadRequest(BaseModel):
    """Payload used to mark a batch of notifications as read."""

    ids: list[int] = Field(..., min_length=1, description="Identificadores de notificaciones")

    def unique_ids(self) -> list[int]:
        """Return the list of identifiers without duplicates preserving order."""

        return list(dict.fromkeys(self.ids))


class NotificationRead(BaseModel):
    """Representation of a notification delivered to the client."""

    id: int
    user_id: int
    event_type: str
    title: str
    content: str
    link: str
    source_type: str
    source_id: str | None = None
    triggered_by_user_id: int | None = None
    created_at: datetime
    read_at: datetime | None = None


__all__ = ["NotificationMarkReadRequest", "NotificationRead"]
