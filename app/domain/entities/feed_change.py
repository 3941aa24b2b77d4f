"""Domain events describing live changes of the comment sub-stream."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any

from .timeline_event import TimelineEvent, coerce_timeline_event


class ChangeOperation(str, Enum):
    INSERT = "insert"
    UPDATE = "update"
    DELETE = "delete"


@dataclass(frozen=True)
class FeedChange:
    """One push notification ``{op, event}`` for a client's comments.

    Deletes only need ``event_id``; inserts and updates carry the full event.
    """

    op: ChangeOperation
    event_id: str
    event: TimelineEvent | None = None

    def __post_init__(self) -> None:
        if self.op is not ChangeOperation.DELETE and self.event is None:
            raise ValueError(f"A {self.op.value} change requires the event")
        if self.event is not None and self.event.id != self.event_id:
            raise ValueError("event_id does not match the event identifier")

    @classmethod
    def insert(cls, event: TimelineEvent) -> "FeedChange":
        return cls(op=ChangeOperation.INSERT, event_id=event.id, event=event)

    @classmethod
    def update(cls, event: TimelineEvent) -> "FeedChange":
        return cls(op=ChangeOperation.UPDATE, event_id=event.id, event=event)

    @classmethod
    def delete(cls, event_id: str) -> "FeedChange":
        return cls(op=ChangeOperation.DELETE, event_id=str(event_id))

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "FeedChange":
        """Parse a transport payload such as ``{"op": "insert", "event": {...}}``."""

        op = ChangeOperation(str(payload.get("op", "")).lower())
        raw_event = payload.get("event")
        if op is ChangeOperation.DELETE:
            event_id = payload.get("event_id")
            if event_id is None and isinstance(raw_event, Mapping):
                event_id = raw_event.get("id")
            if event_id is None:
                raise ValueError("A delete change requires an event id")
            return cls.delete(str(event_id))
        if raw_event is None:
            raise ValueError(f"A {op.value} change requires the event")
        event = coerce_timeline_event(raw_event)
        return cls(op=op, event_id=event.id, event=event)


@dataclass(frozen=True)
class CommentAdvisory:
    """Local, one-shot cue shown when a detection job comments on a client."""

    event_id: str
    author_id: int | None
    author_name: str | None
    origin: str
    message: str


__all__ = ["ChangeOperation", "CommentAdvisory", "FeedChange"]
