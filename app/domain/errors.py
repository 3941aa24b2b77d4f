"""Exceptions raised by the timeline domain."""

from __future__ import annotations


class TimelineError(Exception):
    """Base class for timeline related failures."""


class MalformedEventError(TimelineError):
    """Raised when a single event cannot be interpreted (e.g. bad timestamp)."""

    def __init__(self, event_id: object, reason: str) -> None:
        super().__init__(f"Malformed timeline event {event_id!r}: {reason}")
        self.event_id = event_id
        self.reason = reason


class CommentPersistError(TimelineError):
    """Raised when a comment could not be stored; the submission failed."""


class NotificationDispatchError(TimelineError):
    """Raised when the notifications of a comment could not be stored."""


__all__ = [
    "TimelineError",
    "MalformedEventError",
    "CommentPersistError",
    "NotificationDispatchError",
]
