"""Domain entities exposed by the application."""

from .client import Client
from .comment import COMMENT_TITLE, Comment
from .feed_change import ChangeOperation, CommentAdvisory, FeedChange
from .highlight import IDLE_HIGHLIGHT, HighlightPhase, HighlightState
from .mention import Mention
from .notification import (
    NOTIFICATION_EVENT_MENTION,
    NOTIFICATION_SOURCE_COMMENT,
    Notification,
)
from .timeline_event import (
    COMMENT_ORIGIN_MANUAL,
    FILTER_EXEMPT_KINDS,
    KNOWN_EVENT_KINDS,
    TimelineEvent,
    TimelineEventKind,
    coerce_timeline_event,
    normalize_kind,
)
from .user import User

__all__ = [
    "ChangeOperation",
    "Client",
    "Comment",
    "CommentAdvisory",
    "COMMENT_ORIGIN_MANUAL",
    "COMMENT_TITLE",
    "FeedChange",
    "FILTER_EXEMPT_KINDS",
    "HighlightPhase",
    "HighlightState",
    "IDLE_HIGHLIGHT",
    "KNOWN_EVENT_KINDS",
    "Mention",
    "Notification",
    "NOTIFICATION_EVENT_MENTION",
    "NOTIFICATION_SOURCE_COMMENT",
    "TimelineEvent",
    "TimelineEventKind",
    "User",
    "coerce_timeline_event",
    "normalize_kind",
]
