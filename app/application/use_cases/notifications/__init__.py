"""Public helpers for emitting and reading notifications."""

from .inbox import list_notifications, mark_notifications_read
from .mentions import notify_comment_mentions

__all__ = [
    "list_notifications",
    "mark_notifications_read",
    "notify_comment_mentions",
]
