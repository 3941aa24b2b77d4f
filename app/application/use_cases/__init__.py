"""Aggregate application use cases."""

from .clients import create_client, get_client, record_client_event
from .comments import CommentSubmission, delete_comment, submit_comment, update_comment
from .notifications import (
    list_notifications,
    mark_notifications_read,
    notify_comment_mentions,
)
from .timeline import ClientTimelineView, build_client_feed, get_client_timeline
from .users import create_user, get_user, list_users

__all__ = [
    "ClientTimelineView",
    "CommentSubmission",
    "build_client_feed",
    "create_client",
    "create_user",
    "delete_comment",
    "get_client",
    "get_client_timeline",
    "get_user",
    "list_notifications",
    "list_users",
    "mark_notifications_read",
    "notify_comment_mentions",
    "record_client_event",
    "submit_comment",
    "update_comment",
]
