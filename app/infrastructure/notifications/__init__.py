"""Realtime notification helpers for the infrastructure layer."""

from .comment_changes import (
    CommentChangeBroker,
    CommentChangeSubscription,
    comment_change_broker,
    publish_comment_change,
)
from .manager import NotificationConnectionManager, notification_manager
from .publisher import (
    NotificationPublisher,
    dispatch_notification,
    notification_publisher,
    serialize_notification,
)

__all__ = [
    "CommentChangeBroker",
    "CommentChangeSubscription",
    "comment_change_broker",
    "publish_comment_change",
    "NotificationConnectionManager",
    "notification_manager",
    "NotificationPublisher",
    "notification_publisher",
    "dispatch_notification",
    "serialize_notification",
]
