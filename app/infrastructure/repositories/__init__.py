"""Repository implementations for infrastructure layer."""

from .client_event_repository import ClientEventRepository
from .client_repository import ClientRepository
from .comment_repository import CommentRepository
from .notification_repository import NotificationRepository
from .user_repository import UserRepository

__all__ = [
    "ClientEventRepository",
    "ClientRepository",
    "CommentRepository",
    "NotificationRepository",
    "UserRepository",
]
