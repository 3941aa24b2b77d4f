"""ORM models used by the application infrastructure."""

from .client import ClientModel
from .client_event import ClientEventModel
from .comment import CommentModel
from .notification import NotificationModel
from .user import UserModel

__all__ = [
    "ClientEventModel",
    "ClientModel",
    "CommentModel",
    "NotificationModel",
    "UserModel",
]
