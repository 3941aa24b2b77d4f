from .client import ClientCreate, ClientRead
from .comment import CommentCreate, CommentRead, CommentSubmissionRead, CommentUpdate
from .notification import NotificationMarkReadRequest, NotificationRead
from .timeline import (
    ClientEventCreate,
    ConversationDayRead,
    ConversationRead,
    EventPresentationRead,
    TimelineEventRead,
    TimelineRead,
)
from .user import UserCreate, UserRead, UserSummaryRead

__all__ = [
    "ClientCreate",
    "ClientEventCreate",
    "ClientRead",
    "CommentCreate",
    "CommentRead",
    "CommentSubmissionRead",
    "CommentUpdate",
    "ConversationDayRead",
    "ConversationRead",
    "EventPresentationRead",
    "NotificationMarkReadRequest",
    "NotificationRead",
    "TimelineEventRead",
    "TimelineRead",
    "UserCreate",
    "UserRead",
    "UserSummaryRead",
]
