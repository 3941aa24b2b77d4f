"""Use cases for client comments."""

from .edit_comment import delete_comment, update_comment
from .submit_comment import CommentSubmission, submit_comment

__all__ = [
    "CommentSubmission",
    "delete_comment",
    "submit_comment",
    "update_comment",
]
