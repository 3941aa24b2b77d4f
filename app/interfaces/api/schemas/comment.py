"""Comment schemas."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.domain.entities import COMMENT_ORIGIN_MANUAL

from .timeline import TimelineEventRead


class CommentCreate(BaseModel):
    content: str = Field(..., min_length=1, max_length=5000)
    origin: str = Field(default=COMMENT_ORIGIN_MANUAL, max_length=40)

    @field_validator("content")
    @classmethod
    def strip_content(cls, value: str) -> str:
        text = value.strip()
        if not text:
            raise ValueError("El comentario no puede estar vacío")
        return text


class CommentUpdate(BaseModel):
    content: str = Field(..., min_length=1, max_length=5000)

    @field_validator("content")
    @classmethod
    def strip_content(cls, value: str) -> str:
        text = value.strip()
        if not text:
            raise ValueError("El comentario no puede estar vacío")
        return text

    model_config = ConfigDict(extra="forbid")


class CommentRead(BaseModel):
    id: str
    client_id: int
    user_id: int
    author_name: str | None = None
    content: str
    origin: str
    created_at: datetime | None
    updated_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


class CommentSubmissionRead(BaseModel):
    """Stored comment plus what happened with its mentions."""

    comment: CommentRead
    event: TimelineEventRead
    notified_user_ids: list[int] = Field(default_factory=list)
    notification_error: str | None = None


__all__ = ["CommentCreate", "CommentRead", "CommentSubmissionRead", "CommentUpdate"]
