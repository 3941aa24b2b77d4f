"""SQLAlchemy model for comments written on a client timeline."""

from uuid import uuid4

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from app.infrastructure.database import Base
from app.utils import now_in_app_naive_datetime


def _new_comment_id() -> str:
    return str(uuid4())


class CommentModel(Base):
    """Database representation of a client comment."""

    __tablename__ = "client_comment"

    id = Column(String(36), primary_key=True, default=_new_comment_id)
    client_id = Column(Integer, ForeignKey("client.id"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("user.id"), nullable=False, index=True)
    content = Column(Text, nullable=False)
    origin = Column(String(40), nullable=False, default="manual")
    created_at = Column(DateTime(), nullable=False, default=now_in_app_naive_datetime, index=True)
    updated_at = Column(DateTime(), nullable=True)

    user = relationship("UserModel", lazy="joined")
