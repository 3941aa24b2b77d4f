"""SQLAlchemy model for the client table."""

from sqlalchemy import Column, DateTime, Integer, String

from app.infrastructure.database import Base
from app.utils import now_in_app_naive_datetime


class ClientModel(Base):
    """Database representation of a followed client."""

    __tablename__ = "client"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(160), nullable=False)
    created_at = Column(DateTime(), nullable=False, default=now_in_app_naive_datetime)
