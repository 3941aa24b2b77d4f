"""SQLAlchemy model for timeline entries produced by other systems."""

from uuid import uuid4

from sqlalchemy import JSON, Column, DateTime, ForeignKey, Integer, String, Text

from app.infrastructure.database import Base
from app.utils import now_in_app_naive_datetime


def _new_event_id() -> str:
    return str(uuid4())


class ClientEventModel(Base):
    """Message, ROI, risk, session, ... entries handed over by collaborators.

    ``occurred_at`` keeps the producer's raw text; it is parsed when the
    timeline is built so one bad value only drops its own entry. Identifiers
    are only unique within the client they belong to.
    """

    __tablename__ = "client_event"

    client_id = Column(Integer, ForeignKey("client.id"), primary_key=True)
    id = Column(String(64), primary_key=True, default=_new_event_id)
    kind = Column(String(40), nullable=False, index=True)
    title = Column(String(200), nullable=False, default="")
    description = Column(Text, nullable=True)
    occurred_at = Column(String(64), nullable=False)
    event_metadata = Column("metadata", JSON, nullable=False, default=dict)
    recorded_at = Column(DateTime(), nullable=False, default=now_in_app_naive_datetime, index=True)
