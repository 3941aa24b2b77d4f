"""Schemas describing the merged client timeline."""

from __future__ import annotations

from datetime import date, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from app.application.timeline import DayGroup, present_event
from app.domain.entities import TimelineEvent


class EventPresentationRead(BaseModel):
    label: str
    tone: str
    icon: str
    badge: str | None = None
    source_label: str | None = None

    model_config = ConfigDict(from_attributes=True)


class TimelineEventRead(BaseModel):
    """One entry of the timeline with its display hints."""

    id: str
    kind: str
    title: str
    timestamp: datetime
    description: str | None = None
    metadata: dict[str, Any] = Field(default_factory=dict)
    presentation: EventPresentationRead

    @classmethod
    def from_entity(cls, event: TimelineEvent) -> "TimelineEventRead":
        return cls(
            id=event.id,
            kind=event.kind,
            title=event.title,
            timestamp=event.timestamp,
            description=event.description,
            metadata=dict(event.metadata),
            presentation=EventPresentationRead.model_validate(present_event(event)),
        )


class TimelineRead(BaseModel):
    client_id: int
    events: list[TimelineEventRead]
    filters: list[str]
    total: int
    filtered_total: int
    has_older: bool
    expanded: bool


class ConversationDayRead(BaseModel):
    day: date
    events: list[TimelineEventRead]

    @classmethod
    def from_group(cls, group: DayGroup) -> "ConversationDayRead":
        return cls(
            day=group.day,
            events=[TimelineEventRead.from_entity(event) for event in group.events],
        )


class ConversationRead(BaseModel):
    client_id: int
    days: list[ConversationDayRead]


class ClientEventCreate(BaseModel):
    """Event pushed by a collaborator system (sessions, alerts, forms...)."""

    id: str | None = Field(default=None, max_length=64)
    kind: str = Field(..., min_length=1, max_length=40)
    title: str = Field(default="", max_length=255)
    description: str | None = None
    timestamp: datetime | float | str
    metadata: dict[str, Any] = Field(default_factory=dict)


__all__ = [
    "ClientEventCreate",
    "ConversationDayRead",
    "ConversationRead",
    "EventPresentationRead",
    "TimelineEventRead",
    "TimelineRead",
]
