"""Domain entity representing one entry of a client timeline."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum
from typing import Any

from app.domain.errors import MalformedEventError
from app.utils import parse_app_datetime


class TimelineEventKind(str, Enum):
    """Closed set of kinds the timeline knows how to present."""

    MESSAGE = "message"
    ROI = "roi"
    RISK = "risk"
    RECOMMENDATION = "recommendation"
    SESSION = "session"
    COMMENT = "comment"
    FIELD_CHANGE = "field_change"
    LIFE_EVENT = "life_event"
    FINANCIAL = "financial"
    FOLLOWUP = "followup"
    FORM_RESPONSE = "form_response"


KNOWN_EVENT_KINDS: frozenset[str] = frozenset(kind.value for kind in TimelineEventKind)

# System narration entries are never hidden by kind filters.
FILTER_EXEMPT_KINDS: frozenset[str] = frozenset(
    {TimelineEventKind.SESSION.value, TimelineEventKind.FIELD_CHANGE.value}
)

COMMENT_ORIGIN_MANUAL = "manual"


def normalize_kind(kind: str | TimelineEventKind) -> str:
    """Return the plain string value of ``kind``."""

    if isinstance(kind, TimelineEventKind):
        return kind.value
    return str(kind).strip()


@dataclass(frozen=True)
class TimelineEvent:
    """A single feed entry; ``kind`` decides which ``metadata`` keys matter.

    ``metadata`` is display data produced by the owning collaborator and must
    be treated as read-only. Comments are the only kind created by the
    timeline itself and carry ``user_id``, ``user_name`` and ``origin``.
    """

    id: str
    kind: str
    title: str
    timestamp: datetime
    description: str | None = None
    metadata: Mapping[str, Any] = field(default_factory=dict)

    @property
    def is_known_kind(self) -> bool:
        return self.kind in KNOWN_EVENT_KINDS

    @property
    def is_comment(self) -> bool:
        return self.kind == TimelineEventKind.COMMENT.value

    @property
    def is_filter_exempt(self) -> bool:
        return self.kind in FILTER_EXEMPT_KINDS

    @property
    def author_id(self) -> int | None:
        """Identifier of the user who wrote a comment, if any."""

        value = self.metadata.get("user_id")
        if value is None:
            return None
        try:
            return int(value)
        except (TypeError, ValueError):
            return None

    @property
    def origin(self) -> str:
        return str(self.metadata.get("origin") or COMMENT_ORIGIN_MANUAL)

    @classmethod
    def from_mapping(cls, payload: Mapping[str, Any]) -> "TimelineEvent":
        """Build an event from a producer payload.

        Raises :class:`MalformedEventError` when the identifier is missing or
        the timestamp cannot be parsed.
        """

        raw_id = payload.get("id")
        if raw_id is None or str(raw_id).strip() == "":
            raise MalformedEventError(raw_id, "missing identifier")

        raw_kind = payload.get("kind", payload.get("type"))
        if raw_kind is None or str(raw_kind).strip() == "":
            raise MalformedEventError(raw_id, "missing kind")

        try:
            timestamp = parse_app_datetime(payload.get("timestamp"))
        except ValueError as exc:
            raise MalformedEventError(raw_id, f"invalid timestamp ({exc})") from exc

        metadata = payload.get("metadata") or {}
        if not isinstance(metadata, Mapping):
            raise MalformedEventError(raw_id, "metadata must be a mapping")

        description = payload.get("description")
        return cls(
            id=str(raw_id),
            kind=normalize_kind(raw_kind),
            title=str(payload.get("title") or ""),
            timestamp=timestamp,
            description=str(description) if description is not None else None,
            metadata=dict(metadata),
        )


def coerce_timeline_event(item: "TimelineEvent | Mapping[str, Any]") -> TimelineEvent:
    """Return ``item`` as a :class:`TimelineEvent`, parsing mappings."""

    if isinstance(item, TimelineEvent):
        if not isinstance(item.timestamp, datetime):
            raise MalformedEventError(item.id, "timestamp is not a datetime")
        if item.timestamp.tzinfo is None:
            return replace(item, timestamp=parse_app_datetime(item.timestamp))
        return item
    if isinstance(item, Mapping):
        return TimelineEvent.from_mapping(item)
    raise MalformedEventError(getattr(item, "id", None), f"unsupported payload {type(item).__name__}")


__all__ = [
    "COMMENT_ORIGIN_MANUAL",
    "FILTER_EXEMPT_KINDS",
    "KNOWN_EVENT_KINDS",
    "TimelineEvent",
    "TimelineEventKind",
    "coerce_timeline_event",
    "normalize_kind",
]
