"""Merge, ordering, filtering and windowing of timeline events."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from datetime import date, tzinfo
from typing import Any

from app.domain.entities import (
    FILTER_EXEMPT_KINDS,
    TimelineEvent,
    TimelineEventKind,
    coerce_timeline_event,
    normalize_kind,
)
from app.domain.errors import MalformedEventError
from app.utils import get_app_timezone

logger = logging.getLogger(__name__)

DEFAULT_WINDOW_SIZE = 10

EventLike = TimelineEvent | Mapping[str, Any]


def sort_newest_first(events: Iterable[TimelineEvent]) -> list[TimelineEvent]:
    """Return ``events`` ordered by timestamp descending.

    ``sorted`` stays stable with ``reverse=True``, so entries sharing a
    timestamp keep the order in which their sources produced them.
    """

    return sorted(events, key=lambda event: event.timestamp, reverse=True)


def merge_batches(batches: Iterable[Iterable[EventLike]]) -> list[TimelineEvent]:
    """Combine every batch into one deduplicated feed, newest first.

    The first occurrence of an identifier wins; later duplicates are dropped
    silently. Events that cannot be parsed are skipped without affecting the
    rest of their batch.
    """

    seen: set[str] = set()
    merged: list[TimelineEvent] = []
    for batch in batches:
        for item in batch:
            try:
                event = coerce_timeline_event(item)
            except MalformedEventError as exc:
                logger.warning("Skipping timeline event %r: %s", exc.event_id, exc.reason)
                continue
            if event.id in seen:
                continue
            seen.add(event.id)
            merged.append(event)
    return sort_newest_first(merged)


@dataclass(frozen=True)
class FilterSet:
    """Kinds currently selected for display; empty means everything."""

    kinds: frozenset[str] = field(default_factory=frozenset)

    @classmethod
    def of(cls, kinds: Iterable[str | TimelineEventKind] | None) -> "FilterSet":
        if not kinds:
            return cls()
        return cls(frozenset(normalize_kind(kind) for kind in kinds if str(kind).strip()))

    @property
    def is_empty(self) -> bool:
        return not self.kinds

    def toggle(self, kind: str | TimelineEventKind) -> "FilterSet":
        value = normalize_kind(kind)
        if value in self.kinds:
            return FilterSet(self.kinds - {value})
        return FilterSet(self.kinds | {value})

    def cleared(self) -> "FilterSet":
        return FilterSet()

    def allows(self, event: TimelineEvent) -> bool:
        return self.is_empty or event.kind in FILTER_EXEMPT_KINDS or event.kind in self.kinds

    def sorted_kinds(self) -> list[str]:
        return sorted(self.kinds)


EMPTY_FILTER_SET = FilterSet()


def apply_filters(
    events: Iterable[TimelineEvent], filters: FilterSet | None
) -> list[TimelineEvent]:
    """Keep the events allowed by ``filters``, preserving order."""

    active = filters or EMPTY_FILTER_SET
    return [event for event in events if active.allows(event)]


def window_events(
    events: Sequence[TimelineEvent],
    *,
    size: int = DEFAULT_WINDOW_SIZE,
    expanded: bool = False,
) -> list[TimelineEvent]:
    """Return the entries rendered initially, or all of them when expanded."""

    if expanded:
        return list(events)
    return list(events[:size])


@dataclass(frozen=True)
class DayGroup:
    """Entries of one calendar day, oldest first."""

    day: date
    events: tuple[TimelineEvent, ...]


def group_by_day(
    events: Iterable[TimelineEvent], *, tz: tzinfo | None = None
) -> list[DayGroup]:
    """Group ``events`` for conversation-style reading.

    Days are ordered newest first and the entries of each day oldest first.
    """

    zone = tz or get_app_timezone()
    buckets: dict[date, list[TimelineEvent]] = {}
    for event in events:
        day = event.timestamp.astimezone(zone).date()
        buckets.setdefault(day, []).append(event)

    groups: list[DayGroup] = []
    for day in sorted(buckets, reverse=True):
        ordered = sorted(buckets[day], key=lambda event: event.timestamp)
        groups.append(DayGroup(day=day, events=tuple(ordered)))
    return groups


__all__ = [
    "DEFAULT_WINDOW_SIZE",
    "DayGroup",
    "EMPTY_FILTER_SET",
    "FilterSet",
    "apply_filters",
    "group_by_day",
    "merge_batches",
    "sort_newest_first",
    "window_events",
]
