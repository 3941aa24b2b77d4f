"""Folding of live comment changes into an in-memory feed."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Sequence

from app.domain.entities import (
    ChangeOperation,
    CommentAdvisory,
    FeedChange,
    TimelineEvent,
)

from .aggregator import sort_newest_first

logger = logging.getLogger(__name__)

DEFAULT_AUTOMATED_ORIGINS: frozenset[str] = frozenset({"ai_detection", "automation"})

AdvisoryCallback = Callable[[CommentAdvisory], None]


class LiveUpdateReconciler:
    """Apply ``insert``/``update``/``delete`` changes without duplicating entries.

    Changes are applied in the order they are handed over; the transport is
    expected to preserve ordering per identifier.
    """

    def __init__(
        self,
        *,
        viewer_id: int | None = None,
        automated_origins: Iterable[str] = DEFAULT_AUTOMATED_ORIGINS,
        on_advisory: AdvisoryCallback | None = None,
    ) -> None:
        self._viewer_id = viewer_id
        self._automated_origins = frozenset(automated_origins)
        self._on_advisory = on_advisory

    def apply(
        self, events: Sequence[TimelineEvent], change: FeedChange
    ) -> list[TimelineEvent]:
        """Return a new feed with ``change`` folded into ``events``."""

        if change.op is ChangeOperation.INSERT:
            return self._insert(events, change)
        if change.op is ChangeOperation.UPDATE:
            return self._update(events, change)
        return self._delete(events, change)

    def apply_many(
        self, events: Sequence[TimelineEvent], changes: Iterable[FeedChange]
    ) -> list[TimelineEvent]:
        current = list(events)
        for change in changes:
            current = self.apply(current, change)
        return current

    def _insert(
        self, events: Sequence[TimelineEvent], change: FeedChange
    ) -> list[TimelineEvent]:
        event = _require_event(change)
        if any(existing.id == change.event_id for existing in events):
            logger.debug("Ignoring echo of timeline entry %s", change.event_id)
            return list(events)
        updated = sort_newest_first([*events, event])
        self._maybe_advise(event)
        return updated

    def _update(
        self, events: Sequence[TimelineEvent], change: FeedChange
    ) -> list[TimelineEvent]:
        event = _require_event(change)
        updated: list[TimelineEvent] = []
        replaced = False
        for existing in events:
            if existing.id == change.event_id and not replaced:
                updated.append(event)
                replaced = True
            else:
                updated.append(existing)
        if not replaced:
            logger.debug("Update for unknown entry %s treated as insert", change.event_id)
            return self._insert(events, FeedChange.insert(event))
        return sort_newest_first(updated)

    def _delete(
        self, events: Sequence[TimelineEvent], change: FeedChange
    ) -> list[TimelineEvent]:
        remaining = [existing for existing in events if existing.id != change.event_id]
        if len(remaining) == len(events):
            logger.debug("Delete for unknown entry %s ignored", change.event_id)
        return remaining

    def _maybe_advise(self, event: TimelineEvent) -> None:
        if self._on_advisory is None or not event.is_comment:
            return
        if event.origin not in self._automated_origins:
            return
        author_id = event.author_id
        if self._viewer_id is not None and author_id == self._viewer_id:
            return

        author_name = event.metadata.get("user_name")
        advisory = CommentAdvisory(
            event_id=event.id,
            author_id=author_id,
            author_name=str(author_name) if author_name else None,
            origin=event.origin,
            message="Nuevo comentario detectado automáticamente en el timeline.",
        )
        try:
            self._on_advisory(advisory)
        except Exception:
            logger.exception("Advisory callback failed for entry %s", event.id)


def _require_event(change: FeedChange) -> TimelineEvent:
    if change.event is None:
        raise ValueError(f"A {change.op.value} change for {change.event_id} carries no event")
    return change.event


__all__ = ["AdvisoryCallback", "DEFAULT_AUTOMATED_ORIGINS", "LiveUpdateReconciler"]
