"""State of one open timeline and the queue that serializes its updates."""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable
from dataclasses import dataclass

import anyio

from app.domain.entities import (
    CommentAdvisory,
    FeedChange,
    HighlightState,
    TimelineEvent,
    TimelineEventKind,
)

from .aggregator import (
    DEFAULT_WINDOW_SIZE,
    EMPTY_FILTER_SET,
    DayGroup,
    EventLike,
    FilterSet,
    apply_filters,
    group_by_day,
    merge_batches,
    window_events,
)
from .anchors import COMMENT_FRAGMENT_PREFIX, parse_anchor
from .highlight import (
    DEFAULT_FADE_SECONDS,
    DEFAULT_GLOW_SECONDS,
    AsyncioTimerScheduler,
    HighlightNavigator,
    TimerScheduler,
)
from .reconciler import DEFAULT_AUTOMATED_ORIGINS, LiveUpdateReconciler

logger = logging.getLogger(__name__)


class FeedListener:
    """Receives the outputs of a feed. Subclasses override what they need."""

    def feed_changed(self, feed: "TimelineFeed") -> None:
        pass

    def filters_changed(self, filters: FilterSet) -> None:
        pass

    def highlight_changed(self, state: HighlightState) -> None:
        pass

    def scroll_requested(self, event_id: str) -> None:
        pass

    def advisory(self, advisory: CommentAdvisory) -> None:
        pass


class TimelineFeed:
    """Merged events of one client plus the view state layered on top.

    Filters, the display window and the highlight belong to the instance, so
    two open timelines never share them.
    """

    def __init__(
        self,
        client_id: int | str,
        *,
        viewer_id: int | None = None,
        window_size: int = DEFAULT_WINDOW_SIZE,
        scheduler: TimerScheduler | None = None,
        glow_seconds: float = DEFAULT_GLOW_SECONDS,
        fade_seconds: float = DEFAULT_FADE_SECONDS,
        automated_origins: Iterable[str] = DEFAULT_AUTOMATED_ORIGINS,
        listener: FeedListener | None = None,
    ) -> None:
        self.client_id = client_id
        self.viewer_id = viewer_id
        self.window_size = window_size
        self._listener = listener or FeedListener()
        self._events: list[TimelineEvent] = []
        self._filters = EMPTY_FILTER_SET
        self._expanded = False
        self._reconciler = LiveUpdateReconciler(
            viewer_id=viewer_id,
            automated_origins=automated_origins,
            on_advisory=self._listener.advisory,
        )
        self._navigator = HighlightNavigator(
            scheduler=scheduler or AsyncioTimerScheduler(),
            locate=self.ensure_visible,
            on_change=self._listener.highlight_changed,
            on_scroll=self._listener.scroll_requested,
            glow_seconds=glow_seconds,
            fade_seconds=fade_seconds,
        )

    # Queries -------------------------------------------------------------

    @property
    def events(self) -> tuple[TimelineEvent, ...]:
        return tuple(self._events)

    @property
    def filters(self) -> FilterSet:
        return self._filters

    @property
    def expanded(self) -> bool:
        return self._expanded

    @property
    def highlight(self) -> HighlightState:
        return self._navigator.state

    def get(self, event_id: str) -> TimelineEvent | None:
        for event in self._events:
            if event.id == event_id:
                return event
        return None

    def filtered_events(self) -> list[TimelineEvent]:
        return apply_filters(self._events, self._filters)

    def visible_events(self) -> list[TimelineEvent]:
        return window_events(
            self.filtered_events(), size=self.window_size, expanded=self._expanded
        )

    def hidden_count(self) -> int:
        if self._expanded:
            return 0
        return max(len(self.filtered_events()) - self.window_size, 0)

    @property
    def has_older(self) -> bool:
        return self.hidden_count() > 0

    def conversation_days(self) -> list[DayGroup]:
        return group_by_day(self.filtered_events())

    # Commands ------------------------------------------------------------

    def load(self, batches: Iterable[Iterable[EventLike]]) -> None:
        """Replace the feed content with the merge of ``batches``."""

        self._events = merge_batches(batches)
        self._listener.feed_changed(self)

    def apply_filter(self, kinds: Iterable[str | TimelineEventKind]) -> FilterSet:
        return self._set_filters(FilterSet.of(kinds))

    def toggle_filter(self, kind: str | TimelineEventKind) -> FilterSet:
        return self._set_filters(self._filters.toggle(kind))

    def clear_filters(self) -> FilterSet:
        return self._set_filters(EMPTY_FILTER_SET)

    def reveal_older(self) -> None:
        if self._expanded:
            return
        self._expanded = True
        self._listener.feed_changed(self)

    def apply_change(self, change: FeedChange) -> None:
        """Fold one live change into the feed."""

        self._events = self._reconciler.apply(self._events, change)
        if self._navigator.state.target_event_id is not None and self.get(
            self._navigator.state.target_event_id
        ) is None:
            self._navigator.cancel()
        self._listener.feed_changed(self)

    def set_highlight(self, target: str) -> bool:
        """Highlight the entry addressed by an anchor or a bare event id."""

        event_id = self._resolve_target(target)
        if event_id is None:
            return False
        return self._navigator.receive_anchor(event_id)

    def ensure_visible(self, event_id: str) -> bool:
        """Return ``True`` if ``event_id`` passes the filters, revealing it if needed."""

        for index, event in enumerate(self.filtered_events()):
            if event.id != event_id:
                continue
            if index >= self.window_size:
                self.reveal_older()
            return True
        return False

    def close(self) -> None:
        self._navigator.cancel()

    def _set_filters(self, filters: FilterSet) -> FilterSet:
        if filters != self._filters:
            self._filters = filters
            self._listener.filters_changed(filters)
            self._listener.feed_changed(self)
        return self._filters

    def _resolve_target(self, target: str) -> str | None:
        if not target:
            return None
        if "#" not in target and not target.startswith(COMMENT_FRAGMENT_PREFIX):
            return target
        anchor = parse_anchor(target)
        if anchor is None:
            return None
        if anchor.client_id is not None and anchor.client_id != str(self.client_id):
            logger.debug("Anchor %s belongs to another client", target)
            return None
        return anchor.event_id


@dataclass(frozen=True)
class AnchorReceived:
    anchor: str


@dataclass(frozen=True)
class FilterToggled:
    kind: str


@dataclass(frozen=True)
class FiltersCleared:
    pass


@dataclass(frozen=True)
class OlderRevealed:
    pass


FeedCommand = FeedChange | AnchorReceived | FilterToggled | FiltersCleared | OlderRevealed


class FeedSession:
    """Single consumer that applies push changes and user commands in order."""

    def __init__(self, feed: TimelineFeed, *, max_buffer_size: float = math.inf) -> None:
        self.feed = feed
        self._send, self._receive = anyio.create_memory_object_stream(max_buffer_size)

    def submit(self, item: FeedCommand) -> None:
        """Queue ``item``; must be called from the session's event loop."""

        try:
            self._send.send_nowait(item)
        except (anyio.ClosedResourceError, anyio.BrokenResourceError):
            logger.debug("Dropping %r; feed session already closed", item)

    async def run(self) -> None:
        """Apply queued items until :meth:`close` is called."""

        async with self._receive:
            async for item in self._receive:
                try:
                    self.apply(item)
                except Exception:
                    logger.exception("Failed to apply %r to timeline %s", item, self.feed.client_id)

    def apply(self, item: FeedCommand) -> None:
        if isinstance(item, FeedChange):
            self.feed.apply_change(item)
        elif isinstance(item, AnchorReceived):
            self.feed.set_highlight(item.anchor)
        elif isinstance(item, FilterToggled):
            self.feed.toggle_filter(item.kind)
        elif isinstance(item, FiltersCleared):
            self.feed.clear_filters()
        elif isinstance(item, OlderRevealed):
            self.feed.reveal_older()
        else:
            raise TypeError(f"Unsupported feed command: {item!r}")

    def close(self) -> None:
        self._send.close()
        self.feed.close()


__all__ = [
    "AnchorReceived",
    "FeedCommand",
    "FeedListener",
    "FeedSession",
    "FilterToggled",
    "FiltersCleared",
    "OlderRevealed",
    "TimelineFeed",
]
