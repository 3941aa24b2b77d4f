"""Unified client timeline: merge, mentions, live updates and highlights."""

from .aggregator import (
    DEFAULT_WINDOW_SIZE,
    DayGroup,
    EMPTY_FILTER_SET,
    FilterSet,
    apply_filters,
    group_by_day,
    merge_batches,
    sort_newest_first,
    window_events,
)
from .anchors import Anchor, build_comment_anchor, comment_fragment, parse_anchor
from .feed import (
    AnchorReceived,
    FeedListener,
    FeedSession,
    FilterToggled,
    FiltersCleared,
    OlderRevealed,
    TimelineFeed,
)
from .highlight import AsyncioTimerScheduler, HighlightNavigator, TimerScheduler
from .mentions import extract_mentions, iter_mentions
from .notification_router import (
    AmbiguousMentionPolicy,
    UserDirectory,
    route_comment_mentions,
    truncate_body,
)
from .presentation import EventPresentation, present_event
from .reconciler import LiveUpdateReconciler

__all__ = [
    "AmbiguousMentionPolicy",
    "Anchor",
    "AnchorReceived",
    "AsyncioTimerScheduler",
    "DEFAULT_WINDOW_SIZE",
    "DayGroup",
    "EMPTY_FILTER_SET",
    "EventPresentation",
    "FeedListener",
    "FeedSession",
    "FilterSet",
    "FilterToggled",
    "FiltersCleared",
    "HighlightNavigator",
    "LiveUpdateReconciler",
    "OlderRevealed",
    "TimelineFeed",
    "TimerScheduler",
    "UserDirectory",
    "apply_filters",
    "build_comment_anchor",
    "comment_fragment",
    "extract_mentions",
    "group_by_day",
    "iter_mentions",
    "merge_batches",
    "parse_anchor",
    "present_event",
    "route_comment_mentions",
    "sort_newest_first",
    "truncate_body",
    "window_events",
]
