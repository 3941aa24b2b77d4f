"""Use case returning the merged timeline of a client."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from sqlalchemy.orm import Session

from app.application.timeline import DayGroup, FilterSet, TimelineFeed
from app.config import Settings, get_settings
from app.domain.entities import Client, TimelineEvent
from app.infrastructure.repositories import ClientRepository

from .sources import load_timeline_batches


@dataclass
class ClientTimelineView:
    """Snapshot of a timeline as rendered for one request."""

    client: Client
    events: list[TimelineEvent]
    filters: FilterSet
    total: int
    filtered_total: int
    has_older: bool
    expanded: bool
    days: list[DayGroup]


def build_client_feed(
    session: Session,
    *,
    client_id: int,
    settings: Settings | None = None,
    **feed_options,
) -> TimelineFeed:
    """Create a :class:`TimelineFeed` loaded with every source of ``client_id``."""

    settings = settings or get_settings()
    feed_options.setdefault("window_size", settings.timeline_window_size)
    feed_options.setdefault("glow_seconds", settings.highlight_glow_seconds)
    feed_options.setdefault("fade_seconds", settings.highlight_fade_seconds)
    feed_options.setdefault("automated_origins", settings.automated_comment_origins)
    feed = TimelineFeed(client_id, **feed_options)
    feed.load(
        load_timeline_batches(
            session, client_id=client_id, limit=settings.timeline_source_limit
        )
    )
    return feed


def get_client_timeline(
    session: Session,
    *,
    client_id: int,
    kinds: Sequence[str] | None = None,
    expanded: bool = False,
    window_size: int | None = None,
    settings: Settings | None = None,
) -> ClientTimelineView:
    """Return the filtered, windowed timeline of ``client_id``."""

    client = ClientRepository(session).get(client_id)
    if client is None:
        msg = f"Client with id {client_id} not found"
        raise ValueError(msg)

    settings = settings or get_settings()
    feed = build_client_feed(
        session,
        client_id=client_id,
        settings=settings,
        window_size=window_size or settings.timeline_window_size,
    )
    feed.apply_filter(kinds or [])
    if expanded:
        feed.reveal_older()

    filtered = feed.filtered_events()
    return ClientTimelineView(
        client=client,
        events=feed.visible_events(),
        filters=feed.filters,
        total=len(feed.events),
        filtered_total=len(filtered),
        has_older=feed.has_older,
        expanded=feed.expanded,
        days=feed.conversation_days(),
    )


__all__ = ["ClientTimelineView", "build_client_feed", "get_client_timeline"]
