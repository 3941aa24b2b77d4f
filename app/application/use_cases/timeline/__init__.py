"""Use cases for reading client timelines."""

from .get_client_timeline import ClientTimelineView, build_client_feed, get_client_timeline
from .sources import load_timeline_batches

__all__ = [
    "ClientTimelineView",
    "build_client_feed",
    "get_client_timeline",
    "load_timeline_batches",
]
