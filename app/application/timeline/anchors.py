"""Deep-link anchors pointing at a single timeline entry."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final

COMMENT_FRAGMENT_PREFIX: Final[str] = "comment-"
DEFAULT_ANCHOR_BASE_PATH: Final[str] = "/clients"


@dataclass(frozen=True)
class Anchor:
    """Parsed form of ``<base>/<client_id>#comment-<event_id>``."""

    event_id: str
    client_id: str | None = None
    path: str | None = None


def comment_fragment(event_id: str) -> str:
    """Return the fragment identifying ``event_id`` inside a timeline."""

    return f"{COMMENT_FRAGMENT_PREFIX}{event_id}"


def build_comment_anchor(
    client_id: int | str,
    event_id: str,
    *,
    base_path: str = DEFAULT_ANCHOR_BASE_PATH,
) -> str:
    """Return the anchor every caller must use to deep-link a feed entry."""

    base = base_path.rstrip("/")
    return f"{base}/{client_id}#{comment_fragment(event_id)}"


def parse_anchor(value: str | None) -> Anchor | None:
    """Parse a full anchor, a bare ``#comment-<id>`` fragment or ``comment-<id>``.

    Returns ``None`` when ``value`` does not reference a timeline entry.
    """

    if not value:
        return None
    text = value.strip()
    path: str | None = None
    if "#" in text:
        path, fragment = text.split("#", 1)
        path = path or None
    else:
        fragment = text
    if not fragment.startswith(COMMENT_FRAGMENT_PREFIX):
        return None
    event_id = fragment[len(COMMENT_FRAGMENT_PREFIX):]
    if not event_id:
        return None

    client_id: str | None = None
    if path:
        segments = [segment for segment in path.split("/") if segment]
        if segments:
            client_id = segments[-1]
    return Anchor(event_id=event_id, client_id=client_id, path=path)


__all__ = [
    "Anchor",
    "COMMENT_FRAGMENT_PREFIX",
    "DEFAULT_ANCHOR_BASE_PATH",
    "build_comment_anchor",
    "comment_fragment",
    "parse_anchor",
]
