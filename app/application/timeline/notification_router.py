"""Turn the mentions of a new comment into notifications."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from enum import Enum
from typing import Protocol

from app.domain.entities import (
    Mention,
    NOTIFICATION_EVENT_MENTION,
    NOTIFICATION_SOURCE_COMMENT,
    Notification,
    User,
)

from .anchors import DEFAULT_ANCHOR_BASE_PATH, build_comment_anchor
from .mentions import extract_mentions

logger = logging.getLogger(__name__)

DEFAULT_BODY_LIMIT = 100
ELLIPSIS = "..."


class UserDirectory(Protocol):
    """Lookup of users by display name."""

    def find_by_display_name(self, display_name: str) -> Sequence[User]:
        ...


class AmbiguousMentionPolicy(str, Enum):
    """How to treat a name shared by several directory entries."""

    SKIP = "skip"
    NOTIFY_ALL = "notify_all"


def truncate_body(text: str, limit: int = DEFAULT_BODY_LIMIT) -> str:
    """Quote at most ``limit`` characters of ``text``, marking the cut."""

    if len(text) <= limit:
        return text
    return f"{text[:limit]}{ELLIPSIS}"


def resolve_mentions(names: Iterable[str], directory: UserDirectory) -> list[Mention]:
    """Look every name up in ``directory``; unknown names resolve to nothing."""

    mentions: list[Mention] = []
    for name in names:
        candidates = tuple(
            user for user in directory.find_by_display_name(name) if user.is_reachable()
        )
        mentions.append(Mention(display_name=name, candidates=candidates))
    return mentions


def select_recipients(
    mentions: Iterable[Mention],
    *,
    author_id: int | None,
    policy: AmbiguousMentionPolicy = AmbiguousMentionPolicy.SKIP,
) -> list[User]:
    """Return the distinct users to notify, in mention order, without the author."""

    recipients: list[User] = []
    seen: set[int] = set()
    for mention in mentions:
        if not mention.is_resolved:
            continue
        if mention.is_ambiguous and policy is AmbiguousMentionPolicy.SKIP:
            logger.warning(
                "Mention @%s matches %d users; no notification sent",
                mention.display_name,
                len(mention.candidates),
            )
            continue
        for user in mention.candidates:
            if user.id is None or user.id == author_id or user.id in seen:
                continue
            seen.add(user.id)
            recipients.append(user)
    return recipients


def route_comment_mentions(
    comment_text: str,
    comment_id: str,
    author_id: int | None,
    client_id: int | str,
    *,
    directory: UserDirectory,
    author_name: str | None = None,
    policy: AmbiguousMentionPolicy = AmbiguousMentionPolicy.SKIP,
    body_limit: int = DEFAULT_BODY_LIMIT,
    anchor_base_path: str = DEFAULT_ANCHOR_BASE_PATH,
) -> list[Notification]:
    """Build one notification per user mentioned in ``comment_text``.

    Returns an empty list when the comment mentions nobody who can be
    resolved. The notifications are not persisted here.
    """

    names = extract_mentions(comment_text)
    if not names:
        return []

    recipients = select_recipients(
        resolve_mentions(names, directory), author_id=author_id, policy=policy
    )
    if not recipients:
        return []

    anchor = build_comment_anchor(client_id, comment_id, base_path=anchor_base_path)
    body = truncate_body(comment_text, body_limit)
    title = (
        f"{author_name} te mencionó en un comentario"
        if author_name
        else "Te mencionaron en un comentario"
    )
    return [
        Notification(
            id=None,
            recipient_id=user.id,
            title=title,
            body=body,
            anchor=anchor,
            triggered_by_user_id=author_id,
            source_type=NOTIFICATION_SOURCE_COMMENT,
            source_id=comment_id,
            event_type=NOTIFICATION_EVENT_MENTION,
        )
        for user in recipients
    ]


__all__ = [
    "AmbiguousMentionPolicy",
    "DEFAULT_BODY_LIMIT",
    "ELLIPSIS",
    "UserDirectory",
    "resolve_mentions",
    "route_comment_mentions",
    "select_recipients",
    "truncate_body",
]
