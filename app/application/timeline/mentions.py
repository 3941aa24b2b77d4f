"""Extraction of ``@name`` references from comment bodies."""

from __future__ import annotations

import re
from collections.abc import Iterator
from typing import Final

MENTION_SIGIL: Final[str] = "@"
MENTION_TERMINATORS: Final[str] = ".,;:!?)]"

# The sigil must not follow a word character so e-mail addresses are ignored.
_MENTION_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"(?<![\w@])@([^\s@" + re.escape(MENTION_TERMINATORS) + r"]+)"
)


def iter_mentions(text: str | None) -> Iterator[str]:
    """Yield each distinct display name mentioned in ``text``.

    Names are yielded lazily in order of first appearance; calling the
    function again restarts the scan.
    """

    if not text or MENTION_SIGIL not in text:
        return
    seen: set[str] = set()
    for match in _MENTION_PATTERN.finditer(text):
        name = match.group(1)
        if name in seen:
            continue
        seen.add(name)
        yield name


def extract_mentions(text: str | None) -> list[str]:
    """Return the distinct display names mentioned in ``text``.

    >>> extract_mentions("Hi @Ana and @Bruno, cc @Ana")
    ['Ana', 'Bruno']
    """

    return list(iter_mentions(text))


__all__ = ["MENTION_SIGIL", "MENTION_TERMINATORS", "extract_mentions", "iter_mentions"]
