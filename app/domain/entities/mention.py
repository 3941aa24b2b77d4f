"""Domain entity linking a typed ``@name`` to directory users."""

from __future__ import annotations

from dataclasses import dataclass, field

from .user import User


@dataclass(frozen=True)
class Mention:
    """A display name as typed and the users it may refer to."""

    display_name: str
    candidates: tuple[User, ...] = field(default_factory=tuple)

    @property
    def is_resolved(self) -> bool:
        return bool(self.candidates)

    @property
    def is_ambiguous(self) -> bool:
        return len(self.candidates) > 1


__all__ = ["Mention"]
