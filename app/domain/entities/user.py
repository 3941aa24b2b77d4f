"""Domain entity representing a user of the directory."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class User:
    """Core attributes describing an application user."""

    id: int | None
    name: str
    email: str
    is_active: bool
    deleted: bool
    created_at: datetime | None

    def is_reachable(self) -> bool:
        """Return ``True`` when the user may receive notifications."""

        return self.is_active and not self.deleted


__all__ = ["User"]
