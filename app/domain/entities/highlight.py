"""Ephemeral state of the deep-link highlight of a feed."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class HighlightPhase(str, Enum):
    IDLE = "idle"
    GLOW = "glow"
    FADING = "fading"


@dataclass(frozen=True)
class HighlightState:
    """Which entry is emphasized and at which stage of the animation."""

    target_event_id: str | None = None
    phase: HighlightPhase = HighlightPhase.IDLE

    @property
    def is_active(self) -> bool:
        return self.phase is not HighlightPhase.IDLE


IDLE_HIGHLIGHT = HighlightState()


__all__ = ["HighlightPhase", "HighlightState", "IDLE_HIGHLIGHT"]
