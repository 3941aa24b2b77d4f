"""Timed emphasis of a deep-linked timeline entry."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from typing import Protocol

from app.domain.entities import IDLE_HIGHLIGHT, HighlightPhase, HighlightState

logger = logging.getLogger(__name__)

DEFAULT_GLOW_SECONDS = 2.5
DEFAULT_FADE_SECONDS = 0.5


class TimerHandle(Protocol):
    def cancel(self) -> None:
        ...


class TimerScheduler(Protocol):
    """Something able to run ``callback`` once after ``delay`` seconds."""

    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle:
        ...


class AsyncioTimerScheduler:
    """Schedule callbacks on an asyncio event loop."""

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._loop = loop

    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle:
        loop = self._loop or asyncio.get_running_loop()
        return loop.call_later(delay, callback)


class HighlightNavigator:
    """State machine ``idle -> glow -> fading -> idle`` driven by one timer.

    ``locate`` receives the target identifier and returns ``True`` when the
    entry exists in the filtered feed (revealing older entries if needed).
    ``on_change`` observes every transition and ``on_scroll`` receives the
    identifier that should be scrolled into view.
    """

    def __init__(
        self,
        *,
        scheduler: TimerScheduler,
        locate: Callable[[str], bool],
        on_change: Callable[[HighlightState], None] | None = None,
        on_scroll: Callable[[str], None] | None = None,
        glow_seconds: float = DEFAULT_GLOW_SECONDS,
        fade_seconds: float = DEFAULT_FADE_SECONDS,
    ) -> None:
        self._scheduler = scheduler
        self._locate = locate
        self._on_change = on_change
        self._on_scroll = on_scroll
        self._glow_seconds = glow_seconds
        self._fade_seconds = fade_seconds
        self._state = IDLE_HIGHLIGHT
        self._timer: TimerHandle | None = None
        self._generation = 0

    @property
    def state(self) -> HighlightState:
        return self._state

    def receive_anchor(self, event_id: str) -> bool:
        """Start emphasizing ``event_id``; returns ``False`` when it is absent.

        A request for an entry that cannot be found leaves the current state
        untouched.
        """

        if not event_id or not self._locate(event_id):
            logger.debug("Highlight target %s not found in feed", event_id)
            return False

        self._cancel_timer()
        self._generation += 1
        generation = self._generation
        self._transition(HighlightState(target_event_id=event_id, phase=HighlightPhase.GLOW))
        if self._on_scroll is not None:
            self._on_scroll(event_id)
        self._timer = self._scheduler.call_later(
            self._glow_seconds, lambda: self._start_fading(generation)
        )
        return True

    def cancel(self) -> None:
        """Drop any pending timer and return to ``idle`` immediately."""

        self._cancel_timer()
        self._generation += 1
        if self._state.is_active:
            self._transition(IDLE_HIGHLIGHT)

    def _start_fading(self, generation: int) -> None:
        if generation != self._generation:
            return
        self._transition(
            HighlightState(target_event_id=self._state.target_event_id, phase=HighlightPhase.FADING)
        )
        self._timer = self._scheduler.call_later(
            self._fade_seconds, lambda: self._finish(generation)
        )

    def _finish(self, generation: int) -> None:
        if generation != self._generation:
            return
        self._timer = None
        self._transition(IDLE_HIGHLIGHT)

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _transition(self, state: HighlightState) -> None:
        self._state = state
        if self._on_change is not None:
            self._on_change(state)


__all__ = [
    "AsyncioTimerScheduler",
    "DEFAULT_FADE_SECONDS",
    "DEFAULT_GLOW_SECONDS",
    "HighlightNavigator",
    "TimerHandle",
    "TimerScheduler",
]
