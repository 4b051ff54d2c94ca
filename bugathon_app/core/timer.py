"""Persisted countdown timer shared by every reader of the store.

Remaining time is always derived from an absolute ``target_time`` read off
the injected clock, so reloads, throttled ticks and several tabs reading the
same record all agree on the countdown.
"""

from __future__ import annotations

import logging

from .clock import Clock
from .config import TIMER_KEY
from .models import TimerState
from .storage import KeyValueStore

logger = logging.getLogger(__name__)


def format_time(ms: int | float) -> str:
    """Format milliseconds as ``HH:MM:SS`` (seconds floored)."""
    total_seconds = max(0, int(ms // 1000))
    hours, rest = divmod(total_seconds, 3600)
    minutes, seconds = divmod(rest, 60)
    return f"{hours:02d}:{minutes:02d}:{seconds:02d}"


class CountdownTimer:
    """Idle / Running / Finished countdown persisted under ``TIMER_KEY``."""

    def __init__(
        self,
        store: KeyValueStore,
        clock: Clock,
        duration_ms: int,
        *,
        key: str = TIMER_KEY,
    ):
        self.store = store
        self.clock = clock
        self.duration_ms = int(duration_ms)
        self.key = key
        self.state = TimerState(remaining=self.duration_ms)
        self.refresh()

    # ------------------ State ------------------
    @property
    def is_running(self) -> bool:
        return self.state.is_running

    @property
    def is_finished(self) -> bool:
        return self.state.is_finished

    def refresh(self) -> None:
        """Re-read the shared record (another tab may have written it)."""
        data = self.store.load(self.key)
        if isinstance(data, dict):
            self.state = TimerState.from_json(data, self.duration_ms)

    def _persist(self) -> None:
        self.store.save(self.key, self.state.to_json())

    def remaining_ms(self) -> int:
        if self.state.is_running and self.state.target_time is not None:
            return max(0, self.state.target_time - self.clock.now())
        if self.state.remaining is None:
            return self.duration_ms
        return self.state.remaining

    def display(self) -> str:
        return format_time(self.remaining_ms())

    # ------------------ Controls ------------------
    def start(self) -> None:
        if self.state.is_running or self.state.is_finished:
            return
        remaining = self.state.remaining
        if remaining is None:
            remaining = self.duration_ms
        self.state.target_time = self.clock.now() + remaining
        self.state.is_running = True
        self._persist()

    def pause(self) -> None:
        if not self.state.is_running:
            return
        self.state.remaining = self.remaining_ms()
        self.state.is_running = False
        self._persist()

    def toggle(self) -> None:
        if self.state.is_running:
            self.pause()
        else:
            self.start()

    def reset(self) -> None:
        self.state = TimerState(remaining=self.duration_ms)
        self._persist()

    def tick(self) -> bool:
        """Recompute the countdown; return True only on the tick that reaches zero."""
        if not self.state.is_running:
            return False
        remaining = self.remaining_ms()
        self.state.remaining = remaining
        if remaining == 0:
            self.state.is_running = False
            self.state.is_finished = True
            self._persist()
            logger.info("Countdown finished")
            return True
        self._persist()
        return False
