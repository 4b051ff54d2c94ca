"""Wall-clock abstraction so timer and notification expiry can be tested without waiting."""

from __future__ import annotations

import time
from abc import ABC, abstractmethod


class Clock(ABC):
    """Abstract wall clock for dependency injection."""

    @abstractmethod
    def now(self) -> int:
        """Return the current instant in epoch milliseconds."""
        ...


class SystemClock(Clock):
    def now(self) -> int:
        return int(time.time() * 1000)


class ManualClock(Clock):
    """Clock that only moves when told to."""

    def __init__(self, start: int = 0):
        self._now = int(start)

    def now(self) -> int:
        return self._now

    def advance(self, ms: int) -> None:
        self._now += int(ms)

    def set(self, instant: int) -> None:
        self._now = int(instant)
