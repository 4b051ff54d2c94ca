"""Expiring, dismissable notifications for resolved bugs and the timer."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from itertools import count

from bugathon_app.core.clock import Clock
from bugathon_app.core.config import NOTIFICATION_TTL_MS
from bugathon_app.core.models import Transition


@dataclass(slots=True)
class Notification:
    id: int
    transition: Transition
    expires_at: int
    celebrated: bool = False


class NotificationQueue:
    def __init__(self, clock: Clock, ttl_ms: int = NOTIFICATION_TTL_MS):
        self.clock = clock
        self.ttl_ms = ttl_ms
        self._ids = count(1)
        self._items: list[Notification] = []

    def push(self, transitions: Iterable[Transition], *, celebrate: bool = True) -> list[Notification]:
        now = self.clock.now()
        added = [
            Notification(next(self._ids), t, now + self.ttl_ms, celebrated=not celebrate) for t in transitions
        ]
        self._items.extend(added)
        return added

    def dismiss(self, notification_id: int) -> None:
        self._items = [n for n in self._items if n.id != notification_id]

    def active(self) -> list[Notification]:
        """Drop expired notifications and return the rest, oldest first."""
        now = self.clock.now()
        self._items = [n for n in self._items if n.expires_at > now]
        return list(self._items)

    def take_celebrations(self) -> int:
        """Number of notifications whose celebration has not been played yet."""
        pending = [n for n in self._items if not n.celebrated]
        for n in pending:
            n.celebrated = True
        return len(pending)
