"""DashboardSession: orchestrates polling, aggregation, change detection and the timer."""

from __future__ import annotations

import json
import logging
from collections.abc import Callable
from typing import Any

from bugathon_app.analytics.aggregations.stats import aggregate
from bugathon_app.analytics.detection.transitions import ChangeDetector

from .clock import Clock
from .config import SETTINGS, STORAGE_KEY, TIMER_NOTIFICATION_KEY, AppSettings
from .errors import FetchError
from .fetchers import IssueFetcher
from .mappers import issues_from_payload
from .models import StatisticsSnapshot, Transition
from .storage import KeyValueStore
from .timer import CountdownTimer

logger = logging.getLogger(__name__)

Renderer = Callable[[StatisticsSnapshot], None]
Notifier = Callable[[list[Transition]], None]

TIMES_UP = Transition(key=TIMER_NOTIFICATION_KEY, summary="Time's Up!", assignee="System", qa_owner="System")


def _noop(*_args: Any) -> None:
    return None


class DashboardSession:
    """One viewer's session.

    The snapshot and the known-issue baseline belong to this object only;
    the cached search result and the timer live in the shared store.
    """

    def __init__(
        self,
        store: KeyValueStore,
        clock: Clock,
        fetcher: IssueFetcher,
        *,
        render: Renderer | None = None,
        notify: Notifier | None = None,
        on_times_up: Notifier | None = None,
        settings: AppSettings = SETTINGS,
    ):
        self.store = store
        self.clock = clock
        self.fetcher = fetcher
        self.settings = settings
        self._render = render or _noop
        self._notify = notify or _noop
        self._on_times_up = on_times_up or self._notify
        self.timer = CountdownTimer(store, clock, settings.timer_duration_ms)
        self.detector = ChangeDetector(settings)
        self.snapshot = StatisticsSnapshot()
        self.active = False
        self.last_refresh: int | None = None
        self.last_error: str | None = None
        self._last_payload: str | None = None
        self._last_poll_at: int | None = None

    # ------------------ Lifecycle ------------------
    def start(self) -> None:
        """Render the cached result (when there is one) and fetch once."""
        if self.active:
            return
        self.active = True
        self.timer.refresh()
        cached = self.store.load(STORAGE_KEY)
        if isinstance(cached, dict):
            logger.info("Loaded cached data")
            self.snapshot = aggregate(issues_from_payload(cached), self.settings)
            self._render(self.snapshot)
        self.poll()

    def stop(self) -> None:
        self.active = False

    # ------------------ Data ------------------
    def poll(self) -> bool:
        """Fetch and process; return True when a new payload was rendered."""
        if not self.active:
            return False
        self._last_poll_at = self.clock.now()
        try:
            payload = self.fetcher()
        except FetchError as exc:
            logger.error("API fetch error: %s", exc)
            self.last_error = str(exc)
            return False
        if not self.active:
            logger.debug("Session stopped during fetch; discarding result")
            return False
        self.last_error = None
        return self.update(payload)

    def poll_if_due(self) -> bool:
        """Poll unless a fetch was attempted less than half a polling interval ago."""
        if self._last_poll_at is not None:
            if self.clock.now() - self._last_poll_at < self.settings.polling_interval_ms // 2:
                return False
        return self.poll()

    def update(self, payload: dict[str, Any]) -> bool:
        serialized = json.dumps(payload, sort_keys=True)
        if serialized == self._last_payload:
            return False
        self._last_payload = serialized

        issues = issues_from_payload(payload)
        self.snapshot = aggregate(issues, self.settings)
        transitions = self.detector(issues)
        self.last_refresh = self.clock.now()
        self.store.save(STORAGE_KEY, payload)

        self._render(self.snapshot)
        if transitions:
            logger.info("Resolved: %s", ", ".join(t.key for t in transitions))
            self._notify(transitions)
        return True

    # ------------------ Timer ------------------
    def tick(self) -> bool:
        """Advance the countdown; return True on the tick that finishes it."""
        if not self.active:
            return False
        self.timer.refresh()
        if self.timer.tick():
            self._on_times_up([TIMES_UP])
            return True
        return False

    def toggle_timer(self) -> None:
        self.timer.refresh()
        self.timer.toggle()

    def reset_timer(self) -> None:
        self.timer.reset()
