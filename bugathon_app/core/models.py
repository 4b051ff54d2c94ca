"""Domain data models for people, statistics snapshots, transitions and timer state."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(slots=True)
class IssueModel:
    key: str | None
    status: str
    priority: str
    summary: str | None
    reporter: str
    reporter_avatar: str | None
    developer: str
    developer_avatar: str | None
    assignee: str
    qa_owner: str


@dataclass(slots=True)
class Person:
    name: str
    avatar: str | None = None
    bugs: int = 0
    points: int = 0


@dataclass(slots=True)
class StatisticsSnapshot:
    total: int = 0
    done: int = 0
    status_breakdown: dict[str, int] = field(default_factory=dict)
    developers: dict[str, Person] = field(default_factory=dict)
    testers: dict[str, Person] = field(default_factory=dict)

    @property
    def done_pct(self) -> int:
        if self.total <= 0:
            return 0
        # Half-up, matching how the percentage is shown everywhere else
        return int(self.done * 100 / self.total + 0.5)


@dataclass(slots=True, frozen=True)
class Transition:
    key: str
    summary: str
    assignee: str
    qa_owner: str


@dataclass(slots=True)
class TimerState:
    remaining: int | None
    is_running: bool = False
    target_time: int | None = None
    is_finished: bool = False

    def to_json(self) -> dict[str, Any]:
        return {
            "isRunning": self.is_running,
            "remaining": self.remaining,
            "targetTime": self.target_time,
            "isFinished": self.is_finished,
        }

    @classmethod
    def from_json(cls, data: dict[str, Any], default_remaining: int) -> TimerState:
        """Rebuild a state written by ``to_json``; bad values fall back to defaults."""

        def _int_or_none(value: Any) -> int | None:
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                return None
            return int(value)

        remaining = _int_or_none(data.get("remaining"))
        if remaining is not None and remaining < 0:
            remaining = 0
        target = _int_or_none(data.get("targetTime"))
        running = bool(data.get("isRunning")) and target is not None
        return cls(
            remaining=remaining if remaining is not None else default_remaining,
            is_running=running,
            target_time=target,
            is_finished=bool(data.get("isFinished")),
        )
