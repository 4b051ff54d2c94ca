"""Pure helpers to build the dashboard view model (no Streamlit)."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

import pandas as pd
import pytz

from bugathon_app.analytics.aggregations.leaderboard import medal, rank_people
from bugathon_app.core.config import (
    HIDDEN_STATUSES_LOWER,
    REOPEN_MARKER,
    SETTINGS,
    TIMEZONE,
    AppSettings,
)
from bugathon_app.core.models import Person, StatisticsSnapshot


@dataclass(slots=True)
class StatusCard:
    name: str
    count: int
    is_reopen: bool = False


@dataclass(slots=True)
class DashboardContext:
    total: int
    done: int
    pct: int
    progress_text: str
    status_cards: list[StatusCard]
    developers: list[Person]
    testers: list[Person]


def status_cards(breakdown: dict[str, int]) -> list[StatusCard]:
    """Status grid entries, hiding done-like statuses (shown by the hero counters)."""
    cards: list[StatusCard] = []
    for name, count in breakdown.items():
        lowered = name.lower()
        if lowered in HIDDEN_STATUSES_LOWER:
            continue
        cards.append(StatusCard(name, count, is_reopen=REOPEN_MARKER in lowered and count > 0))
    return cards


def leaderboard_frame(people: list[Person]) -> pd.DataFrame:
    if not people:
        return pd.DataFrame(columns=["Rank", "Name", "Bugs", "Points"])
    rows = [
        {"Rank": medal(idx), "Name": p.name, "Bugs": p.bugs, "Points": p.points}
        for idx, p in enumerate(people, start=1)
    ]
    return pd.DataFrame(rows)


def status_frame(cards: list[StatusCard]) -> pd.DataFrame:
    return pd.DataFrame(
        [{"status": c.name, "count": c.count, "reopen": c.is_reopen} for c in cards],
        columns=["status", "count", "reopen"],
    )


def build_context(snapshot: StatisticsSnapshot | None, settings: AppSettings = SETTINGS) -> DashboardContext:
    snapshot = snapshot or StatisticsSnapshot()
    pct = snapshot.done_pct
    return DashboardContext(
        total=snapshot.total,
        done=snapshot.done,
        pct=pct,
        progress_text=f"{snapshot.done} / {snapshot.total} ({pct}%)",
        status_cards=status_cards(snapshot.status_breakdown),
        developers=rank_people(snapshot.developers, settings.leaderboard_limit),
        testers=rank_people(snapshot.testers, settings.leaderboard_limit),
    )


def format_refreshed(epoch_ms: int | None, tz_name: str = TIMEZONE) -> str:
    """Local wall-clock time of the last data refresh, or a placeholder."""
    if epoch_ms is None:
        return "never"
    tz = pytz.timezone(tz_name)
    return datetime.fromtimestamp(epoch_ms / 1000, tz=pytz.UTC).astimezone(tz).strftime("%H:%M:%S")
