from bugathon_app.analytics.aggregations.leaderboard import medal, rank_people
from bugathon_app.core.config import AppSettings
from bugathon_app.core.models import Person, StatisticsSnapshot
from bugathon_app.features.dashboard.context import (
    build_context,
    format_refreshed,
    leaderboard_frame,
    status_cards,
)


def test_zero_point_people_are_excluded():
    registry = {"X": Person("X", points=0, bugs=3), "Y": Person("Y", points=10, bugs=1)}
    assert [p.name for p in rank_people(registry, 5)] == ["Y"]


def test_ranking_is_descending_and_stable_on_ties():
    registry = {
        "A": Person("A", points=10),
        "B": Person("B", points=25),
        "C": Person("C", points=10),
        "D": Person("D", points=5),
    }
    assert [p.name for p in rank_people(registry, 3)] == ["B", "A", "C"]
    assert rank_people(registry, 0) == []


def test_status_cards_hide_done_like_statuses():
    cards = status_cards({"Open": 3, "DONE": 2, "closed": 1, "Verified": 1, "Resolved": 1, "Reopened": 2})
    assert [c.name for c in cards] == ["Open", "Reopened"]
    assert [c.is_reopen for c in cards] == [False, True]
    assert status_cards({"Reopen": 0})[0].is_reopen is False


def test_build_context():
    snapshot = StatisticsSnapshot(
        total=3,
        done=2,
        status_breakdown={"Done": 2, "Open": 1},
        developers={"X": Person("X", points=0), "Y": Person("Y", points=10)},
        testers={f"T{i}": Person(f"T{i}", points=i + 1) for i in range(8)},
    )
    ctx = build_context(snapshot, AppSettings(leaderboard_limit=5))
    assert ctx.pct == 67
    assert ctx.progress_text == "2 / 3 (67%)"
    assert [c.name for c in ctx.status_cards] == ["Open"]
    assert [p.name for p in ctx.developers] == ["Y"]
    assert [p.name for p in ctx.testers] == ["T7", "T6", "T5", "T4", "T3"]


def test_build_context_zero_state():
    ctx = build_context(None)
    assert (ctx.total, ctx.done, ctx.pct) == (0, 0, 0)
    assert ctx.progress_text == "0 / 0 (0%)"
    assert ctx.developers == [] and ctx.testers == []


def test_leaderboard_frame_medals():
    people = [Person("A", points=30, bugs=2), Person("B", points=20), Person("C", points=10), Person("D", points=5)]
    frame = leaderboard_frame(people)
    assert list(frame["Rank"]) == ["🥇", "🥈", "🥉", "#4"]
    assert list(frame.columns) == ["Rank", "Name", "Bugs", "Points"]
    assert leaderboard_frame([]).empty
    assert medal(7) == "#7"


def test_format_refreshed():
    assert format_refreshed(None) == "never"
    # 2025-01-01T10:00:00Z
    assert format_refreshed(1735725600000, "UTC") == "10:00:00"
    assert format_refreshed(1735725600000, "Asia/Jerusalem") == "12:00:00"
