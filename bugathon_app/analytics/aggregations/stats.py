"""Snapshot aggregation: totals, status histogram and per-person scores."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from bugathon_app.core.config import SETTINGS, UNASSIGNED_PERSON, AppSettings
from bugathon_app.core.mappers import iter_issues
from bugathon_app.core.models import Person, StatisticsSnapshot


def points_for(priority: str, settings: AppSettings = SETTINGS) -> int:
    return settings.points_by_severity.get(priority, settings.default_points)


def _update_person(
    registry: dict[str, Person],
    name: str,
    avatar: str | None,
    points: int,
    is_done: bool,
    calculate_points: bool,
) -> None:
    person = registry.get(name)
    if person is None:
        person = registry[name] = Person(name=name, avatar=avatar)
    # Every issue counts as activity; only completed ones score
    person.bugs += 1
    if calculate_points and is_done:
        person.points += points


def aggregate(raw_issues: Iterable[Any], settings: AppSettings = SETTINGS) -> StatisticsSnapshot:
    """Build a StatisticsSnapshot from raw Jira issues.

    ``total`` is the number of issues actually processed, never the search
    result's ``total`` field, so partial (paginated) fetches stay consistent.
    Entries that are not JSON objects still count, as "Unknown" issues.
    """
    stats = StatisticsSnapshot()
    for issue in iter_issues(raw_issues):
        stats.total += 1
        stats.status_breakdown[issue.status] = stats.status_breakdown.get(issue.status, 0) + 1
        is_done = issue.status in settings.done_statuses
        if is_done:
            stats.done += 1
        points = points_for(issue.priority, settings)
        _update_person(
            stats.testers,
            issue.reporter,
            issue.reporter_avatar,
            points,
            is_done,
            settings.calculate_points,
        )
        if issue.developer != UNASSIGNED_PERSON:
            _update_person(
                stats.developers,
                issue.developer,
                issue.developer_avatar,
                points,
                is_done,
                settings.calculate_points,
            )
    return stats
