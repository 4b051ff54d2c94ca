"""Leaderboard ranking over a person registry."""

from __future__ import annotations

from collections.abc import Mapping

from bugathon_app.core.models import Person


def rank_people(registry: Mapping[str, Person], limit: int) -> list[Person]:
    """Top ``limit`` people by points, descending; zero-point entries dropped.

    ``sorted`` is stable, so ties keep the registry's insertion order.
    """
    scored = [p for p in registry.values() if p.points > 0]
    return sorted(scored, key=lambda p: p.points, reverse=True)[: max(0, limit)]


def medal(rank: int) -> str:
    return {1: "🥇", 2: "🥈", 3: "🥉"}.get(rank, f"#{rank}")
