"""Chart builders (Altair) for the status histogram."""

from __future__ import annotations

import altair as alt

from bugathon_app.features.dashboard.context import StatusCard, status_frame


def status_chart(cards: list[StatusCard]):
    if not cards:
        return None
    data = status_frame(cards)
    return (
        alt.Chart(data)
        .mark_bar()
        .encode(
            x=alt.X("status:N", title="Status", sort=None),
            y=alt.Y("count:Q", title="Bugs"),
            color=alt.condition(alt.datum.reopen, alt.value("#d62728"), alt.value("#1f77b4")),
            tooltip=[
                alt.Tooltip("status:N", title="Status"),
                alt.Tooltip("count:Q", title="Count"),
            ],
        )
        .properties(height=220)
    )
