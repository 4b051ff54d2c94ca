"""Leaderboard and hero counter display utilities."""

from __future__ import annotations

import streamlit as st

from bugathon_app.core.models import Person
from bugathon_app.features.dashboard.context import DashboardContext, leaderboard_frame


def display_hero(ctx: DashboardContext) -> None:
    total_col, done_col, pct_col = st.columns(3)
    total_col.metric("Total Bugs", ctx.total)
    done_col.metric("Smashed", ctx.done)
    pct_col.metric("Progress", f"{ctx.pct}%")
    st.progress(ctx.pct / 100, text=ctx.progress_text)


def display_leaderboard(title: str, people: list[Person]) -> None:
    st.markdown(f"##### {title}")
    if not people:
        st.info("No points scored yet.")
        return
    st.dataframe(
        leaderboard_frame(people),
        hide_index=True,
        width="stretch",
        column_config={
            "Rank": st.column_config.TextColumn("Rank", width="small"),
            "Points": st.column_config.NumberColumn("Points", format="%d"),
        },
    )
