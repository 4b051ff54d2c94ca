"""Live dashboard page.

Two fragments rerun on their own cadence: the data panel polls the issue
source, the timer panel ticks the countdown and shows notifications.
Stopping the session clears both ``run_every`` schedules.
"""

from __future__ import annotations

import streamlit as st

from bugathon_app.app import register_page
from bugathon_app.core.clock import SystemClock
from bugathon_app.core.config import STORE_PATH, load_settings
from bugathon_app.core.session import DashboardSession
from bugathon_app.core.storage import JsonFileStore
from bugathon_app.features.dashboard.context import build_context, format_refreshed
from bugathon_app.features.dashboard.notifications import NotificationQueue
from bugathon_app.visual.charts import status_chart
from bugathon_app.visual.leaderboard import display_hero, display_leaderboard
from bugathon_app.visual.notifications import display_notifications


def _get_session() -> DashboardSession | None:
    session = st.session_state.get("dashboard_session")
    if session is not None:
        return session
    fetcher = st.session_state.get("issue_fetcher")
    if fetcher is None:
        return None
    settings = load_settings()
    clock = SystemClock()
    queue = NotificationQueue(clock, settings.notification_ttl_ms)

    def render(snapshot):
        st.session_state["dashboard_view"] = build_context(snapshot, settings)

    session = DashboardSession(
        JsonFileStore(STORE_PATH),
        clock,
        fetcher,
        render=render,
        notify=queue.push,
        on_times_up=lambda items: queue.push(items, celebrate=False),
        settings=settings,
    )
    st.session_state["notifications"] = queue
    st.session_state["dashboard_session"] = session
    session.start()
    return session


def _render_stats(session: DashboardSession) -> None:
    ctx = st.session_state.get("dashboard_view") or build_context(None, session.settings)
    display_hero(ctx)
    st.caption(f"Last refreshed: {format_refreshed(session.last_refresh)}")
    if session.last_error:
        st.caption(f"Showing last known data ({session.last_error})")

    st.markdown("##### Status Breakdown")
    chart = status_chart(ctx.status_cards)
    if chart is None:
        st.info("No open statuses.")
    else:
        st.altair_chart(chart, use_container_width=True)

    dev_col, test_col = st.columns(2)
    with dev_col:
        display_leaderboard("Top Developers", ctx.developers)
    with test_col:
        display_leaderboard("Top Testers", ctx.testers)


def _render_timer(session: DashboardSession) -> None:
    st.markdown(f"## ⏱ {session.timer.display()}")
    toggle_col, reset_col, _ = st.columns([1, 1, 6])
    label = "⏸ Pause" if session.timer.is_running else "▶ Start"
    if toggle_col.button(label, key="timer-toggle"):
        session.toggle_timer()
        st.rerun(scope="fragment")
    if reset_col.button("↺ Reset", key="timer-reset"):
        session.reset_timer()
        st.rerun(scope="fragment")


@register_page("Live Dashboard")
def dashboard_page():
    st.title("Bugathon Live Dashboard")
    session = _get_session()
    if session is None:
        st.warning("Configure an issue source on the Setup page first.")
        return

    if session.active:
        if st.sidebar.button("Stop live updates"):
            session.stop()
            st.rerun()
    elif st.sidebar.button("Resume live updates"):
        session.start()
        st.rerun()

    settings = session.settings
    poll_every = settings.polling_interval_ms / 1000 if session.active else None
    tick_every = settings.tick_interval_ms / 1000 if session.active else None

    @st.fragment(run_every=tick_every)
    def timer_panel():
        session.tick()
        _render_timer(session)
        display_notifications(st.session_state["notifications"])

    @st.fragment(run_every=poll_every)
    def data_panel():
        # start() has just fetched on a cold load or resume
        session.poll_if_due()
        _render_stats(session)

    timer_panel()
    data_panel()
