"""Toast-style notification cards for resolved bugs and the timer."""

from __future__ import annotations

import streamlit as st

from bugathon_app.core.config import TIMER_NOTIFICATION_KEY
from bugathon_app.features.dashboard.notifications import NotificationQueue


def display_notifications(queue: NotificationQueue) -> None:
    active = queue.active()
    for _ in range(queue.take_celebrations()):
        st.balloons()
    for note in reversed(active):
        t = note.transition
        with st.container(border=True):
            body_col, close_col = st.columns([12, 1])
            if t.key == TIMER_NOTIFICATION_KEY:
                body_col.markdown(f"**⏰ {t.summary}**")
            else:
                body_col.markdown(
                    f"**🎉🎉 Bug Smashed!**  \n**{t.key}:** {t.summary}  \n{t.assignee} ❤️ {t.qa_owner}"
                )
            if close_col.button("✕", key=f"dismiss-{note.id}"):
                queue.dismiss(note.id)
                st.rerun(scope="fragment")
