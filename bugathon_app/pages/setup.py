"""Connection setup page: choose the issue source (direct Jira or proxy URL)."""

from __future__ import annotations

import streamlit as st

from bugathon_app.app import register_page
from bugathon_app.core.config import load_settings
from bugathon_app.core.fetchers import JiraSearchFetcher, ProxyFetcher
from bugathon_app.core.jira_client import JiraAPI


def _reset_session() -> None:
    session = st.session_state.pop("dashboard_session", None)
    st.session_state.pop("dashboard_view", None)
    if session is not None:
        session.stop()


@register_page("Setup / Connection")
def setup_page():
    st.title("Issue Source Setup")
    st.caption("Credentials stay on the server (use secrets manager in production).")
    settings = load_settings()

    jira_secrets = st.secrets.get("jira", {})
    secret_server = jira_secrets.get("JIRA_SERVER") or st.secrets.get("JIRA_SERVER")
    secret_email = jira_secrets.get("JIRA_EMAIL") or st.secrets.get("JIRA_EMAIL")
    secret_token = jira_secrets.get("JIRA_API_KEY") or st.secrets.get("JIRA_API_KEY")

    mode = st.radio("Source", ["Jira (direct)", "Proxy URL"], horizontal=True)
    jql = st.text_area("JQL", value=st.session_state.get("jql") or settings.jql)

    if mode == "Proxy URL":
        url = st.text_input("Proxy endpoint", value=st.session_state.get("proxy_url") or settings.data_source_url)
        if st.button("Use Proxy", type="primary"):
            if not url:
                st.error("Proxy endpoint required.")
                return
            _reset_session()
            st.session_state["proxy_url"] = url
            st.session_state["jql"] = jql
            st.session_state["issue_fetcher"] = ProxyFetcher(url, jql=jql or None)
            st.success("Proxy source configured.")
    else:
        server = st.text_input("Jira Server URL", value=st.session_state.get("jira_server") or secret_server or "")
        email = st.text_input("Email / Username", value=st.session_state.get("jira_email") or secret_email or "")
        token = st.text_input("API Token", type="password", value=secret_token or "")
        if st.button("Initialize Connection", type="primary"):
            if not (server and email and token and jql):
                st.error("All fields required.")
                return
            try:
                api = JiraAPI(server, email, token)
            except Exception as e:  # pragma: no cover
                st.error(f"Failed to initialize Jira client: {e}")
                return
            _reset_session()
            st.session_state["jira_server"] = server
            st.session_state["jira_email"] = email
            st.session_state["jql"] = jql
            st.session_state["issue_fetcher"] = JiraSearchFetcher(api, jql)
            st.success("Connection initialized.")

    if "issue_fetcher" in st.session_state:
        st.info("Issue source ready. Open the Live Dashboard page.")
