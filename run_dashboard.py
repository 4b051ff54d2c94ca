"""Convenience launcher for the Streamlit app.

Usage:
  streamlit run run_dashboard.py

Automatically imports every module in ``bugathon_app/pages`` so each page
decorated with ``@register_page`` registers itself without manual edits here.
"""

import logging
from importlib import import_module
from pathlib import Path

import streamlit as st

from bugathon_app.app import main
from bugathon_app.core.config import load_settings

st.set_page_config(layout="wide", page_title="Bugathon Dashboard")
logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")


def _auto_init_issue_fetcher():
    """Initialize the issue source from Streamlit secrets if available."""
    if "issue_fetcher" in st.session_state:
        return

    settings = load_settings()
    # Try to get secrets from a [jira] section, fall back to top-level
    jira_secrets = st.secrets.get("jira", {})
    server = jira_secrets.get("JIRA_SERVER") or st.secrets.get("JIRA_SERVER")
    email = jira_secrets.get("JIRA_EMAIL") or st.secrets.get("JIRA_EMAIL")
    token = jira_secrets.get("JIRA_API_KEY") or st.secrets.get("JIRA_API_KEY")
    jql = jira_secrets.get("JQL") or st.secrets.get("JQL") or settings.jql

    if server and email and token:
        st.sidebar.info("Secrets found, attempting to connect to Jira...")
        try:
            from bugathon_app.core.fetchers import JiraSearchFetcher
            from bugathon_app.core.jira_client import JiraAPI

            api = JiraAPI(server, email, token)
            st.session_state["jira_server"] = server
            st.session_state["jql"] = jql
            st.session_state["issue_fetcher"] = JiraSearchFetcher(api, jql)
            st.sidebar.success("Jira connection successful!")
        except Exception as e:
            st.sidebar.error(f"Jira connection failed: {e}")
            st.session_state.pop("issue_fetcher", None)
    else:
        st.sidebar.warning("Jira secrets not found. Please use the Setup page.")


_auto_init_issue_fetcher()

PAGES_DIR = Path(__file__).parent / "bugathon_app" / "pages"
for py in sorted(PAGES_DIR.glob("[!_]*.py")):
    mod_name = f"bugathon_app.pages.{py.stem}"
    try:
        import_module(mod_name)
    except Exception as e:  # pragma: no cover - defensive
        print(f"Failed importing page {mod_name}: {e}")

if __name__ == "__main__":
    main()
