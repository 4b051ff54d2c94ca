"""Issue sources returning a raw search result (``{"issues": [...]}``).

Both sources raise FetchError on failure; the session controller logs it
and retries on the next poll.
"""

from __future__ import annotations

import logging
from typing import Any, Protocol

import requests

from .clock import Clock, SystemClock
from .config import FIELD_IDS
from .errors import FetchError
from .jira_client import JiraAPI, error_detail

logger = logging.getLogger(__name__)

SEARCH_FIELDS = [
    "summary",
    "status",
    "priority",
    "reporter",
    "assignee",
    FIELD_IDS["severity"],
    FIELD_IDS["actual_developer"],
    FIELD_IDS["qa_owner"],
]


class IssueFetcher(Protocol):
    def __call__(self) -> dict[str, Any]: ...


class JiraSearchFetcher:
    """Query Jira directly with credentials held server-side."""

    def __init__(self, api: JiraAPI, jql: str):
        self.api = api
        self.jql = jql

    def __call__(self) -> dict[str, Any]:
        logger.debug("Searching Jira: %s", self.jql)
        return self.api.search_raw(self.jql, fields=SEARCH_FIELDS)


class ProxyFetcher:
    """GET the search result from a proxy endpoint, cache-busted per call."""

    def __init__(
        self,
        url: str,
        *,
        jql: str | None = None,
        clock: Clock | None = None,
        session: requests.Session | None = None,
        timeout: float = 30.0,
    ):
        self.url = url
        self.jql = jql
        self.clock = clock or SystemClock()
        self.session = session or requests.Session()
        self.timeout = timeout

    def __call__(self) -> dict[str, Any]:
        params: dict[str, Any] = {"t": self.clock.now()}
        if self.jql:
            params["jql"] = self.jql
        logger.debug("Fetching data from: %s", self.url)
        try:
            resp = self.session.get(self.url, params=params, timeout=self.timeout)
        except requests.RequestException as exc:
            raise FetchError(f"Failed to fetch data: {exc}") from exc
        if not resp.ok:
            raise FetchError(
                f"Failed to fetch data {resp.status_code}: {error_detail(resp)}",
                status_code=resp.status_code,
            )
        try:
            data = resp.json()
        except ValueError as exc:
            raise FetchError(f"Proxy returned invalid JSON: {exc}") from exc
        if not isinstance(data, dict):
            raise FetchError(f"Proxy returned {type(data).__name__}, expected an object")
        return data
