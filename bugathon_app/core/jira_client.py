"""Jira API client wrapper (REST v2 search with startAt pagination)."""

from __future__ import annotations

from typing import Any

from jira import JIRA, JIRAError
from requests import RequestException

from .errors import FetchError


def error_detail(resp) -> str:
    """Pull ``error`` / ``details`` / ``errorMessages`` out of a JSON error body."""
    try:
        body = resp.json()
    except ValueError:
        return resp.text[:200]
    if isinstance(body, dict):
        for field in ("error", "details"):
            if body.get(field):
                return str(body[field])
        messages = body.get("errorMessages")
        if messages:
            return "; ".join(str(m) for m in messages)
    return str(body)[:200]


class JiraAPI:
    def __init__(self, server: str, email: str, token: str):
        self.server = server.rstrip("/")
        self.client = JIRA(basic_auth=(email, token), options={"server": self.server, "rest_api_version": "2"})

    def search_raw(
        self,
        jql: str,
        fields: list[str] | None = None,
        page_size: int = 1000,
    ) -> dict[str, Any]:
        """Return ``{"issues": [...], "total": n}`` for ``jql`` across every page.

        Raises FetchError on transport failures and non-2xx answers.
        """
        session = getattr(self.client, "_session", None)
        if session is None:
            raise FetchError("JIRA session unavailable")
        url = f"{self.server}/rest/api/2/search"
        params: dict[str, Any] = {"jql": jql, "maxResults": page_size}
        if fields:
            params["fields"] = ",".join(fields)
        issues: list[dict[str, Any]] = []
        total = 0
        start_at = 0
        while True:
            try:
                resp = session.get(url, params={**params, "startAt": start_at})
            except (JIRAError, RequestException) as exc:
                status = getattr(exc, "status_code", None)
                raise FetchError(f"Jira search failed: {exc}", status_code=status) from exc
            if resp.status_code >= 400:
                raise FetchError(
                    f"Jira search failed {resp.status_code}: {error_detail(resp)}",
                    status_code=resp.status_code,
                )
            try:
                data = resp.json()
            except ValueError as exc:
                raise FetchError(f"Jira returned invalid JSON: {exc}") from exc
            page = data.get("issues") or []
            issues.extend(page)
            total = int(data.get("total") or len(issues))
            start_at += len(page)
            if not page or start_at >= total:
                break
        return {"total": total, "issues": issues}
