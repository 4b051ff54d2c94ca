"""Mapping raw Jira issue JSON into IssueModel instances with safe fallbacks."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from typing import Any

from .config import (
    AVATAR_SIZE,
    DEFAULT_PRIORITY,
    FIELD_IDS,
    UNASSIGNED_PERSON,
    UNKNOWN_PERSON,
    UNKNOWN_STATUS,
)
from .models import IssueModel

logger = logging.getLogger(__name__)


def _as_dict(value: Any) -> dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _display_name(person: Any) -> str | None:
    name = _as_dict(person).get("displayName")
    if isinstance(name, str) and name.strip():
        return name
    return None


def _avatar(person: Any) -> str | None:
    url = _as_dict(_as_dict(person).get("avatarUrls")).get(AVATAR_SIZE)
    return url if isinstance(url, str) else None


def status_of(raw: dict[str, Any]) -> str:
    name = _as_dict(_as_dict(raw.get("fields")).get("status")).get("name")
    return name if isinstance(name, str) and name else UNKNOWN_STATUS


def resolve_priority(fields: dict[str, Any]) -> str:
    """Severity custom field wins over the standard priority; default "Medium"."""
    severity = _as_dict(fields.get(FIELD_IDS["severity"])).get("value")
    if isinstance(severity, str) and severity:
        return severity
    priority = _as_dict(fields.get("priority")).get("name")
    if isinstance(priority, str) and priority:
        return priority
    return DEFAULT_PRIORITY


def map_issue(raw: dict[str, Any]) -> IssueModel:
    fields = _as_dict(raw.get("fields"))
    reporter = fields.get("reporter")
    actual_dev = fields.get(FIELD_IDS["actual_developer"])
    assignee = fields.get("assignee")

    dev_name = _display_name(actual_dev) or _display_name(assignee) or UNASSIGNED_PERSON
    dev_avatar = _avatar(actual_dev) or _avatar(assignee)

    key = raw.get("key")
    summary = fields.get("summary")
    return IssueModel(
        key=key if isinstance(key, str) and key else None,
        status=status_of(raw),
        priority=resolve_priority(fields),
        summary=summary if isinstance(summary, str) else None,
        reporter=_display_name(reporter) or UNKNOWN_PERSON,
        reporter_avatar=_avatar(reporter),
        developer=dev_name,
        developer_avatar=dev_avatar,
        assignee=_display_name(assignee) or UNKNOWN_PERSON,
        qa_owner=_display_name(fields.get(FIELD_IDS["qa_owner"])) or UNKNOWN_PERSON,
    )


def iter_issues(raw_issues: Iterable[Any]) -> Iterator[IssueModel]:
    """Yield one mapped issue per entry; entries that are not JSON objects get every fallback."""
    for idx, raw in enumerate(raw_issues):
        if not isinstance(raw, dict):
            logger.warning("Malformed issue at index %s: %r", idx, type(raw))
            raw = {}
        yield map_issue(raw)


def issues_from_payload(payload: Any) -> list[Any]:
    """Return the ``issues`` array of a search result (empty when absent)."""
    issues = _as_dict(payload).get("issues")
    return issues if isinstance(issues, list) else []
