"""Central configuration, constants, scoring tables, and YAML overrides."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any

import yaml

logger = logging.getLogger(__name__)

# =============================================================================
# Jira Connection Settings
# =============================================================================
JIRA_DEFAULT_SERVER = "https://your-jira-instance"
TIMEZONE = "Asia/Jerusalem"

# Bug board query; callers may pass their own JQL per fetch
DEFAULT_JQL = (
    'type = Bug AND "Assignee Management Hierarchy" = T158429 '
    "AND status not in (Done, Cancelled) ORDER BY cf[11506] ASC"
)

# Optional proxy endpoint returning the raw search JSON
DATA_SOURCE_URL = "http://localhost:3000/api/jira"

# =============================================================================
# Jira Custom Field IDs
# =============================================================================
FIELD_IDS = {
    "severity": "customfield_11506",
    "actual_developer": "customfield_10919",
    "qa_owner": "customfield_11024",
}

AVATAR_SIZE = "48x48"

# =============================================================================
# Workflow Status Configuration
# =============================================================================
# Statuses that count as a completed bug (exact match)
DONE_STATUSES: frozenset[str] = frozenset({"Done", "Closed", "Verified", "Resolved"})

# Hidden from the status grid (already summarized by the hero counters)
HIDDEN_STATUSES_LOWER: frozenset[str] = frozenset({"done", "closed", "verified", "resolved"})

REOPEN_MARKER = "reopen"

# =============================================================================
# Scoring
# =============================================================================
POINTS_BY_SEVERITY: dict[str, int] = {
    "Critical": 25,
    "Very High": 20,
    "High": 15,
    "Medium": 10,
    "Low": 5,
}
DEFAULT_POINTS = 10
DEFAULT_PRIORITY = "Medium"

UNKNOWN_PERSON = "Unknown"
UNASSIGNED_PERSON = "Unassigned"
UNKNOWN_STATUS = "Unknown"

# =============================================================================
# Persistence (two fixed storage slots)
# =============================================================================
STORAGE_KEY = "bugathon_data_v1"
TIMER_KEY = "bugathon_timer_v1"
STORE_PATH = Path(__file__).resolve().parents[2] / "data" / "bugathon_store.json"

# =============================================================================
# UI Default Values
# =============================================================================
POLLING_INTERVAL_MS = 5000
TICK_INTERVAL_MS = 1000
TIMER_DURATION_MINUTES = 90
LEADERBOARD_LIMIT = 5
NOTIFICATION_TTL_MS = 10_000
TIMER_NOTIFICATION_KEY = "Timer"


@dataclass(slots=True)
class AppSettings:
    polling_interval_ms: int = POLLING_INTERVAL_MS
    tick_interval_ms: int = TICK_INTERVAL_MS
    timer_duration_minutes: int = TIMER_DURATION_MINUTES
    leaderboard_limit: int = LEADERBOARD_LIMIT
    notification_ttl_ms: int = NOTIFICATION_TTL_MS
    calculate_points: bool = True
    default_points: int = DEFAULT_POINTS
    points_by_severity: dict[str, int] = field(default_factory=lambda: dict(POINTS_BY_SEVERITY))
    done_statuses: frozenset[str] = DONE_STATUSES
    jql: str = DEFAULT_JQL
    data_source_url: str = DATA_SOURCE_URL

    @property
    def timer_duration_ms(self) -> int:
        return self.timer_duration_minutes * 60 * 1000


SETTINGS = AppSettings()

_CACHE: AppSettings | None = None


def _coerce(name: str, value: Any) -> Any:
    if name == "done_statuses":
        return frozenset(str(v) for v in value)
    if name == "points_by_severity":
        return {str(k): int(v) for k, v in dict(value).items()}
    return value


def load_settings(base_path: str | Path | None = None) -> AppSettings:
    """Return settings with overrides from ``bugathon.yaml`` applied.

    The file is optional and read once per process. Unknown keys are ignored
    and any parse error falls back to the built-in defaults.
    """
    global _CACHE
    if _CACHE is not None:
        return _CACHE
    base = Path(base_path or Path(__file__).resolve().parents[2])
    yaml_path = base / "bugathon.yaml"
    if not yaml_path.exists():
        _CACHE = SETTINGS
        return _CACHE
    try:
        data = yaml.safe_load(yaml_path.read_text()) or {}
        known = {f.name for f in fields(AppSettings)}
        overrides = {k: _coerce(k, v) for k, v in (data.get("settings") or {}).items() if k in known}
        _CACHE = replace(SETTINGS, **overrides)
    except Exception as exc:
        logger.warning("Ignoring unreadable %s: %s", yaml_path, exc)
        _CACHE = SETTINGS
    return _CACHE


def clear_settings_cache() -> None:
    global _CACHE
    _CACHE = None
