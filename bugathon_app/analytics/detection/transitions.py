"""Detect issues that newly moved into a done status since the last poll."""

from __future__ import annotations

import logging
from collections.abc import Iterable, MutableMapping
from typing import Any

from bugathon_app.core.config import SETTINGS, AppSettings
from bugathon_app.core.mappers import iter_issues
from bugathon_app.core.models import Transition

logger = logging.getLogger(__name__)

KnownIssueState = MutableMapping[str, str]


def detect(
    raw_issues: Iterable[Any],
    state: KnownIssueState,
    settings: AppSettings = SETTINGS,
) -> list[Transition]:
    """Return transitions into done and record every issue's status in ``state``.

    An empty ``state`` is treated as the first observation: it is filled as a
    baseline and nothing is reported. Afterwards an issue is reported only if
    its previous status was known and not done and its current status is
    done. Each check uses the status recorded before this batch.
    """
    issues = [i for i in iter_issues(raw_issues) if i.key is not None]
    if not state:
        for issue in issues:
            state[issue.key] = issue.status
        logger.debug("Baseline established for %s issue(s)", len(state))
        return []

    done = settings.done_statuses
    transitions: list[Transition] = []
    for issue in issues:
        old_status = state.get(issue.key)
        state[issue.key] = issue.status
        if old_status is None or old_status in done or issue.status not in done:
            continue
        transitions.append(
            Transition(
                key=issue.key,
                summary=issue.summary or "",
                assignee=issue.assignee,
                qa_owner=issue.qa_owner,
            )
        )
    return transitions


class ChangeDetector:
    """Session-owned KnownIssueState plus ``detect``."""

    def __init__(self, settings: AppSettings = SETTINGS):
        self.settings = settings
        self.known: dict[str, str] = {}

    def __call__(self, raw_issues: Iterable[Any]) -> list[Transition]:
        return detect(raw_issues, self.known, self.settings)
