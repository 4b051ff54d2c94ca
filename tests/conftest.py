"""Test configuration ensuring local package import when editable install not active.

If users invoke `pytest` outside the project's virtualenv, we still add the project
root to sys.path so `import bugathon_app` works.
"""

from __future__ import annotations

import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


def make_issue(
    key,
    status,
    *,
    priority=None,
    severity=None,
    reporter="Tess",
    assignee="Dev",
    actual_dev=None,
    qa_owner=None,
    summary=None,
):
    """Build a raw Jira search issue in the shape the dashboard consumes."""

    def person(name):
        if name is None:
            return None
        return {"displayName": name, "avatarUrls": {"48x48": f"https://avatars/{name}.png"}}

    fields = {
        "summary": summary or f"Bug {key}",
        "status": {"name": status},
        "reporter": person(reporter),
        "assignee": person(assignee),
    }
    if priority is not None:
        fields["priority"] = {"name": priority}
    if severity is not None:
        fields["customfield_11506"] = {"value": severity}
    if actual_dev is not None:
        fields["customfield_10919"] = person(actual_dev)
    if qa_owner is not None:
        fields["customfield_11024"] = {"displayName": qa_owner}
    return {"key": key, "fields": fields}
