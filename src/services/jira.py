"""
Jira REST API access for the issues currently assigned to the user.
"""

from core.config import JIRA_ASSIGNED_JQL, JIRA_FIELDS
from core.credentials import JiraSettings
from core.http import make_request
from models.entries import JiraIssue


def _simplify_issue(raw: dict) -> JiraIssue:
    fields = raw.get("fields") or {}
    project = fields.get("project") or {}
    return {
        "id": str(raw.get("id", "")),
        "key": raw.get("key", ""),
        "fields": {
            "summary": fields.get("summary", ""),
            "project": {"key": project.get("key", ""), "name": project.get("name", "")},
        },
    }


def fetch_assigned_issues(settings: JiraSettings) -> list[JiraIssue]:
    """
    Fetch issues assigned to the user that are in progress or up next.

    Raises:
        ValueError: if any credential is missing
        ApiError: if Jira rejects the search
    """
    if not settings.is_connected():
        raise ValueError("Missing required parameters: email, token, domain")

    data = make_request(
        "POST",
        f"https://{settings.domain}/rest/api/3/search",
        json={"jql": JIRA_ASSIGNED_JQL, "fields": JIRA_FIELDS},
        auth=(settings.email, settings.api_token),
    )
    issues = data.get("issues", []) if isinstance(data, dict) else []
    return [_simplify_issue(issue) for issue in issues]


def format_issue_line(issue: JiraIssue) -> str:
    """Format an issue for a selection list, e.g. '- ABC-1: Fix login (Website)'."""
    fields = issue["fields"]
    project_name = fields["project"]["name"]
    suffix = f" ({project_name})" if project_name else ""
    return f"- {issue['key']}: {fields['summary']}{suffix}"
