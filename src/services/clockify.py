"""
Clockify REST API access: current user, workspaces and time entries.
"""

from datetime import datetime

from core.config import CLOCKIFY_API_URL, CLOCKIFY_MAX_PAGES, CLOCKIFY_PAGE_SIZE
from core.http import ApiError, make_request
from core.validation import clean_workspace_id, normalize_time_entry
from models.entries import ClockifyUser, ClockifyWorkspace, TimeEntry
from services.dates import default_date_range, format_date_for_api


def _get(path: str, api_key: str, params: dict | None = None):
    return make_request(
        "GET", f"{CLOCKIFY_API_URL}{path}", headers={"X-Api-Key": api_key}, params=params
    )


def fetch_current_user(api_key: str) -> ClockifyUser:
    """Get the user the API key belongs to."""
    return _get("/v1/user", api_key)


def fetch_workspaces(api_key: str) -> list[ClockifyWorkspace]:
    """List the workspaces visible to the API key."""
    workspaces = _get("/v1/workspaces", api_key)
    return [{"id": ws.get("id", ""), "name": ws.get("name", "")} for ws in workspaces or []]


def _extract_entries(response) -> list[dict]:
    # The endpoint returns either a bare list or {"timeEntriesList": [...]}
    if isinstance(response, list):
        return response
    if isinstance(response, dict):
        return response.get("timeEntriesList") or []
    return []


def fetch_time_entries(
    api_key: str,
    workspace_id: str,
    start: datetime | None = None,
    end: datetime | None = None,
    now: datetime | None = None,
    silent: bool = False,
) -> list[TimeEntry]:
    """
    Fetch the current user's time entries for a workspace.

    Missing bounds default to the start of the previous workday through now.

    Args:
        silent: If True, suppress print statements (for API usage)

    Raises:
        ValueError: if the workspace id is malformed
        ApiError: if Clockify rejects a request
    """
    workspace_id = clean_workspace_id(workspace_id)

    user = fetch_current_user(api_key)
    user_id = user.get("id") if isinstance(user, dict) else None
    if not user_id:
        raise ApiError("Failed to get current user ID")

    default_start, default_end = default_date_range(now or datetime.now().astimezone())
    effective_start = start or default_start
    effective_end = end or default_end

    if not silent:
        print(
            f"Fetching time entries from {format_date_for_api(effective_start)} "
            f"to {format_date_for_api(effective_end)}"
        )

    path = f"/workspaces/{workspace_id}/timeEntries/user/{user_id}/full"
    raw_entries: list[dict] = []
    for page in range(CLOCKIFY_MAX_PAGES):
        params = {
            "start": format_date_for_api(effective_start),
            "end": format_date_for_api(effective_end),
            "page": page,
            "limit": CLOCKIFY_PAGE_SIZE,
        }
        page_entries = _extract_entries(_get(path, api_key, params=params))
        raw_entries.extend(page_entries)
        if len(page_entries) < CLOCKIFY_PAGE_SIZE:
            break

    entries = [normalize_time_entry(raw) for raw in raw_entries if isinstance(raw, dict)]
    if not silent:
        print(f"  Found {len(entries)} time entries")
    return entries
