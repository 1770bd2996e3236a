"""
Time entry payload validation and normalization.
"""

import re
from typing import Any

from core.config import NO_PROJECT
from models.entries import TimeEntry

WORKSPACE_ID_PATTERN = re.compile(r"^[0-9a-fA-F]{24}$")

_TEXT_FIELDS = ("start", "end", "duration")


def is_valid_workspace_id(workspace_id: str) -> bool:
    """Clockify workspace ids are 24-character hex strings."""
    return bool(WORKSPACE_ID_PATTERN.match(workspace_id))


def clean_workspace_id(workspace_id: str) -> str:
    """Strip and validate a workspace id, raising ValueError if malformed."""
    cleaned = (workspace_id or "").strip()
    if not is_valid_workspace_id(cleaned):
        raise ValueError(
            f"Invalid workspace ID format. Expected 24-character hex string, got: {cleaned}"
        )
    return cleaned


def _interval(raw: dict) -> dict:
    interval = raw.get("timeInterval")
    return interval if isinstance(interval, dict) else raw


def normalize_time_entry(raw: dict) -> TimeEntry:
    """
    Flatten a Clockify entry into a TimeEntry.

    Accepts both the native shape (start/end/duration under "timeInterval")
    and the already-flat shape. The description is kept verbatim so task
    references like "[ABC-1]" survive for grouping.
    """
    interval = _interval(raw)
    project = raw.get("project") or {}
    task = raw.get("task")

    return {
        "id": str(raw.get("id") or ""),
        "description": raw.get("description") or "",
        "start": interval.get("start") or None,
        "end": interval.get("end") or None,
        "duration": interval.get("duration") or None,
        "project": {"name": project.get("name") or NO_PROJECT},
        "task": {"name": task.get("name") or ""} if isinstance(task, dict) else None,
    }


def validate_entry(raw: Any, index: int) -> list[str]:
    """Return a list of shape problems for one raw entry (empty if fine)."""
    if not isinstance(raw, dict):
        return [f"Entry {index}: expected an object, got {type(raw).__name__}"]

    errors = []

    description = raw.get("description")
    if description is not None and not isinstance(description, str):
        errors.append(f"Entry {index}: 'description' must be a string")

    if "timeInterval" in raw and raw["timeInterval"] is not None and not isinstance(
        raw["timeInterval"], dict
    ):
        errors.append(f"Entry {index}: 'timeInterval' must be an object")
    else:
        interval = _interval(raw)
        for field_name in _TEXT_FIELDS:
            value = interval.get(field_name)
            if value is not None and not isinstance(value, str):
                errors.append(f"Entry {index}: '{field_name}' must be a string")

    for field_name in ("project", "task"):
        value = raw.get(field_name)
        if value is None:
            continue
        if not isinstance(value, dict):
            errors.append(f"Entry {index}: '{field_name}' must be an object")
        elif value.get("name") is not None and not isinstance(value["name"], str):
            errors.append(f"Entry {index}: '{field_name}.name' must be a string")

    return errors


def parse_time_entries_payload(payload: Any) -> list[TimeEntry]:
    """
    Validate a pasted or uploaded time entries payload.

    Accepts a list of entries or an object with a "timeEntriesList" array.

    Raises:
        ValueError: with one line per problem found.
    """
    if isinstance(payload, dict):
        if "timeEntriesList" not in payload:
            raise ValueError("Payload must include a 'timeEntriesList' array")
        raw_entries = payload["timeEntriesList"]
    else:
        raw_entries = payload

    if not isinstance(raw_entries, list):
        raise ValueError(
            "Expected a list of time entries or an object with a 'timeEntriesList' array"
        )

    errors = []
    for index, raw in enumerate(raw_entries):
        errors.extend(validate_entry(raw, index))
    if errors:
        raise ValueError("\n".join(errors))

    return [normalize_time_entry(raw) for raw in raw_entries]
