"""
Standup report generation from Clockify time entries.

Entries are bucketed by the UTC date of their start. The most recent day before
today becomes the "yesterday" section (with durations summed per task) and
today's entries become the plan for "today".
"""

import re
from collections import defaultdict
from datetime import date, datetime, timezone
from typing import Iterable

from core.config import (
    NO_DESCRIPTION,
    NO_ENTRIES_MESSAGE,
    NO_VALID_ENTRIES_MESSAGE,
    TODAY_HEADING,
    YESTERDAY_HEADING,
)
from models.entries import AggregatedTask, TimeEntry
from services.dates import format_date_for_display, format_work_date
from services.durations import duration_ms, parse_timestamp

# Task references are written into descriptions as "[ABC-123]". Only these
# patterns know the bracket convention.
TASK_TOKEN_PATTERN = re.compile(r"\[([^\]]+)\]")
TRAILING_TOKEN_PATTERN = re.compile(r"\s*\[[^\]]+\]\s*$")
LEADING_TOKEN_PATTERN = re.compile(r"^\s*\[[^\]]+\]\s*:?\s*")


# =============================================================================
# DESCRIPTION PARSING
# =============================================================================


def extract_task_token(description: str | None) -> str:
    """Return the first bracketed task reference in a description, or ''."""
    if not isinstance(description, str):
        return ""
    match = TASK_TOKEN_PATTERN.search(description)
    return match.group(1) if match else ""


def display_description(description: str | None) -> str:
    """
    Description as shown in the report.

    Drops a trailing "[ID]" and a leading "[ID]:" prefix, since the task
    reference is rendered separately.
    """
    text = description.strip() if isinstance(description, str) else ""
    text = TRAILING_TOKEN_PATTERN.sub("", text).strip()
    text = LEADING_TOKEN_PATTERN.sub("", text).strip()
    return text or NO_DESCRIPTION


def task_key(description: str | None) -> tuple[str, str, str]:
    """Return (key, display description, task token) for an entry description."""
    token = extract_task_token(description)
    display = display_description(description)
    return token or display, display, token


# =============================================================================
# BUCKETING
# =============================================================================


def _utc_date(dt: datetime) -> date:
    if dt.tzinfo is not None:
        dt = dt.astimezone(timezone.utc)
    return dt.date()


def entry_date(entry: TimeEntry) -> str | None:
    """YYYY-MM-DD of the entry start, or None if it has no usable start."""
    start_dt = parse_timestamp(entry.get("start"))
    if start_dt is None:
        return None
    try:
        return _utc_date(start_dt).isoformat()
    except (OverflowError, ValueError):
        # e.g. 0001-01-01T00:30+01:00 has no UTC equivalent
        return None


def bucket_entries(entries: Iterable[TimeEntry]) -> dict[str, list[TimeEntry]]:
    """Group entries by start date, keeping input order within each day."""
    buckets: dict[str, list[TimeEntry]] = defaultdict(list)
    for entry in entries:
        date_str = entry_date(entry)
        if date_str is None:
            continue
        buckets[date_str].append(entry)
    return dict(buckets)


def select_report_dates(bucket_keys: Iterable[str], today: str) -> tuple[str | None, str | None]:
    """
    Pick the (yesterday, today) bucket keys.

    Yesterday is the latest day strictly before today, falling back to the
    oldest day available. Today is only set when there are entries for it.
    """
    sorted_dates = sorted(bucket_keys, reverse=True)
    if not sorted_dates:
        return None, None

    yesterday_key = next((d for d in sorted_dates if d < today), sorted_dates[-1])
    today_key = today if today in sorted_dates else None
    return yesterday_key, today_key


# =============================================================================
# SECTIONS
# =============================================================================


def aggregate_tasks(entries: Iterable[TimeEntry]) -> list[AggregatedTask]:
    """
    Merge entries sharing a task key and sum their durations.

    Sorted by total duration, longest first; ties keep first-seen order.
    """
    tasks: dict[str, AggregatedTask] = {}
    for entry in entries:
        key, display, token = task_key(entry.get("description"))
        task = tasks.get(key)
        if task is None:
            task = AggregatedTask(key=key, display_description=display, task_token=token)
            tasks[key] = task
        task.add(
            duration_ms(entry.get("duration"), entry.get("start"), entry.get("end")),
            entry.get("start"),
            entry.get("end"),
        )

    return sorted(tasks.values(), key=lambda t: t.total_duration_ms, reverse=True)


def list_planned_tasks(entries: Iterable[TimeEntry]) -> list[str]:
    """One line per distinct task in first-seen order, without durations."""
    lines: dict[str, str] = {}
    for entry in entries:
        key, display, token = task_key(entry.get("description"))
        if key not in lines:
            task_ref = f" [{token}]" if token else ""
            lines[key] = f"- {display}{task_ref}"
    return list(lines.values())


# =============================================================================
# REPORT
# =============================================================================


def build_standup_report(entries: list[TimeEntry], now: datetime) -> str:
    """
    Render the plain-text standup report.

    Args:
        entries: Validated time entries in any order.
        now: Current time; decides which bucket is "today" and the header date.

    Returns:
        The report, or a short message when there is nothing to report.
    """
    if not entries:
        return NO_ENTRIES_MESSAGE

    buckets = bucket_entries(entries)
    if not buckets:
        return NO_VALID_ENTRIES_MESSAGE

    today = _utc_date(now).isoformat()
    yesterday_key, today_key = select_report_dates(buckets.keys(), today)

    output = [f"Date: {format_date_for_display(now.date())}", ""]

    output.append(YESTERDAY_HEADING)
    output.append("")
    if yesterday_key:
        work_date = date.fromisoformat(yesterday_key)
        output.append(f"(Work from {format_work_date(work_date)})")
        for task in aggregate_tasks(buckets[yesterday_key]):
            output.append(task.render())
    output.append("")

    output.append(TODAY_HEADING)
    output.append("")
    if today_key:
        output.extend(list_planned_tasks(buckets[today_key]))

    return "\n".join(output)
