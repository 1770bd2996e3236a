#!/usr/bin/env python3
"""
Create a daily standup report from Clockify time entries.

Fetches entries for the previous workday through today (or an explicit range),
or reads them from a Clockify JSON export, and prints the report.

Usage:
    uv run python src/scripts/create_standup.py
    uv run python src/scripts/create_standup.py --start 2025-11-06 --end 2025-11-07
    uv run python src/scripts/create_standup.py --input entries.json --date 2025-11-07T09:30
"""

import argparse
import json
import sys
from datetime import datetime, time
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from core.credentials import CredentialStore
from core.database import SqliteSettingsAdapter
from core.http import ApiError
from core.validation import parse_time_entries_payload
from models.entries import JiraIssue, TimeEntry
from services.clockify import fetch_time_entries
from services.dates import parse_date_arg
from services.jira import fetch_assigned_issues, format_issue_line
from services.standup import build_standup_report


# =============================================================================
# ARGUMENT HELPERS
# =============================================================================


def parse_now(value: str | None) -> datetime:
    """Parse --date (ISO date or datetime, local time if no offset). Defaults to now."""
    if not value:
        return datetime.now().astimezone()
    parsed = datetime.fromisoformat(value)
    return parsed if parsed.tzinfo else parsed.astimezone()


def get_date_range(
    start_str: str | None, end_str: str | None, now: datetime
) -> tuple[datetime | None, datetime | None]:
    """
    Turn --start/--end dates into a datetime range in the local timezone.

    The end date includes the full day. Missing bounds stay None so the
    gateway applies its default.
    """
    start_day = parse_date_arg(start_str)
    end_day = parse_date_arg(end_str)

    start = datetime.combine(start_day, time.min, tzinfo=now.tzinfo) if start_day else None
    end = datetime.combine(end_day, time.max, tzinfo=now.tzinfo) if end_day else None
    return start, end


def load_entries_file(path: Path) -> list[TimeEntry]:
    """Read a Clockify JSON export and validate its shape."""
    if not path.exists():
        raise FileNotFoundError(f"Input file not found: {path}")
    with open(path, encoding="utf-8") as f:
        try:
            payload = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"Input file is not valid JSON: {e}") from e
    return parse_time_entries_payload(payload)


# =============================================================================
# MAIN
# =============================================================================


def generate_standup(
    args: argparse.Namespace, store: CredentialStore
) -> tuple[str, list[JiraIssue], str | None]:
    """
    Build the report and, if requested, fetch assigned Jira issues.

    A Jira failure does not lose the report: it comes back as the third
    element instead of being raised.
    """
    now = parse_now(args.date)

    if args.input:
        print(f"Reading time entries from {args.input}")
        entries = load_entries_file(args.input)
    else:
        settings = store.load_clockify()
        workspace_id = args.workspace or settings.workspace_id
        if not settings.api_key or not workspace_id:
            raise ValueError(
                "API key and workspace must be configured (scripts/configure.py) "
                "or set via CLOCKIFY_API_KEY / CLOCKIFY_WORKSPACE_ID"
            )
        start, end = get_date_range(args.start, args.end, now)
        entries = fetch_time_entries(settings.api_key, workspace_id, start, end, now=now)

    report = build_standup_report(entries, now)

    issues: list[JiraIssue] = []
    jira_error = None
    if args.jira:
        print("Fetching assigned Jira issues...")
        try:
            issues = fetch_assigned_issues(store.load_jira())
        except (ApiError, ValueError) as e:
            jira_error = str(e)

    return report, issues, jira_error


def main():
    parser = argparse.ArgumentParser(description="Generate a daily standup report from Clockify")
    parser.add_argument("--input", type=Path, help="Clockify JSON export to read instead of calling the API")
    parser.add_argument("--workspace", help="Clockify workspace ID (overrides the stored one)")
    parser.add_argument("--start", help="Start date (YYYY-MM-DD). Defaults to the previous workday.")
    parser.add_argument("--end", help="End date (YYYY-MM-DD), inclusive. Defaults to now.")
    parser.add_argument("--date", help="Treat this ISO date/time as 'now' for the report")
    parser.add_argument("--jira", action="store_true", help="Also list assigned Jira issues")
    args = parser.parse_args()

    try:
        report, issues, jira_error = generate_standup(args, CredentialStore(SqliteSettingsAdapter()))
    except (ApiError, ValueError, FileNotFoundError) as e:
        print(f"\nError: {e}")
        sys.exit(1)

    print()
    print(report)

    if jira_error:
        print(f"\nCould not fetch Jira issues: {jira_error}")
    elif args.jira:
        print(f"\nAssigned Jira issues ({len(issues)}):")
        for issue in issues:
            print(format_issue_line(issue))


if __name__ == "__main__":
    main()
