"""
Date helpers for report headers and Clockify query ranges.
"""

from datetime import date, datetime, time, timedelta, timezone


def previous_workday(d: date) -> date:
    """Day before `d`, skipping back over a weekend to Friday."""
    prev_day = d - timedelta(days=1)
    if prev_day.weekday() == 6:  # Sunday
        prev_day -= timedelta(days=2)
    elif prev_day.weekday() == 5:  # Saturday
        prev_day -= timedelta(days=1)
    return prev_day


def default_date_range(now: datetime) -> tuple[datetime, datetime]:
    """
    Default Clockify query range: start of the previous workday through now.

    The start keeps the tzinfo of `now`, so a local clock gives a local midnight.
    """
    start_day = previous_workday(now.date())
    start = datetime.combine(start_day, time.min, tzinfo=now.tzinfo)
    return start, now


def format_date_for_api(dt: datetime) -> str:
    """Format as ISO UTC with milliseconds, e.g. 2024-01-05T09:00:00.000Z."""
    if dt.tzinfo is None:
        dt = dt.astimezone()
    dt = dt.astimezone(timezone.utc)
    return dt.strftime("%Y-%m-%dT%H:%M:%S.") + f"{dt.microsecond // 1000:03d}Z"


def format_date_for_display(d: date) -> str:
    """Format date as DD-MM-YYYY."""
    return f"{d.day:02d}-{d.month:02d}-{d.year}"


def format_work_date(d: date) -> str:
    """Format date as 'Friday, January 5, 2024' (platform-safe, no zero-padding)."""
    return f"{d.strftime('%A')}, {d.strftime('%B')} {d.day}, {d.year}"


def parse_date_arg(value: str | None) -> date | None:
    """Parse a YYYY-MM-DD argument; None passes through."""
    if not value:
        return None
    return datetime.strptime(value, "%Y-%m-%d").date()
