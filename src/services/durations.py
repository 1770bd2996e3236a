"""
Duration parsing and formatting for time entries.

Clockify reports durations as ISO-8601 tokens (e.g. PT1H30M). Entries that are
still running, or that come from older exports, may only carry start/end
timestamps, so both sources are supported.
"""

import re
from datetime import datetime

DURATION_PATTERN = re.compile(r"PT(?:(\d+)H)?(?:(\d+)M)?(?:(\d+)S)?")

MS_PER_MINUTE = 60 * 1000
MS_PER_HOUR = 60 * MS_PER_MINUTE


def parse_timestamp(value: str | None) -> datetime | None:
    """Parse an ISO-8601 timestamp (trailing 'Z' allowed). Returns None on failure."""
    if not value or not isinstance(value, str):
        return None
    try:
        return datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    except ValueError:
        return None


def parse_duration_token(token: str | None) -> int | None:
    """
    Parse a PT<h>H<m>M<s>S token into milliseconds.

    Seconds are accepted but dropped, so the result is always whole minutes.
    Returns None when the token is missing or does not match.
    """
    if not token or not isinstance(token, str):
        return None
    match = DURATION_PATTERN.fullmatch(token.strip())
    if not match:
        return None
    hours = int(match.group(1)) if match.group(1) else 0
    minutes = int(match.group(2)) if match.group(2) else 0
    return hours * MS_PER_HOUR + minutes * MS_PER_MINUTE


def duration_ms(
    duration_token: str | None = None,
    start: str | None = None,
    end: str | None = None,
) -> int:
    """
    Duration of an entry in milliseconds.

    Prefers the duration token; falls back to end - start. Anything unusable,
    including a non-positive difference, counts as zero.
    """
    try:
        token_ms = parse_duration_token(duration_token)
        if token_ms is not None:
            return token_ms

        start_dt = parse_timestamp(start)
        end_dt = parse_timestamp(end)
        if start_dt is None or end_dt is None:
            return 0

        diff_ms = int((end_dt - start_dt).total_seconds() * 1000)
        return diff_ms if diff_ms > 0 else 0
    except (TypeError, ValueError, OverflowError):
        # Mixed naive/aware timestamps and similar oddities
        return 0


def format_ms(total_ms: int) -> str:
    """Format milliseconds as 'Xh Ym', dropping a zero hour term ('0m' for nothing)."""
    if total_ms <= 0:
        return "0m"
    total_minutes = total_ms // MS_PER_MINUTE
    hours, minutes = divmod(total_minutes, 60)

    parts = []
    if hours > 0:
        parts.append(f"{hours}h")
    if minutes > 0 or hours == 0:
        parts.append(f"{minutes}m")
    return " ".join(parts)


def format_duration(
    duration_token: str | None = None,
    start: str | None = None,
    end: str | None = None,
) -> str:
    """Human-readable duration of an entry, e.g. 'PT1H30M' -> '1h 30m'."""
    return format_ms(duration_ms(duration_token, start, end))
