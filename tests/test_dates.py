"""Tests for date helpers."""

from datetime import date, datetime, timedelta, timezone

import pytest

from services.dates import (
    default_date_range,
    format_date_for_api,
    format_date_for_display,
    format_work_date,
    parse_date_arg,
    previous_workday,
)


@pytest.mark.parametrize(
    "day, expected",
    [
        (date(2024, 1, 8), date(2024, 1, 5)),  # Monday -> Friday
        (date(2024, 1, 7), date(2024, 1, 5)),  # Sunday -> Friday
        (date(2024, 1, 6), date(2024, 1, 5)),  # Saturday -> Friday
        (date(2024, 1, 9), date(2024, 1, 8)),  # Tuesday -> Monday
        (date(2024, 1, 5), date(2024, 1, 4)),  # Friday -> Thursday
    ],
)
def test_previous_workday(day, expected):
    assert previous_workday(day) == expected


def test_default_date_range_starts_at_previous_workday_midnight(now):
    start, end = default_date_range(now)
    assert start == datetime(2024, 1, 5, tzinfo=timezone.utc)
    assert end == now


def test_default_date_range_keeps_local_timezone():
    local = timezone(timedelta(hours=2))
    start, _ = default_date_range(datetime(2024, 1, 10, 8, 0, tzinfo=local))
    assert start == datetime(2024, 1, 9, tzinfo=local)


def test_format_date_for_api():
    dt = datetime(2024, 1, 5, 9, 0, 0, 123456, tzinfo=timezone.utc)
    assert format_date_for_api(dt) == "2024-01-05T09:00:00.123Z"

    local = datetime(2024, 1, 5, 11, 0, tzinfo=timezone(timedelta(hours=2)))
    assert format_date_for_api(local) == "2024-01-05T09:00:00.000Z"


def test_display_formats():
    assert format_date_for_display(date(2024, 1, 8)) == "08-01-2024"
    assert format_work_date(date(2024, 1, 5)) == "Friday, January 5, 2024"


def test_parse_date_arg():
    assert parse_date_arg("2024-01-05") == date(2024, 1, 5)
    assert parse_date_arg(None) is None
    with pytest.raises(ValueError):
        parse_date_arg("05/01/2024")
