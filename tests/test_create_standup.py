"""Tests for the create_standup CLI helpers."""

import argparse
import json
from datetime import datetime, timedelta, timezone

import pytest

import core.credentials
from conftest import FakeResponse
from core.credentials import ClockifySettings, CredentialStore, JiraSettings, MemorySettingsAdapter
import scripts.create_standup
from scripts.create_standup import generate_standup, get_date_range, load_entries_file, main, parse_now

WORKSPACE_ID = "64f0a1b2c3d4e5f60718293a"


def make_args(**overrides):
    defaults = {
        "input": None,
        "workspace": None,
        "start": None,
        "end": None,
        "date": "2024-01-08T09:30:00+00:00",
        "jira": False,
    }
    defaults.update(overrides)
    return argparse.Namespace(**defaults)


@pytest.fixture
def empty_store(monkeypatch):
    for name in ("CLOCKIFY_API_KEY", "CLOCKIFY_WORKSPACE_ID", "JIRA_EMAIL", "JIRA_API_TOKEN", "JIRA_DOMAIN"):
        monkeypatch.setattr(core.credentials, name, "")
    return CredentialStore(MemorySettingsAdapter())


def test_parse_now():
    assert parse_now("2024-01-08T09:30:00+00:00") == datetime(2024, 1, 8, 9, 30, tzinfo=timezone.utc)
    assert parse_now("2024-01-08").tzinfo is not None
    assert parse_now(None).tzinfo is not None


def test_get_date_range_covers_full_end_day(now):
    start, end = get_date_range("2024-01-04", "2024-01-05", now)

    assert start == datetime(2024, 1, 4, tzinfo=timezone.utc)
    assert end.date() == datetime(2024, 1, 5).date()
    assert end - datetime(2024, 1, 5, tzinfo=timezone.utc) > timedelta(hours=23, minutes=59)
    assert get_date_range(None, None, now) == (None, None)


def test_generate_from_input_file(tmp_path, clockify_payload, empty_store, expected_report):
    path = tmp_path / "entries.json"
    path.write_text(json.dumps(clockify_payload), encoding="utf-8")

    report, issues, jira_error = generate_standup(make_args(input=path), empty_store)

    assert report == expected_report
    assert issues == []
    assert jira_error is None


def test_load_entries_file_errors(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_entries_file(tmp_path / "missing.json")

    bad = tmp_path / "bad.json"
    bad.write_text("{not json", encoding="utf-8")
    with pytest.raises(ValueError, match="not valid JSON"):
        load_entries_file(bad)


def test_generate_requires_credentials(empty_store):
    with pytest.raises(ValueError, match="API key and workspace"):
        generate_standup(make_args(), empty_store)


def test_generate_from_clockify_with_jira(fake_session, empty_store, clockify_payload, expected_report):
    empty_store.save_clockify(ClockifySettings(api_key="key-123", workspace_id=WORKSPACE_ID))
    empty_store.save_jira(JiraSettings(email="me@example.com", api_token="tok", domain="example.atlassian.net"))
    issue = {"id": "1", "key": "ABC-1", "fields": {"summary": "Fix login", "project": {"key": "ABC", "name": "Website"}}}
    session = fake_session(
        FakeResponse(payload={"id": "user-1"}),
        FakeResponse(payload=clockify_payload),
        FakeResponse(payload={"issues": [issue]}),
    )

    report, issues, jira_error = generate_standup(make_args(jira=True, start="2024-01-04"), empty_store)

    assert report == expected_report
    assert issues == [issue]
    assert jira_error is None
    assert session.calls[1]["params"]["start"] == "2024-01-04T00:00:00.000Z"


def test_generate_keeps_report_when_jira_fails(tmp_path, fake_session, empty_store, clockify_payload, expected_report):
    path = tmp_path / "entries.json"
    path.write_text(json.dumps(clockify_payload), encoding="utf-8")
    empty_store.save_jira(JiraSettings(email="me@example.com", api_token="bad", domain="example.atlassian.net"))
    fake_session(FakeResponse(status_code=401, payload={"errorMessages": ["Unauthorized"]}, reason="Unauthorized"))

    report, issues, jira_error = generate_standup(make_args(input=path, jira=True), empty_store)

    assert report == expected_report
    assert issues == []
    assert jira_error


def test_main_prints_report_before_jira_error(tmp_path, monkeypatch, capsys, empty_store, clockify_payload):
    path = tmp_path / "entries.json"
    path.write_text(json.dumps(clockify_payload), encoding="utf-8")
    monkeypatch.setattr(scripts.create_standup, "SqliteSettingsAdapter", MemorySettingsAdapter)
    monkeypatch.setattr(
        "sys.argv",
        ["create_standup.py", "--input", str(path), "--date", "2024-01-08T09:30:00+00:00", "--jira"],
    )

    main()

    out = capsys.readouterr().out
    assert "What I accomplished yesterday?" in out
    assert "Could not fetch Jira issues: Missing required parameters" in out
    assert out.index("What I accomplished yesterday?") < out.index("Could not fetch Jira issues")
