"""
Pytest configuration and shared fixtures.
"""

import json
import os
import sys
import tempfile
from datetime import datetime, timezone
from pathlib import Path

import pytest

# Keep the request log / settings database out of the project tree
os.environ.setdefault(
    "STANDUP_DB_PATH", str(Path(tempfile.mkdtemp(prefix="standup-tests-")) / "standup.db")
)

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

import core.http  # noqa: E402
from core.validation import parse_time_entries_payload  # noqa: E402

FIXTURES_DIR = Path(__file__).parent / "fixtures"

# Monday; the previous workday in the fixture data is Friday 2024-01-05
NOW = datetime(2024, 1, 8, 9, 30, tzinfo=timezone.utc)

EXPECTED_REPORT = "\n".join(
    [
        "Date: 08-01-2024",
        "",
        "What I accomplished yesterday?",
        "",
        "(Work from Friday, January 5, 2024)",
        "- Fix bug (1h 30m) [ABC-1]",
        "- Code review (45m)",
        "- Random task (0m)",
        "",
        "What I am going to do today?",
        "",
        "- Write tests [ABC-2]",
        "- Standup meeting",
    ]
)


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def expected_report():
    return EXPECTED_REPORT


@pytest.fixture
def clockify_payload():
    """Clockify export in the native timeEntriesList / timeInterval shape."""
    with open(FIXTURES_DIR / "time_entries.json", encoding="utf-8") as f:
        return json.load(f)


@pytest.fixture
def sample_entries(clockify_payload):
    """Fixture entries flattened into TimeEntry dicts."""
    return parse_time_entries_payload(clockify_payload)


@pytest.fixture
def sample_entry():
    """Sample entry dictionary for testing."""
    return {
        "id": "e1",
        "description": "[ABC-1]: Fix bug",
        "start": "2024-01-05T09:00:00Z",
        "end": "2024-01-05T10:00:00Z",
        "duration": "PT1H",
        "project": {"name": "Website"},
        "task": None,
    }


class FakeResponse:
    """Minimal stand-in for requests.Response."""

    def __init__(self, status_code=200, payload=None, reason="OK"):
        self.status_code = status_code
        self.reason = reason
        self._payload = payload

    @property
    def ok(self):
        return self.status_code < 400

    def json(self):
        if self._payload is None:
            raise ValueError("No JSON body")
        return self._payload


class FakeSession:
    """Replays queued responses and records every request."""

    def __init__(self, responses):
        self.responses = list(responses)
        self.calls = []

    def request(self, method, url, **kwargs):
        self.calls.append({"method": method, "url": url, **kwargs})
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


@pytest.fixture
def fake_session(monkeypatch):
    """Install a FakeSession as the shared HTTP session: fake_session(resp1, resp2, ...)."""

    def install(*responses):
        session = FakeSession(responses)
        monkeypatch.setattr(core.http, "_session", session)
        return session

    return install
