"""Tests for the FastAPI endpoints."""

import sqlite3

import pytest
from fastapi.testclient import TestClient

from api.main import app
from conftest import FakeResponse
from core.config import DB_PATH
from core.database import create_schema, get_connection

WORKSPACE_ID = "64f0a1b2c3d4e5f60718293a"
USER = {"id": "5e0000000000000000000001", "name": "Sam"}
ISSUE = {"id": "10001", "key": "ABC-1", "fields": {"summary": "Fix login", "project": {"key": "ABC", "name": "Website"}}}


@pytest.fixture
def client():
    DB_PATH.parent.mkdir(parents=True, exist_ok=True)
    conn = get_connection(DB_PATH)
    try:
        create_schema(conn)
    finally:
        conn.close()
    with TestClient(app) as test_client:
        yield test_client


def last_logged_request():
    conn = sqlite3.connect(DB_PATH)
    try:
        return conn.execute(
            "SELECT endpoint, status_code, entries_received, tasks_reported, error_code "
            "FROM api_requests ORDER BY id DESC LIMIT 1"
        ).fetchone()
    finally:
        conn.close()


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "healthy"
    assert body["database_available"] is True


def test_generate_standup(client, clockify_payload, expected_report):
    response = client.post(
        "/v1/standup/generate",
        json={"time_entries": clockify_payload, "now": "2024-01-08T09:30:00Z"},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["report"] == expected_report
    assert body["entry_count"] == 8
    assert body["jira_issues"] == []
    assert last_logged_request() == ("/v1/standup/generate", 200, 8, 5, None)


def test_generate_standup_empty_list(client):
    response = client.post("/v1/standup/generate", json={"time_entries": []})

    assert response.status_code == 200
    assert response.json()["report"] == "No time entries found."


def test_generate_standup_invalid_payload(client):
    response = client.post(
        "/v1/standup/generate",
        json={"time_entries": [{"description": 5}, "oops"]},
    )

    assert response.status_code == 422
    detail = response.json()["detail"]
    assert detail["code"] == "VALIDATION_ERROR"
    assert detail["details"] == [
        "Entry 0: 'description' must be a string",
        "Entry 1: expected an object, got str",
    ]
    assert last_logged_request()[1:] == (422, None, None, "VALIDATION_ERROR")


def test_clockify_standup_requires_api_key(client):
    response = client.post("/v1/standup/clockify", json={"workspace_id": WORKSPACE_ID})

    assert response.status_code == 401
    assert response.json()["detail"]["code"] == "UNAUTHORIZED"


def test_clockify_standup(client, fake_session, clockify_payload, expected_report):
    session = fake_session(FakeResponse(payload=USER), FakeResponse(payload=clockify_payload))

    response = client.post(
        "/v1/standup/clockify",
        headers={"X-Api-Key": "key-123"},
        json={"workspace_id": WORKSPACE_ID, "now": "2024-01-08T09:30:00Z", "jira_issues": [ISSUE]},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["report"] == expected_report
    # selected issues are returned alongside the report, not merged into it
    assert body["jira_issues"] == [ISSUE]
    assert "Fix login" not in body["report"]
    assert session.calls[0]["headers"]["X-Api-Key"] == "key-123"


def test_clockify_standup_invalid_workspace(client):
    response = client.post(
        "/v1/standup/clockify",
        headers={"X-Api-Key": "key-123"},
        json={"workspace_id": "nope"},
    )

    assert response.status_code == 422
    assert response.json()["detail"]["code"] == "VALIDATION_ERROR"


def test_clockify_standup_upstream_error(client, fake_session):
    fake_session(FakeResponse(status_code=401, payload={"message": "Api key does not exist"}))

    response = client.post(
        "/v1/standup/clockify",
        headers={"X-Api-Key": "bad"},
        json={"workspace_id": WORKSPACE_ID},
    )

    assert response.status_code == 502
    detail = response.json()["detail"]
    assert detail["code"] == "UPSTREAM_ERROR"
    assert detail["error"] == "Api key does not exist"


def test_list_workspaces(client, fake_session):
    fake_session(FakeResponse(payload=[{"id": WORKSPACE_ID, "name": "Acme"}]))

    response = client.get("/v1/clockify/workspaces", headers={"X-Api-Key": "key-123"})

    assert response.status_code == 200
    assert response.json() == [{"id": WORKSPACE_ID, "name": "Acme"}]


def test_jira_issues_missing_credentials(client):
    response = client.post("/v1/jira/issues", json={"email": "me@example.com"})

    assert response.status_code == 400
    assert response.json()["detail"]["error"] == "Missing required parameters: email, token, domain"


def test_jira_issues(client, fake_session):
    fake_session(FakeResponse(payload={"issues": [ISSUE]}))

    response = client.post(
        "/v1/jira/issues",
        json={"email": "me@example.com", "token": "tok", "domain": "example.atlassian.net"},
    )

    assert response.status_code == 200
    assert response.json() == [ISSUE]
