"""Pydantic request models for API endpoints."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field


class JiraProjectModel(BaseModel):
    key: str = ""
    name: str = ""


class JiraIssueFieldsModel(BaseModel):
    summary: str = ""
    project: JiraProjectModel = Field(default_factory=JiraProjectModel)


class JiraIssueModel(BaseModel):
    """Jira issue as returned by /v1/jira/issues and echoed back on selection."""

    id: str
    key: str
    fields: JiraIssueFieldsModel = Field(default_factory=JiraIssueFieldsModel)


class GenerateStandupRequest(BaseModel):
    """Report from time entries the caller already has (e.g. pasted JSON)."""

    # A list of entries or {"timeEntriesList": [...]}; shape is checked by
    # core.validation so every problem is reported at once.
    time_entries: Any
    now: datetime | None = None


class ClockifyStandupRequest(BaseModel):
    """Report from entries fetched live from Clockify."""

    workspace_id: str
    start: datetime | None = None
    end: datetime | None = None
    now: datetime | None = None
    jira_issues: list[JiraIssueModel] = []


class JiraCredentialsRequest(BaseModel):
    email: str = ""
    token: str = ""
    domain: str = ""
