"""Pydantic response models for API endpoints."""

from pydantic import BaseModel

from api.models.requests import JiraIssueModel


class HealthResponse(BaseModel):
    """Health check response."""

    status: str  # "healthy" or "unhealthy"
    version: str
    database_available: bool
    timestamp: str  # ISO 8601 UTC
    error: str | None = None


class StandupResponse(BaseModel):
    """Generated standup report."""

    report: str
    entry_count: int
    generated_at: str  # ISO 8601, the "now" the report was built for
    jira_issues: list[JiraIssueModel] = []


class WorkspaceResponse(BaseModel):
    id: str
    name: str


class ErrorResponse(BaseModel):
    """Standard error response."""

    error: str
    code: str
    details: list[str] = []


class ErrorCodes:
    """Error code constants."""

    INVALID_REQUEST = "INVALID_REQUEST"
    UNAUTHORIZED = "UNAUTHORIZED"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    UPSTREAM_ERROR = "UPSTREAM_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"
