"""API Pydantic models."""

from .requests import (
    ClockifyStandupRequest,
    GenerateStandupRequest,
    JiraCredentialsRequest,
    JiraIssueModel,
)
from .responses import (
    ErrorCodes,
    ErrorResponse,
    HealthResponse,
    StandupResponse,
    WorkspaceResponse,
)

__all__ = [
    "ClockifyStandupRequest",
    "GenerateStandupRequest",
    "JiraCredentialsRequest",
    "JiraIssueModel",
    "HealthResponse",
    "ErrorResponse",
    "ErrorCodes",
    "StandupResponse",
    "WorkspaceResponse",
]
