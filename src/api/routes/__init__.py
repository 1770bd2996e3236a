"""API route modules."""

from .clockify import router as clockify_router
from .health import router as health_router
from .jira import router as jira_router
from .standup import router as standup_router

__all__ = ["clockify_router", "health_router", "jira_router", "standup_router"]
