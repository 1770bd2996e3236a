"""
Configuration constants and environment setup.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

# =============================================================================
# PATHS
# =============================================================================

PROJECT_ROOT = Path(__file__).parent.parent.parent
DB_PATH = Path(
    os.environ.get("STANDUP_DB_PATH", str(PROJECT_ROOT / "data" / "db" / "standup.db"))
)

# =============================================================================
# CLOCKIFY CONFIGURATION
# =============================================================================

CLOCKIFY_API_URL = os.environ.get("CLOCKIFY_API_URL", "https://api.clockify.me/api").rstrip("/")
CLOCKIFY_PAGE_SIZE = int(os.environ.get("CLOCKIFY_PAGE_SIZE", "50"))
CLOCKIFY_MAX_PAGES = int(os.environ.get("CLOCKIFY_MAX_PAGES", "10"))

# Fallback credentials when nothing has been saved with scripts/configure.py
CLOCKIFY_API_KEY = os.environ.get("CLOCKIFY_API_KEY", "")
CLOCKIFY_WORKSPACE_ID = os.environ.get("CLOCKIFY_WORKSPACE_ID", "")

# =============================================================================
# JIRA CONFIGURATION
# =============================================================================

JIRA_EMAIL = os.environ.get("JIRA_EMAIL", "")
JIRA_API_TOKEN = os.environ.get("JIRA_API_TOKEN", "")
JIRA_DOMAIN = os.environ.get("JIRA_DOMAIN", "")

JIRA_ASSIGNED_JQL = (
    'assignee = currentUser() AND status in ("In Progress", "Selected for Development") '
    "ORDER BY updated DESC"
)
JIRA_FIELDS = ["summary", "project", "status"]

# =============================================================================
# HTTP CONFIGURATION
# =============================================================================

REQUEST_TIMEOUT_SECONDS = float(os.environ.get("REQUEST_TIMEOUT_SECONDS", "15"))

# =============================================================================
# REPORT CONFIGURATION
# =============================================================================

NO_ENTRIES_MESSAGE = "No time entries found."
NO_VALID_ENTRIES_MESSAGE = "No valid time entries found."
NO_DESCRIPTION = "No description"
NO_PROJECT = "No Project"

YESTERDAY_HEADING = "What I accomplished yesterday?"
TODAY_HEADING = "What I am going to do today?"

# Storage keys for the persisted credential blobs
CLOCKIFY_STORAGE_KEY = "clockify-storage"
JIRA_STORAGE_KEY = "jira-storage"

# =============================================================================
# API CONFIGURATION
# =============================================================================

API_HOST = os.environ.get("API_HOST", "0.0.0.0")
API_PORT = int(os.environ.get("API_PORT", "8000"))
API_DEBUG = os.environ.get("API_DEBUG", "false").lower() == "true"
API_VERSION = "1.0.0"
# Comma-separated; browser origins allowed to call the API in debug mode
API_CORS_ORIGINS = [o.strip() for o in os.environ.get("API_CORS_ORIGINS", "*").split(",") if o.strip()]
