#!/usr/bin/env python3
"""
List the Clockify workspaces visible to the configured API key.

Usage:
    uv run python src/scripts/list_workspaces.py
"""

import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from core.credentials import CredentialStore
from core.database import SqliteSettingsAdapter
from core.http import ApiError
from services.clockify import fetch_current_user, fetch_workspaces


def main():
    """List the current user and their workspaces."""
    settings = CredentialStore(SqliteSettingsAdapter()).load_clockify()
    if not settings.api_key:
        print("No Clockify API key configured. Run scripts/configure.py --clockify-key KEY")
        sys.exit(1)

    try:
        user = fetch_current_user(settings.api_key)
        workspaces = fetch_workspaces(settings.api_key)
    except ApiError as e:
        print(f"Error: {e}")
        sys.exit(1)

    print(f"User: {user.get('name', '')} <{user.get('email', '')}>")
    print(f"Found {len(workspaces)} workspaces\n")
    print("=" * 80)

    for ws in workspaces:
        marker = " (selected)" if ws["id"] == settings.workspace_id else ""
        print(f"  {ws['name']}{marker}")
        print(f"    ID: {ws['id']}")

    print("-" * 80)


if __name__ == "__main__":
    main()
