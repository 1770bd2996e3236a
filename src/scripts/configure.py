#!/usr/bin/env python3
"""
Save or clear Clockify and Jira credentials in the local database.

Usage:
    uv run python src/scripts/configure.py --clockify-key KEY --workspace WORKSPACE_ID
    uv run python src/scripts/configure.py --jira-email me@example.com --jira-token TOKEN --jira-domain example.atlassian.net
    uv run python src/scripts/configure.py --clear
"""

import argparse
import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from core.credentials import ClockifySettings, CredentialStore, JiraSettings
from core.database import SqliteSettingsAdapter
from core.validation import clean_workspace_id


def mask(secret: str) -> str:
    """Show only the last four characters of a secret."""
    if not secret:
        return "(not set)"
    return "*" * max(len(secret) - 4, 0) + secret[-4:]


def configure(args: argparse.Namespace, store: CredentialStore) -> None:
    if args.clear:
        store.clear_clockify()
        store.clear_jira()
        print("Cleared stored Clockify and Jira credentials")
        return

    clockify = store.load_clockify()
    if args.clockify_key is not None or args.workspace is not None:
        workspace_id = clockify.workspace_id
        if args.workspace is not None:
            workspace_id = clean_workspace_id(args.workspace)
        clockify = ClockifySettings(
            api_key=args.clockify_key if args.clockify_key is not None else clockify.api_key,
            workspace_id=workspace_id,
        )
        store.save_clockify(clockify)
        print("Saved Clockify settings")

    jira = store.load_jira()
    if any(v is not None for v in (args.jira_email, args.jira_token, args.jira_domain)):
        jira = JiraSettings(
            email=args.jira_email if args.jira_email is not None else jira.email,
            api_token=args.jira_token if args.jira_token is not None else jira.api_token,
            domain=args.jira_domain if args.jira_domain is not None else jira.domain,
        )
        store.save_jira(jira)
        print("Saved Jira settings")

    print(f"\nClockify API key: {mask(clockify.api_key)}")
    print(f"Clockify workspace: {clockify.workspace_id or '(not set)'}")
    print(f"Jira: {'connected' if jira.is_connected() else 'not connected'}")
    if jira.is_connected():
        print(f"  {jira.email} @ {jira.domain}")


def main():
    parser = argparse.ArgumentParser(description="Configure Clockify and Jira credentials")
    parser.add_argument("--clockify-key", help="Clockify API key")
    parser.add_argument("--workspace", help="Clockify workspace ID (24 hex characters)")
    parser.add_argument("--jira-email", help="Jira account email")
    parser.add_argument("--jira-token", help="Jira API token")
    parser.add_argument("--jira-domain", help="Jira domain, e.g. example.atlassian.net")
    parser.add_argument("--clear", action="store_true", help="Remove all stored credentials")
    args = parser.parse_args()

    try:
        configure(args, CredentialStore(SqliteSettingsAdapter()))
    except ValueError as e:
        print(f"\nError: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
