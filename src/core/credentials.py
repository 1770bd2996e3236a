"""
Clockify and Jira credentials, persisted through a pluggable key-value adapter.

Nothing in the report code reads credentials; callers load them here and pass
them to the API gateways explicitly.
"""

import json
from dataclasses import asdict, dataclass, field
from typing import Protocol

from core.config import (
    CLOCKIFY_API_KEY,
    CLOCKIFY_STORAGE_KEY,
    CLOCKIFY_WORKSPACE_ID,
    JIRA_API_TOKEN,
    JIRA_DOMAIN,
    JIRA_EMAIL,
    JIRA_STORAGE_KEY,
)


class SettingsAdapter(Protocol):
    """Read/write pair backing the credential store."""

    def read(self, key: str) -> str | None: ...

    def write(self, key: str, value: str) -> None: ...

    def delete(self, key: str) -> None: ...


class MemorySettingsAdapter:
    """In-process adapter, used by tests and one-off runs."""

    def __init__(self, initial: dict[str, str] | None = None):
        self.values: dict[str, str] = dict(initial or {})

    def read(self, key: str) -> str | None:
        return self.values.get(key)

    def write(self, key: str, value: str) -> None:
        self.values[key] = value

    def delete(self, key: str) -> None:
        self.values.pop(key, None)


@dataclass
class ClockifySettings:
    api_key: str = ""
    workspace_id: str = ""

    def is_configured(self) -> bool:
        return bool(self.api_key and self.workspace_id)


@dataclass
class JiraSettings:
    email: str = ""
    api_token: str = field(default="", repr=False)
    domain: str = ""

    def __post_init__(self):
        self.email = self.email.strip()
        self.domain = self.domain.strip().rstrip("/")

    def is_connected(self) -> bool:
        return bool(self.email and self.api_token and self.domain)


def clockify_settings_from_env() -> ClockifySettings:
    return ClockifySettings(api_key=CLOCKIFY_API_KEY, workspace_id=CLOCKIFY_WORKSPACE_ID)


def jira_settings_from_env() -> JiraSettings:
    return JiraSettings(email=JIRA_EMAIL, api_token=JIRA_API_TOKEN, domain=JIRA_DOMAIN)


class CredentialStore:
    """Loads and saves credential settings as JSON blobs through an adapter."""

    def __init__(self, adapter: SettingsAdapter):
        self.adapter = adapter

    def _load(self, key: str) -> dict:
        raw = self.adapter.read(key)
        if not raw:
            return {}
        try:
            data = json.loads(raw)
        except json.JSONDecodeError:
            return {}
        return data if isinstance(data, dict) else {}

    def load_clockify(self) -> ClockifySettings:
        """Stored Clockify settings, falling back to the environment per field."""
        data = self._load(CLOCKIFY_STORAGE_KEY)
        env = clockify_settings_from_env()
        return ClockifySettings(
            api_key=data.get("api_key") or env.api_key,
            workspace_id=data.get("workspace_id") or env.workspace_id,
        )

    def save_clockify(self, settings: ClockifySettings) -> None:
        self.adapter.write(CLOCKIFY_STORAGE_KEY, json.dumps(asdict(settings)))

    def clear_clockify(self) -> None:
        self.adapter.delete(CLOCKIFY_STORAGE_KEY)

    def load_jira(self) -> JiraSettings:
        """Stored Jira settings, falling back to the environment per field."""
        data = self._load(JIRA_STORAGE_KEY)
        env = jira_settings_from_env()
        return JiraSettings(
            email=data.get("email") or env.email,
            api_token=data.get("api_token") or env.api_token,
            domain=data.get("domain") or env.domain,
        )

    def save_jira(self, settings: JiraSettings) -> None:
        self.adapter.write(JIRA_STORAGE_KEY, json.dumps(asdict(settings)))

    def clear_jira(self) -> None:
        self.adapter.delete(JIRA_STORAGE_KEY)
