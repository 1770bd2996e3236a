"""
Data models for time entries, Jira issues and report rows.

Records received from the remote APIs stay as TypedDicts; the aggregated
report row is a dataclass since it is built and mutated locally.
"""

from dataclasses import dataclass
from typing import TypedDict

from services.durations import format_ms, parse_timestamp


class ProjectRef(TypedDict):
    name: str


class TaskRef(TypedDict):
    name: str


class TimeEntry(TypedDict):
    """One tracked span of work, flattened from Clockify's timeInterval."""
    id: str
    description: str
    start: str | None
    end: str | None
    duration: str | None
    project: ProjectRef
    task: TaskRef | None


class JiraProject(TypedDict):
    key: str
    name: str


class JiraIssueFields(TypedDict):
    summary: str
    project: JiraProject


class JiraIssue(TypedDict):
    """Assigned Jira issue, trimmed to what the selection list needs."""
    id: str
    key: str
    fields: JiraIssueFields


class ClockifyWorkspace(TypedDict):
    id: str
    name: str


class ClockifyUser(TypedDict, total=False):
    id: str
    name: str
    email: str
    activeWorkspace: str
    defaultWorkspace: str
    status: str


@dataclass
class AggregatedTask:
    """All entries of one date bucket that share a grouping key."""

    key: str
    display_description: str
    task_token: str
    total_duration_ms: int = 0
    first_start: str | None = None
    last_end: str | None = None
    entry_count: int = 0

    @property
    def formatted_duration(self) -> str:
        return format_ms(self.total_duration_ms)

    def add(self, duration_ms: int, start: str | None, end: str | None) -> None:
        """Fold one more entry into the running total."""
        self.total_duration_ms += duration_ms
        self.entry_count += 1
        if parse_timestamp(start) is not None and (
            self.first_start is None or _is_later(self.first_start, start)
        ):
            self.first_start = start
        if _is_later(end, self.last_end):
            self.last_end = end

    def render(self) -> str:
        task_ref = f" [{self.task_token}]" if self.task_token else ""
        return f"- {self.display_description} ({self.formatted_duration}){task_ref}"


def _is_later(candidate: str | None, current: str | None) -> bool:
    """True if candidate is a later instant than current. Unparseable candidates never win."""
    new = parse_timestamp(candidate)
    if new is None:
        return False
    old = parse_timestamp(current)
    if old is None:
        return True
    try:
        return new > old
    except TypeError:
        # naive and aware timestamps cannot be ordered
        return False
