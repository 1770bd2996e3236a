"""Per-request audit trail for the API, stored in the local SQLite database."""

import time
import uuid
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone

from core.config import DB_PATH
from core.database import get_connection, insert_request_log


def _utc_now() -> str:
    return datetime.now(timezone.utc).isoformat()


@dataclass
class RequestLog:
    """What one standup/Clockify/Jira call received and how it ended."""

    endpoint: str = ""
    method: str = ""
    client_ip: str | None = None
    workspace_id: str | None = None
    entries_received: int | None = None
    tasks_reported: int | None = None
    status_code: int = 0
    error_code: str | None = None
    error_message: str | None = None
    processing_time_ms: int = 0
    details: list[tuple[str, str]] = field(default_factory=list)
    request_id: str = field(default_factory=lambda: uuid.uuid4().hex)
    timestamp: str = field(default_factory=_utc_now)
    started_at: float = field(default_factory=time.monotonic, repr=False)

    def finish(self, status_code: int) -> None:
        self.status_code = status_code
        self.processing_time_ms = int((time.monotonic() - self.started_at) * 1000)

    def as_row(self) -> dict:
        row = asdict(self)
        del row["details"], row["started_at"]
        return row


def log_request(log: RequestLog, db_path=DB_PATH) -> None:
    conn = get_connection(db_path)
    try:
        insert_request_log(conn, log.as_row(), log.details)
    finally:
        conn.close()
