"""Standup report endpoints."""

import asyncio
from datetime import datetime

from fastapi import APIRouter, Depends, Request

from api.dependencies import clockify_api_key, get_client_ip, to_http_exception
from api.logging import RequestLog, log_request
from api.models.requests import ClockifyStandupRequest, GenerateStandupRequest
from api.models.responses import StandupResponse
from core.validation import parse_time_entries_payload
from services.clockify import fetch_time_entries
from services.standup import build_standup_report

router = APIRouter(prefix="/v1")


def count_report_tasks(report: str) -> int:
    return sum(1 for line in report.splitlines() if line.startswith("- "))


def _write_log(request_log: RequestLog) -> None:
    try:
        log_request(request_log)
    except Exception:
        # Don't fail the request if logging fails
        pass


@router.post("/standup/generate", response_model=StandupResponse)
async def generate_standup_endpoint(request: Request, body: GenerateStandupRequest):
    """
    Generate a standup report from time entries supplied in the request.

    Accepts a list of entries or a Clockify export ({"timeEntriesList": [...]}).
    """
    request_log = RequestLog(
        endpoint="/v1/standup/generate",
        method="POST",
        client_ip=get_client_ip(request),
    )

    try:
        entries = parse_time_entries_payload(body.time_entries)
        request_log.entries_received = len(entries)

        now = body.now or datetime.now().astimezone()
        report = build_standup_report(entries, now)

        request_log.tasks_reported = count_report_tasks(report)
        request_log.finish(200)
        return StandupResponse(
            report=report,
            entry_count=len(entries),
            generated_at=now.isoformat(),
        )

    except Exception as e:
        raise to_http_exception(e, request_log)

    finally:
        _write_log(request_log)


@router.post("/standup/clockify", response_model=StandupResponse)
async def clockify_standup_endpoint(
    request: Request,
    body: ClockifyStandupRequest,
    api_key: str = Depends(clockify_api_key),
):
    """
    Fetch the caller's Clockify entries and generate a standup report.

    Selected Jira issues are echoed back unchanged; they are not written into
    the report text.
    """
    request_log = RequestLog(
        endpoint="/v1/standup/clockify",
        method="POST",
        client_ip=get_client_ip(request),
        workspace_id=body.workspace_id,
    )

    try:
        now = body.now or datetime.now().astimezone()

        # requests is blocking; keep it off the event loop
        entries = await asyncio.to_thread(
            fetch_time_entries,
            api_key,
            body.workspace_id,
            body.start,
            body.end,
            now,
            True,
        )
        request_log.entries_received = len(entries)

        report = build_standup_report(entries, now)

        request_log.tasks_reported = count_report_tasks(report)
        request_log.finish(200)
        return StandupResponse(
            report=report,
            entry_count=len(entries),
            generated_at=now.isoformat(),
            jira_issues=body.jira_issues,
        )

    except Exception as e:
        raise to_http_exception(e, request_log)

    finally:
        _write_log(request_log)
