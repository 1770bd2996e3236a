"""Jira issue lookup endpoint."""

import asyncio

from fastapi import APIRouter, HTTPException, Request, status

from api.dependencies import get_client_ip, to_http_exception
from api.logging import RequestLog, log_request
from api.models.requests import JiraCredentialsRequest, JiraIssueModel
from api.models.responses import ErrorCodes
from core.credentials import JiraSettings
from services.jira import fetch_assigned_issues

router = APIRouter(prefix="/v1/jira")


@router.post("/issues", response_model=list[JiraIssueModel])
async def list_jira_issues_endpoint(request: Request, body: JiraCredentialsRequest):
    """
    List Jira issues assigned to the caller that are in progress or up next.

    Credentials are used for this one call and never stored server-side.
    """
    request_log = RequestLog(
        endpoint="/v1/jira/issues",
        method="POST",
        client_ip=get_client_ip(request),
    )

    try:
        settings = JiraSettings(email=body.email, api_token=body.token, domain=body.domain)
        if not settings.is_connected():
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail={
                    "error": "Missing required parameters: email, token, domain",
                    "code": ErrorCodes.INVALID_REQUEST,
                    "details": [],
                },
            )

        issues = await asyncio.to_thread(fetch_assigned_issues, settings)
        request_log.finish(200)
        return [JiraIssueModel(**issue) for issue in issues]

    except Exception as e:
        raise to_http_exception(e, request_log)

    finally:
        try:
            log_request(request_log)
        except Exception:
            pass
