"""Clockify lookup endpoints."""

import asyncio

from fastapi import APIRouter, Depends, Request

from api.dependencies import clockify_api_key, get_client_ip, to_http_exception
from api.logging import RequestLog, log_request
from api.models.responses import WorkspaceResponse
from services.clockify import fetch_workspaces

router = APIRouter(prefix="/v1/clockify")


@router.get("/workspaces", response_model=list[WorkspaceResponse])
async def list_workspaces_endpoint(request: Request, api_key: str = Depends(clockify_api_key)):
    """List the workspaces the API key can see."""
    request_log = RequestLog(
        endpoint="/v1/clockify/workspaces",
        method="GET",
        client_ip=get_client_ip(request),
    )

    try:
        workspaces = await asyncio.to_thread(fetch_workspaces, api_key)
        request_log.finish(200)
        return [WorkspaceResponse(**ws) for ws in workspaces]

    except Exception as e:
        raise to_http_exception(e, request_log)

    finally:
        try:
            log_request(request_log)
        except Exception:
            pass
