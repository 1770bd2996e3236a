"""
Clockify to Standup HTTP service.

Run with `uv run standup-api` or `uvicorn api.main:app`.
"""

import warnings
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from api.models.responses import ErrorCodes, ErrorResponse
from api.routes import clockify_router, health_router, jira_router, standup_router
from core.config import API_CORS_ORIGINS, API_DEBUG, API_HOST, API_PORT, API_VERSION, DB_PATH

ROUTERS = (health_router, standup_router, clockify_router, jira_router)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Settings and the request log both live in the SQLite file
    if not DB_PATH.exists():
        warnings.warn(f"No database at {DB_PATH}; run scripts/init_db.py to enable request logging")
    yield


async def unhandled_error(request: Request, exc: Exception) -> JSONResponse:
    """Anything the routes did not map becomes a 500 in the usual error body."""
    body = ErrorResponse(error="Internal server error", code=ErrorCodes.INTERNAL_ERROR, details=[])
    return JSONResponse(status_code=500, content=body.model_dump())


def create_app() -> FastAPI:
    application = FastAPI(
        title="Clockify to Standup API",
        description="Daily standup reports from Clockify time entries, plus assigned Jira issues",
        version=API_VERSION,
        debug=API_DEBUG,
        lifespan=lifespan,
    )

    if API_DEBUG:
        application.add_middleware(
            CORSMiddleware,
            allow_origins=API_CORS_ORIGINS,
            allow_methods=["GET", "POST"],
            allow_headers=["*"],
        )

    application.add_exception_handler(Exception, unhandled_error)
    for router in ROUTERS:
        application.include_router(router)
    return application


app = create_app()


def run() -> None:
    import uvicorn

    uvicorn.run("api.main:app", host=API_HOST, port=API_PORT, reload=API_DEBUG)


if __name__ == "__main__":
    run()
