"""FastAPI dependencies and shared error translation."""

from fastapi import Header, HTTPException, Request, status

from api.logging import RequestLog
from api.models.responses import ErrorCodes
from core.http import ApiError


async def clockify_api_key(x_api_key: str = Header("", alias="X-Api-Key")) -> str:
    """
    Clockify API key from the X-Api-Key header; forwarded to Clockify as-is.

    Raises:
        HTTPException: 401 if the header is missing or blank
    """
    if not x_api_key.strip():
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail={
                "error": "Missing Clockify API key",
                "code": ErrorCodes.UNAUTHORIZED,
                "details": ["Send your Clockify API key in the X-Api-Key header"],
            },
        )
    return x_api_key.strip()


def get_client_ip(request: Request) -> str:
    """Extract client IP from request, handling proxies."""
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.client.host if request.client else "unknown"


def to_http_exception(exc: Exception, request_log: RequestLog) -> HTTPException:
    """
    Record an exception on the request log and translate it to an HTTPException.

    ValueError -> 422, ApiError -> 502, anything else -> 500.
    """
    if isinstance(exc, HTTPException):
        request_log.finish(exc.status_code)
        if isinstance(exc.detail, dict):
            request_log.error_code = exc.detail.get("code")
            request_log.error_message = exc.detail.get("error")
            for detail in exc.detail.get("details", []):
                request_log.details.append(("validation_error", detail))
        else:
            request_log.error_message = str(exc.detail)
        return exc

    if isinstance(exc, ValueError):
        # Validation errors arrive as one problem per line
        details = [line.strip() for line in str(exc).split("\n") if line.strip()]
        request_log.finish(status.HTTP_422_UNPROCESSABLE_ENTITY)
        request_log.error_code = ErrorCodes.VALIDATION_ERROR
        request_log.error_message = str(exc)
        for detail in details:
            request_log.details.append(("validation_error", detail))
        return HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail={
                "error": "Time entry validation failed" if len(details) > 1 else str(exc),
                "code": ErrorCodes.VALIDATION_ERROR,
                "details": details,
            },
        )

    if isinstance(exc, ApiError):
        request_log.finish(status.HTTP_502_BAD_GATEWAY)
        request_log.error_code = ErrorCodes.UPSTREAM_ERROR
        request_log.error_message = str(exc)
        request_log.details.append(("upstream_error", f"status={exc.status_code}"))
        return HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail={
                "error": str(exc),
                "code": ErrorCodes.UPSTREAM_ERROR,
                "details": [f"Upstream status: {exc.status_code}"] if exc.status_code else [],
            },
        )

    request_log.finish(status.HTTP_500_INTERNAL_SERVER_ERROR)
    request_log.error_code = ErrorCodes.INTERNAL_ERROR
    request_log.error_message = str(exc)
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail={
            "error": "Internal server error",
            "code": ErrorCodes.INTERNAL_ERROR,
            "details": [],
        },
    )
