"""
Shared HTTP session for the Clockify and Jira REST APIs.
"""

from typing import Any

import requests

from core.config import REQUEST_TIMEOUT_SECONDS

_session: requests.Session | None = None


class ApiError(RuntimeError):
    """A remote API call failed (transport error or non-2xx response)."""

    def __init__(self, message: str, status_code: int | None = None, details: Any = None):
        super().__init__(message)
        self.status_code = status_code
        self.details = details


def get_session() -> requests.Session:
    """Get or create the shared requests session (lazy initialization)."""
    global _session
    if _session is None:
        _session = requests.Session()
    return _session


def _decode_json(response: requests.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return {}


def make_request(
    method: str,
    url: str,
    headers: dict[str, str] | None = None,
    json: Any = None,
    params: dict[str, Any] | None = None,
    auth: tuple[str, str] | None = None,
) -> Any:
    """
    Send a request and return the decoded JSON body.

    Raises:
        ApiError: on connection failure or a non-2xx status. The message is the
            API's own "message" field when it sends one.
    """
    request_headers = {"Content-Type": "application/json", "Accept": "application/json"}
    if headers:
        request_headers.update(headers)

    try:
        response = get_session().request(
            method,
            url,
            headers=request_headers,
            json=json,
            params=params,
            auth=auth,
            timeout=REQUEST_TIMEOUT_SECONDS,
        )
    except requests.RequestException as e:
        raise ApiError(f"Request to {url} failed: {e}") from e

    data = _decode_json(response)

    if not response.ok:
        message = data.get("message") if isinstance(data, dict) else None
        raise ApiError(
            message or f"API error ({response.status_code}): {response.reason}",
            status_code=response.status_code,
            details=data,
        )

    return data
