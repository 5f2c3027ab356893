"""ABOUTME: HTTP client utilities - async HTTP GET with standard error handling."""

from typing import Optional, Dict, Any
import httpx

from .error_handling import (
    ERROR_FETCH_FAILED,
    ERROR_NOT_FOUND,
    ERROR_PROVIDER,
    ERROR_RATE_LIMITED,
    ERROR_UNAUTHORIZED,
    HTTPStatusCodes,
)

# Constants
DEFAULT_HTTP_TIMEOUT = 30.0


async def safe_http_get(
    url: str,
    headers: Optional[Dict[str, str]] = None,
    params: Optional[Dict[str, Any]] = None,
    timeout: float = DEFAULT_HTTP_TIMEOUT,
    follow_redirects: bool = True,
    transport: Optional[httpx.AsyncBaseTransport] = None
) -> httpx.Response:
    """Perform async HTTP GET with standard error handling.

    Raises httpx.HTTPStatusError for non-2xx responses and httpx.RequestError
    subclasses for transport failures.
    """
    async with httpx.AsyncClient(
        timeout=timeout,
        follow_redirects=follow_redirects,
        transport=transport
    ) as client:
        response = await client.get(url, headers=headers, params=params)
        response.raise_for_status()
        return response


def interpret_http_error(status_code: int) -> str:
    """Map HTTP status code to MCP error code."""
    if HTTPStatusCodes.is_rate_limit(status_code):
        return ERROR_RATE_LIMITED
    elif HTTPStatusCodes.is_auth_error(status_code):
        return ERROR_UNAUTHORIZED
    elif HTTPStatusCodes.is_not_found(status_code):
        return ERROR_NOT_FOUND
    elif HTTPStatusCodes.is_server_error(status_code):
        return ERROR_FETCH_FAILED
    else:
        return ERROR_PROVIDER


def get_retry_after_seconds(response: httpx.Response) -> Optional[int]:
    """Extract Retry-After header from response."""
    retry_after = response.headers.get("retry-after")
    if retry_after:
        try:
            return int(retry_after)
        except ValueError:
            return None
    return None


def get_error_message(response: httpx.Response) -> Optional[str]:
    """Extract the provider's 'message' field from an error body, if any."""
    try:
        body = response.json()
    except ValueError:
        return None
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return None


__all__ = [
    "DEFAULT_HTTP_TIMEOUT",
    "safe_http_get",
    "interpret_http_error",
    "get_retry_after_seconds",
    "get_error_message",
]
