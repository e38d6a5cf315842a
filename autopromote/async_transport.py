"""
Async HTTP Transport for autopromote.

Handles async HTTP communication with the GitHub REST API: token
authentication, request/response logging and error handling using the httpx
async client.
"""

import time
from typing import Any

import httpx

from autopromote.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    GitHubError,
    NotFoundError,
    RateLimitedError,
    ServerError,
    ValidationError,
)
from autopromote.logging import log_http_request, log_http_response

GITHUB_API_VERSION = "2022-11-28"

# Seconds to wait when a rate-limit response has no usable Retry-After.
DEFAULT_RETRY_AFTER = 60

_STATUS_ERRORS: dict[int, type[GitHubError]] = {
    401: AuthenticationError,
    403: AuthorizationError,
    404: NotFoundError,
    405: ConflictError,  # merge refused: not mergeable
    409: ConflictError,  # merge refused: head moved
}


def invalid_response(what: str, error: Exception) -> ServerError:
    """Error for a successful response whose body cannot be used."""
    return ServerError("INVALID_RESPONSE", f"Unexpected response to {what}: {error!r}")


class AsyncHTTPTransport:
    """
    Async HTTP transport layer bound to a single GitHub token.

    Handles:
    - Bearer token authentication and GitHub API version headers
    - Masked DEBUG logging of every request and response
    - Error response parsing into typed exceptions

    Every call is a single attempt. Callers decide whether to poll again.
    """

    def __init__(
        self,
        base_url: str,
        token: str,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Initialize async HTTP transport.

        Args:
            base_url: Base URL for API requests (e.g., "https://api.github.com")
            token: GitHub token used for every request made by this transport
            timeout: Request timeout in seconds
            transport: Optional httpx transport (used by tests to stub the network)
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout,
            transport=transport,
            headers={
                "Accept": "application/vnd.github+json",
                "Authorization": f"Bearer {token}",
                "X-GitHub-Api-Version": GITHUB_API_VERSION,
                "User-Agent": "autopromote",
            },
        )

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()

    async def __aenter__(self) -> "AsyncHTTPTransport":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    async def request(
        self,
        method: str,
        path: str,
        params: dict[str, Any] | None = None,
        body: dict[str, Any] | None = None,
    ) -> Any:
        """
        Make an authenticated request.

        Args:
            method: HTTP method
            path: API path (e.g., "/repos/octo/hello/pulls")
            params: Query parameters
            body: JSON request body (for POST/PUT)

        Returns:
            Parsed JSON response, or None for empty responses

        Raises:
            GitHubError: On API errors or connection failures
        """
        log_http_request(method, f"{self.base_url}{path}", body=body)
        started = time.monotonic()

        try:
            response = await self._client.request(method, path, params=params, json=body)
        except httpx.RequestError as e:
            raise ServerError("CONNECTION_ERROR", str(e)) from e

        elapsed_ms = (time.monotonic() - started) * 1000

        if response.status_code >= 400:
            log_http_response(response.status_code, str(response.url), response.text, elapsed_ms)
            raise self._parse_error_response(response)

        try:
            data = response.json() if response.content else None
        except ValueError as e:
            log_http_response(response.status_code, str(response.url), response.text, elapsed_ms)
            raise invalid_response(f"{method} {path}", e) from e
        log_http_response(response.status_code, str(response.url), data, elapsed_ms)
        return data

    def _parse_error_response(self, response: httpx.Response) -> GitHubError:
        """
        Map a GitHub error response onto the exception hierarchy.

        ``code`` is ``HTTP_<status>`` except for rate limits, which GitHub
        signals either with 429 or with 403 and an exhausted quota header.
        """
        try:
            data = response.json()
        except ValueError:
            data = None
        if not isinstance(data, dict):
            data = {}

        message = data.get("message") or f"HTTP {response.status_code}"
        details = [
            e.get("message") or e.get("code", "") if isinstance(e, dict) else str(e)
            for e in data.get("errors") or []
        ]
        if details:
            message = f"{message} ({'; '.join(details)})"

        status = response.status_code
        request_id = response.headers.get("X-GitHub-Request-Id")

        if status == 429 or (status == 403 and response.headers.get("X-RateLimit-Remaining") == "0"):
            retry_after = response.headers.get("Retry-After", "")
            return RateLimitedError(
                "RATE_LIMITED",
                message,
                int(retry_after) if retry_after.isdigit() else DEFAULT_RETRY_AFTER,
                request_id,
            )

        if status in _STATUS_ERRORS:
            error_class = _STATUS_ERRORS[status]
        elif status >= 500:
            error_class = ServerError
        else:
            error_class = ValidationError
        return error_class(f"HTTP_{status}", message, request_id)
