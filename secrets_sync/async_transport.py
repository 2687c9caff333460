"""
Async HTTP Transport for secrets-sync.

Handles async HTTP communication with the GitHub REST API: token auth,
automatic retry of rate-limited and failed requests, and error handling
using httpx async client.
"""

import time
from typing import Any

import httpx

from secrets_sync.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    NotFoundError,
    RateLimitedError,
    SecretsSyncError,
    ServerError,
    ValidationError,
)
from secrets_sync.logging import log_http_request, log_http_response
from secrets_sync.transport import RetryConfig, call_with_retry

GITHUB_MEDIA_TYPE = "application/vnd.github+json"
GITHUB_API_VERSION = "2022-11-28"
DEFAULT_RETRY_AFTER = 60

_ABUSE_MARKERS = ("secondary rate limit", "abuse")


class AsyncHTTPTransport:
    """
    Async HTTP transport layer with authentication and retry logic.

    Handles:
    - Bearer token authentication and GitHub API headers
    - Retry of rate-limit, abuse-detection and server errors
    - Retry-After / X-RateLimit-Reset header respect
    - Error response parsing into typed exceptions
    """

    def __init__(
        self,
        base_url: str,
        token: str,
        timeout: float = 30.0,
        retry_config: RetryConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Initialize async HTTP transport.

        Args:
            base_url: Base URL for API requests (e.g., "https://api.github.com")
            token: Token used in the Authorization header
            timeout: Request timeout in seconds
            retry_config: Configuration for retry behavior
            transport: Optional httpx transport (tests pass a MockTransport)
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.retry_config = retry_config or RetryConfig()

        headers = {
            "Accept": GITHUB_MEDIA_TYPE,
            "X-GitHub-Api-Version": GITHUB_API_VERSION,
            "User-Agent": "secrets-sync",
        }
        if token:
            headers["Authorization"] = f"Bearer {token}"

        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout,
            headers=headers,
            transport=transport,
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
        Make a request with automatic retry.

        Args:
            method: HTTP method (GET, PUT, POST, PATCH, DELETE)
            path: API path (e.g., "/repos/octo/hello")
            params: Query parameters
            body: JSON request body

        Returns:
            Parsed JSON response, or None for empty responses

        Raises:
            SecretsSyncError: On API errors
        """
        async def make_request() -> Any:
            return await self._send(method, path, params, body)

        return await call_with_retry(
            make_request, self.retry_config, description=f"{method} {path}"
        )

    async def _send(
        self,
        method: str,
        path: str,
        params: dict[str, Any] | None,
        body: dict[str, Any] | None,
    ) -> Any:
        log_http_request(method, path, params, body)
        started = time.monotonic()
        try:
            response = await self._client.request(method, path, params=params, json=body)
        except httpx.RequestError as e:
            raise ServerError("CONNECTION_ERROR", f"{method} {path}: {e}") from e

        log_http_response(response.status_code, path, (time.monotonic() - started) * 1000)

        if response.status_code >= 400:
            raise self._parse_error_response(response)

        if response.status_code == 204 or not response.content:
            return None
        return response.json()

    def _parse_error_response(self, response: httpx.Response) -> SecretsSyncError:
        """
        Parse an error response into a typed exception.

        Args:
            response: HTTP response with error status

        Returns:
            Appropriate SecretsSyncError subclass
        """
        try:
            data = response.json()
        except ValueError:
            data = {}
        if not isinstance(data, dict):
            data = {}

        status_code = response.status_code
        message = data.get("message") or f"HTTP {status_code}"
        request_id = response.headers.get("x-github-request-id")

        if status_code == 429:
            return RateLimitedError(
                "RATE_LIMITED", message, self._retry_after(response), request_id
            )
        if status_code == 403:
            if response.headers.get("x-ratelimit-remaining") == "0":
                return RateLimitedError(
                    "RATE_LIMITED", message, self._retry_after(response), request_id
                )
            if any(marker in message.lower() for marker in _ABUSE_MARKERS):
                return RateLimitedError(
                    "ABUSE_DETECTED", message, self._retry_after(response), request_id
                )
            return AuthorizationError("FORBIDDEN", message, request_id)
        if status_code == 401:
            return AuthenticationError("UNAUTHORIZED", message, request_id)
        if status_code == 404:
            return NotFoundError("NOT_FOUND", message, request_id)
        if status_code == 409:
            return ConflictError("CONFLICT", message, request_id)
        if status_code >= 500:
            return ServerError("SERVER_ERROR", message, request_id)
        return ValidationError(f"HTTP_{status_code}", message, request_id)

    @staticmethod
    def _retry_after(response: httpx.Response) -> int:
        """Seconds to wait, from Retry-After or X-RateLimit-Reset."""
        retry_after = response.headers.get("retry-after")
        if retry_after is not None:
            try:
                return max(0, int(retry_after))
            except ValueError:
                pass

        reset = response.headers.get("x-ratelimit-reset")
        if reset is not None:
            try:
                return max(0, int(reset) - int(time.time()))
            except ValueError:
                pass

        return DEFAULT_RETRY_AFTER
