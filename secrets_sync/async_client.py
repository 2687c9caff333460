"""
secrets-sync async client.

Provides the async interface to the narrow slice of the GitHub API used to
manage secrets and variables.
"""

from typing import TYPE_CHECKING, Any

import httpx

from secrets_sync.async_clients import (
    AsyncReposClient,
    AsyncSecretsClient,
    AsyncVariablesClient,
)
from secrets_sync.async_transport import AsyncHTTPTransport
from secrets_sync.transport import RetryConfig

if TYPE_CHECKING:
    from secrets_sync.config import Config


class AsyncGitHubClient:
    """
    Async client for the GitHub secrets and variables API.

    Aggregates the async resource clients over one shared transport.

    Example:
        ```python
        import asyncio
        from secrets_sync import AsyncGitHubClient

        async def main():
            async with AsyncGitHubClient(token="ghp_...") as client:
                repo = await client.repos.get("octo-org/hello-world")
                key = await client.secrets.get_public_key(repo)

        asyncio.run(main())
        ```
    """

    DEFAULT_BASE_URL = "https://api.github.com"
    DEFAULT_TIMEOUT = 30.0

    def __init__(
        self,
        token: str,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        retry_config: RetryConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Initialize the async client.

        Args:
            token: GitHub token
            base_url: Base URL for API requests (default: https://api.github.com)
            timeout: Request timeout in seconds (default: 30.0)
            retry_config: Configuration for retry behavior (optional)
            transport: Optional httpx transport, for tests
        """
        self.base_url = base_url
        self.timeout = timeout

        self._transport = AsyncHTTPTransport(
            base_url=base_url,
            token=token,
            timeout=timeout,
            retry_config=retry_config,
            transport=transport,
        )

        self.repos = AsyncReposClient(self._transport)
        self.secrets = AsyncSecretsClient(self._transport)
        self.variables = AsyncVariablesClient(self._transport)

    @classmethod
    def from_config(
        cls,
        config: "Config",
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> "AsyncGitHubClient":
        """
        Create a client for a run configuration.

        Args:
            config: Run configuration (token, API URL and retry count are used)
            transport: Optional httpx transport, for tests

        Returns:
            Configured AsyncGitHubClient instance
        """
        return cls(
            token=config.github_token,
            base_url=config.github_api_url,
            retry_config=RetryConfig(max_retries=config.retries),
            transport=transport,
        )

    @property
    def transport(self) -> AsyncHTTPTransport:
        """Get the underlying async HTTP transport (for advanced use cases)."""
        return self._transport

    async def close(self) -> None:
        """Close the client and release resources."""
        await self._transport.close()

    async def __aenter__(self) -> "AsyncGitHubClient":
        """Async context manager entry."""
        return self

    async def __aexit__(self, *args: Any) -> None:
        """Async context manager exit - closes the client."""
        await self.close()
