"""
autopromote async GitHub client.

Provides the async interface for the handful of GitHub REST operations the
promotion lifecycle needs, scoped to one repository and one token.
"""

from typing import Any

import httpx

from autopromote.async_clients import (
    AsyncIssuesClient,
    AsyncPullsClient,
    AsyncReviewsClient,
)
from autopromote.async_transport import AsyncHTTPTransport


class AsyncGitHubClient:
    """
    Async client for one repository under one GitHub identity.

    Aggregates the async resource clients. Create one instance per token;
    the orchestrator receives them as a pair.

    Example:
        ```python
        import asyncio
        from autopromote import AsyncGitHubClient

        async def main():
            async with AsyncGitHubClient(
                token="ghp_...",
                owner="octo-org",
                repo="manifests",
            ) as client:
                pr = await client.pulls.get(42)
                print(pr.mergeable_state)

        asyncio.run(main())
        ```
    """

    DEFAULT_BASE_URL = "https://api.github.com"
    DEFAULT_TIMEOUT = 30.0

    def __init__(
        self,
        token: str,
        owner: str,
        repo: str,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        identity: str = "default",
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Initialize the async GitHub client.

        Args:
            token: GitHub token for every request made through this client
            owner: Repository owner (user or organization)
            repo: Repository name
            base_url: Base URL for API requests (default: https://api.github.com)
            timeout: Request timeout in seconds (default: 30.0)
            identity: Label for this credential scope, used in logs
            transport: Optional httpx transport (used by tests to stub the network)
        """
        self.owner = owner
        self.repo = repo
        self.base_url = base_url
        self.timeout = timeout
        self.identity = identity

        self._transport = AsyncHTTPTransport(
            base_url=base_url,
            token=token,
            timeout=timeout,
            transport=transport,
        )

        self.pulls = AsyncPullsClient(self._transport, owner, repo)
        self.reviews = AsyncReviewsClient(self._transport, owner, repo)
        self.issues = AsyncIssuesClient(self._transport, owner, repo)

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
