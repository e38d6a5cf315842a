"""Async issues resource client.

GitHub treats every pull request as an issue, so labels are applied through
the issues endpoints using the pull request number.
"""

from typing import TYPE_CHECKING

from autopromote.async_transport import invalid_response
from autopromote.types.pulls import Label

if TYPE_CHECKING:
    from autopromote.async_transport import AsyncHTTPTransport


class AsyncIssuesClient:
    """Async client for issue label operations."""

    def __init__(self, transport: "AsyncHTTPTransport", owner: str, repo: str) -> None:
        self.transport = transport
        self.owner = owner
        self.repo = repo

    async def add_labels(self, number: int, labels: list[str]) -> list[Label]:
        """
        Add labels to an issue or pull request.

        Labels that do not exist yet are created by GitHub.

        Args:
            number: The issue or pull request number
            labels: Label names to add

        Returns:
            All labels now on the issue
        """
        path = f"/repos/{self.owner}/{self.repo}/issues/{number}/labels"
        data = await self.transport.request("POST", path, body={"labels": labels})

        try:
            return [Label(name=label["name"], color=label.get("color", "")) for label in data or []]
        except (KeyError, TypeError, AttributeError) as e:
            raise invalid_response(f"POST {path}", e) from e
