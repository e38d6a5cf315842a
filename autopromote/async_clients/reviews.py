"""Async reviews resource client."""

from typing import TYPE_CHECKING

from autopromote.async_transport import invalid_response
from autopromote.types.pulls import Review

if TYPE_CHECKING:
    from autopromote.async_transport import AsyncHTTPTransport


class AsyncReviewsClient:
    """Async client for pull request review operations."""

    def __init__(self, transport: "AsyncHTTPTransport", owner: str, repo: str) -> None:
        """
        Initialize the async reviews client.

        Args:
            transport: Async HTTP transport for making requests
            owner: Repository owner (user or organization)
            repo: Repository name
        """
        self.transport = transport
        self.owner = owner
        self.repo = repo

    async def create(
        self,
        number: int,
        event: str,
        body: str | None = None,
    ) -> Review:
        """
        Submit a review for a pull request.

        Args:
            number: The pull request number
            event: "APPROVE", "REQUEST_CHANGES", or "COMMENT"
            body: Optional review comment

        Returns:
            Review object with review_id
        """
        request_body: dict[str, str] = {"event": event}
        if body:
            request_body["body"] = body

        path = f"/repos/{self.owner}/{self.repo}/pulls/{number}/reviews"
        data = await self.transport.request("POST", path, body=request_body)

        try:
            return Review(
                review_id=data["id"],
                pr_number=number,
                reviewer=(data.get("user") or {}).get("login", ""),
                state=data.get("state", ""),
            )
        except (KeyError, TypeError, AttributeError) as e:
            raise invalid_response(f"POST {path}", e) from e
