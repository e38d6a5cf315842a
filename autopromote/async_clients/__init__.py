"""autopromote async resource clients."""

from autopromote.async_clients.issues import AsyncIssuesClient
from autopromote.async_clients.pulls import AsyncPullsClient
from autopromote.async_clients.reviews import AsyncReviewsClient

__all__ = [
    "AsyncIssuesClient",
    "AsyncPullsClient",
    "AsyncReviewsClient",
]
