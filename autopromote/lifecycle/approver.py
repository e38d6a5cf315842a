"""Approves the promotion pull request under the action identity."""

from typing import TYPE_CHECKING

from autopromote.exceptions import ApprovalError, GitHubError
from autopromote.logging import log_stage_event
from autopromote.types.pulls import Review

if TYPE_CHECKING:
    from autopromote.async_client import AsyncGitHubClient


async def approve_pull_request(client: "AsyncGitHubClient", number: int) -> Review:
    """
    Submit a single APPROVE review. Not retried.

    Raises:
        ApprovalError: If GitHub rejects or fails the review
    """
    log_stage_event("approve", "started", "Approving pull request", pr_number=number)

    try:
        review = await client.reviews.create(number, event="APPROVE")
    except GitHubError as e:
        raise ApprovalError(f"Failed to approve pull request: {e}", pr_number=number) from e

    log_stage_event(
        "approve",
        "succeeded",
        f"Pull request #{number} approved by {review.reviewer or 'action identity'}",
        pr_number=number,
    )
    return review
