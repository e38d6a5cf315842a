"""Marks the promotion pull request as generated and test-exempt."""

from typing import TYPE_CHECKING

from autopromote.exceptions import GitHubError, LabelError
from autopromote.logging import log_stage_event
from autopromote.types.pulls import Label

if TYPE_CHECKING:
    from autopromote.async_client import AsyncGitHubClient

PROMOTION_LABELS = ["manifest_generation", "skip_tests"]


async def attach_labels(client: "AsyncGitHubClient", number: int) -> list[Label]:
    """
    Apply the promotion labels to a pull request.

    Args:
        client: Client for the artifact identity
        number: Pull request number

    Returns:
        Labels now on the pull request

    Raises:
        LabelError: If GitHub rejects or fails the request
    """
    try:
        labels = await client.issues.add_labels(number, list(PROMOTION_LABELS))
    except GitHubError as e:
        raise LabelError(
            f"failed to create label for pull request: {e}", pr_number=number
        ) from e

    log_stage_event(
        "label",
        "succeeded",
        f"Labeled pull request #{number}: {', '.join(PROMOTION_LABELS)}",
        pr_number=number,
    )
    return labels
