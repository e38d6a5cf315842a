"""Opens the promotion pull request under the artifact identity."""

from typing import TYPE_CHECKING

from autopromote.config import DEFAULT_BASE_BRANCH
from autopromote.exceptions import CreationError, GitHubError
from autopromote.logging import log_stage_event
from autopromote.types.pulls import PullRequest

if TYPE_CHECKING:
    from autopromote.async_client import AsyncGitHubClient


async def create_pull_request(
    client: "AsyncGitHubClient",
    head: str,
    base: str,
    title: str,
    body: str,
) -> PullRequest:
    """
    Open a pull request from ``head`` into ``base``.

    Maintainers are always allowed to modify the head branch.

    Args:
        client: Client for the artifact identity
        head: Branch containing the generated changes
        base: Target branch; "" means master
        title: Pull request title
        body: Pull request body

    Returns:
        The created PullRequest

    Raises:
        CreationError: If GitHub rejects or fails the request
    """
    base = base or DEFAULT_BASE_BRANCH
    log_stage_event("create", "started", f"Opening pull request {head} -> {base}")

    try:
        pull_request = await client.pulls.create(
            head=head,
            base=base,
            title=title,
            body=body,
            maintainer_can_modify=True,
        )
    except GitHubError as e:
        raise CreationError(f"failed to create pull request: {e}") from e

    log_stage_event(
        "create",
        "succeeded",
        f"Pull request #{pull_request.number} successfully created",
        pr_number=pull_request.number,
    )
    return pull_request
