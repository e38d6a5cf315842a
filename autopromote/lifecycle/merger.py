"""Merges the promotion pull request once its state allows it."""

from typing import TYPE_CHECKING

from autopromote.exceptions import GitHubError, MergeError, UnmergeableError
from autopromote.logging import log_stage_event
from autopromote.types.pulls import MergeResult, MergeState

if TYPE_CHECKING:
    from autopromote.async_client import AsyncGitHubClient


async def merge_if_clean(
    client: "AsyncGitHubClient",
    number: int,
    state: MergeState | str,
) -> MergeResult:
    """
    Merge the pull request if ``state`` is exactly clean.

    Args:
        client: Client for the action identity
        number: Pull request number
        state: State resolved by the merge-state watcher

    Returns:
        MergeResult from GitHub

    Raises:
        UnmergeableError: If the state is anything but clean; no merge is attempted
        MergeError: If the merge call fails
    """
    state = state.value if isinstance(state, MergeState) else state
    if state != MergeState.CLEAN.value:
        raise UnmergeableError(
            f"Can't merge pull request, merge state: {state}",
            pr_number=number,
            state=state,
        )

    log_stage_event("merge", "started", "Merging pull request", pr_number=number, state=state)

    try:
        result = await client.pulls.merge(number)
    except GitHubError as e:
        raise MergeError(f"Failed to merge pull request: {e}", pr_number=number, state=state) from e

    log_stage_event(
        "merge",
        "succeeded",
        f"Pull request #{number} merged as {result.sha or 'unknown sha'}",
        pr_number=number,
        state=state,
    )
    return result
