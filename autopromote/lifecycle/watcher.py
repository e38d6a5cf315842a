"""
Merge-state watcher.

GitHub computes ``mergeable_state`` asynchronously after a pull request is
opened or updated, and keeps reporting pending values (unknown, unstable,
blocked, ...) while checks run. The watcher polls until the state is
decidable (clean or dirty) or the retry budget runs out.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING

from autopromote.exceptions import AmbiguousStateError, GitHubError, PollError
from autopromote.logging import log_stage_event
from autopromote.types.pulls import MergeState

if TYPE_CHECKING:
    from autopromote.async_client import AsyncGitHubClient

Sleep = Callable[[float], Awaitable[None]]


@dataclass(frozen=True)
class RetryBudget:
    """Polling limits for one watcher invocation."""

    max_attempts: int = 25
    delay: float = 60.0  # Fixed delay between attempts, in seconds

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        if self.delay < 0:
            raise ValueError("delay must not be negative")


class MergeStateWatcher:
    """
    Polls a pull request until its mergeable state is decidable.

    The first fetch happens immediately; the delay only separates attempts,
    so resolving on attempt k costs k-1 delays. The delay is an awaited
    ``asyncio.sleep`` so cancellation of the run interrupts it.

    Attributes:
        attempts: Fetches made so far
        last_state: Most recently observed mergeable state
    """

    def __init__(
        self,
        client: "AsyncGitHubClient",
        budget: RetryBudget | None = None,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        """
        Initialize the watcher.

        Args:
            client: Client for the action identity
            budget: Polling limits (default: 25 attempts, 60 seconds apart)
            sleep: Awaitable delay function (default: asyncio.sleep)
        """
        self.client = client
        self.budget = budget or RetryBudget()
        self._sleep = sleep
        self.attempts = 0
        self.last_state: str | None = None

    async def wait_for_decidable_state(self, number: int) -> MergeState:
        """
        Poll until the pull request reports clean or dirty.

        Args:
            number: Pull request number

        Returns:
            MergeState.CLEAN or MergeState.DIRTY

        Raises:
            PollError: If a fetch fails; fetch errors are never retried
            AmbiguousStateError: If every attempt in the budget saw a pending state
        """
        self.attempts = 0
        self.last_state = None

        while True:
            self.attempts += 1
            log_stage_event(
                "watch",
                "polling",
                "Attempting to get pull request state",
                logging.DEBUG,
                pr_number=number,
                attempt=self.attempts,
            )

            try:
                pull_request = await self.client.pulls.get(number)
            except GitHubError as e:
                raise PollError(
                    f"Failed getting merge state of pull request: {e}",
                    pr_number=number,
                    state=self.last_state,
                ) from e

            state = pull_request.mergeable_state
            self.last_state = state

            if MergeState.is_decidable(state):
                log_stage_event(
                    "watch",
                    "resolved",
                    f"Pull request #{number} mergeable state resolved: {state}",
                    pr_number=number,
                    state=state,
                    attempt=self.attempts,
                )
                return MergeState(state)

            if self.attempts >= self.budget.max_attempts:
                log_stage_event(
                    "watch",
                    "exhausted",
                    f"Pull request #{number} mergeable state is unknown after "
                    f"{self.attempts} attempts (last state: {state})",
                    logging.ERROR,
                    pr_number=number,
                    state=state,
                    attempt=self.attempts,
                )
                raise AmbiguousStateError(
                    f"Pull request #{number} mergeable state is unknown after "
                    f"{self.attempts} attempts, last state: {state}",
                    pr_number=number,
                    state=state,
                )

            if state == MergeState.UNSTABLE.value:
                reason = "checks still running"
            else:
                reason = "not ready"
            log_stage_event(
                "watch",
                "pending",
                f"Pull request #{number} is {state} ({reason}), waiting "
                f"{self.budget.delay:g} seconds and then trying again",
                pr_number=number,
                state=state,
                attempt=self.attempts,
            )
            await self._sleep(self.budget.delay)
