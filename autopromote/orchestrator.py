"""
Promotion orchestrator.

Runs one pull request lifecycle: create, label, approve, wait for a decidable
mergeable state, then merge if clean. Every stage failure except labeling
ends the run.
"""

import asyncio
import functools
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from autopromote.config import DEFAULT_BASE_BRANCH, ActionInputs
from autopromote.exceptions import ConfigurationError, ErrorKind, StageError
from autopromote.lifecycle import (
    MergeStateWatcher,
    RetryBudget,
    approve_pull_request,
    attach_labels,
    create_pull_request,
    merge_if_clean,
)
from autopromote.lifecycle.watcher import Sleep
from autopromote.logging import log_stage_event
from autopromote.types.pulls import MergeResult, MergeState, PullRequest

if TYPE_CHECKING:
    from autopromote.async_client import AsyncGitHubClient


@dataclass(frozen=True)
class ClientPair:
    """
    The two credential scopes of a run.

    ``artifact`` opens and labels the pull request; ``action`` approves,
    polls and merges it. They must be different identities because GitHub
    does not let the author of a pull request approve it.
    """

    action: "AsyncGitHubClient"
    artifact: "AsyncGitHubClient"

    def __post_init__(self) -> None:
        if self.action is self.artifact:
            raise ConfigurationError(
                "action and artifact clients must be separate identities"
            )

    async def close(self) -> None:
        await self.action.close()
        await self.artifact.close()


@dataclass(frozen=True)
class PromotionRequest:
    """What to promote, as handed over by the configuration provider."""

    head: str
    base: str = DEFAULT_BASE_BRANCH
    title: str = ""
    body: str = ""

    @classmethod
    def from_inputs(cls, inputs: ActionInputs) -> "PromotionRequest":
        return cls(head=inputs.head, base=inputs.base, title=inputs.title, body=inputs.body)


@dataclass(frozen=True)
class PromotionResult:
    """Outcome of a successful run."""

    pull_request: PullRequest
    state: MergeState
    merge_result: MergeResult
    poll_attempts: int
    label_outcome: str  # "succeeded", "failed", "abandoned"


class PromotionOrchestrator:
    """
    Sequences the lifecycle stages for one pull request.

    Example:
        ```python
        clients = ClientPair(
            action=AsyncGitHubClient(action_token, owner, repo, identity="action"),
            artifact=AsyncGitHubClient(artifact_token, owner, repo, identity="artifact"),
        )
        result = await PromotionOrchestrator(clients).run(
            PromotionRequest(head="generated/manifests")
        )
        ```
    """

    DEFAULT_LABEL_TIMEOUT = 30.0

    def __init__(
        self,
        clients: ClientPair,
        budget: RetryBudget | None = None,
        sleep: Sleep = asyncio.sleep,
        label_timeout: float = DEFAULT_LABEL_TIMEOUT,
    ) -> None:
        """
        Initialize the orchestrator.

        Args:
            clients: Action and artifact clients
            budget: Merge-state polling limits (default: 25 attempts, 60 seconds apart)
            sleep: Awaitable delay used between polls (default: asyncio.sleep)
            label_timeout: Seconds to wait for labeling once the run is otherwise finished
        """
        self.clients = clients
        self.budget = budget or RetryBudget()
        self.label_timeout = label_timeout
        self._sleep = sleep
        self._reported_label_tasks: set[asyncio.Task[object]] = set()

    async def run(self, request: PromotionRequest) -> PromotionResult:
        """
        Run the lifecycle to completion.

        Returns:
            PromotionResult once the pull request is merged

        Raises:
            StageError: The first fatal stage failure, unchanged
        """
        try:
            pull_request = await create_pull_request(
                self.clients.artifact,
                head=request.head,
                base=request.base,
                title=request.title,
                body=request.body,
            )
        except StageError as e:
            self._log_failure(e)
            raise

        number = pull_request.number
        label_task = asyncio.create_task(
            attach_labels(self.clients.artifact, number), name=f"label-pr-{number}"
        )
        label_task.add_done_callback(functools.partial(self._report_label_failure, number))

        cancelled = False
        try:
            await approve_pull_request(self.clients.action, number)

            watcher = MergeStateWatcher(self.clients.action, self.budget, self._sleep)
            state = await watcher.wait_for_decidable_state(number)

            merge_result = await merge_if_clean(self.clients.action, number, state)
        except asyncio.CancelledError:
            cancelled = True
            raise
        except StageError as e:
            self._log_failure(e)
            raise
        finally:
            label_outcome = await self._settle_label_task(label_task, number, abandon=cancelled)

        return PromotionResult(
            pull_request=pull_request,
            state=state,
            merge_result=merge_result,
            poll_attempts=watcher.attempts,
            label_outcome=label_outcome,
        )

    def _report_label_failure(self, number: int, task: "asyncio.Task[object]") -> None:
        """Log a failed labeling task once, as soon as it finishes."""
        if task in self._reported_label_tasks or task.cancelled() or task.exception() is None:
            return
        self._reported_label_tasks.add(task)
        log_stage_event(
            "label",
            "failed",
            str(task.exception()),
            logging.WARNING,
            pr_number=number,
            kind=ErrorKind.LABEL.value,
        )

    async def _settle_label_task(
        self, task: "asyncio.Task[object]", number: int, abandon: bool = False
    ) -> str:
        """Wait for (or cancel) the labeling task and return how it ended."""
        if not task.done():
            if not abandon:
                await asyncio.wait({task}, timeout=self.label_timeout)
            if not task.done():
                task.cancel()
                await asyncio.wait({task})

        if task.cancelled():
            log_stage_event(
                "label",
                "abandoned",
                f"Abandoned labeling of pull request #{number}",
                logging.WARNING,
                pr_number=number,
            )
            return "abandoned"

        if task.exception() is None:
            return "succeeded"

        # The done callback may still be queued; logging here is idempotent.
        self._report_label_failure(number, task)
        return "failed"

    def _log_failure(self, error: StageError) -> None:
        log_stage_event(
            error.kind.stage,
            "failed",
            error.message,
            logging.ERROR,
            pr_number=error.pr_number,
            state=error.state,
            kind=error.kind.value,
        )
