"""
Action entry point.

Reads the action inputs, builds one GitHub client per identity, runs the
promotion lifecycle and maps the outcome to a process exit code.
"""

import asyncio
import sys

from autopromote.actions import set_failed, set_output
from autopromote.async_client import AsyncGitHubClient
from autopromote.config import ActionInputs
from autopromote.exceptions import ConfigurationError, StageError
from autopromote.logging import configure_logging, get_logger, mask_sensitive_data
from autopromote.orchestrator import ClientPair, PromotionOrchestrator, PromotionRequest

logger = get_logger()


def build_clients(inputs: ActionInputs) -> ClientPair:
    """Create the action and artifact clients for ``inputs``."""
    return ClientPair(
        action=AsyncGitHubClient(
            token=inputs.action_token,
            owner=inputs.owner,
            repo=inputs.repo,
            base_url=inputs.api_url,
            identity="action",
        ),
        artifact=AsyncGitHubClient(
            token=inputs.artifact_token,
            owner=inputs.owner,
            repo=inputs.repo,
            base_url=inputs.api_url,
            identity="artifact",
        ),
    )


async def run(inputs: ActionInputs, orchestrator: PromotionOrchestrator | None = None) -> int:
    """
    Run one promotion and return the process exit code.

    Args:
        inputs: Validated action inputs
        orchestrator: Preconfigured orchestrator (default: one built from ``inputs``)
    """
    logger.info("GitHub owner: %s GitHub repo: %s", inputs.owner, inputs.repo)
    logger.info("BRANCH REF: %s", inputs.head)

    if orchestrator is None:
        orchestrator = PromotionOrchestrator(build_clients(inputs))

    try:
        result = await orchestrator.run(PromotionRequest.from_inputs(inputs))
    except StageError as e:
        if e.pr_number is not None:
            set_output("pull-request-number", str(e.pr_number))
        if e.state is not None:
            set_output("mergeable-state", e.state)
        return set_failed(mask_sensitive_data(str(e)))
    finally:
        await orchestrator.clients.close()

    set_output("pull-request-number", str(result.pull_request.number))
    set_output("mergeable-state", result.state.value)
    logger.info("Pull request #%d merged", result.pull_request.number)
    return 0


def main() -> int:
    """Console entry point."""
    configure_logging()

    try:
        inputs = ActionInputs.from_env()
    except ConfigurationError as e:
        return set_failed(e.message)

    try:
        return asyncio.run(run(inputs))
    except Exception as e:
        logger.exception("Unexpected failure")
        return set_failed(mask_sensitive_data(f"Action failed: {e}"))


if __name__ == "__main__":
    sys.exit(main())
