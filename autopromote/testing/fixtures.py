"""
Pytest fixtures for autopromote testing.

Provides common fixtures for testing code built on the promotion lifecycle.
"""

from collections.abc import Generator

import pytest

from autopromote.lifecycle.watcher import RetryBudget
from autopromote.orchestrator import ClientPair
from autopromote.testing.mock import MockGitHubClient, RecordingSleep
from autopromote.types.pulls import Label, MergeResult, MergeState, PullRequest, Review


# ============================================================================
# Helper Functions
# ============================================================================


def create_mock_pull_request(
    number: int = 42,
    head: str = "generated/manifests",
    base: str = "master",
    title: str = "Update generated manifests",
    body: str | None = "Automated promotion",
    state: str = "open",
    mergeable_state: str = MergeState.UNKNOWN.value,
) -> PullRequest:
    """Build a PullRequest with sensible defaults."""
    return PullRequest(
        number=number,
        head=head,
        base=base,
        title=title,
        body=body,
        state=state,
        mergeable_state=mergeable_state,
        html_url=f"https://github.com/mock-owner/mock-repo/pull/{number}",
    )


def pull_request_payload(
    number: int = 42,
    mergeable_state: str | None = "unknown",
    head: str = "generated/manifests",
    base: str = "master",
) -> dict:
    """Build a GitHub REST pull request payload, as returned by the API."""
    return {
        "number": number,
        "state": "open",
        "title": "Update generated manifests",
        "body": "Automated promotion",
        "html_url": f"https://github.com/mock-owner/mock-repo/pull/{number}",
        "draft": False,
        "merged": False,
        "mergeable_state": mergeable_state,
        "head": {"ref": head, "sha": "a" * 40},
        "base": {"ref": base, "sha": "b" * 40},
    }


# ============================================================================
# Mock Client Fixtures
# ============================================================================


@pytest.fixture
def action_client() -> Generator[MockGitHubClient, None, None]:
    """Provide a MockGitHubClient for the action identity."""
    client = MockGitHubClient(identity="action", login="action-bot")
    yield client
    client.reset()


@pytest.fixture
def artifact_client() -> Generator[MockGitHubClient, None, None]:
    """Provide a MockGitHubClient for the artifact identity."""
    client = MockGitHubClient(identity="artifact", login="artifact-bot")
    yield client
    client.reset()


@pytest.fixture
def client_pair(
    action_client: MockGitHubClient, artifact_client: MockGitHubClient
) -> ClientPair:
    """
    Provide a ClientPair of mock clients.

    Example:
        ```python
        def test_promotion(client_pair, recording_sleep):
            client_pair.action.pulls.configure_mergeable_states(["clean"])
            orchestrator = PromotionOrchestrator(client_pair, sleep=recording_sleep)
            result = asyncio.run(orchestrator.run(PromotionRequest(head="gen")))
        ```
    """
    return ClientPair(action=action_client, artifact=artifact_client)  # type: ignore[arg-type]


@pytest.fixture
def recording_sleep() -> RecordingSleep:
    """Provide a RecordingSleep to pass as the watcher's sleep function."""
    return RecordingSleep()


@pytest.fixture
def retry_budget() -> RetryBudget:
    """Provide the default retry budget (25 attempts, 60 seconds apart)."""
    return RetryBudget()


# ============================================================================
# Sample Data Fixtures
# ============================================================================


@pytest.fixture
def sample_pull_request() -> PullRequest:
    """Provide a sample PullRequest object."""
    return create_mock_pull_request()


@pytest.fixture
def sample_review() -> Review:
    """Provide a sample Review object."""
    return Review(review_id=1001, pr_number=42, reviewer="action-bot", state="APPROVED")


@pytest.fixture
def sample_merge_result() -> MergeResult:
    """Provide a sample MergeResult object."""
    return MergeResult(
        pr_number=42,
        merged=True,
        sha="6dcb09b5b57875f334f61aebed695e2e4193db5e",
        message="Pull Request successfully merged",
    )


@pytest.fixture
def sample_labels() -> list[Label]:
    """Provide the labels GitHub returns after labeling a promotion PR."""
    return [Label(name="manifest_generation", color="ededed"), Label(name="skip_tests", color="ededed")]
