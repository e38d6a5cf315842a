"""autopromote testing utilities.

Provides mock clients and fixtures for testing the promotion lifecycle
without talking to GitHub.
"""

from autopromote.testing.fixtures import create_mock_pull_request, pull_request_payload
from autopromote.testing.mock import MockCall, MockGitHubClient, MockResponse, RecordingSleep

__all__ = [
    # Mock client
    "MockGitHubClient",
    "MockCall",
    "MockResponse",
    "RecordingSleep",
    # Helper functions
    "create_mock_pull_request",
    "pull_request_payload",
]
