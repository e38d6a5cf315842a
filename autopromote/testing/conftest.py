"""
Pytest plugin for autopromote testing fixtures.

This module re-exports all fixtures from fixtures.py so they can be
discovered by pytest. To use these fixtures in your tests, add this to your
conftest.py:

    pytest_plugins = ["autopromote.testing.conftest"]
"""

from autopromote.testing.fixtures import (
    action_client,
    artifact_client,
    client_pair,
    recording_sleep,
    retry_budget,
    sample_labels,
    sample_merge_result,
    sample_pull_request,
    sample_review,
)

__all__ = [
    "action_client",
    "artifact_client",
    "client_pair",
    "recording_sleep",
    "retry_budget",
    "sample_labels",
    "sample_merge_result",
    "sample_pull_request",
    "sample_review",
]
