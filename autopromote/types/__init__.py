"""autopromote type definitions.

This module exports all data model types used by the package.
"""

from autopromote.types.pulls import Label, MergeResult, MergeState, PullRequest, Review

__all__ = [
    "Label",
    "MergeResult",
    "MergeState",
    "PullRequest",
    "Review",
]
