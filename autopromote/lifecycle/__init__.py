"""Pull request lifecycle stages, in the order the orchestrator runs them."""

from autopromote.lifecycle.approver import approve_pull_request
from autopromote.lifecycle.creator import create_pull_request
from autopromote.lifecycle.labeler import PROMOTION_LABELS, attach_labels
from autopromote.lifecycle.merger import merge_if_clean
from autopromote.lifecycle.watcher import MergeStateWatcher, RetryBudget

__all__ = [
    "PROMOTION_LABELS",
    "MergeStateWatcher",
    "RetryBudget",
    "approve_pull_request",
    "attach_labels",
    "create_pull_request",
    "merge_if_clean",
]
