"""Pull request-related data models."""

from dataclasses import dataclass
from enum import Enum


class MergeState(str, Enum):
    """Values GitHub reports in a pull request's ``mergeable_state``."""

    UNKNOWN = "unknown"
    CLEAN = "clean"
    DIRTY = "dirty"
    UNSTABLE = "unstable"
    BLOCKED = "blocked"
    BEHIND = "behind"
    DRAFT = "draft"
    HAS_HOOKS = "has_hooks"

    @classmethod
    def is_decidable(cls, value: str) -> bool:
        """Return True if ``value`` settles whether the PR can be merged.

        Only clean and dirty are decidable. Every other value, including
        ones GitHub may add later, means the platform is still computing.
        """
        return value in (cls.CLEAN.value, cls.DIRTY.value)


@dataclass(frozen=True)
class PullRequest:
    """Pull request information, as last fetched from GitHub."""

    number: int
    head: str
    base: str
    title: str
    body: str | None
    state: str  # "open", "closed"
    mergeable_state: str
    html_url: str = ""
    draft: bool = False
    merged: bool = False


@dataclass(frozen=True)
class Review:
    """Pull request review."""

    review_id: int
    pr_number: int
    reviewer: str
    state: str  # "APPROVED", "COMMENTED", "CHANGES_REQUESTED"


@dataclass(frozen=True)
class Label:
    """Issue label."""

    name: str
    color: str = ""


@dataclass(frozen=True)
class MergeResult:
    """Result of merging a pull request."""

    pr_number: int
    merged: bool
    sha: str
    message: str
