"""autopromote exception classes.

Two families live here. ``GitHubError`` and its subclasses describe what the
platform answered. ``StageError`` and its subclasses describe which step of
the promotion lifecycle failed, and are what the orchestrator reports.
"""

from enum import Enum


class GitHubError(Exception):
    """Base exception for all GitHub API errors."""

    def __init__(
        self, code: str, message: str, request_id: str | None = None
    ) -> None:
        self.code = code
        self.message = message
        self.request_id = request_id
        super().__init__(f"[{code}] {message}")


class ConfigurationError(GitHubError):
    """Raised when action inputs are invalid or missing."""

    def __init__(self, message: str) -> None:
        super().__init__("CONFIGURATION_ERROR", message)


class AuthenticationError(GitHubError):
    """Raised when the token is missing or rejected (401)."""

    pass


class AuthorizationError(GitHubError):
    """Raised when the token lacks permission (403)."""

    pass


class NotFoundError(GitHubError):
    """Raised when a repository, branch or pull request is not found."""

    pass


class ConflictError(GitHubError):
    """Raised on conflicts (head branch modified, merge conflicts, etc.)."""

    pass


class RateLimitedError(GitHubError):
    """Raised when the API rate limit is exhausted."""

    def __init__(
        self,
        code: str,
        message: str,
        retry_after: int,
        request_id: str | None = None,
    ) -> None:
        super().__init__(code, message, request_id)
        self.retry_after = retry_after


class ValidationError(GitHubError):
    """Raised on validation errors (422), e.g. a pull request already exists."""

    pass


class ServerError(GitHubError):
    """Raised on server errors (5xx) and connection failures."""

    pass


class ErrorKind(str, Enum):
    """Lifecycle stage that produced a ``StageError``."""

    CREATION = "creation"
    LABEL = "label"
    APPROVAL = "approval"
    POLL = "poll"
    AMBIGUOUS_STATE = "ambiguous_state"
    UNMERGEABLE = "unmergeable"
    MERGE = "merge"

    @property
    def fatal(self) -> bool:
        """Whether a failure of this kind ends the run."""
        return self is not ErrorKind.LABEL

    @property
    def stage(self) -> str:
        """Lifecycle stage name used in log events."""
        return _STAGES[self]


_STAGES = {
    ErrorKind.CREATION: "create",
    ErrorKind.LABEL: "label",
    ErrorKind.APPROVAL: "approve",
    ErrorKind.POLL: "watch",
    ErrorKind.AMBIGUOUS_STATE: "watch",
    ErrorKind.UNMERGEABLE: "gate",
    ErrorKind.MERGE: "merge",
}


class StageError(Exception):
    """Base exception for a failed lifecycle stage.

    Attributes:
        kind: The stage that failed
        message: Human-readable description, including the platform error
        pr_number: Pull request number, when one had been assigned
        state: Last observed mergeable state, for state-related failures
    """

    kind: ErrorKind

    def __init__(
        self,
        message: str,
        pr_number: int | None = None,
        state: str | None = None,
    ) -> None:
        self.message = message
        self.pr_number = pr_number
        self.state = state
        super().__init__(f"[{self.kind.value}] {message}")

    @property
    def fatal(self) -> bool:
        return self.kind.fatal


class CreationError(StageError):
    """Raised when the pull request cannot be opened."""

    kind = ErrorKind.CREATION


class LabelError(StageError):
    """Raised when labels cannot be applied. Never fatal."""

    kind = ErrorKind.LABEL


class ApprovalError(StageError):
    """Raised when the approval review cannot be submitted."""

    kind = ErrorKind.APPROVAL


class PollError(StageError):
    """Raised when fetching the pull request fails while polling."""

    kind = ErrorKind.POLL


class AmbiguousStateError(StageError):
    """Raised when the retry budget runs out before a decidable state."""

    kind = ErrorKind.AMBIGUOUS_STATE


class UnmergeableError(StageError):
    """Raised when the pull request resolved to a state that forbids merging."""

    kind = ErrorKind.UNMERGEABLE


class MergeError(StageError):
    """Raised when the merge call fails."""

    kind = ErrorKind.MERGE
