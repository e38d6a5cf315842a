"""autopromote - open, approve and merge a generated branch from CI."""

from autopromote.async_client import AsyncGitHubClient
from autopromote.config import ActionInputs
from autopromote.exceptions import (
    AmbiguousStateError,
    ApprovalError,
    AuthenticationError,
    AuthorizationError,
    ConfigurationError,
    ConflictError,
    CreationError,
    ErrorKind,
    GitHubError,
    LabelError,
    MergeError,
    NotFoundError,
    PollError,
    RateLimitedError,
    ServerError,
    StageError,
    UnmergeableError,
    ValidationError,
)
from autopromote.lifecycle import MergeStateWatcher, RetryBudget
from autopromote.logging import configure_logging, get_logger
from autopromote.orchestrator import (
    ClientPair,
    PromotionOrchestrator,
    PromotionRequest,
    PromotionResult,
)

__version__ = "0.1.0"

__all__ = [
    "__version__",
    # Clients
    "AsyncGitHubClient",
    "ClientPair",
    # Lifecycle
    "PromotionOrchestrator",
    "PromotionRequest",
    "PromotionResult",
    "MergeStateWatcher",
    "RetryBudget",
    # Configuration
    "ActionInputs",
    # Platform errors
    "GitHubError",
    "AuthenticationError",
    "AuthorizationError",
    "NotFoundError",
    "ConflictError",
    "RateLimitedError",
    "ValidationError",
    "ServerError",
    "ConfigurationError",
    # Stage errors
    "ErrorKind",
    "StageError",
    "CreationError",
    "LabelError",
    "ApprovalError",
    "PollError",
    "AmbiguousStateError",
    "UnmergeableError",
    "MergeError",
    # Logging
    "configure_logging",
    "get_logger",
]
