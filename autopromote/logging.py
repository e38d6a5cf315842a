"""
autopromote logging utilities.

Three loggers are used:

- ``autopromote``: run-level messages (inputs, final result)
- ``autopromote.http``: one DEBUG line per GitHub request and response
- ``autopromote.lifecycle``: structured stage events (see :func:`log_stage_event`)

Messages, bodies and headers pass through the token masks before they reach
a handler.
"""

import logging
import re
from typing import Any

_root_logger = logging.getLogger("autopromote")
_http_logger = logging.getLogger("autopromote.http")
_lifecycle_logger = logging.getLogger("autopromote.lifecycle")

_REDACTED = "[REDACTED]"

# Applied in order; the bearer rule must run before the bare token rules.
_TOKEN_MASKS = (
    (re.compile(r"\b(Bearer)\s+[A-Za-z0-9_\-.]+"), r"\1 " + _REDACTED),
    (re.compile(r"\b(?:ghp|gho|ghu|ghs|ghr)_[A-Za-z0-9]{20,}\b"), "[TOKEN_REDACTED]"),
    (re.compile(r"\bgithub_pat_[A-Za-z0-9_]{20,}\b"), "[TOKEN_REDACTED]"),
    (
        re.compile(r"(secret|token|password|api_key)['\"]?\s*[:=]\s*['\"][^'\"]+['\"]", re.IGNORECASE),
        r"\1: " + _REDACTED,
    ),
)

_SENSITIVE_KEYS = frozenset({"authorization", "token", "secret", "password", "api_key"})

_DEFAULT_FORMAT = "%(levelname)s %(name)s: %(message)s"

_installed_handler: logging.Handler | None = None


def configure_logging(
    level: int = logging.INFO,
    http_level: int | None = None,
    lifecycle_level: int | None = None,
    handler: logging.Handler | None = None,
    format_string: str | None = None,
) -> None:
    """
    Configure autopromote logging.

    Calling this again replaces the handler installed by the previous call.

    Args:
        level: Level for the package logger (default: INFO)
        http_level: Level for request/response lines (default: same as level)
        lifecycle_level: Level for stage events (default: same as level)
        handler: Handler to install (default: StreamHandler to stderr)
        format_string: Record format (default: level, logger name, message;
            the runner already timestamps every line)

    Example:
        ```python
        import logging
        from autopromote.logging import configure_logging

        # Show every poll attempt and the raw API traffic
        configure_logging(http_level=logging.DEBUG, lifecycle_level=logging.DEBUG)
        ```
    """
    global _installed_handler

    if handler is None:
        handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(format_string or _DEFAULT_FORMAT))

    if _installed_handler is not None:
        _root_logger.removeHandler(_installed_handler)
    _root_logger.addHandler(handler)
    _installed_handler = handler

    _root_logger.setLevel(level)
    _http_logger.setLevel(level if http_level is None else http_level)
    _lifecycle_logger.setLevel(level if lifecycle_level is None else lifecycle_level)


def get_logger(name: str | None = None) -> logging.Logger:
    """
    Get an autopromote logger.

    Args:
        name: Child name ("http", "lifecycle", ...). None returns the package logger.
    """
    return _root_logger if name is None else _root_logger.getChild(name)


def mask_sensitive_data(text: str) -> str:
    """
    Replace bearer credentials, GitHub tokens and quoted secrets in ``text``.

    Args:
        text: Free text such as an error message or response body

    Returns:
        The text with every credential replaced by a placeholder
    """
    for pattern, replacement in _TOKEN_MASKS:
        text = pattern.sub(replacement, text)
    return text


def _is_sensitive(key: str, sensitive_keys: frozenset[str] | set[str]) -> bool:
    lowered = key.lower()
    return any(marker in lowered for marker in sensitive_keys)


def _redact(value: Any, sensitive_keys: frozenset[str] | set[str]) -> Any:
    if isinstance(value, dict):
        return safe_log_dict(value, sensitive_keys)
    if isinstance(value, list):
        return [_redact(item, sensitive_keys) for item in value]
    return value


def safe_log_dict(
    data: dict[str, Any],
    sensitive_keys: frozenset[str] | set[str] | None = None,
) -> dict[str, Any]:
    """
    Copy ``data`` with the value of every sensitive key replaced.

    A key is sensitive when it contains one of ``sensitive_keys``, compared
    case-insensitively, so ``github_token`` and ``Authorization`` both match.
    Nested dicts and lists are walked.

    Args:
        data: Headers, a request body or a decoded response
        sensitive_keys: Key markers (default: authorization, token, secret, password, api_key)
    """
    keys = _SENSITIVE_KEYS if sensitive_keys is None else sensitive_keys
    return {
        key: _REDACTED if _is_sensitive(key, keys) else _redact(value, keys)
        for key, value in data.items()
    }


def _describe_body(body: Any) -> str:
    if isinstance(body, dict):
        return str(safe_log_dict(body))
    return mask_sensitive_data(str(body))


def log_http_request(
    method: str,
    url: str,
    headers: dict[str, str] | None = None,
    body: dict[str, Any] | None = None,
) -> None:
    """Log an outgoing request at DEBUG, with headers and body redacted."""
    if not _http_logger.isEnabledFor(logging.DEBUG):
        return

    line = f"{method} {url}"
    if headers:
        line += f" | headers={safe_log_dict(headers)}"
    if body:
        line += f" | body={_describe_body(body)}"
    _http_logger.debug(line)


def log_http_response(
    status_code: int,
    url: str,
    body: Any = None,
    elapsed_ms: float | None = None,
) -> None:
    """
    Log a response at DEBUG.

    Args:
        status_code: HTTP status code
        url: Final request URL
        body: Decoded JSON, or raw text for error responses
        elapsed_ms: Round-trip time in milliseconds
    """
    if not _http_logger.isEnabledFor(logging.DEBUG):
        return

    line = f"Response {status_code} from {url}"
    if elapsed_ms is not None:
        line += f" | elapsed={elapsed_ms:.2f}ms"
    if body:
        line += f" | body={_describe_body(body)}"
    _http_logger.debug(line)


def log_stage_event(
    stage: str,
    outcome: str,
    message: str,
    level: int = logging.INFO,
    pr_number: int | None = None,
    state: str | None = None,
    **context: Any,
) -> None:
    """
    Emit a structured lifecycle event.

    The record carries ``stage``, ``outcome``, ``pr_number`` and ``state``
    attributes (plus any extra ``context``) so handlers and tests can match
    on them instead of parsing the message text.

    Args:
        stage: Lifecycle stage (e.g., "create", "label", "watch")
        outcome: What happened (e.g., "started", "succeeded", "failed")
        message: Human-readable message
        level: Log level (default: INFO)
        pr_number: Pull request number, when known
        state: Mergeable state, for watcher and merge events
    """
    extra = {
        "stage": stage,
        "outcome": outcome,
        "pr_number": pr_number,
        "state": state,
        **context,
    }
    _lifecycle_logger.log(level, mask_sensitive_data(message), extra=extra)


__all__ = [
    "configure_logging",
    "get_logger",
    "log_http_request",
    "log_http_response",
    "log_stage_event",
    "mask_sensitive_data",
    "safe_log_dict",
]
