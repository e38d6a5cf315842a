"""
GitHub Actions runtime helpers.

Workflow commands are written to stdout; step outputs are appended to the
file named by ``GITHUB_OUTPUT``.
"""

import os
import sys
import uuid
from collections.abc import Mapping
from typing import TextIO


def escape_data(value: str) -> str:
    """Escape a workflow command message."""
    return value.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


def set_failed(message: str, stream: TextIO | None = None) -> int:
    """
    Report the run as failed.

    Writes an ``::error::`` workflow command and returns the exit code the
    process should end with.
    """
    stream = stream or sys.stdout
    stream.write(f"::error::{escape_data(message)}\n")
    stream.flush()
    return 1


def set_output(
    name: str,
    value: str,
    environ: Mapping[str, str] | None = None,
) -> bool:
    """
    Set a step output.

    Returns:
        False when not running under GitHub Actions (no ``GITHUB_OUTPUT``)
    """
    if environ is None:
        environ = os.environ
    path = environ.get("GITHUB_OUTPUT")
    if not path:
        return False

    if "\n" in value:
        delimiter = f"ghadelimiter_{uuid.uuid4()}"
        entry = f"{name}<<{delimiter}\n{value}\n{delimiter}\n"
    else:
        entry = f"{name}={value}\n"

    with open(path, "a", encoding="utf-8") as fh:
        fh.write(entry)
    return True
