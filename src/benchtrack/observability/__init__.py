"""Observability module for benchtrack.

Structured logging with JSON output for CI and colored console output
for local runs.

Example:
    >>> from benchtrack.observability import get_logger
    >>>
    >>> logger = get_logger(__name__)
    >>> logger.info("benchtrack.entry.appended", suite="Benchmark", commit="2891ca1")
"""

from benchtrack.observability.logging import (
    bind_context,
    clear_context,
    configure_logging,
    get_logger,
)

__all__ = [
    "bind_context",
    "clear_context",
    "configure_logging",
    "get_logger",
]
