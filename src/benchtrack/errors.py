"""benchtrack error taxonomy.

This module defines the error hierarchy for reading, validating and
updating benchmark history files, providing structured error handling
with specific error codes and context information.
"""
from __future__ import annotations

from typing import Any


class BenchtrackError(Exception):
    """Base exception for all benchtrack errors.

    Attributes:
        code: Error code following the benchtrack:<area>/<reason> pattern
        message: Human-readable error message
        details: Optional additional error context
    """

    def __init__(self, code: str, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Serialize to ``{code, message, details}`` dict."""
        return {
            "code": self.code,
            "message": self.message,
            "details": self.details,
        }


class MalformedDataFileError(BenchtrackError):
    """Raised when a data file is not a ``window.BENCHMARK_DATA = {...}`` script.

    This covers a missing assignment prefix, invalid JSON after it,
    or a JSON root that is not an object.
    """

    def __init__(self, reason: str, details: dict[str, Any] | None = None) -> None:
        message = f"Malformed data file: {reason}"
        super().__init__(code="benchtrack:file/malformed", message=message, details=details or {})
        self.reason = reason


class DataValidationError(BenchtrackError):
    """Raised when the parsed document does not match the data model.

    Attributes:
        errors: One ``location: message`` string per schema violation
    """

    def __init__(self, errors: list[str], details: dict[str, Any] | None = None) -> None:
        message = f"Benchmark data failed validation ({len(errors)} error(s))"
        super().__init__(
            code="benchtrack:data/invalid",
            message=message,
            details={"errors": errors, **(details or {})},
        )
        self.errors = errors


class SuiteNotFoundError(BenchtrackError):
    """Raised when a suite name is not present in the document."""

    def __init__(
        self, suite: str, available: list[str] | None = None, details: dict[str, Any] | None = None
    ) -> None:
        available = available or []
        message = f"Suite not found: {suite}"
        super().__init__(
            code="benchtrack:suite/not_found",
            message=message,
            details={"suite": suite, "available": available, **(details or {})},
        )
        self.suite = suite
        self.available = available


class EntryOrderError(BenchtrackError):
    """Raised when appending an entry older than the suite's last entry.

    Entries within a suite are ordered by non-decreasing date.
    """

    def __init__(
        self, suite: str, last_date: int, new_date: int, details: dict[str, Any] | None = None
    ) -> None:
        message = (
            f"Entry date {new_date} is older than the last entry of suite "
            f"'{suite}' ({last_date})"
        )
        super().__init__(
            code="benchtrack:entry/out_of_order",
            message=message,
            details={
                "suite": suite,
                "last_date": last_date,
                "new_date": new_date,
                **(details or {}),
            },
        )
        self.suite = suite
        self.last_date = last_date
        self.new_date = new_date


class BenchOutputParseError(BenchtrackError):
    """Raised when benchmark tool output yields no results or cannot be parsed."""

    def __init__(self, tool: str, reason: str, details: dict[str, Any] | None = None) -> None:
        message = f"Cannot parse {tool} output: {reason}"
        super().__init__(
            code="benchtrack:parser/failed",
            message=message,
            details={"tool": tool, **(details or {})},
        )
        self.tool = tool
        self.reason = reason


class RemoteFetchError(BenchtrackError):
    """Raised when a published data file cannot be downloaded.

    Attributes:
        url: URL that was requested
        status_code: HTTP status, None for transport failures
    """

    def __init__(
        self,
        url: str,
        reason: str,
        status_code: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        message = f"Failed to fetch {url}: {reason}"
        super().__init__(
            code="benchtrack:remote/fetch_failed",
            message=message,
            details={"url": url, "status_code": status_code, **(details or {})},
        )
        self.url = url
        self.status_code = status_code
