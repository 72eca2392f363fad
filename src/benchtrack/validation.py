"""Invariant checks for benchmark history documents.

The data models validate each record on its own. This module checks the
properties that span records:

- entries inside a suite are ordered by non-decreasing ``date``
- every entry carries at least one bench result
- bench names are unique within an entry
- a bench keeps the same unit across a suite (warning)
- a suite is produced by a single tool (warning)

Problems are reported as ValidationIssue values instead of exceptions so a
caller can show every problem in one pass.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from benchtrack.codec import format_validation_errors, load_data_file
from benchtrack.errors import DataValidationError, MalformedDataFileError
from benchtrack.models import BenchmarkData


class Severity(str, Enum):
    ERROR = "error"
    WARNING = "warning"


@dataclass(frozen=True)
class ValidationIssue:
    """A single problem found in a document.

    Attributes:
        severity: ERROR for broken invariants, WARNING for suspicious data
        message: Human-readable description
        suite: Suite the issue belongs to, if any
        entry_index: Position of the entry inside the suite, if any
        bench: Bench name the issue is about, if any
    """

    severity: Severity
    message: str
    suite: str | None = None
    entry_index: int | None = None
    bench: str | None = None

    @property
    def location(self) -> str:
        parts: list[str] = []
        if self.suite is not None:
            parts.append(self.suite)
        if self.entry_index is not None:
            parts.append(f"[{self.entry_index}]")
        if self.bench is not None:
            parts.append(self.bench)
        return " ".join(parts) if parts else "<document>"

    def format(self) -> str:
        return f"{self.severity.value}: {self.location}: {self.message}"


def _check_suite(suite: str, data: BenchmarkData) -> list[ValidationIssue]:
    issues: list[ValidationIssue] = []
    entries = data.entries[suite]
    units: dict[str, str] = {}
    tools: set[str] = set()
    previous_date: int | None = None

    for index, entry in enumerate(entries):
        if previous_date is not None and entry.date < previous_date:
            issues.append(
                ValidationIssue(
                    Severity.ERROR,
                    f"date {entry.date} is older than previous entry ({previous_date})",
                    suite=suite,
                    entry_index=index,
                )
            )
        previous_date = entry.date if previous_date is None else max(previous_date, entry.date)

        if not entry.benches:
            issues.append(
                ValidationIssue(Severity.ERROR, "entry has no bench results", suite, index)
            )

        seen: set[str] = set()
        for bench in entry.benches:
            if bench.name in seen:
                issues.append(
                    ValidationIssue(
                        Severity.ERROR, "duplicate bench name in entry", suite, index, bench.name
                    )
                )
            seen.add(bench.name)

            known_unit = units.setdefault(bench.name, bench.unit)
            if known_unit != bench.unit:
                issues.append(
                    ValidationIssue(
                        Severity.WARNING,
                        f"unit changed from {known_unit!r} to {bench.unit!r}",
                        suite,
                        index,
                        bench.name,
                    )
                )

        if tools and entry.tool not in tools:
            issues.append(
                ValidationIssue(
                    Severity.WARNING,
                    f"tool changed to {entry.tool!r} (previously {sorted(tools)})",
                    suite,
                    index,
                )
            )
        tools.add(entry.tool)

    return issues


def validate_data(data: BenchmarkData) -> list[ValidationIssue]:
    """Check cross-record invariants of a parsed document."""
    issues: list[ValidationIssue] = []
    for suite in data.entries:
        issues.extend(_check_suite(suite, data))
    return issues


def validate_raw(obj: Any) -> list[ValidationIssue]:
    """Validate a decoded JSON object without raising.

    Schema violations are reported first; invariant checks only run once
    the object matches the data model.
    """
    if not isinstance(obj, dict):
        return [ValidationIssue(Severity.ERROR, "JSON root must be an object")]
    try:
        data = BenchmarkData.model_validate(obj)
    except ValidationError as exc:
        return [ValidationIssue(Severity.ERROR, msg) for msg in format_validation_errors(exc)]
    return validate_data(data)


def check_data_file(path: Path) -> list[ValidationIssue]:
    """Load a data.js file and return every problem found in it."""
    try:
        data = load_data_file(path)
    except MalformedDataFileError as exc:
        return [ValidationIssue(Severity.ERROR, exc.message)]
    except DataValidationError as exc:
        return [ValidationIssue(Severity.ERROR, msg) for msg in exc.errors]
    return validate_data(data)


def has_errors(issues: list[ValidationIssue]) -> bool:
    return any(issue.severity is Severity.ERROR for issue in issues)
