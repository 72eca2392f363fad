"""Entity models for the benchmark history file.

This module defines the data shape stored behind ``window.BENCHMARK_DATA``:
- Person: Author or committer of a commit
- CommitInfo: Commit metadata attached to each benchmark run
- BenchResult: One named measurement (value, range, unit)
- BenchmarkEntry: One CI run's measurements for a commit
- BenchmarkData: The whole document, keyed by suite name
"""

from __future__ import annotations

from datetime import datetime, timezone

from pydantic import Field, field_validator, model_validator

from benchtrack.models.base import BenchBaseModel
from benchtrack.models.constants import SUPPORTED_TOOLS
from benchtrack.models.validators import (
    normalize_range,
    parse_range_value,
    validate_iso_timestamp,
)


class Person(BenchBaseModel):
    """Author or committer of a benchmarked commit.

    Attributes:
        name: Display name
        username: GitHub login, absent for commits from other sources
        email: Email address, absent when hidden
    """

    name: str = Field(..., description="Display name")
    username: str | None = Field(default=None, description="GitHub login")
    email: str | None = Field(default=None, description="Email address")


class CommitInfo(BenchBaseModel):
    """Commit metadata recorded with every benchmark entry.

    Example:
        >>> commit = CommitInfo(
        ...     author=Person(name="Alice", username="alice", email="a@example.com"),
        ...     committer=Person(name="GitHub", username="web-flow"),
        ...     id="2891ca11f7da6be8022a9e165eaa9a90017d3d43",
        ...     message="chore(release 0.4.1) (#513)",
        ...     timestamp="2021-10-12T17:04:56Z",
        ...     url="https://github.com/paritytech/jsonrpsee/commit/2891ca1",
        ... )
        >>> commit.short_id
        '2891ca1'
    """

    author: Person = Field(..., description="Commit author")
    committer: Person = Field(..., description="Commit committer")
    id: str = Field(..., min_length=1, description="Commit hash")
    message: str = Field(..., description="Full commit message")
    timestamp: str = Field(..., description="Commit timestamp (ISO 8601)")
    url: str = Field(..., description="Commit URL")

    @field_validator("timestamp")
    @classmethod
    def validate_timestamp(cls, v: str) -> str:
        return validate_iso_timestamp(v)

    @property
    def short_id(self) -> str:
        return self.id[:7]

    @property
    def title(self) -> str:
        """First line of the commit message."""
        return self.message.splitlines()[0] if self.message else ""


class BenchResult(BenchBaseModel):
    """A single named measurement.

    Attributes:
        name: Benchmark name, e.g. ``sync/http_round_trip``
        value: Measured value in ``unit``
        range: Deviation, always rendered as ``± <number>``
        unit: Measurement unit, e.g. ``ns/iter``
        extra: Optional free-form details from the extractor
    """

    name: str = Field(..., min_length=1, description="Benchmark name")
    value: int | float = Field(..., description="Measured value")
    range: str | None = Field(default=None, description="Deviation, e.g. '± 1234'")
    unit: str = Field(..., min_length=1, description="Measurement unit")
    extra: str | None = Field(default=None, description="Extractor-specific details")

    @field_validator("range")
    @classmethod
    def validate_range(cls, v: str | None) -> str | None:
        if v is None:
            return v
        return normalize_range(v)

    @field_validator("value")
    @classmethod
    def integral_value_as_int(cls, v: int | float) -> int | float:
        # keep "197" rather than "197.0" when rendering integral values
        if isinstance(v, float) and v.is_integer():
            return int(v)
        return v

    @property
    def range_value(self) -> float | None:
        if self.range is None:
            return None
        return parse_range_value(self.range)


class BenchmarkEntry(BenchBaseModel):
    """One CI run: the commit benchmarked and all results it produced."""

    commit: CommitInfo = Field(..., description="Benchmarked commit")
    date: int = Field(..., ge=0, description="Run time (epoch milliseconds)")
    tool: str = Field(..., description="Extractor that produced the results")
    benches: list[BenchResult] = Field(..., description="Results of this run")

    @field_validator("tool")
    @classmethod
    def validate_tool(cls, v: str) -> str:
        if v not in SUPPORTED_TOOLS:
            raise ValueError(f"Unsupported tool {v!r}, expected one of {sorted(SUPPORTED_TOOLS)}")
        return v

    @property
    def run_at(self) -> datetime:
        return datetime.fromtimestamp(self.date / 1000, tz=timezone.utc)

    def bench(self, name: str) -> BenchResult | None:
        """Return the result named ``name`` or None."""
        for result in self.benches:
            if result.name == name:
                return result
        return None

    def bench_names(self) -> list[str]:
        return [result.name for result in self.benches]


class BenchmarkData(BenchBaseModel):
    """The full ``window.BENCHMARK_DATA`` document.

    Attributes:
        last_update: Time of the last write (epoch milliseconds), ``lastUpdate`` on the wire
        repo_url: Repository the history belongs to, ``repoUrl`` on the wire
        entries: Entries per suite, oldest first
    """

    last_update: int = Field(..., alias="lastUpdate", ge=0, description="Last write (epoch ms)")
    repo_url: str = Field(..., alias="repoUrl", description="Repository URL")
    entries: dict[str, list[BenchmarkEntry]] = Field(
        default_factory=dict, description="Benchmark entries keyed by suite name"
    )

    @model_validator(mode="after")
    def validate_suite_names(self) -> "BenchmarkData":
        for suite in self.entries:
            if not suite.strip():
                raise ValueError("Suite names must not be empty")
        return self

    @classmethod
    def empty(cls, repo_url: str = "", last_update: int = 0) -> "BenchmarkData":
        """Build a document with no suites."""
        return cls(lastUpdate=last_update, repoUrl=repo_url, entries={})
