"""Append and query operations over benchmark history.

BenchmarkData is immutable; every update returns a new document. The
history is append-only: a new entry is placed at the end of its suite
and never before an entry with a later date.

Example:
    >>> from benchtrack.store import add_entry, series
    >>> data = add_entry(data, "Benchmark", entry, max_items=100)
    >>> [p.value for p in series(data, "Benchmark", "sync/http_round_trip")]
    [185063, 183910]
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Any

from benchtrack.errors import EntryOrderError, SuiteNotFoundError
from benchtrack.models import BenchmarkData, BenchmarkEntry, BenchResult, CommitInfo
from benchtrack.models.constants import DEFAULT_TOOL
from benchtrack.observability import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class SeriesPoint:
    """One data point of a bench's time series."""

    commit_id: str
    date: int
    value: int | float
    range: str | None
    unit: str


def current_time_ms() -> int:
    return int(time.time() * 1000)


def commit_from_event(obj: dict[str, Any]) -> CommitInfo:
    """Build CommitInfo from a GitHub push event ``head_commit`` object.

    Event payloads carry more keys (``tree_id``, ``distinct``, ...) than the
    data file stores; those are dropped.
    """
    person_keys = ("name", "username", "email")
    commit = {key: obj.get(key) for key in ("id", "message", "timestamp", "url")}
    for role in ("author", "committer"):
        person = obj.get(role)
        if isinstance(person, dict):
            commit[role] = {k: person[k] for k in person_keys if person.get(k) is not None}
        else:
            commit[role] = person
    return CommitInfo.model_validate(commit)


def build_entry(
    commit: CommitInfo,
    benches: list[BenchResult],
    tool: str = DEFAULT_TOOL,
    *,
    date_ms: int | None = None,
) -> BenchmarkEntry:
    """Create an entry for ``commit`` dated now unless ``date_ms`` is given."""
    return BenchmarkEntry(
        commit=commit,
        date=date_ms if date_ms is not None else current_time_ms(),
        tool=tool,
        benches=benches,
    )


def suite_names(data: BenchmarkData) -> list[str]:
    return list(data.entries)


def get_suite(data: BenchmarkData, suite: str) -> list[BenchmarkEntry]:
    """Return the entries of ``suite``.

    Raises:
        SuiteNotFoundError: If the suite does not exist.
    """
    if suite not in data.entries:
        raise SuiteNotFoundError(suite, available=suite_names(data))
    return data.entries[suite]


def latest_entry(data: BenchmarkData, suite: str) -> BenchmarkEntry | None:
    entries = get_suite(data, suite)
    return entries[-1] if entries else None


def add_entry(
    data: BenchmarkData,
    suite: str,
    entry: BenchmarkEntry,
    *,
    max_items: int | None = None,
    now_ms: int | None = None,
) -> BenchmarkData:
    """Append ``entry`` to ``suite`` and return the updated document.

    A missing suite is created. When the last entry of the suite is for the
    same commit, it is replaced instead of duplicated (a re-run of the same
    commit). ``max_items`` keeps only the newest entries of the suite.

    Raises:
        EntryOrderError: If ``entry`` is older than the suite's last entry.
        ValueError: If ``max_items`` is less than 1.
    """
    if max_items is not None and max_items < 1:
        raise ValueError(f"max_items must be at least 1, got {max_items}")

    existing = list(data.entries.get(suite, []))
    replaced = False
    if existing and existing[-1].commit.id == entry.commit.id:
        existing.pop()
        replaced = True
    if existing and entry.date < existing[-1].date:
        raise EntryOrderError(suite, existing[-1].date, entry.date)

    existing.append(entry)
    dropped = 0
    if max_items is not None and len(existing) > max_items:
        dropped = len(existing) - max_items
        existing = existing[dropped:]

    entries = dict(data.entries)
    entries[suite] = existing
    updated = data.model_copy(
        update={
            "entries": entries,
            "last_update": now_ms if now_ms is not None else current_time_ms(),
        }
    )

    logger.info(
        "benchtrack.entry.appended",
        suite=suite,
        commit=entry.commit.short_id,
        benches=len(entry.benches),
        replaced=replaced,
        dropped=dropped,
    )
    return updated


def bench_names(data: BenchmarkData, suite: str) -> list[str]:
    """Return all bench names of a suite in order of first appearance."""
    names: dict[str, None] = {}
    for entry in get_suite(data, suite):
        for result in entry.benches:
            names.setdefault(result.name, None)
    return list(names)


def series(data: BenchmarkData, suite: str, bench: str) -> list[SeriesPoint]:
    """Return the time series of one bench, skipping entries that lack it."""
    points: list[SeriesPoint] = []
    for entry in get_suite(data, suite):
        result = entry.bench(bench)
        if result is None:
            continue
        points.append(
            SeriesPoint(
                commit_id=entry.commit.id,
                date=entry.date,
                value=result.value,
                range=result.range,
                unit=result.unit,
            )
        )
    return points


def introduced_benches(data: BenchmarkData, suite: str) -> dict[str, str]:
    """Map each bench name to the id of the first commit that recorded it."""
    introduced: dict[str, str] = {}
    for entry in get_suite(data, suite):
        for result in entry.benches:
            introduced.setdefault(result.name, entry.commit.id)
    return introduced
