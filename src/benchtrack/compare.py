"""Compare benchmark runs and detect regressions.

A comparison pairs each bench present in two entries. The ratio is
oriented so that a value above 1.0 always means "worse":

- smaller is better (latency units such as ns/iter): ``current / previous``
- bigger is better (throughput units, customBiggerIsBetter): ``previous / current``

A bench is flagged when its ratio exceeds the alert threshold, given as a
percentage string like ``"200%"`` (twice as slow).
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from benchtrack.models import BenchmarkData, BenchmarkEntry, BenchResult
from benchtrack.models.constants import BIGGER_IS_BETTER_TOOLS
from benchtrack.observability import get_logger
from benchtrack.store import get_suite

logger = get_logger(__name__)

_PERCENTAGE_RE = re.compile(r"^(-?[\d.]+)\s*%?\s*$")

_THROUGHPUT_UNIT_SUFFIXES = ("/s", "/sec", "ops", "ops/s", "iter/sec")


def parse_threshold(value: str | float) -> float:
    """Parse an alert threshold into a ratio.

    ``"200%"`` and ``"200"`` mean 2.0; a float is returned unchanged.

    Raises:
        ValueError: If the string is not a positive percentage.
    """
    if isinstance(value, (int, float)):
        ratio = float(value)
    else:
        match = _PERCENTAGE_RE.match(value.strip())
        if not match:
            raise ValueError(f"Invalid threshold: {value!r}")
        try:
            ratio = float(match.group(1)) / 100.0
        except ValueError as exc:
            raise ValueError(f"Invalid threshold: {value!r}") from exc
    if ratio <= 0:
        raise ValueError(f"Threshold must be positive, got {value!r}")
    return ratio


def is_bigger_better(tool: str, unit: str) -> bool:
    if tool in BIGGER_IS_BETTER_TOOLS:
        return True
    return unit.endswith(_THROUGHPUT_UNIT_SUFFIXES)


@dataclass(frozen=True)
class BenchComparison:
    """Previous and current result of one bench."""

    name: str
    previous: BenchResult
    current: BenchResult
    bigger_is_better: bool

    @property
    def ratio(self) -> float:
        """How much worse the current value is (1.0 = unchanged)."""
        prev = float(self.previous.value)
        curr = float(self.current.value)
        if self.bigger_is_better:
            if curr == 0:
                return float("inf") if prev > 0 else 1.0
            return prev / curr
        if prev == 0:
            return float("inf") if curr > 0 else 1.0
        return curr / prev

    @property
    def change_percent(self) -> float:
        """Signed change of the raw value in percent."""
        prev = float(self.previous.value)
        if prev == 0:
            return 0.0
        return (float(self.current.value) - prev) / prev * 100.0

    def is_regression(self, threshold: float) -> bool:
        return self.ratio > threshold


@dataclass(frozen=True)
class EntryComparison:
    """Result of comparing two entries of a suite."""

    previous: BenchmarkEntry
    current: BenchmarkEntry
    benches: list[BenchComparison] = field(default_factory=list)
    added: list[str] = field(default_factory=list)
    removed: list[str] = field(default_factory=list)

    def regressions(self, threshold: float) -> list[BenchComparison]:
        return [c for c in self.benches if c.is_regression(threshold)]


def compare_entries(
    previous: BenchmarkEntry,
    current: BenchmarkEntry,
    *,
    bigger_is_better: bool | None = None,
) -> EntryComparison:
    """Compare every bench shared by two entries.

    Args:
        previous: Older entry.
        current: Newer entry.
        bigger_is_better: Force the direction for all benches; when None it is
            derived per bench from the tool and unit.
    """
    comparisons: list[BenchComparison] = []
    previous_names = set(previous.bench_names())
    for result in current.benches:
        prev = previous.bench(result.name)
        if prev is None:
            continue
        direction = (
            bigger_is_better
            if bigger_is_better is not None
            else is_bigger_better(current.tool, result.unit)
        )
        comparisons.append(
            BenchComparison(
                name=result.name, previous=prev, current=result, bigger_is_better=direction
            )
        )
    current_names = current.bench_names()
    return EntryComparison(
        previous=previous,
        current=current,
        benches=comparisons,
        added=[n for n in current_names if n not in previous_names],
        removed=[n for n in previous.bench_names() if n not in set(current_names)],
    )


def compare_latest(data: BenchmarkData, suite: str) -> EntryComparison | None:
    """Compare the last two entries of a suite, or None if it has fewer than two."""
    entries = get_suite(data, suite)
    if len(entries) < 2:
        return None
    return compare_entries(entries[-2], entries[-1])


def find_regressions(
    data: BenchmarkData, suite: str, threshold: str | float
) -> list[BenchComparison]:
    """Return benches of the latest entry that regressed beyond ``threshold``."""
    ratio = parse_threshold(threshold)
    comparison = compare_latest(data, suite)
    if comparison is None:
        return []
    regressions = comparison.regressions(ratio)
    for item in regressions:
        logger.warning(
            "benchtrack.regression.detected",
            suite=suite,
            bench=item.name,
            previous=item.previous.value,
            current=item.current.value,
            ratio=round(item.ratio, 3),
        )
    return regressions
