"""Parser for ``cargo bench`` output.

Handles the libtest format and criterion's ``--output-format bencher``
format, which share one line shape::

    test sync/http_round_trip ... bench:     185,063 ns/iter (+/- 15,069)

Any other line (compilation output, criterion's own report) is ignored.
"""

from __future__ import annotations

import re

from benchtrack.errors import BenchOutputParseError
from benchtrack.models import BenchResult
from benchtrack.models.constants import RANGE_SYMBOL

_BENCH_LINE_RE = re.compile(
    r"^test\s+(?P<name>.+?)\s+\.\.\.\s+bench:\s+(?P<value>[\d,.]+)\s+(?P<unit>\S+)"
    r"\s+\(\+/-\s+(?P<dev>[\d,.]+)\)\s*$"
)


def _number(text: str) -> int | float:
    cleaned = text.replace(",", "")
    return float(cleaned) if "." in cleaned else int(cleaned)


def parse_cargo_line(line: str) -> BenchResult | None:
    """Parse one output line, returning None for non-bench lines."""
    match = _BENCH_LINE_RE.match(line.strip())
    if match is None:
        return None
    dev = match.group("dev").replace(",", "")
    return BenchResult(
        name=match.group("name"),
        value=_number(match.group("value")),
        range=f"{RANGE_SYMBOL} {dev}",
        unit=match.group("unit"),
    )


def parse_cargo_output(text: str) -> list[BenchResult]:
    """Parse the full output of a cargo bench run.

    Raises:
        BenchOutputParseError: If no bench line is found.
    """
    results = [r for r in (parse_cargo_line(line) for line in text.splitlines()) if r]
    if not results:
        raise BenchOutputParseError("cargo", "no benchmark result lines found")
    return results
