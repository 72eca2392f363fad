"""Parser for ``go test -bench`` output.

Lines look like ``BenchmarkFib10-8   5000000   325 ns/op``; the iteration
count goes into ``extra``. Go reports no deviation, so ``range`` is unset.
"""

from __future__ import annotations

import re

from benchtrack.errors import BenchOutputParseError
from benchtrack.models import BenchResult

_GO_LINE_RE = re.compile(
    r"^(?P<name>Benchmark\S+)\s+(?P<runs>\d+)\s+(?P<value>[\d.]+)\s+(?P<unit>\S+)"
)


def parse_go_output(text: str) -> list[BenchResult]:
    results: list[BenchResult] = []
    for line in text.splitlines():
        match = _GO_LINE_RE.match(line.strip())
        if match is None:
            continue
        value = match.group("value")
        results.append(
            BenchResult(
                name=match.group("name"),
                value=float(value) if "." in value else int(value),
                unit=match.group("unit"),
                extra=f"{match.group('runs')} times",
            )
        )
    if not results:
        raise BenchOutputParseError("go", "no benchmark result lines found")
    return results
