"""Plain-text rendering of benchmark data for terminals and CI logs."""

from __future__ import annotations

from datetime import datetime, timezone

from benchtrack.compare import EntryComparison
from benchtrack.models import BenchmarkData, BenchmarkEntry
from benchtrack.store import SeriesPoint, bench_names, suite_names


def format_value(value: int | float) -> str:
    """Format a value with thousands separators ('185063' -> '185,063')."""
    if isinstance(value, int) or float(value).is_integer():
        return f"{int(value):,}"
    return f"{value:,.3f}".rstrip("0").rstrip(".")


def format_date(epoch_ms: int) -> str:
    return datetime.fromtimestamp(epoch_ms / 1000, tz=timezone.utc).strftime("%Y-%m-%d %H:%M")


def _table(headers: list[str], rows: list[list[str]], right_align: set[int]) -> str:
    widths = [len(h) for h in headers]
    for row in rows:
        for i, cell in enumerate(row):
            widths[i] = max(widths[i], len(cell))

    def line(cells: list[str]) -> str:
        out = []
        for i, cell in enumerate(cells):
            out.append(cell.rjust(widths[i]) if i in right_align else cell.ljust(widths[i]))
        return "  ".join(out).rstrip()

    sep = "  ".join("-" * w for w in widths)
    return "\n".join([line(headers), sep, *(line(r) for r in rows)])


def format_entry(entry: BenchmarkEntry) -> str:
    """Header line for the commit plus one row per bench."""
    header = (
        f"{entry.commit.short_id} {entry.commit.title} "
        f"({format_date(entry.date)}, {entry.tool})"
    )
    rows = [
        [b.name, format_value(b.value), b.range or "", b.unit] for b in entry.benches
    ]
    return header + "\n" + _table(["bench", "value", "range", "unit"], rows, {1})


def format_series(bench: str, points: list[SeriesPoint]) -> str:
    if not points:
        return f"{bench}: no data"
    rows = [
        [p.commit_id[:7], format_date(p.date), format_value(p.value), p.range or "", p.unit]
        for p in points
    ]
    return f"{bench}\n" + _table(["commit", "date", "value", "range", "unit"], rows, {2})


def format_comparison(comparison: EntryComparison, threshold: float) -> str:
    """Table of previous vs current values; regressions are marked with '!'."""
    lines = [
        f"{comparison.previous.commit.short_id} -> {comparison.current.commit.short_id}",
    ]
    rows = []
    for c in comparison.benches:
        mark = "!" if c.is_regression(threshold) else ""
        rows.append(
            [
                c.name,
                format_value(c.previous.value),
                format_value(c.current.value),
                f"{c.ratio:.2f}",
                mark,
            ]
        )
    lines.append(_table(["bench", "previous", "current", "ratio", ""], rows, {1, 2, 3}))
    if comparison.added:
        lines.append("added: " + ", ".join(comparison.added))
    if comparison.removed:
        lines.append("removed: " + ", ".join(comparison.removed))
    return "\n".join(lines)


def format_summary(data: BenchmarkData) -> str:
    """One line per suite: entry count, bench count and date span."""
    lines = [f"{data.repo_url or '<no repository>'} (updated {format_date(data.last_update)})"]
    for suite in suite_names(data):
        entries = data.entries[suite]
        if not entries:
            lines.append(f"  {suite}: no entries")
            continue
        lines.append(
            f"  {suite}: {len(entries)} entries, {len(bench_names(data, suite))} benches, "
            f"{format_date(entries[0].date)} .. {format_date(entries[-1].date)}"
        )
    return "\n".join(lines)
