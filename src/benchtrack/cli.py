"""Command-line interface for benchtrack.

This module provides CLI commands to validate, inspect, append to and
compare ``window.BENCHMARK_DATA`` history files.

Example:
    >>> # From terminal:
    >>> # benchtrack --version
    >>> # benchtrack validate gh-pages/dev/bench/data.js
    >>> # benchtrack append data.js --output output.txt --commit head_commit.json
    >>> # benchtrack series data.js sync/http_round_trip --format json
    >>> # benchtrack compare data.js --threshold 150% --fail-on-alert
    >>> # benchtrack fetch https://example.github.io/repo/dev/bench/data.js
"""

import asyncio
import json
from pathlib import Path
from typing import Annotated, Any, Optional

import typer

from benchtrack import __version__
from benchtrack.codec import load_data_file, save_data_file
from benchtrack.compare import compare_latest, parse_threshold
from benchtrack.config import BenchtrackConfig
from benchtrack.errors import BenchtrackError
from benchtrack.models import BenchmarkData
from benchtrack.observability import configure_logging
from benchtrack.parsers import parse_bench_output
from benchtrack.remote import fetch_data_file
from benchtrack.report import (
    format_comparison,
    format_entry,
    format_series,
    format_summary,
)
from benchtrack.schemas import export_all_schemas, get_schema_json
from benchtrack.store import add_entry, build_entry, commit_from_event, latest_entry, series
from benchtrack.validation import check_data_file, has_errors

app = typer.Typer(help="Benchmark history (data.js) tooling.")

DEFAULT_SCHEMAS_DIR = Path("schemas")

_verbose: bool = False


def _version_callback(value: bool) -> None:
    """Print the version and exit when requested."""
    if value:
        typer.echo(__version__)
        raise typer.Exit()


VERSION_OPTION = typer.Option(
    False,
    "--version",
    help="Show benchtrack version and exit.",
    callback=_version_callback,
    is_eager=True,
)

SUITE_OPTION = typer.Option(
    None, "--suite", "-s", help="Suite name (default: BENCHTRACK_SUITE or 'Benchmark')."
)


@app.callback()
def cli(
    version: bool = VERSION_OPTION,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose output."),
    log_format: Optional[str] = typer.Option(
        None, "--log-format", help="Log format: console or json."
    ),
) -> None:
    """benchtrack CLI entrypoint."""
    global _verbose
    _verbose = verbose
    configure_logging(
        log_format=log_format,
        log_level="DEBUG" if verbose else None,
        force=True,
    )


def _config() -> BenchtrackConfig:
    try:
        return BenchtrackConfig.from_env()
    except ValueError as exc:
        raise typer.BadParameter(f"Invalid BENCHTRACK_* configuration: {exc}") from exc


def _load(path: Path, **kwargs: Any) -> BenchmarkData:
    try:
        return load_data_file(path, **kwargs)
    except FileNotFoundError as exc:
        raise typer.BadParameter(str(exc)) from exc
    except BenchtrackError as exc:
        detail = "\n".join(f"  - {e}" for e in exc.details.get("errors", []))
        raise typer.BadParameter(exc.message + (f"\n{detail}" if detail else "")) from exc


def _save(path: Path, data: BenchmarkData) -> None:
    try:
        save_data_file(path, data)
    except PermissionError as exc:
        raise typer.BadParameter(f"Cannot write to file: {path}") from exc
    except OSError as exc:
        raise typer.BadParameter(f"Failed to write {path}: {exc}") from exc


@app.command("validate")
def validate(
    file: Annotated[Path, typer.Argument(help="Path to the data.js file.")],
    strict: Annotated[
        bool, typer.Option("--strict", help="Treat warnings as errors.")
    ] = False,
) -> None:
    """Validate a data.js file: schema plus ordering and consistency checks."""
    if not file.exists():
        raise typer.BadParameter(f"File not found: {file}")

    issues = check_data_file(file)
    for issue in issues:
        typer.echo(issue.format())
    if has_errors(issues) or (strict and issues):
        raise typer.Exit(1)
    typer.echo(f"Valid benchmark data: {file}")


@app.command("show")
def show(
    file: Annotated[Path, typer.Argument(help="Path to the data.js file.")],
    suite: Optional[str] = SUITE_OPTION,
) -> None:
    """Summarize a data file, or print the latest entry of one suite."""
    data = _load(file)
    if suite is None:
        typer.echo(format_summary(data))
        return
    try:
        entry = latest_entry(data, suite)
    except BenchtrackError as exc:
        raise typer.BadParameter(exc.message) from exc
    if entry is None:
        typer.echo(f"{suite}: no entries")
        return
    typer.echo(format_entry(entry))


@app.command("append")
def append(
    file: Annotated[Path, typer.Argument(help="data.js file to update (created if missing).")],
    output: Annotated[
        Path, typer.Option(..., "--output", "-o", help="Benchmark tool output to record.")
    ],
    commit: Annotated[
        Path,
        typer.Option(..., "--commit", "-c", help="Commit JSON (GitHub head_commit object)."),
    ],
    suite: Optional[str] = SUITE_OPTION,
    tool: Annotated[Optional[str], typer.Option("--tool", help="Output format.")] = None,
    max_items: Annotated[
        Optional[int], typer.Option("--max-items", min=1, help="Keep only the newest N entries.")
    ] = None,
    date_ms: Annotated[
        Optional[int], typer.Option("--date", help="Entry date in epoch ms (default: now).")
    ] = None,
    repo_url: Annotated[
        Optional[str], typer.Option("--repo-url", help="Repository URL for a new file.")
    ] = None,
) -> None:
    """Parse benchmark output and append it as a new entry."""
    config = _config()
    suite = suite or config.suite
    tool = tool or config.tool
    max_items = max_items if max_items is not None else config.max_items

    for path in (output, commit):
        if not path.exists():
            raise typer.BadParameter(f"File not found: {path}")
    try:
        commit_obj = json.loads(commit.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise typer.BadParameter(f"Invalid JSON in commit file: {exc}") from exc
    if not isinstance(commit_obj, dict):
        raise typer.BadParameter("Commit JSON root must be an object")

    data = _load(file, missing_ok=True, repo_url=repo_url)
    try:
        benches = parse_bench_output(tool, output.read_text(encoding="utf-8"))
        entry = build_entry(commit_from_event(commit_obj), benches, tool, date_ms=date_ms)
        updated = add_entry(data, suite, entry, max_items=max_items)
    except BenchtrackError as exc:
        raise typer.BadParameter(exc.message) from exc
    except ValueError as exc:
        raise typer.BadParameter(f"Invalid commit or entry: {exc}") from exc

    _save(file, updated)
    typer.echo(
        f"Appended {len(benches)} results for {entry.commit.short_id} to {suite} in {file}"
    )


@app.command("series")
def series_command(
    file: Annotated[Path, typer.Argument(help="Path to the data.js file.")],
    bench: Annotated[str, typer.Argument(help="Bench name, e.g. sync/http_round_trip.")],
    suite: Optional[str] = SUITE_OPTION,
    output_format: Annotated[
        str, typer.Option("--format", "-F", help="Output format: text or json.")
    ] = "text",
) -> None:
    """Print the history of one bench."""
    if output_format not in ("text", "json"):
        raise typer.BadParameter("--format must be 'text' or 'json'")
    suite = suite or _config().suite
    data = _load(file)
    try:
        points = series(data, suite, bench)
    except BenchtrackError as exc:
        raise typer.BadParameter(exc.message) from exc

    if output_format == "json":
        typer.echo(
            json.dumps(
                [
                    {
                        "commit": p.commit_id,
                        "date": p.date,
                        "value": p.value,
                        "range": p.range,
                        "unit": p.unit,
                    }
                    for p in points
                ],
                indent=2,
                ensure_ascii=False,
            )
        )
    else:
        typer.echo(format_series(bench, points))


@app.command("compare")
def compare(
    file: Annotated[Path, typer.Argument(help="Path to the data.js file.")],
    suite: Optional[str] = SUITE_OPTION,
    threshold: Annotated[
        Optional[str],
        typer.Option("--threshold", "-t", help="Alert threshold, e.g. 200%."),
    ] = None,
    fail_on_alert: Annotated[
        bool, typer.Option("--fail-on-alert", help="Exit 1 when a regression is found.")
    ] = False,
) -> None:
    """Compare the last two entries of a suite and report regressions."""
    config = _config()
    suite = suite or config.suite
    try:
        ratio = parse_threshold(threshold or config.alert_threshold)
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc

    data = _load(file)
    try:
        comparison = compare_latest(data, suite)
    except BenchtrackError as exc:
        raise typer.BadParameter(exc.message) from exc
    if comparison is None:
        typer.echo(f"{suite}: fewer than two entries, nothing to compare")
        return

    typer.echo(format_comparison(comparison, ratio))
    regressions = comparison.regressions(ratio)
    if regressions:
        typer.echo(f"{len(regressions)} regression(s) above {ratio:.0%}")
        if fail_on_alert:
            raise typer.Exit(1)


@app.command("fetch")
def fetch(
    url: Annotated[str, typer.Argument(help="URL of a published data.js file.")],
    out: Annotated[
        Optional[Path], typer.Option("--out", "-o", help="Save the file here.")
    ] = None,
) -> None:
    """Download a published data file and summarize or save it."""
    try:
        data = asyncio.run(fetch_data_file(url))
    except BenchtrackError as exc:
        raise typer.BadParameter(exc.message) from exc
    if out is not None:
        _save(out, data)
        typer.echo(f"Saved {url} to {out}")
    else:
        typer.echo(format_summary(data))


@app.command("export-schemas")
def export_schemas(
    output_dir: Path = typer.Option(
        DEFAULT_SCHEMAS_DIR, "--output-dir", help="Directory where JSON schemas will be written."
    ),
) -> None:
    """Export JSON schemas of the data file records."""
    try:
        written_paths = export_all_schemas(output_dir)
    except PermissionError as exc:
        raise typer.BadParameter(f"Cannot write to directory: {output_dir}") from exc
    except OSError as exc:
        raise typer.BadParameter(f"Failed to export schemas: {exc}") from exc
    typer.echo(f"Exported {len(written_paths)} schemas to {output_dir}")
    if _verbose:
        for path in sorted(written_paths):
            typer.echo(f"  - {path.relative_to(output_dir)}")


@app.command("show-schema")
def show_schema(schema_name: str) -> None:
    """Print the JSON schema for a named record type."""
    try:
        schema = get_schema_json(schema_name)
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc
    typer.echo(json.dumps(schema, indent=2, ensure_ascii=False))


def main() -> None:
    app()


if __name__ == "__main__":
    main()
