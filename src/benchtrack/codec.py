"""Read and write ``window.BENCHMARK_DATA = {...}`` files.

The dashboard loads the history through a ``<script>`` tag, so the file is a
single JavaScript assignment whose right-hand side is plain JSON. Parsing
strips the assignment and validates the JSON against the data models;
rendering produces the same two-space indented layout the benchmark action
writes.

Example:
    >>> from benchtrack.codec import parse_data_js, render_data_js
    >>> data = parse_data_js('window.BENCHMARK_DATA = {"lastUpdate": 0, "repoUrl": "", "entries": {}}')
    >>> render_data_js(data).startswith("window.BENCHMARK_DATA = {")
    True
"""

from __future__ import annotations

import json
import os
import re
import tempfile
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from benchtrack.errors import DataValidationError, MalformedDataFileError
from benchtrack.models import BenchmarkData
from benchtrack.models.constants import DATA_JS_PREFIX
from benchtrack.observability import get_logger

logger = get_logger(__name__)

_ASSIGNMENT_RE = re.compile(r"^\s*window\.BENCHMARK_DATA\s*=\s*")


def format_validation_errors(exc: ValidationError) -> list[str]:
    """Flatten a pydantic ValidationError into ``loc: msg`` strings."""
    errors: list[str] = []
    for error in exc.errors():
        loc = ".".join(str(part) for part in error["loc"])
        errors.append(f"{loc}: {error['msg']}")
    return errors


def strip_assignment(text: str) -> str:
    """Return the JSON text on the right-hand side of the assignment.

    Raises:
        MalformedDataFileError: If the text does not start with the assignment.
    """
    match = _ASSIGNMENT_RE.match(text)
    if match is None:
        raise MalformedDataFileError("missing 'window.BENCHMARK_DATA =' assignment")
    body = text[match.end() :].rstrip()
    if body.endswith(";"):
        body = body[:-1].rstrip()
    return body


def parse_data_object(obj: Any) -> BenchmarkData:
    """Validate an already-decoded JSON object as BenchmarkData.

    Raises:
        MalformedDataFileError: If the root is not a JSON object.
        DataValidationError: If the object does not match the data model.
    """
    if not isinstance(obj, dict):
        raise MalformedDataFileError(
            "JSON root must be an object", details={"type": type(obj).__name__}
        )
    try:
        return BenchmarkData.model_validate(obj)
    except ValidationError as exc:
        raise DataValidationError(format_validation_errors(exc)) from exc


def parse_data_js(text: str) -> BenchmarkData:
    """Parse the contents of a data.js file."""
    body = strip_assignment(text)
    try:
        obj = json.loads(body)
    except json.JSONDecodeError as exc:
        raise MalformedDataFileError(
            f"invalid JSON: {exc.msg}", details={"line": exc.lineno, "column": exc.colno}
        ) from exc
    return parse_data_object(obj)


def dump_data(data: BenchmarkData) -> dict[str, Any]:
    """Return the wire representation (camelCase keys, no unset optionals)."""
    return data.to_wire()


def render_data_js(data: BenchmarkData) -> str:
    """Render a document as a data.js script."""
    return DATA_JS_PREFIX + json.dumps(dump_data(data), indent=2, ensure_ascii=False)


def load_data_file(
    path: Path,
    *,
    missing_ok: bool = False,
    repo_url: str | None = None,
) -> BenchmarkData:
    """Load and validate a data.js file.

    Args:
        path: File to read.
        missing_ok: Return an empty document when the file does not exist
            (first run of a new history).
        repo_url: Repository URL used for that empty document.

    Raises:
        FileNotFoundError: If the file is missing and missing_ok is False.
        MalformedDataFileError: If the file is not valid UTF-8 or not a benchmark
            data script.
        DataValidationError: If the document does not match the data model.
    """
    path = Path(path)
    if not path.exists():
        if missing_ok:
            logger.info("benchtrack.file.created", path=str(path))
            return BenchmarkData.empty(repo_url or "")
        raise FileNotFoundError(f"Data file not found: {path}")
    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise MalformedDataFileError(
            "file is not valid UTF-8", details={"path": str(path), "position": exc.start}
        ) from exc
    data = parse_data_js(text)
    logger.debug(
        "benchtrack.file.loaded",
        path=str(path),
        suites=len(data.entries),
        entries=sum(len(v) for v in data.entries.values()),
    )
    return data


def save_data_file(path: Path, data: BenchmarkData) -> Path:
    """Write a document atomically (temp file in the same directory, then rename)."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", dir=path.parent)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as fh:
            fh.write(render_data_js(data))
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise
    logger.info("benchtrack.file.saved", path=str(path))
    return path
