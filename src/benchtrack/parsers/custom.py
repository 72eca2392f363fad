"""Parser for the custom JSON result format.

Both ``customSmallerIsBetter`` and ``customBiggerIsBetter`` take a JSON
array of ``{"name", "unit", "value", "range"?, "extra"?}`` objects.
"""

from __future__ import annotations

import json

from pydantic import TypeAdapter, ValidationError

from benchtrack.errors import BenchOutputParseError
from benchtrack.models import BenchResult

_RESULTS_ADAPTER = TypeAdapter(list[BenchResult])


def parse_custom_json(text: str, tool: str = "customSmallerIsBetter") -> list[BenchResult]:
    try:
        obj = json.loads(text)
    except json.JSONDecodeError as exc:
        raise BenchOutputParseError(tool, f"invalid JSON: {exc.msg}") from exc
    if not isinstance(obj, list):
        raise BenchOutputParseError(tool, "expected a JSON array of results")
    try:
        results = _RESULTS_ADAPTER.validate_python(obj)
    except ValidationError as exc:
        raise BenchOutputParseError(
            tool, "result does not match {name, unit, value}", details={"errors": exc.errors()}
        ) from exc
    if not results:
        raise BenchOutputParseError(tool, "result array is empty")
    return results
