"""Tool name to parser dispatch."""

from __future__ import annotations

from typing import Callable

from benchtrack.errors import BenchOutputParseError
from benchtrack.models import BenchResult
from benchtrack.observability import get_logger
from benchtrack.parsers.cargo import parse_cargo_output
from benchtrack.parsers.custom import parse_custom_json
from benchtrack.parsers.go import parse_go_output

logger = get_logger(__name__)

PARSER_REGISTRY: dict[str, Callable[[str], list[BenchResult]]] = {
    "cargo": parse_cargo_output,
    "go": parse_go_output,
    "customSmallerIsBetter": lambda text: parse_custom_json(text, "customSmallerIsBetter"),
    "customBiggerIsBetter": lambda text: parse_custom_json(text, "customBiggerIsBetter"),
}


def parse_bench_output(tool: str, text: str) -> list[BenchResult]:
    """Parse tool output with the parser registered for ``tool``.

    Raises:
        BenchOutputParseError: If the tool has no parser or its output yields no results.
    """
    parser = PARSER_REGISTRY.get(tool)
    if parser is None:
        raise BenchOutputParseError(
            tool, "unsupported tool", details={"supported": sorted(PARSER_REGISTRY)}
        )
    results = parser(text)
    logger.debug("benchtrack.output.parsed", tool=tool, results=len(results))
    return results
