"""Extractors turning benchmark tool output into BenchResult lists."""

from benchtrack.parsers.cargo import parse_cargo_output
from benchtrack.parsers.custom import parse_custom_json
from benchtrack.parsers.go import parse_go_output
from benchtrack.parsers.registry import PARSER_REGISTRY, parse_bench_output

__all__ = [
    "PARSER_REGISTRY",
    "parse_bench_output",
    "parse_cargo_output",
    "parse_custom_json",
    "parse_go_output",
]
