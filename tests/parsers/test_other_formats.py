"""Tests for go and custom JSON parsers and tool dispatch."""

import json

import pytest

from benchtrack.errors import BenchOutputParseError
from benchtrack.parsers import PARSER_REGISTRY, parse_bench_output, parse_custom_json, parse_go_output

GO_OUTPUT = """\
goos: linux
goarch: amd64
BenchmarkFib10-8   	 5000000	       325 ns/op
BenchmarkFib20-8   	   30000	     40537.5 ns/op
PASS
ok  	example.com/fib	3.264s
"""


class TestParseGoOutput:
    def test_parses_lines(self) -> None:
        results = parse_go_output(GO_OUTPUT)
        assert [(r.name, r.value, r.unit) for r in results] == [
            ("BenchmarkFib10-8", 325, "ns/op"),
            ("BenchmarkFib20-8", 40537.5, "ns/op"),
        ]
        assert results[0].extra == "5000000 times"
        assert results[0].range is None

    def test_no_results(self) -> None:
        with pytest.raises(BenchOutputParseError):
            parse_go_output("PASS\n")


class TestParseCustomJson:
    def test_parses_array(self) -> None:
        text = json.dumps(
            [
                {"name": "ws_round_trip", "unit": "ns/iter", "value": 64693, "range": "± 3000"},
                {"name": "throughput", "unit": "req/s", "value": 1520.5, "extra": "8 threads"},
            ]
        )
        results = parse_custom_json(text)
        assert results[0].range == "± 3000"
        assert results[1].extra == "8 threads"

    @pytest.mark.parametrize(
        ("text", "reason"),
        [
            ("not json", "invalid JSON"),
            ('{"name": "a"}', "JSON array"),
            ("[]", "empty"),
            ('[{"name": "a"}]', "does not match"),
        ],
    )
    def test_errors(self, text: str, reason: str) -> None:
        with pytest.raises(BenchOutputParseError, match=reason):
            parse_custom_json(text, "customBiggerIsBetter")


class TestParseBenchOutput:
    def test_dispatches_by_tool(self, cargo_output: str) -> None:
        assert len(parse_bench_output("cargo", cargo_output)) == 3

    def test_custom_tools_registered(self) -> None:
        assert {"customSmallerIsBetter", "customBiggerIsBetter"} <= set(PARSER_REGISTRY)

    def test_unsupported_tool(self) -> None:
        with pytest.raises(BenchOutputParseError, match="unsupported tool") as exc_info:
            parse_bench_output("julia", "")
        assert "cargo" in exc_info.value.details["supported"]
