"""Shared pytest fixtures for benchtrack tests.

This module provides the sample history file, commits and entries used
across test modules.
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable

import pytest

from benchtrack.models import BenchmarkData, BenchmarkEntry, BenchResult, CommitInfo, Person

FIXTURES_DIR = Path(__file__).parent / "fixtures"
JSONRPSEE_DATA_FILE = FIXTURES_DIR / "jsonrpsee_dev_data.js"

# Dates of the three entries in the jsonrpsee fixture
JSONRPSEE_ENTRY_DATES = [1634084619291, 1634170892793, 1634257300919]
JSONRPSEE_BENCH_COUNT = 53

BASE_DATE = 1_700_000_000_000
REPO_URL = "https://github.com/paritytech/jsonrpsee"


@pytest.fixture
def jsonrpsee_data_path() -> Path:
    return JSONRPSEE_DATA_FILE


@pytest.fixture
def jsonrpsee_data_text() -> str:
    return JSONRPSEE_DATA_FILE.read_text(encoding="utf-8")


def make_commit(commit_id: str = "a" * 40, message: str = "Bump deps (#100)") -> CommitInfo:
    return CommitInfo(
        author=Person(name="Alice Example", username="alice", email="alice@example.com"),
        committer=Person(name="GitHub", username="web-flow", email="noreply@github.com"),
        id=commit_id,
        message=message,
        timestamp="2023-11-14T22:13:20Z",
        url=f"{REPO_URL}/commit/{commit_id}",
    )


def make_entry(
    commit_id: str = "a" * 40,
    date: int = BASE_DATE,
    benches: dict[str, int | float] | None = None,
    tool: str = "cargo",
    unit: str = "ns/iter",
) -> BenchmarkEntry:
    benches = benches if benches is not None else {"sync/http_round_trip": 130377}
    return BenchmarkEntry(
        commit=make_commit(commit_id),
        date=date,
        tool=tool,
        benches=[
            BenchResult(name=name, value=value, range="± 10", unit=unit)
            for name, value in benches.items()
        ],
    )


@pytest.fixture
def entry_factory() -> Callable[..., BenchmarkEntry]:
    return make_entry


@pytest.fixture
def sample_commit() -> CommitInfo:
    return make_commit()


@pytest.fixture
def sample_data() -> BenchmarkData:
    """Two-entry history; the second run adds a batch-request bench."""
    return BenchmarkData(
        lastUpdate=BASE_DATE + 1000,
        repoUrl=REPO_URL,
        entries={
            "Benchmark": [
                make_entry("1" * 40, BASE_DATE, {"sync/http_round_trip": 100_000}),
                make_entry(
                    "2" * 40,
                    BASE_DATE + 1000,
                    {"sync/http_round_trip": 250_000, "async/http_batch_requests/10": 5_000},
                ),
            ]
        },
    )


@pytest.fixture
def github_head_commit() -> dict[str, object]:
    """``head_commit`` object as found in a GitHub push event payload."""
    return {
        "id": "e734afe28e91be4ee45da570304636420da45d0a",
        "tree_id": "0d1b2c3a4f5e6d7c8b9a0f1e2d3c4b5a69788796",
        "distinct": True,
        "message": "chore: update readme to new pending release (#516)",
        "timestamp": "2021-10-14T11:16:58Z",
        "url": "https://github.com/paritytech/jsonrpsee/commit/e734afe28e91be4ee45da570304636420da45d0a",
        "author": {
            "name": "Niklas Adolfsson",
            "email": "niklasadolfsson1@gmail.com",
            "username": "niklasad1",
        },
        "committer": {"name": "GitHub", "email": "noreply@github.com", "username": "web-flow"},
        "added": [],
        "removed": [],
        "modified": ["README.md"],
    }


CARGO_OUTPUT = """\
   Compiling jsonrpsee-benchmarks v0.1.0 (/builds/parity/jsonrpsee/benches)
    Finished bench [optimized] target(s) in 2m 03s
     Running unittests (target/release/deps/bench-5f1e8d7c6b5a4f3e)

test jsonrpsee_types_v2_array_ref ... bench:         148 ns/iter (+/- 1)
test sync/http_round_trip ... bench:     130,377 ns/iter (+/- 5,232)
test sync/ws_concurrent_conn_calls/fast_call/1024 ... bench:  12,345,678 ns/iter (+/- 234,567)

test result: ok. 0 passed; 0 failed; 0 ignored; 3 measured; 0 filtered out
"""


@pytest.fixture
def cargo_output() -> str:
    return CARGO_OUTPUT
