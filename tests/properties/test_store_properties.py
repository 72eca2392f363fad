"""Property-based tests for the append-only history.

Any sequence of accepted appends leaves every suite ordered by date, and a
max_items bound is never exceeded.
"""

from __future__ import annotations

import pytest
from hypothesis import given
from hypothesis import strategies as st

from benchtrack.codec import parse_data_js, render_data_js
from benchtrack.errors import EntryOrderError
from benchtrack.models import BenchmarkData, BenchmarkEntry, BenchResult, CommitInfo, Person
from benchtrack.store import add_entry, bench_names, series
from benchtrack.validation import validate_data

BASE_DATE = 1_700_000_000_000

_PERSON = Person(name="Alice Example", username="alice", email="alice@example.com")


def _entry(index: int, date: int, benches: dict[str, int | float]) -> BenchmarkEntry:
    commit = CommitInfo(
        author=_PERSON,
        committer=_PERSON,
        id=f"{index:040x}",
        message=f"change {index}",
        timestamp="2023-11-14T22:13:20Z",
        url=f"https://github.com/paritytech/jsonrpsee/commit/{index:040x}",
    )
    return BenchmarkEntry(
        commit=commit,
        date=date,
        tool="cargo",
        benches=[
            BenchResult(name=name, value=value, range="± 1", unit="ns/iter")
            for name, value in benches.items()
        ],
    )


def st_bench_map() -> st.SearchStrategy[dict[str, int]]:
    return st.dictionaries(
        keys=st.sampled_from(
            ["sync/http_round_trip", "sync/ws_round_trip", "async/http_concurrent_conn_calls/64"]
        ),
        values=st.integers(min_value=0, max_value=10**9),
        min_size=1,
    )


def st_date_offsets() -> st.SearchStrategy[list[int]]:
    """Offsets from BASE_DATE, in any order."""
    return st.lists(st.integers(min_value=0, max_value=10**9), min_size=1, max_size=15)


class TestAddEntryProperties:
    @given(offsets=st_date_offsets(), benches=st.lists(st_bench_map(), min_size=15, max_size=15))
    def test_dates_never_decrease(self, offsets: list[int], benches: list[dict[str, int]]) -> None:
        data = BenchmarkData.empty("https://github.com/paritytech/jsonrpsee")
        for index, offset in enumerate(offsets):
            entry = _entry(index, BASE_DATE + offset, benches[index])
            try:
                data = add_entry(data, "Benchmark", entry, now_ms=BASE_DATE)
            except EntryOrderError:
                continue
        dates = [e.date for e in data.entries["Benchmark"]]
        assert dates == sorted(dates)
        assert not [i for i in validate_data(data) if "older than previous" in i.message]

    @given(count=st.integers(min_value=1, max_value=12), max_items=st.integers(min_value=1, max_value=5))
    def test_max_items_keeps_newest(self, count: int, max_items: int) -> None:
        data = BenchmarkData.empty()
        for index in range(count):
            entry = _entry(index, BASE_DATE + index, {"sync/http_round_trip": index})
            data = add_entry(data, "Benchmark", entry, max_items=max_items, now_ms=BASE_DATE)

        entries = data.entries["Benchmark"]
        assert len(entries) == min(count, max_items)
        assert entries[-1].commit.id == f"{count - 1:040x}"

    @given(benches=st.lists(st_bench_map(), min_size=1, max_size=8))
    def test_series_has_one_point_per_recording_entry(self, benches: list[dict[str, int]]) -> None:
        data = BenchmarkData.empty()
        for index, bench_map in enumerate(benches):
            data = add_entry(data, "Benchmark", _entry(index, BASE_DATE + index, bench_map), now_ms=0)

        for name in bench_names(data, "Benchmark"):
            points = series(data, "Benchmark", name)
            assert len(points) == sum(1 for m in benches if name in m)
            assert [p.value for p in points] == [m[name] for m in benches if name in m]


class TestRenderProperties:
    @given(benches=st.lists(st_bench_map(), min_size=1, max_size=4))
    def test_rendered_history_parses_back(self, benches: list[dict[str, int]]) -> None:
        data = BenchmarkData.empty("https://github.com/paritytech/jsonrpsee")
        for index, bench_map in enumerate(benches):
            data = add_entry(data, "Benchmark", _entry(index, BASE_DATE + index, bench_map), now_ms=BASE_DATE)

        assert parse_data_js(render_data_js(data)) == data


@pytest.mark.parametrize("max_items", [0, -3])
def test_max_items_must_be_positive(max_items: int) -> None:
    with pytest.raises(ValueError, match="max_items"):
        add_entry(BenchmarkData.empty(), "Benchmark", _entry(0, BASE_DATE, {"a": 1}), max_items=max_items)
