"""Tests for history append and query operations."""

import pytest

from benchtrack.errors import EntryOrderError, SuiteNotFoundError
from benchtrack.models import BenchmarkData, CommitInfo
from benchtrack.store import (
    add_entry,
    bench_names,
    build_entry,
    commit_from_event,
    introduced_benches,
    latest_entry,
    series,
    suite_names,
)

BASE = 1_700_000_000_000


class TestAddEntry:
    def test_creates_suite(self, entry_factory) -> None:
        data = add_entry(BenchmarkData.empty("https://r"), "Benchmark", entry_factory(), now_ms=42)
        assert suite_names(data) == ["Benchmark"]
        assert data.last_update == 42

    def test_appends_in_order(self, sample_data: BenchmarkData, entry_factory) -> None:
        entry = entry_factory("3" * 40, BASE + 2000)
        data = add_entry(sample_data, "Benchmark", entry, now_ms=BASE + 3000)
        assert [e.commit.id[0] for e in data.entries["Benchmark"]] == ["1", "2", "3"]
        # the input document is left untouched
        assert len(sample_data.entries["Benchmark"]) == 2

    def test_rejects_older_entry(self, sample_data: BenchmarkData, entry_factory) -> None:
        with pytest.raises(EntryOrderError) as exc_info:
            add_entry(sample_data, "Benchmark", entry_factory("3" * 40, BASE - 1))
        assert exc_info.value.last_date == BASE + 1000
        assert exc_info.value.code == "benchtrack:entry/out_of_order"

    def test_same_date_accepted(self, sample_data: BenchmarkData, entry_factory) -> None:
        data = add_entry(sample_data, "Benchmark", entry_factory("3" * 40, BASE + 1000))
        assert len(data.entries["Benchmark"]) == 3

    def test_rerun_of_last_commit_replaces_it(self, sample_data: BenchmarkData, entry_factory) -> None:
        rerun = entry_factory("2" * 40, BASE + 5000, {"sync/http_round_trip": 99})
        data = add_entry(sample_data, "Benchmark", rerun)
        entries = data.entries["Benchmark"]
        assert len(entries) == 2
        assert entries[-1].bench("sync/http_round_trip").value == 99

    def test_max_items_drops_oldest(self, sample_data: BenchmarkData, entry_factory) -> None:
        data = add_entry(sample_data, "Benchmark", entry_factory("3" * 40, BASE + 2000), max_items=2)
        assert [e.commit.id[0] for e in data.entries["Benchmark"]] == ["2", "3"]

    def test_max_items_must_be_positive(self, sample_data: BenchmarkData, entry_factory) -> None:
        with pytest.raises(ValueError):
            add_entry(sample_data, "Benchmark", entry_factory(), max_items=0)

    def test_other_suites_untouched(self, sample_data: BenchmarkData, entry_factory) -> None:
        data = add_entry(sample_data, "Release", entry_factory("9" * 40, BASE - 10_000))
        assert suite_names(data) == ["Benchmark", "Release"]
        assert data.entries["Benchmark"] == sample_data.entries["Benchmark"]


class TestQueries:
    def test_bench_names_first_appearance_order(self, sample_data: BenchmarkData) -> None:
        assert bench_names(sample_data, "Benchmark") == [
            "sync/http_round_trip",
            "async/http_batch_requests/10",
        ]

    def test_series_skips_entries_without_bench(self, sample_data: BenchmarkData) -> None:
        points = series(sample_data, "Benchmark", "async/http_batch_requests/10")
        assert [(p.commit_id[0], p.value) for p in points] == [("2", 5_000)]

    def test_series_values(self, sample_data: BenchmarkData) -> None:
        points = series(sample_data, "Benchmark", "sync/http_round_trip")
        assert [p.value for p in points] == [100_000, 250_000]
        assert points[0].range == "± 10"
        assert points[0].unit == "ns/iter"

    def test_introduced_benches(self, sample_data: BenchmarkData) -> None:
        assert introduced_benches(sample_data, "Benchmark") == {
            "sync/http_round_trip": "1" * 40,
            "async/http_batch_requests/10": "2" * 40,
        }

    def test_latest_entry(self, sample_data: BenchmarkData) -> None:
        assert latest_entry(sample_data, "Benchmark").commit.id == "2" * 40
        empty = BenchmarkData(lastUpdate=0, repoUrl="", entries={"Benchmark": []})
        assert latest_entry(empty, "Benchmark") is None

    def test_unknown_suite(self, sample_data: BenchmarkData) -> None:
        with pytest.raises(SuiteNotFoundError) as exc_info:
            series(sample_data, "Nope", "x")
        assert exc_info.value.available == ["Benchmark"]


class TestBuilders:
    def test_commit_from_event_drops_extra_keys(self, github_head_commit) -> None:
        commit = commit_from_event(github_head_commit)
        assert commit.id == "e734afe28e91be4ee45da570304636420da45d0a"
        assert commit.author.username == "niklasad1"
        assert commit.committer.name == "GitHub"

    def test_commit_from_event_without_email(self, github_head_commit) -> None:
        event = dict(github_head_commit, author={"name": "paritytech", "username": "paritytech"})
        assert commit_from_event(event).author.email is None

    def test_build_entry_defaults_date_to_now(self, sample_commit: CommitInfo, monkeypatch) -> None:
        monkeypatch.setattr("benchtrack.store.time.time", lambda: 1_700_000_123.5)
        entry = build_entry(sample_commit, [], "cargo")
        assert entry.date == 1_700_000_123_500

    def test_build_entry_explicit_date(self, sample_commit: CommitInfo) -> None:
        assert build_entry(sample_commit, [], date_ms=BASE).date == BASE
