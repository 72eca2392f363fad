"""Benchmark data models.

Pydantic models for the ``window.BENCHMARK_DATA`` document and the
constants that describe its file format.
"""

from benchtrack.models.base import BenchBaseModel
from benchtrack.models.constants import (
    DATA_JS_PREFIX,
    DEFAULT_ALERT_THRESHOLD,
    DEFAULT_SUITE_NAME,
    DEFAULT_TOOL,
    SUPPORTED_TOOLS,
)
from benchtrack.models.entities import (
    BenchmarkData,
    BenchmarkEntry,
    BenchResult,
    CommitInfo,
    Person,
)

__all__ = [
    "BenchBaseModel",
    "DATA_JS_PREFIX",
    "DEFAULT_ALERT_THRESHOLD",
    "DEFAULT_SUITE_NAME",
    "DEFAULT_TOOL",
    "SUPPORTED_TOOLS",
    "BenchmarkData",
    "BenchmarkEntry",
    "BenchResult",
    "CommitInfo",
    "Person",
]
