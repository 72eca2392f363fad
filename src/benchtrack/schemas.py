"""Schema export helpers for benchmark data models.

Exports JSON Schemas for the data file's records so other tooling (the
dashboard, CI checks in other languages) can validate the same shape.

Example:
    >>> from benchtrack.schemas import get_schema_json
    >>> schema = get_schema_json("bench_result")
    >>> schema["title"]
    'BenchResult'
"""

import json
from pathlib import Path

from benchtrack.models import (
    BenchmarkData,
    BenchmarkEntry,
    BenchResult,
    CommitInfo,
    Person,
)
from benchtrack.models.base import BenchBaseModel

SCHEMA_REGISTRY: dict[str, type[BenchBaseModel]] = {
    "benchmark_data": BenchmarkData,
    "benchmark_entry": BenchmarkEntry,
    "commit": CommitInfo,
    "person": Person,
    "bench_result": BenchResult,
}

TOTAL_SCHEMA_COUNT = len(SCHEMA_REGISTRY)


def _schema_filename(name: str) -> str:
    return f"{name}.schema.json"


def list_schema_entries(output_dir: Path) -> list[tuple[str, Path]]:
    """List all schema names and the paths they are exported to."""
    return [(name, output_dir / _schema_filename(name)) for name in SCHEMA_REGISTRY]


def get_schema_json(schema_name: str) -> dict[str, object]:
    """Return the JSON schema (wire aliases) for a named model.

    Raises:
        ValueError: If the schema name is not recognized.
    """
    if schema_name not in SCHEMA_REGISTRY:
        raise ValueError(f"Unknown schema name: {schema_name}")
    return SCHEMA_REGISTRY[schema_name].model_json_schema(by_alias=True)


def export_schema(model_class: type[BenchBaseModel], output_path: Path) -> Path:
    """Write the JSON Schema of ``model_class`` to ``output_path``."""
    schema = model_class.model_json_schema(by_alias=True)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(json.dumps(schema, indent=2, ensure_ascii=False), encoding="utf-8")
    return output_path


def export_all_schemas(output_dir: Path) -> list[Path]:
    """Export every registered schema into ``output_dir``."""
    return [
        export_schema(SCHEMA_REGISTRY[name], path)
        for name, path in list_schema_entries(output_dir)
    ]
