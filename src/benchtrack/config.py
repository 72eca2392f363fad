"""Configuration for benchtrack commands."""

from __future__ import annotations

import os
from pathlib import Path

from pydantic import BaseModel, Field, field_validator

from benchtrack.compare import parse_threshold
from benchtrack.models.constants import (
    DEFAULT_ALERT_THRESHOLD,
    DEFAULT_DATA_FILE,
    DEFAULT_SUITE_NAME,
    DEFAULT_TOOL,
    SUPPORTED_TOOLS,
)

ENV_DATA_FILE = "BENCHTRACK_DATA_FILE"
ENV_SUITE = "BENCHTRACK_SUITE"
ENV_TOOL = "BENCHTRACK_TOOL"
ENV_ALERT_THRESHOLD = "BENCHTRACK_ALERT_THRESHOLD"
ENV_MAX_ITEMS = "BENCHTRACK_MAX_ITEMS"


class BenchtrackConfig(BaseModel):
    data_file: Path = Field(default=Path(DEFAULT_DATA_FILE), description="History file")
    suite: str = Field(default=DEFAULT_SUITE_NAME, min_length=1, description="Suite name")
    tool: str = Field(default=DEFAULT_TOOL, description="Benchmark extractor")
    alert_threshold: str = Field(
        default=DEFAULT_ALERT_THRESHOLD, description="Regression threshold, e.g. '200%'"
    )
    max_items: int | None = Field(
        default=None, ge=1, description="Keep only the newest N entries per suite"
    )

    @field_validator("tool")
    @classmethod
    def validate_tool(cls, v: str) -> str:
        if v not in SUPPORTED_TOOLS:
            raise ValueError(f"Unsupported tool {v!r}")
        return v

    @field_validator("alert_threshold")
    @classmethod
    def validate_threshold(cls, v: str) -> str:
        parse_threshold(v)
        return v

    @property
    def threshold_ratio(self) -> float:
        return parse_threshold(self.alert_threshold)

    @classmethod
    def from_env(cls) -> "BenchtrackConfig":
        """Build a config from BENCHTRACK_* environment variables; unset ones keep defaults."""
        values: dict[str, object] = {}
        if os.environ.get(ENV_DATA_FILE):
            values["data_file"] = Path(os.environ[ENV_DATA_FILE])
        if os.environ.get(ENV_SUITE):
            values["suite"] = os.environ[ENV_SUITE]
        if os.environ.get(ENV_TOOL):
            values["tool"] = os.environ[ENV_TOOL]
        if os.environ.get(ENV_ALERT_THRESHOLD):
            values["alert_threshold"] = os.environ[ENV_ALERT_THRESHOLD]
        if os.environ.get(ENV_MAX_ITEMS):
            values["max_items"] = os.environ[ENV_MAX_ITEMS]
        return cls.model_validate(values)
