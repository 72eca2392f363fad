"""Base Pydantic model configuration for benchmark data models.

All models inherit from BenchBaseModel to ensure consistent behavior:
- Immutability (frozen=True); the history file is append-only
- Strict validation (extra="forbid") to catch typos and unknown keys
- Flexible field naming (populate_by_name=True) for the camelCase wire keys
"""

from typing import Any

from pydantic import BaseModel, ConfigDict


class BenchBaseModel(BaseModel):
    """Base model for all benchmark data entities.

    Example:
        >>> from pydantic import Field
        >>> class MyModel(BenchBaseModel):
        ...     name: str
        ...     count: int = Field(default=0, ge=0)
        >>>
        >>> obj = MyModel(name="test", count=5)
        >>> obj.name
        'test'
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        populate_by_name=True,
        validate_default=True,
        json_schema_extra={
            "additionalProperties": False,
        },
    )

    def to_wire(self) -> dict[str, Any]:
        """Dump using wire aliases, omitting unset optional fields."""
        return self.model_dump(by_alias=True, exclude_none=True)
