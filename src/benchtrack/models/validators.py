"""Shared validators for benchmark data models."""

import re
from datetime import datetime

from benchtrack.models.constants import RANGE_SYMBOL

# "± 1234", "±12.5", or the ASCII "+/- 1234" some extractors emit
_RANGE_RE = re.compile(r"^(?:±|\+/-)\s*(\d[\d,]*(?:\.\d+)?(?:[eE][+-]?\d+)?)\s*%?$")


def normalize_range(v: str) -> str:
    """Validate a range string and normalize its prefix to '± '.

    Raises ValueError if the string is not a plus/minus deviation.
    """
    v = v.strip()
    match = _RANGE_RE.match(v)
    if not match:
        raise ValueError(f"Invalid range string: {v!r}")
    rest = v[1:] if v.startswith(RANGE_SYMBOL) else v[3:]
    return f"{RANGE_SYMBOL} {rest.strip()}"


def parse_range_value(v: str) -> float:
    """Return the numeric deviation from a range string ('± 1,234' -> 1234.0)."""
    match = _RANGE_RE.match(v.strip())
    if not match:
        raise ValueError(f"Invalid range string: {v!r}")
    return float(match.group(1).replace(",", ""))


def validate_iso_timestamp(v: str) -> str:
    """Validate an ISO 8601 timestamp, accepting a trailing 'Z'."""
    try:
        datetime.fromisoformat(v.replace("Z", "+00:00"))
    except ValueError as exc:
        raise ValueError(f"Invalid ISO 8601 timestamp: {v!r}") from exc
    return v
