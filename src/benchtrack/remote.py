"""Download published benchmark data files.

The dashboard publishes ``data.js`` on a static site (usually gh-pages), so
the current history can be read straight from its public URL.
"""

from __future__ import annotations

from typing import Any, Optional

import httpx

from benchtrack.codec import parse_data_js
from benchtrack.errors import RemoteFetchError
from benchtrack.models import BenchmarkData
from benchtrack.observability import get_logger

logger = get_logger(__name__)

DEFAULT_FETCH_TIMEOUT = 10.0


async def fetch_data_text(
    url: str,
    *,
    transport: Optional[httpx.AsyncBaseTransport] = None,
    timeout: float = DEFAULT_FETCH_TIMEOUT,
) -> str:
    """Fetch the raw text of a published data file.

    Args:
        url: URL of the data.js file.
        transport: Optional httpx transport for testing.
        timeout: Request timeout in seconds.

    Raises:
        RemoteFetchError: On network errors or a non-2xx response.
    """
    kwargs: dict[str, Any] = {"timeout": httpx.Timeout(timeout), "follow_redirects": True}
    if transport is not None:
        kwargs["transport"] = transport

    try:
        async with httpx.AsyncClient(**kwargs) as client:
            resp = await client.get(url)
            resp.raise_for_status()
            text = resp.text
    except httpx.HTTPStatusError as exc:
        raise RemoteFetchError(
            url, f"HTTP {exc.response.status_code}", status_code=exc.response.status_code
        ) from exc
    except httpx.HTTPError as exc:
        raise RemoteFetchError(url, str(exc) or type(exc).__name__) from exc

    logger.info("benchtrack.remote.fetched", url=url, size=len(text))
    return text


async def fetch_data_file(
    url: str,
    *,
    transport: Optional[httpx.AsyncBaseTransport] = None,
    timeout: float = DEFAULT_FETCH_TIMEOUT,
) -> BenchmarkData:
    """Fetch and parse a published data file."""
    text = await fetch_data_text(url, transport=transport, timeout=timeout)
    return parse_data_js(text)
