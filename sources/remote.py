"""
HTTP Data Source - tables and boundary files served over http(s).
"""

import httpx
from typing import Optional

from .base import DataSource, RawTable
from config import config


# Module-level connection pool, shared by every concurrent fetch
_async_client: Optional[httpx.AsyncClient] = None


def get_async_client() -> httpx.AsyncClient:
    """Get or create the shared async HTTP client with connection pooling."""
    global _async_client
    if _async_client is None or _async_client.is_closed:
        _async_client = httpx.AsyncClient(
            timeout=config.http_timeout,
            follow_redirects=True,
            limits=httpx.Limits(
                max_keepalive_connections=10,
                max_connections=20,
                keepalive_expiry=30.0
            )
        )
    return _async_client


async def close_async_client() -> None:
    global _async_client
    if _async_client is not None and not _async_client.is_closed:
        await _async_client.aclose()
    _async_client = None


class HttpSource(DataSource):
    """Fetches http(s) locations."""

    def __init__(self, client: Optional[httpx.AsyncClient] = None):
        self._client = client

    @property
    def name(self) -> str:
        return "HTTP"

    def supports(self, location: str) -> bool:
        return location.lower().startswith(('http://', 'https://'))

    async def fetch(self, location: str) -> RawTable:
        client = self._client or get_async_client()
        try:
            response = await client.get(location)
            response.raise_for_status()
            return RawTable(location=location, text=response.text)
        except httpx.HTTPStatusError as e:
            return RawTable(location=location, error=f"HTTP {e.response.status_code}")
        except httpx.HTTPError as e:
            return RawTable(location=location, error=f"{type(e).__name__}: {e}")
