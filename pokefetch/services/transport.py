"""
Transport service - outbound GETs to PokeAPI with a revalidating response cache.

The cache lifetime passed with each fetch is a revalidation window: a stored
successful response younger than the window is served without touching the
network.
"""
from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable

import httpx
from cachetools import TLRUCache

from pokefetch.logging import get_logger

logger = get_logger(__name__)


# Default bound on cached upstream responses
MAX_CACHE_ENTRIES = 1000


@dataclass(frozen=True)
class CachedResponse:
    """A successful upstream response and when it was fetched."""
    response: httpx.Response
    fetched_at: float
    lifetime_seconds: int

    def age(self, now: float) -> float:
        return now - self.fetched_at


def _time_to_use(_url: str, entry: CachedResponse, _now: float) -> float:
    return entry.fetched_at + entry.lifetime_seconds


class PokeApiTransport:
    """
    Issues GET requests through a shared httpx client and caches successful
    responses per URL for the lifetime supplied with the request.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        max_entries: int = MAX_CACHE_ENTRIES,
        timer: Callable[[], float] = time.monotonic,
    ):
        if max_entries < 1:
            raise ValueError("max_entries must be at least 1")
        self._client = client
        self._timer = timer
        self._cache: TLRUCache = TLRUCache(maxsize=max_entries, ttu=_time_to_use, timer=timer)

    def __len__(self) -> int:
        return len(self._cache)

    def clear(self) -> None:
        self._cache.clear()

    async def fetch(self, url: str, cache_lifetime_seconds: int) -> httpx.Response:
        """
        GET the URL, reusing a cached response when it is within the lifetime.

        Args:
            url: Absolute upstream URL
            cache_lifetime_seconds: Revalidation window; 0 disables reuse and storage

        Returns:
            The upstream (or cached) response, whatever its status
        """
        if cache_lifetime_seconds < 0:
            raise ValueError("cache_lifetime_seconds must be non-negative")

        if cache_lifetime_seconds > 0:
            entry = self._cache.get(url)
            if entry is not None and entry.age(self._timer()) < cache_lifetime_seconds:
                logger.debug(f"Cache hit for {url}")
                return entry.response

        response = await self._client.get(url)

        if cache_lifetime_seconds > 0 and response.is_success:
            self._cache[url] = CachedResponse(
                response=response,
                fetched_at=self._timer(),
                lifetime_seconds=cache_lifetime_seconds,
            )
            logger.debug(f"Cached {url} for {cache_lifetime_seconds}s")

        return response
