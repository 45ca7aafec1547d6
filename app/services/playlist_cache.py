"""
Playlist Cache

Memoizes parsed playlists per source URL for a fixed time window.
One instance is created per application at startup.
"""
import asyncio
import logging
import time
from typing import Awaitable, Callable

from cachetools import TTLCache

from app.services.fetch_types import Channel
from app.services.playlist_ingest_service import process_playlist_source
from app.utils.logging_helpers import log_cache_hit, log_cache_miss, log_ingest_summary


logger = logging.getLogger(__name__)

PlaylistLoader = Callable[[str], Awaitable[tuple[Channel, ...]]]


class PlaylistCache:
    """
    Time-expiring cache of parsed playlists keyed by the exact source URL.

    Only successful loads are stored; a failed fetch or parse propagates to
    the caller and leaves the cache untouched. Concurrent misses for the same
    URL are collapsed into a single load with a per-URL asyncio.Lock.
    """

    def __init__(
        self,
        ttl_seconds: float = 300,
        max_entries: int = 128,
        loader: PlaylistLoader | None = None,
        timer: Callable[[], float] = time.monotonic
    ):
        """
        Initialize the cache.

        Args:
            ttl_seconds: Lifetime of an entry, counted from insertion
            max_entries: Capacity before least recently used entries are evicted
            loader: Async callable that fetches and parses a URL
            timer: Clock used for expiry (injectable for tests)
        """
        self.ttl_seconds = ttl_seconds
        self._entries: TTLCache[str, tuple[Channel, ...]] = TTLCache(
            maxsize=max_entries, ttl=ttl_seconds, timer=timer
        )
        self._loader = loader or process_playlist_source
        self._locks: dict[str, asyncio.Lock] = {}
        self._waiters: dict[str, int] = {}

    async def get_or_load(self, url: str) -> tuple[Channel, ...]:
        """
        Return cached channels for url, loading them on a miss.

        Args:
            url: Playlist source URL (used verbatim as the cache key)

        Returns:
            The stored channel tuple

        Raises:
            PlaylistFetchError: If the download fails
            PlaylistParseError: If the playlist is malformed
        """
        cached = self._entries.get(url)
        if cached is not None:
            log_cache_hit(logger, url, len(cached))
            return cached

        lock = self._locks.setdefault(url, asyncio.Lock())
        self._waiters[url] = self._waiters.get(url, 0) + 1
        try:
            async with lock:
                # Another caller may have loaded it while we waited
                cached = self._entries.get(url)
                if cached is not None:
                    log_cache_hit(logger, url, len(cached))
                    return cached

                log_cache_miss(logger, url)
                channels = await self._loader(url)
                self._entries[url] = channels
                log_ingest_summary(logger, url, len(channels), self.ttl_seconds)
                return channels
        finally:
            self._waiters[url] -= 1
            if not self._waiters[url]:
                del self._waiters[url]
                del self._locks[url]

    def invalidate(self, url: str) -> bool:
        """
        Drop the entry for url.

        Returns:
            True if an entry was removed, False otherwise
        """
        return self._entries.pop(url, None) is not None

    def clear(self) -> None:
        """Drop all entries."""
        self._entries.clear()
        logger.debug("Playlist cache cleared")

    def __contains__(self, url: object) -> bool:
        return url in self._entries

    def __len__(self) -> int:
        self._entries.expire()
        return len(self._entries)
