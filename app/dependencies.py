"""
Dependency Injection Configuration

Provides the playlist cache to request handlers through FastAPI's Depends.
The cache is owned by the application (created in the lifespan hook and kept
on app.state) instead of living in a module global, so tests can swap in a
fresh instance with app.dependency_overrides.
"""
from functools import partial
import logging

import httpx
from fastapi import Request

from app.config import settings
from app.services.playlist_cache import PlaylistCache
from app.services.playlist_ingest_service import process_playlist_source


logger = logging.getLogger(__name__)


def create_playlist_cache(client: httpx.AsyncClient | None = None) -> PlaylistCache:
    """
    Build a playlist cache from application settings.

    Args:
        client: Shared HTTP client used for playlist downloads

    Returns:
        A new, empty PlaylistCache
    """
    cache = PlaylistCache(
        ttl_seconds=settings.playlist_cache_ttl_sec,
        max_entries=settings.playlist_cache_max_entries,
        loader=partial(process_playlist_source, client=client),
    )
    logger.debug(
        "Created playlist cache (ttl=%ss, max_entries=%s)",
        settings.playlist_cache_ttl_sec,
        settings.playlist_cache_max_entries,
    )
    return cache


def get_playlist_cache(request: Request) -> PlaylistCache:
    """Return the application-owned playlist cache."""
    return request.app.state.playlist_cache
