"""
Playlist Ingest Service

Downloads a single M3U source and parses it into channels.
"""
import asyncio
import logging

import httpx

from app.services.fetch_types import Channel
from app.services.m3u_parser_service import parse_m3u_text
from app.utils.logging_helpers import sanitize_url_for_logging
from app.utils.playlist_download import fetch_playlist_text


logger = logging.getLogger(__name__)


async def process_playlist_source(
    source_url: str,
    *,
    client: httpx.AsyncClient | None = None
) -> tuple[Channel, ...]:
    """
    Download and parse a single M3U source

    Args:
        source_url: URL to download from

    Keyword Args:
        client: Optional shared HTTP client

    Returns:
        Parsed channels in playlist order

    Raises:
        PlaylistFetchError: If the download fails
        PlaylistParseError: If the playlist is malformed
    """
    safe_url = sanitize_url_for_logging(source_url)

    text = await fetch_playlist_text(source_url, client=client)

    logger.info(f"Parsing M3U content from {safe_url}...")
    channels = await parse_m3u_async(text)
    logger.debug(
        "  Channel IDs (first 5): %s",
        [channel.identifier for channel in channels[:5]],
    )

    return channels


async def parse_m3u_async(text: str) -> tuple[Channel, ...]:
    """
    Parse playlist text off the event loop.

    Large provider playlists can hold tens of thousands of entries, so the
    parse is offloaded to the default thread pool executor.

    Args:
        text: Raw playlist body

    Returns:
        Parsed channels

    Raises:
        PlaylistParseError: If the playlist is malformed
    """
    loop = asyncio.get_running_loop()
    logger.debug("Offloading M3U parsing to thread pool executor...")
    return await loop.run_in_executor(None, parse_m3u_text, text)
