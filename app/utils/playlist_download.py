"""
Playlist download utilities

This module handles retrieving raw playlist text from remote HTTP(S) sources.
"""
import logging

import httpx

from app.config import settings
from app.exceptions import PlaylistFetchError
from app.utils.logging_helpers import sanitize_url_for_logging


logger = logging.getLogger(__name__)

ALLOWED_SCHEMES = ("http://", "https://")


async def fetch_playlist_text(
    url: str,
    *,
    client: httpx.AsyncClient | None = None,
    timeout: float | None = None
) -> str:
    """
    Download a playlist and return its body as text

    Performs exactly one GET request. Failures are not retried; the caller
    may simply repeat the request.

    Args:
        url: Playlist URL to download from (http or https)

    Keyword Args:
        client: Optional shared client; a short-lived one is created otherwise
        timeout: HTTP timeout in seconds (defaults to playlist_fetch_timeout_sec)

    Returns:
        Decoded response body

    Raises:
        PlaylistFetchError: On invalid URL or scheme, network error, timeout or non-2xx status
    """
    safe_url = sanitize_url_for_logging(url)

    if not url.lower().startswith(ALLOWED_SCHEMES):
        logger.warning(f"Rejected playlist URL with unsupported scheme: {safe_url}")
        raise PlaylistFetchError(url, "Playlist URL must be HTTP/HTTPS")

    try:
        parsed = httpx.URL(url)
    except httpx.InvalidURL as e:
        logger.warning(f"Rejected malformed playlist URL: {safe_url} ({e})")
        raise PlaylistFetchError(url, "Invalid playlist URL") from e

    if not parsed.host:
        logger.warning(f"Rejected playlist URL without host: {safe_url}")
        raise PlaylistFetchError(url, "Invalid playlist URL")

    effective_timeout = timeout if timeout is not None else settings.playlist_fetch_timeout_sec
    headers = {"User-Agent": settings.playlist_user_agent}

    logger.info(f"Downloading playlist from {safe_url}...")

    try:
        if client is None:
            async with httpx.AsyncClient(timeout=effective_timeout, follow_redirects=True) as own_client:
                response = await own_client.get(url, headers=headers)
        else:
            response = await client.get(url, headers=headers, timeout=effective_timeout)
        response.raise_for_status()

    except httpx.HTTPStatusError as e:
        logger.error(f"Playlist download failed: HTTP {e.response.status_code} from {safe_url}")
        raise PlaylistFetchError(url, f"HTTP {e.response.status_code} from playlist source") from e

    except httpx.TimeoutException as e:
        logger.error(f"Playlist download timed out after {effective_timeout}s: {safe_url}")
        raise PlaylistFetchError(url, "Timed out fetching playlist") from e

    except httpx.InvalidURL as e:
        # e.g. a redirect to an unparsable Location
        logger.error(f"Playlist download failed (invalid URL): {safe_url}")
        raise PlaylistFetchError(url, "Invalid playlist URL") from e

    except httpx.HTTPError as e:
        logger.error(f"Playlist download failed ({type(e).__name__}): {safe_url}")
        raise PlaylistFetchError(url, f"Could not fetch playlist: {type(e).__name__}") from e

    logger.info(f"Downloaded {len(response.content) / 1024:.1f} KB from {safe_url}")

    return response.text
