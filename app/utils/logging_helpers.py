"""
Structured logging helpers for consistent log formatting.

Provides utilities for clean logging of playlist sources without leaking credentials.
"""
import logging
from urllib.parse import urlsplit, urlunsplit


def sanitize_url_for_logging(url: str) -> str:
    """
    Remove credentials from URL for safe logging.

    IPTV providers commonly embed username/password either in the userinfo part
    or in the query string, so both are masked.

    Args:
        url: URL to sanitize

    Returns:
        URL with userinfo and query values replaced by ***
    """
    if "://" not in url:
        return url
    try:
        parts = urlsplit(url)
    except ValueError:
        return url

    netloc = parts.netloc
    if "@" in netloc:
        netloc = f"***:***@{netloc.rsplit('@', 1)[1]}"

    query = parts.query
    if query:
        masked = []
        for pair in query.split("&"):
            key, sep, _ = pair.partition("=")
            masked.append(f"{key}=***" if sep else key)
        query = "&".join(masked)

    return urlunsplit((parts.scheme, netloc, parts.path, query, parts.fragment))


def log_cache_hit(logger: logging.Logger, url: str, channels_count: int) -> None:
    """
    Log a playlist cache hit.

    Args:
        logger: Logger instance
        url: Source URL that was served from cache
        channels_count: Number of cached channels
    """
    logger.debug(f"Cache hit for {sanitize_url_for_logging(url)} ({channels_count} channels)")


def log_cache_miss(logger: logging.Logger, url: str) -> None:
    """Log a playlist cache miss."""
    logger.debug(f"Cache miss for {sanitize_url_for_logging(url)}")


def log_ingest_summary(
    logger: logging.Logger,
    url: str,
    channels_count: int,
    ttl_seconds: float
) -> None:
    """
    Log ingestion summary after a successful fetch and parse.

    Args:
        logger: Logger instance
        url: Source URL
        channels_count: Number of parsed channels
        ttl_seconds: How long the result stays cached
    """
    logger.info(
        f"Cached {channels_count} channels from {sanitize_url_for_logging(url)} for {ttl_seconds}s"
    )
