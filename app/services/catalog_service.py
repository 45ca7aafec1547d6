"""
Catalog Service

Read-side business logic: projects cached playlists to catalog listings and
resolves single streams.
"""
import logging

from app.exceptions import ChannelNotFoundError
from app.schemas import (
    CatalogDescriptor,
    CatalogExtra,
    CatalogResponse,
    Manifest,
    MetaPreview,
    StreamItem,
    StreamResponse,
)
from app.services.playlist_cache import PlaylistCache
from app.utils.logging_helpers import sanitize_url_for_logging

logger = logging.getLogger(__name__)


MANIFEST = Manifest(
    id="org.dynamic.m3u",
    version="1.0.0",
    name="Dynamic M3U Streamer",
    description="Add any M3U URL and stream channels in Stremio",
    resources=["stream", "catalog"],
    types=["channel"],
    catalogs=[
        CatalogDescriptor(
            type="channel",
            id="dynamic-m3u",
            name="Dynamic M3U",
            extra=[
                CatalogExtra(name="url", is_required=True, description="M3U playlist URL")
            ],
        )
    ],
)


def get_manifest() -> Manifest:
    """Return the static addon manifest"""
    return MANIFEST


async def list_catalog(cache: PlaylistCache, url: str) -> CatalogResponse:
    """
    Build the catalog listing for a playlist

    Args:
        cache: Playlist cache to read through
        url: Playlist source URL

    Returns:
        One meta per channel, in playlist order
    """
    channels = await cache.get_or_load(url)

    metas = [
        MetaPreview(
            id=channel.identifier,
            name=channel.display_name,
            poster=channel.poster_url,
        )
        for channel in channels
    ]

    logger.info(f"Catalog response: {len(metas)} channels from {sanitize_url_for_logging(url)}")

    return CatalogResponse(metas=metas)


async def resolve_stream(cache: PlaylistCache, url: str, channel_id: str) -> StreamResponse:
    """
    Find the stream for one channel

    Args:
        cache: Playlist cache to read through
        url: Playlist source URL
        channel_id: Normalized channel identifier

    Returns:
        Stream response holding the first channel whose identifier matches

    Raises:
        ChannelNotFoundError: If no channel has this identifier
    """
    channels = await cache.get_or_load(url)

    channel = next((c for c in channels if c.identifier == channel_id), None)
    if channel is None:
        raise ChannelNotFoundError(channel_id)

    return StreamResponse(
        streams=[
            StreamItem(
                title=channel.display_name,
                url=channel.playback_url,
                poster=channel.poster_url,
            )
        ]
    )
