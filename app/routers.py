from typing import Annotated
from fastapi import APIRouter, Depends, HTTPException, Query
import logging

from app.exceptions import ChannelNotFoundError, PlaylistError
from app.schemas import CatalogResponse, Manifest, StreamResponse
from app.services import get_manifest, list_catalog, resolve_stream, PlaylistCache
from app.dependencies import get_playlist_cache


logger = logging.getLogger(__name__)

main_router = APIRouter()

PlaylistUrl = Annotated[str, Query(min_length=1, description="M3U playlist URL")]


@main_router.get("/")
async def root(cache: Annotated[PlaylistCache, Depends(get_playlist_cache)]) -> dict:
    """Root endpoint with service information"""
    manifest = get_manifest()

    return {
        "service": manifest.name,
        "version": manifest.version,
        "cached_playlists": len(cache),
        "endpoints": {
            "manifest": "/manifest.json - Addon manifest",
            "catalog": "/catalog?url= - List channels of a playlist",
            "stream": "/stream?url=&channelId= - Resolve one channel's stream",
            "health": "/health - Health check"
        }
    }


@main_router.get("/health")
async def health_check(cache: Annotated[PlaylistCache, Depends(get_playlist_cache)]) -> dict:
    """Health check endpoint"""
    return {
        "status": "ok",
        "cached_playlists": len(cache)
    }


@main_router.get("/manifest.json", response_model=Manifest)
async def manifest() -> Manifest:
    """Static addon manifest"""
    return get_manifest()


@main_router.get("/catalog", response_model=CatalogResponse)
async def catalog(
    url: PlaylistUrl,
    cache: Annotated[PlaylistCache, Depends(get_playlist_cache)]
) -> CatalogResponse:
    """
    List the channels of a playlist

    Args:
        url: Playlist source URL

    Returns:
        Catalog metas in playlist order
    """
    try:
        return await list_catalog(cache, url)
    except PlaylistError as e:
        logger.error(f"Catalog request failed: {e}")
        raise HTTPException(status_code=500, detail="Error parsing M3U playlist")


@main_router.get("/stream", response_model=StreamResponse)
async def stream(
    url: PlaylistUrl,
    channel_id: Annotated[str, Query(alias="channelId", min_length=1, description="Channel identifier")],
    cache: Annotated[PlaylistCache, Depends(get_playlist_cache)]
) -> StreamResponse:
    """
    Resolve the stream of one channel

    Args:
        url: Playlist source URL
        channel_id: Identifier as listed in the catalog

    Returns:
        Single-element stream list
    """
    try:
        return await resolve_stream(cache, url, channel_id)
    except ChannelNotFoundError as e:
        logger.info(str(e))
        raise HTTPException(status_code=404, detail="Channel not found")
    except PlaylistError as e:
        logger.error(f"Stream request failed: {e}")
        raise HTTPException(status_code=500, detail="Error fetching stream")
