"""
Services package for M3U Catalog Service

This package contains all business logic and service layer components.
"""
from app.services.catalog_service import get_manifest, list_catalog, resolve_stream
from app.services.m3u_parser_service import normalize_identifier, parse_m3u_text
from app.services.playlist_cache import PlaylistCache

__all__ = [
    'get_manifest',
    'list_catalog',
    'resolve_stream',
    'normalize_identifier',
    'parse_m3u_text',
    'PlaylistCache',
]
