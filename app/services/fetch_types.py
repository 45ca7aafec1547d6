"""
Shared dataclasses used across the playlist ingestion pipeline.
"""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Channel:
    """One playable entry parsed from an M3U playlist."""
    identifier: str
    display_name: str
    playback_url: str
    poster_url: str = ""
    epg_tag: str = ""
    group_title: str = ""


__all__ = ["Channel"]
