import logging
import re

from app.exceptions import PlaylistParseError
from app.services.fetch_types import Channel

logger = logging.getLogger(__name__)

HEADER_TAG = "#EXTM3U"
TRACK_TAG = "#EXTINF:"

_ATTRIBUTE_RE = re.compile(r'([A-Za-z0-9_-]+)="([^"]*)"')
_WHITESPACE_RE = re.compile(r"\s+")


def parse_m3u_text(text: str) -> tuple[Channel, ...]:
    """
    Parse M3U playlist text and return its playable channels

    Args:
        text: Raw playlist body

    Returns:
        Channels in source order. Header and directive lines are discarded.

    Raises:
        PlaylistParseError: If the playlist is malformed; no partial result is returned
    """
    lines = [
        (number, line.strip())
        for number, line in enumerate(text.lstrip("\ufeff").splitlines(), start=1)
    ]
    lines = [(number, line) for number, line in lines if line]

    if not lines or not lines[0][1].upper().startswith(HEADER_TAG):
        raise PlaylistParseError("missing #EXTM3U header", lines[0][0] if lines else None)

    logger.debug(f"  Scanning {len(lines)} non-blank lines...")

    channels: list[Channel] = []
    pending: tuple[int, dict[str, str], str] | None = None

    for number, line in lines[1:]:
        if line.upper().startswith(TRACK_TAG):
            if pending is not None:
                raise PlaylistParseError("#EXTINF entry has no stream URI", pending[0])
            attributes, name = _parse_extinf(line, number)
            pending = (number, attributes, name)
            continue

        # Other directives (#EXTGRP, #EXTVLCOPT, #KODIPROP, ...) and comments
        if line.startswith("#"):
            continue

        if pending is None:
            logger.debug(f"Skipping URI without #EXTINF on line {number}")
            continue

        channels.append(_build_channel(pending, line))
        pending = None

    if pending is not None:
        raise PlaylistParseError("#EXTINF entry has no stream URI", pending[0])

    logger.info(f"M3U parsing complete: {len(channels)} channels")

    return tuple(channels)


def normalize_identifier(value: str) -> str:
    """Lowercase and collapse whitespace runs into single hyphens"""
    return _WHITESPACE_RE.sub("-", value.strip()).lower()


def _parse_extinf(line: str, number: int) -> tuple[dict[str, str], str]:
    """Split an #EXTINF line into its attributes and display name"""
    body = line[len(TRACK_TAG):]
    separator = _find_title_separator(body)
    if separator < 0:
        raise PlaylistParseError("#EXTINF entry has no title separator", number)

    attributes = {
        key.lower(): value.strip()
        for key, value in _ATTRIBUTE_RE.findall(body[:separator])
    }
    name = body[separator + 1:].strip()

    return attributes, name


def _find_title_separator(body: str) -> int:
    """Index of the first comma outside quoted attribute values, or -1"""
    in_quotes = False
    for index, char in enumerate(body):
        if char == '"':
            in_quotes = not in_quotes
        elif char == "," and not in_quotes:
            return index
    return -1


def _build_channel(pending: tuple[int, dict[str, str], str], uri: str) -> Channel:
    """Create a Channel from a parsed #EXTINF entry and its URI line"""
    number, attributes, name = pending

    epg_tag = attributes.get("tvg-id", "")
    display_name = name or attributes.get("tvg-name", "")

    identifier = normalize_identifier(epg_tag or display_name)
    if not identifier:
        raise PlaylistParseError("entry has neither tvg-id nor a name", number)

    return Channel(
        identifier=identifier,
        display_name=display_name,
        playback_url=uri,
        poster_url=attributes.get("tvg-logo", ""),
        epg_tag=epg_tag,
        group_title=attributes.get("group-title", ""),
    )
