from functools import partial

import httpx
import pytest
from fastapi.testclient import TestClient

from app.dependencies import get_playlist_cache
from app.main import app
from app.services.playlist_cache import PlaylistCache
from app.services.playlist_ingest_service import process_playlist_source


PLAYLIST_URL = "http://playlists.test/hbo.m3u"

HBO_PLAYLIST = (
    "#EXTM3U\n"
    '#EXTINF:-1 tvg-id="hbo" tvg-logo="http://example.com/hbo.png",HBO\n'
    "http://example.com/hbo.m3u8\n"
)

MIXED_PLAYLIST = """#EXTM3U x-tvg-url="http://epg.test/guide.xml"
#EXTINF:-1 tvg-id="HBO " tvg-logo="http://example.com/hbo.png" group-title="Movies",HBO East
#EXTVLCOPT:http-user-agent=Mozilla/5.0
http://example.com/hbo.m3u8

#EXTINF:-1 tvg-logo="http://example.com/fox.png" group-title="Sports",Fox Sports 1
#EXTGRP:Sports
http://example.com/fox.m3u8
#EXTINF:-1,News Channel
http://example.com/news.m3u8
"""


class FakeTimer:
    """Manually advanced clock for cache expiry tests"""

    def __init__(self, start: float = 0.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeUpstream:
    """Serves playlist bodies by URL and counts requests"""

    def __init__(self, responses: dict[str, httpx.Response] | None = None):
        self.responses = dict(responses or {})
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        response = self.responses.get(str(request.url))
        if response is None:
            return httpx.Response(404, text="not found")
        return response

    def count(self, url: str) -> int:
        return sum(1 for request in self.requests if str(request.url) == url)


@pytest.fixture
def timer() -> FakeTimer:
    return FakeTimer()


@pytest.fixture
def upstream() -> FakeUpstream:
    return FakeUpstream({PLAYLIST_URL: httpx.Response(200, text=HBO_PLAYLIST)})


@pytest.fixture
def playlist_cache(upstream, timer) -> PlaylistCache:
    """Fresh cache that downloads through the fake upstream"""
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(upstream))
    return PlaylistCache(
        ttl_seconds=300,
        max_entries=16,
        loader=partial(process_playlist_source, client=http_client),
        timer=timer,
    )


@pytest.fixture
def client(playlist_cache):
    """API client for the module-level app with the cache overridden"""
    app.dependency_overrides[get_playlist_cache] = lambda: playlist_cache
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
