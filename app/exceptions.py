"""
Playlist error taxonomy

Every failure the ingestion pipeline can raise derives from PlaylistError so
routers can map them to HTTP responses in one place.
"""


class PlaylistError(Exception):
    """Base class for playlist ingestion and lookup failures"""
    pass


class PlaylistFetchError(PlaylistError):
    """Raised when the playlist URL cannot be retrieved"""

    def __init__(self, url: str, message: str):
        super().__init__(message)
        self.url = url


class PlaylistParseError(PlaylistError, ValueError):
    """Raised when playlist text is malformed"""

    def __init__(self, message: str, line_number: int | None = None):
        if line_number is not None:
            message = f"line {line_number}: {message}"
        super().__init__(message)
        self.line_number = line_number


class ChannelNotFoundError(PlaylistError, LookupError):
    """Raised when no channel matches the requested identifier"""

    def __init__(self, channel_id: str):
        super().__init__(f"Channel not found: {channel_id}")
        self.channel_id = channel_id
