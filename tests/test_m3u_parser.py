import pytest

from app.exceptions import PlaylistParseError
from app.services.fetch_types import Channel
from app.services.m3u_parser_service import normalize_identifier, parse_m3u_text

from tests.conftest import HBO_PLAYLIST, MIXED_PLAYLIST


class TestNormalizeIdentifier:
    """Identifier normalization"""

    def test_trailing_whitespace_is_dropped(self):
        assert normalize_identifier("HBO ") == "hbo"

    def test_whitespace_runs_become_single_hyphen(self):
        assert normalize_identifier("Fox Sports 1") == "fox-sports-1"
        assert normalize_identifier("Fox \t  Sports\n1") == "fox-sports-1"

    def test_result_has_no_whitespace_or_uppercase(self):
        result = normalize_identifier("  BBC One  HD ")
        assert result == "bbc-one-hd"
        assert result == result.lower()
        assert not any(ch.isspace() for ch in result)


class TestParseM3UText:
    """Playlist text to Channel records"""

    def test_single_entry(self):
        channels = parse_m3u_text(HBO_PLAYLIST)

        assert channels == (
            Channel(
                identifier="hbo",
                display_name="HBO",
                playback_url="http://example.com/hbo.m3u8",
                poster_url="http://example.com/hbo.png",
                epg_tag="hbo",
            ),
        )

    def test_directives_discarded_and_order_preserved(self):
        channels = parse_m3u_text(MIXED_PLAYLIST)

        assert [c.identifier for c in channels] == ["hbo", "fox-sports-1", "news-channel"]
        assert [c.playback_url for c in channels] == [
            "http://example.com/hbo.m3u8",
            "http://example.com/fox.m3u8",
            "http://example.com/news.m3u8",
        ]

    def test_optional_attributes_default_to_empty(self):
        news = parse_m3u_text(MIXED_PLAYLIST)[2]

        assert news.poster_url == ""
        assert news.epg_tag == ""
        assert news.group_title == ""

    def test_tag_takes_precedence_over_name(self):
        hbo = parse_m3u_text(MIXED_PLAYLIST)[0]

        assert hbo.identifier == "hbo"
        assert hbo.display_name == "HBO East"
        assert hbo.epg_tag == "HBO"
        assert hbo.group_title == "Movies"

    def test_comma_inside_quoted_attribute(self):
        text = (
            "#EXTM3U\n"
            '#EXTINF:-1 tvg-id="news" group-title="News, World",World News, Live\n'
            "http://example.com/news.m3u8\n"
        )
        channel = parse_m3u_text(text)[0]

        assert channel.group_title == "News, World"
        assert channel.display_name == "World News, Live"

    def test_tvg_name_used_when_title_empty(self):
        text = (
            "#EXTM3U\n"
            '#EXTINF:-1 tvg-name="CNN Intl",\n'
            "http://example.com/cnn.m3u8\n"
        )
        channel = parse_m3u_text(text)[0]

        assert channel.display_name == "CNN Intl"
        assert channel.identifier == "cnn-intl"

    def test_bom_and_crlf(self):
        text = "\ufeff" + HBO_PLAYLIST.replace("\n", "\r\n")

        assert parse_m3u_text(text) == parse_m3u_text(HBO_PLAYLIST)

    def test_header_only_playlist_is_empty(self):
        assert parse_m3u_text("#EXTM3U\n") == ()

    def test_uri_without_extinf_is_ignored(self):
        text = "#EXTM3U\nhttp://example.com/orphan.m3u8\n" + HBO_PLAYLIST.split("\n", 1)[1]

        assert [c.identifier for c in parse_m3u_text(text)] == ["hbo"]

    def test_parsing_is_deterministic(self):
        assert parse_m3u_text(MIXED_PLAYLIST) == parse_m3u_text(MIXED_PLAYLIST)


class TestMalformedPlaylists:
    """Malformed input fails the whole parse"""

    def test_missing_header(self):
        with pytest.raises(PlaylistParseError, match="#EXTM3U"):
            parse_m3u_text('#EXTINF:-1,HBO\nhttp://example.com/hbo.m3u8\n')

    def test_empty_text(self):
        with pytest.raises(PlaylistParseError):
            parse_m3u_text("  \n\n")

    def test_html_error_page(self):
        with pytest.raises(PlaylistParseError):
            parse_m3u_text("<html><body>403 Forbidden</body></html>")

    def test_extinf_followed_by_extinf(self):
        text = "#EXTM3U\n#EXTINF:-1,One\n#EXTINF:-1,Two\nhttp://example.com/two.m3u8\n"

        with pytest.raises(PlaylistParseError, match="line 2"):
            parse_m3u_text(text)

    def test_extinf_at_end_of_input(self):
        text = HBO_PLAYLIST + "#EXTINF:-1,Dangling\n"

        with pytest.raises(PlaylistParseError, match="no stream URI"):
            parse_m3u_text(text)

    def test_extinf_without_title_separator(self):
        text = '#EXTM3U\n#EXTINF:-1 tvg-id="hbo"\nhttp://example.com/hbo.m3u8\n'

        with pytest.raises(PlaylistParseError, match="title separator"):
            parse_m3u_text(text)

    def test_entry_without_tag_or_name(self):
        text = '#EXTM3U\n#EXTINF:-1 tvg-logo="http://example.com/x.png",\nhttp://example.com/x.m3u8\n'

        with pytest.raises(PlaylistParseError, match="neither tvg-id nor a name"):
            parse_m3u_text(text)

    def test_no_partial_result_on_late_error(self):
        text = HBO_PLAYLIST + "#EXTINF:-1,\nhttp://example.com/anon.m3u8\n"

        with pytest.raises(PlaylistParseError):
            parse_m3u_text(text)
