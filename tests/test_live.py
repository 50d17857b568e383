"""Tests for localize.live — the post-navigation hook."""

from localize import attrs
from localize.config import LocaleConfig
from localize.live import Signal, Socket, handle_params


class TestHandleParams:
    def test_continues(self) -> None:
        signal, socket = handle_params({}, "https://example.com/", Socket())
        assert signal is Signal.CONT
        assert isinstance(socket, Socket)

    def test_query_from_url(self) -> None:
        _, socket = handle_params({}, "https://example.com/p?locale=fr", Socket())
        assert attrs.get(socket, "locale") == "fr"
        assert socket.assigns["locale"] == "fr"

    def test_path_params(self) -> None:
        config = LocaleConfig.from_options(language_sources=["path"], language_params=["lang"])
        _, socket = handle_params({"lang": "nl"}, "https://example.com/nl/p", Socket(), config=config)
        assert socket.assigns["language"] == "nl"

    def test_host_from_url(self) -> None:
        config = LocaleConfig.from_options(locale_sources=["host"])
        _, socket = handle_params({}, "https://fr.example.com:8443/", Socket(), config=config)
        assert socket.host == "fr.example.com"
        assert attrs.get(socket, "locale") == "fr.example.com"

    def test_header_sources_absent(self) -> None:
        config = LocaleConfig.from_options(locale_sources=["accept_language"])
        _, socket = handle_params({}, "https://example.com/", Socket(), config=config)
        assert "locale" not in socket.assigns

    def test_extra_attributes(self) -> None:
        _, socket = handle_params({}, "/relative", Socket(), {"region": "BE", "__route": "/"})
        assert attrs.get(socket) == {"region": "BE", "__route": "/"}
        assert socket.assigns == {"region": "BE"}

    def test_unparseable_url(self) -> None:
        config = LocaleConfig.from_options(locale_sources=["host", "query"])
        signal, socket = handle_params({}, "http://[::1/?locale=fr", Socket(), config=config)
        assert signal is Signal.CONT
        assert socket.host is None
        assert "locale" not in socket.assigns

    def test_keeps_existing_state(self) -> None:
        socket = Socket(private={"other": 1}, assigns={"user": "alice"})
        _, socket = handle_params({}, "/?locale=fr", socket)
        assert socket.private is not None
        assert socket.private["other"] == 1
        assert socket.assigns == {"user": "alice", "locale": "fr"}

    def test_session_captured_at_connect(self) -> None:
        socket = Socket(session={"loc": {"locale": "nl"}})
        _, socket = handle_params({}, "/", socket)
        assert socket.assigns["locale"] == "nl"

    def test_non_ascii_query_value(self) -> None:
        config = LocaleConfig.from_options(locale_sources=["query"])
        _, socket = handle_params({}, "https://example.com/p?locale=zh-漢字", Socket(), config=config)
        assert attrs.get(socket, "locale") == "zh-漢字"
        assert socket.assigns["locale"] == "zh-漢字"

    def test_unusable_extra_field_values_not_stored(self) -> None:
        config = LocaleConfig.from_options(
            locale_sources=["query"], language_sources=["query"], region_sources=["query"]
        )
        _, socket = handle_params(
            {}, "/?locale=fr", Socket(), {"region": 7, "language": None}, config=config
        )
        assert attrs.get(socket) == {"locale": "fr"}
        assert socket.assigns == {"locale": "fr"}
