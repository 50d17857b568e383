"""Tests for localize.middleware — request-lifecycle hook and middleware."""

from dataclasses import dataclass, replace

import pytest

from localize import attrs
from localize.config import LocaleConfig
from localize.http.request import Request
from localize.middleware import LocaleMiddleware, localize_request
from localize.session import SESSION_KEY, SessionConfig, SignedCookieSessions
from localize.testing import build_request

QUERY_THEN_SESSION = LocaleConfig.from_options(
    locale_sources=["query", "session"],
    language_sources=["query", "session"],
    region_sources=["query", "session"],
)


@dataclass(frozen=True, slots=True)
class FakeResponse:
    body: str = ""
    headers: tuple[tuple[str, str], ...] = ()

    def with_header(self, name: str, value: str) -> "FakeResponse":
        return replace(self, headers=(*self.headers, (name, value)))


def _sessions() -> SignedCookieSessions:
    return SignedCookieSessions(SessionConfig(secret_key="test-secret"))


def _cookie_value(response: FakeResponse) -> str | None:
    for name, value in response.headers:
        if name == "Set-Cookie" and value.startswith("localize_session="):
            return value.split(";", 1)[0].split("=", 1)[1]
    return None


class TestLocalizeRequest:
    def test_assigns_store_and_session(self) -> None:
        req = localize_request(build_request("/?locale=fr"), QUERY_THEN_SESSION)
        assert req.assigns == {"locale": "fr"}
        assert attrs.get(req) == {"locale": "fr"}
        assert req.session == {SESSION_KEY: {"locale": "fr"}}

    def test_nothing_resolved(self) -> None:
        req = localize_request(build_request("/"), QUERY_THEN_SESSION)
        assert req.assigns == {}
        assert attrs.get(req) == {}
        assert req.session == {}

    def test_extra_attributes(self) -> None:
        req = localize_request(
            build_request("/?locale=fr"),
            QUERY_THEN_SESSION,
            extra={"region": "BE", "__route": "/fr"},
        )
        assert attrs.get(req) == {"locale": "fr", "region": "BE", "__route": "/fr"}
        assert req.assigns == {"locale": "fr", "region": "BE"}
        assert req.session == {SESSION_KEY: {"locale": "fr", "region": "BE"}}

    def test_unusable_extra_field_values_not_stored(self) -> None:
        req = localize_request(
            build_request("/?locale=fr"),
            QUERY_THEN_SESSION,
            extra={"region": 7, "language": None},
        )
        assert attrs.get(req) == {"locale": "fr"}
        assert req.assigns == {"locale": "fr"}
        assert req.session == {SESSION_KEY: {"locale": "fr"}}

    def test_idempotent(self) -> None:
        req = build_request("/?locale=fr", headers={"Accept-Language": "de-CH"})
        once = localize_request(req, LocaleConfig(), extra={"region": "BE"})
        twice = localize_request(once, LocaleConfig(), extra={"region": "BE"})
        assert attrs.get(twice) == attrs.get(once)
        assert twice.assigns == once.assigns
        assert twice.session == once.session

    def test_session_round_trip(self) -> None:
        sessions = _sessions()
        first = localize_request(
            build_request("/?locale=nl", session_loader=sessions.load), QUERY_THEN_SESSION
        )
        cookie = sessions.dumps(first.session or {})

        fresh = build_request(
            "/", headers={"Cookie": f"localize_session={cookie}"}, session_loader=sessions.load
        )
        second = localize_request(fresh, QUERY_THEN_SESSION)
        assert attrs.get(second, "locale") == "nl"

    def test_request_unchanged(self) -> None:
        req = build_request("/?locale=fr")
        localize_request(req, QUERY_THEN_SESSION)
        assert req.assigns == {}
        assert req.private is None
        assert req.session is None


class TestLocaleMiddleware:
    @pytest.mark.anyio
    async def test_next_receives_localized_request(self) -> None:
        seen: list[Request] = []

        async def handler(request: Request) -> FakeResponse:
            seen.append(request)
            return FakeResponse(body=request.assigns.get("locale", ""))

        mw = LocaleMiddleware(QUERY_THEN_SESSION)
        response = await mw(build_request("/?locale=fr"), handler)
        assert response.body == "fr"
        assert attrs.require(seen[0], "locale") == "fr"
        assert response.headers == ()

    @pytest.mark.anyio
    async def test_sets_session_cookie(self) -> None:
        sessions = _sessions()

        async def handler(request: Request) -> FakeResponse:
            return FakeResponse()

        mw = LocaleMiddleware(QUERY_THEN_SESSION, sessions=sessions)
        response = await mw(build_request("/?locale=nl"), handler)
        cookie = _cookie_value(response)
        assert cookie is not None

        # The next request recovers the locale from the session cookie
        next_request = build_request("/", headers={"Cookie": f"localize_session={cookie}"})
        seen: list[Request] = []

        async def second(request: Request) -> FakeResponse:
            seen.append(request)
            return FakeResponse()

        response = await mw(next_request, second)
        assert seen[0].assigns["locale"] == "nl"
        # Session unchanged, so no new cookie
        assert _cookie_value(response) is None

    @pytest.mark.anyio
    async def test_route_attrs_callable(self) -> None:
        seen: list[Request] = []

        async def handler(request: Request) -> FakeResponse:
            seen.append(request)
            return FakeResponse()

        mw = LocaleMiddleware(route_attrs=lambda request: {"region": "CH"})
        await mw(build_request("/", host=""), handler)
        assert seen[0].assigns["region"] == "CH"

    @pytest.mark.anyio
    async def test_response_without_with_header(self) -> None:
        async def handler(request: Request) -> str:
            return "plain"

        mw = LocaleMiddleware(QUERY_THEN_SESSION, sessions=_sessions())
        assert await mw(build_request("/?locale=fr"), handler) == "plain"

    @pytest.mark.anyio
    async def test_session_cookie_read_once(self) -> None:
        loads: list[Request] = []

        class CountingSessions(SignedCookieSessions):
            def load(self, carrier: object) -> dict[str, object]:
                loads.append(carrier)
                return super().load(carrier)  # type: ignore[arg-type]

        sessions = CountingSessions(SessionConfig(secret_key="test-secret"))
        cookie = sessions.dumps({SESSION_KEY: {"locale": "nl"}})

        async def handler(request: Request) -> FakeResponse:
            return FakeResponse()

        query_only = LocaleConfig.from_options(locale_sources=["query"])
        mw = LocaleMiddleware(query_only, sessions=sessions)
        request = build_request("/?locale=fr", headers={"Cookie": f"localize_session={cookie}"})
        response = await mw(request, handler)
        assert len(loads) == 1
        assert sessions.load(
            build_request("/", headers={"Cookie": f"localize_session={_cookie_value(response)}"})
        ) == {SESSION_KEY: {"locale": "fr"}}

    @pytest.mark.anyio
    async def test_unchanged_session_compared_to_loaded_cookie(self) -> None:
        sessions = _sessions()
        cookie = sessions.dumps({SESSION_KEY: {"locale": "fr"}})

        async def handler(request: Request) -> FakeResponse:
            return FakeResponse()

        mw = LocaleMiddleware(QUERY_THEN_SESSION, sessions=sessions)
        request = build_request("/?locale=fr", headers={"Cookie": f"localize_session={cookie}"})
        response = await mw(request, handler)
        assert _cookie_value(response) is None
