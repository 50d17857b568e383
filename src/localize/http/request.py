"""Immutable HTTP request — the plain-request carrier.

Frozen metadata plus the two slots locale resolution writes to:
``private`` (internal attributes) and ``assigns`` (user-visible values).
Body parameters arrive already decoded; reading and parsing the body
stays with the surrounding framework.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from dataclasses import replace as dc_replace
from typing import Any, Self

from localize.carrier import SessionLoader
from localize.http.cookies import parse_cookies
from localize.http.headers import Headers
from localize.http.query import QueryParams


@dataclass(frozen=True, slots=True)
class Request:
    """An immutable HTTP request.

    Cookies are parsed once at creation time (in ``from_asgi``) and stored
    as a frozen field, not re-parsed on every access.

    ``session`` stays ``None`` until ``session.fetch_session()`` loads it
    through ``session_loader``.
    """

    headers: Headers
    query: QueryParams
    path_params: Mapping[str, Any] = field(default_factory=dict)
    server: tuple[str, int] | None = None
    cookies: Mapping[str, str] = field(default_factory=dict)
    body_params: Mapping[str, Any] = field(default_factory=dict)
    session: Mapping[str, Any] | None = None
    session_loader: SessionLoader | None = field(default=None, repr=False, compare=False)
    private: Mapping[str, Any] | None = None
    assigns: Mapping[str, Any] = field(default_factory=dict)

    @property
    def host(self) -> str | None:
        """Host name without port, from the Host header or the server address."""
        value = self.headers.get("host")
        if value:
            if value.startswith("["):
                end = value.find("]")
                return value[1:end] if end > 0 else None
            return value.partition(":")[0] or None
        if self.server:
            return self.server[0]
        return None

    def replace(self, **changes: Any) -> Self:
        """Return a copy with *changes* applied."""
        return dc_replace(self, **changes)

    @classmethod
    def from_asgi(
        cls,
        scope: dict[str, Any],
        path_params: Mapping[str, Any] | None = None,
        *,
        body_params: Mapping[str, Any] | None = None,
        session_loader: SessionLoader | None = None,
    ) -> Self:
        """Create a Request from an ASGI HTTP scope."""
        headers = Headers(scope.get("headers", ()))
        server = scope.get("server")
        return cls(
            headers=headers,
            query=QueryParams(scope.get("query_string", b"")),
            path_params=path_params or {},
            server=tuple(server) if server else None,
            cookies=parse_cookies(headers.get("cookie")),
            body_params=body_params or {},
            session_loader=session_loader,
        )
