"""Live-session sockets and the post-navigation hook.

After client-side navigation there is no HTTP request to read: only the
new URL, its path parameters and the socket's own state. ``handle_params``
rebuilds just enough of a carrier from those, resolves, and hands back
the updated socket::

    signal, socket = handle_params(params, "https://fr.example.com/p?locale=fr", socket)

Header-based sources always come up empty here: the socket has no
request headers.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from dataclasses import replace as dc_replace
from enum import StrEnum
from typing import Any, Self
from urllib.parse import urlsplit

from localize import attrs
from localize.carrier import SessionLoader, assign_all
from localize.config import FIELDS, LocaleConfig
from localize.http.headers import Headers
from localize.http.query import QueryParams
from localize.resolver import resolve

_NO_HEADERS = Headers()


class Signal(StrEnum):
    """What a lifecycle hook asks the caller to do next."""

    CONT = "cont"


@dataclass(frozen=True, slots=True)
class Socket:
    """A live-session socket carrier.

    ``session`` is the session captured when the socket connected, if any.
    Sockets carry no headers, cookies or body.
    """

    path_params: Mapping[str, Any] = field(default_factory=dict)
    query: QueryParams = field(default_factory=QueryParams)
    host: str | None = None
    session: Mapping[str, Any] | None = None
    private: Mapping[str, Any] | None = None
    assigns: Mapping[str, Any] = field(default_factory=dict)

    @property
    def headers(self) -> Headers:
        return _NO_HEADERS

    @property
    def cookies(self) -> Mapping[str, str]:
        return {}

    @property
    def body_params(self) -> Mapping[str, Any]:
        return {}

    @property
    def session_loader(self) -> SessionLoader | None:
        return None

    def replace(self, **changes: Any) -> Self:
        """Return a copy with *changes* applied."""
        return dc_replace(self, **changes)


def _split_url(url: str) -> tuple[str | None, QueryParams]:
    try:
        parts = urlsplit(url)
        host = parts.hostname
    except ValueError:
        return None, QueryParams()
    return host, QueryParams(parts.query)


def handle_params(
    params: Mapping[str, Any],
    url: str,
    socket: Socket,
    extra: Mapping[str, Any] | None = None,
    *,
    config: LocaleConfig | None = None,
    route_attrs: Mapping[str, Any] | None = None,
) -> tuple[Signal, Socket]:
    """Resolve locale attributes after navigation to *url*.

    Merges the extra and resolved attributes into the socket's attribute
    store, assigns the resolved fields, and returns ``(Signal.CONT, socket)``.
    An unparseable *url* contributes no host and no query parameters.
    """
    host, query = _split_url(url)
    socket = socket.replace(path_params=dict(params), query=query, host=host)

    resolved = resolve(socket, config, extra, route_attrs)
    passthrough = {k: v for k, v in (extra or {}).items() if k not in FIELDS}
    socket = attrs.merge(socket, {**passthrough, **resolved})
    socket = assign_all(socket, {k: v for k, v in resolved.items() if k in FIELDS})
    return Signal.CONT, socket
