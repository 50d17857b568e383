"""Test helpers — build carriers without an ASGI server.

Uses the same ``Request`` type as production::

    request = build_request("/fr/products?locale=de", headers={"Accept-Language": "nl"})
"""

from collections.abc import Iterable, Mapping
from typing import Any

from localize.carrier import SessionLoader
from localize.http.request import Request


def build_request(
    target: str = "/",
    *,
    headers: Mapping[str, str] | Iterable[tuple[str, str]] = (),
    path_params: Mapping[str, Any] | None = None,
    body_params: Mapping[str, Any] | None = None,
    session: Mapping[str, Any] | None = None,
    session_loader: SessionLoader | None = None,
    host: str = "testserver",
) -> Request:
    """Build a ``Request`` for *target* (path plus optional query string).

    A ``Host`` header is added unless *headers* already has one.
    """
    path, _, query_string = target.partition("?")
    pairs = list(headers.items() if isinstance(headers, Mapping) else headers)
    if not any(name.lower() == "host" for name, _ in pairs):
        pairs.append(("host", host))
    scope = {
        "type": "http",
        "method": "GET",
        "path": path or "/",
        "query_string": query_string.encode("latin-1"),
        "headers": [(k.lower().encode("latin-1"), v.encode("latin-1")) for k, v in pairs],
    }
    request = Request.from_asgi(
        scope,
        path_params,
        body_params=body_params,
        session_loader=session_loader,
    )
    if session is not None:
        request = request.replace(session=dict(session))
    return request
