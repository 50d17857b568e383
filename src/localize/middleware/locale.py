"""Locale middleware — resolve locale attributes for every request.

``localize_request`` is the request-lifecycle hook: a pure function from
request to request. ``LocaleMiddleware`` wraps it for an async middleware
chain and, given ``SignedCookieSessions``, writes the session cookie back.
"""

import logging
from collections.abc import Callable, Mapping
from typing import Any

from localize import attrs
from localize.carrier import assign_all
from localize.config import FIELDS, LocaleConfig
from localize.http.request import Request
from localize.middleware.protocol import HeaderResponse, Next
from localize.resolver import resolve
from localize.session import SignedCookieSessions, fetch_session, persist
from localize.sources import Source

logger = logging.getLogger("localize.middleware")

type RouteAttrsOption = Mapping[str, Any] | Callable[[Request], Mapping[str, Any]]


def localize_request(
    request: Request,
    config: LocaleConfig | None = None,
    extra: Mapping[str, Any] | None = None,
    route_attrs: Mapping[str, Any] | None = None,
) -> Request:
    """Resolve locale attributes for *request* and return the updated request.

    1. Load the session when any field reads from it.
    2. Resolve ``locale``, ``language`` and ``region``.
    3. Assign the resolved fields (never ``None``).
    4. Merge resolved and non-field extra attributes into the attribute store.
    5. Store the resolved fields in the session.

    Applying it twice to the same request data gives the same attributes.
    """
    config = config or LocaleConfig()
    if config.uses(Source.SESSION):
        request = fetch_session(request)

    resolved = resolve(request, config, extra, route_attrs)
    request = assign_all(request, resolved)
    passthrough = {k: v for k, v in (extra or {}).items() if k not in FIELDS}
    request = attrs.merge(request, {**passthrough, **resolved})
    return persist(request)


class LocaleMiddleware:
    """Locale resolution middleware.

    Usage::

        from localize import LocaleConfig, LocaleMiddleware
        from localize.session import SessionConfig, SignedCookieSessions

        sessions = SignedCookieSessions(SessionConfig(secret_key="s3cr3t"))
        app.add_middleware(LocaleMiddleware(LocaleConfig(), sessions=sessions))

        # In a handler:
        locale = attrs.get(request, "locale") or request.assigns.get("locale")

    *route_attrs* is either a mapping or a callable returning the
    precompiled attributes for a request.
    """

    __slots__ = ("_config", "_extra", "_route_attrs", "_sessions")

    def __init__(
        self,
        config: LocaleConfig | None = None,
        *,
        sessions: SignedCookieSessions | None = None,
        route_attrs: RouteAttrsOption | None = None,
        extra: Mapping[str, Any] | None = None,
    ) -> None:
        self._config = config or LocaleConfig()
        self._sessions = sessions
        self._route_attrs = route_attrs
        self._extra = dict(extra or {})

    def _route_attrs_for(self, request: Request) -> Mapping[str, Any]:
        if self._route_attrs is None:
            return {}
        if callable(self._route_attrs):
            return self._route_attrs(request)
        return self._route_attrs

    async def __call__(self, request: Request, next: Next) -> Any:
        """Localize the request, dispatch, then write the session cookie if it changed."""
        sessions = self._sessions
        if sessions is not None:
            if request.session_loader is None:
                request = request.replace(session_loader=sessions.load)
            # Loaded once; the cookie is not read again after dispatch
            request = fetch_session(request)
        before = request.session

        localized = localize_request(
            request,
            self._config,
            self._extra,
            self._route_attrs_for(request),
        )
        response = await next(localized)

        if sessions is None or localized.session is None:
            return response
        if localized.session == before:
            return response

        if not isinstance(response, HeaderResponse):
            logger.warning(
                "Cannot store locale in session: %s has no with_header()",
                type(response).__name__,
            )
            return response
        return response.with_header("Set-Cookie", sessions.set_cookie(localized.session))
