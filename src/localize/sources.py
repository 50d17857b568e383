"""Source kinds and their extractors.

A *source* is a place a locale value can come from: the query string,
a path segment, a cookie, the session, the ``Accept-Language`` header...
Each kind has exactly one extractor::

    extractor(carrier, param, route_attrs) -> str | None

*param* is the parameter name being looked up (``"locale"``, ``"lang"``);
*route_attrs* is the precompiled route attribute mapping read by the
``attrs`` source. Extractors never raise on request data: a missing
header, cookie or session, or a value that is not a non-empty string,
all read as ``None``.
"""

from collections.abc import Callable, Mapping
from enum import StrEnum
from typing import Any

from localize.carrier import Carrier

SESSION_KEY = "loc"


class Source(StrEnum):
    """Every place a locale attribute can be read from."""

    ACCEPT_LANGUAGE = "accept_language"
    ASSIGNS = "assigns"
    ATTRS = "attrs"
    BODY = "body"
    COOKIE = "cookie"
    HOST = "host"
    PATH = "path"
    QUERY = "query"
    SESSION = "session"


# Precompiled route attributes, read by the ``attrs`` source
type RouteAttrs = Mapping[str, Any]

type Extractor = Callable[[Carrier, str, RouteAttrs], str | None]


def _text(value: Any) -> str | None:
    """Normalize an extracted value: non-empty strings only."""
    if isinstance(value, (list, tuple)):
        value = value[0] if value else None
    if isinstance(value, str) and value:
        return value
    return None


# -- Accept-Language --


def parse_accept_language(header: str | None) -> list[str]:
    """Split an ``Accept-Language`` value into tags, in listed order.

    Quality weights are dropped, not sorted on; ``*`` and blank entries
    are skipped::

        parse_accept_language("fr-CH, fr;q=0.9, en;q=0.8")  # ["fr-CH", "fr", "en"]
    """
    if not header:
        return []
    tags: list[str] = []
    for entry in header.split(","):
        tag = entry.partition(";")[0].strip()
        if tag and tag != "*":
            tags.append(tag)
    return tags


def _subtags(tag: str) -> list[str]:
    return tag.replace("_", "-").split("-")


def _region_subtag(tag: str) -> str | None:
    # 2-letter or 3-digit subtag after the primary one: fr-CH, es-419, zh-Hant-TW
    for sub in _subtags(tag)[1:]:
        if (len(sub) == 2 and sub.isalpha()) or (len(sub) == 3 and sub.isdigit()):
            return sub.upper()
    return None


def pick_accept_language(tags: list[str], param: str) -> str | None:
    """Pick a value from parsed Accept-Language *tags* for *param*.

    - ``"locale"`` or ``""``: the first tag as listed
    - ``"language"``: the primary subtag of the first tag
    - ``"region"``: the region subtag of the first tag that has one
    - any other name: the first tag whose primary subtag equals it
    """
    if not tags:
        return None
    match param:
        case "" | "locale":
            return tags[0]
        case "language":
            return _subtags(tags[0])[0].lower() or None
        case "region":
            for tag in tags:
                region = _region_subtag(tag)
                if region:
                    return region
            return None
        case _:
            wanted = param.lower()
            for tag in tags:
                if _subtags(tag)[0].lower() == wanted:
                    return tag
            return None


# -- Extractors --


def from_accept_language(carrier: Carrier, param: str, route: RouteAttrs) -> str | None:
    tags = parse_accept_language(carrier.headers.get("accept-language"))
    return pick_accept_language(tags, param)


def from_assigns(carrier: Carrier, param: str, route: RouteAttrs) -> str | None:
    return _text(carrier.assigns.get(param))


def from_attrs(carrier: Carrier, param: str, route: RouteAttrs) -> str | None:
    return _text(route.get(param))


def from_body(carrier: Carrier, param: str, route: RouteAttrs) -> str | None:
    return _text(carrier.body_params.get(param))


def from_cookie(carrier: Carrier, param: str, route: RouteAttrs) -> str | None:
    return _text(carrier.cookies.get(param))


def from_host(carrier: Carrier, param: str, route: RouteAttrs) -> str | None:
    # The whole host name; the parameter name does not apply
    return _text(carrier.host)


def from_path(carrier: Carrier, param: str, route: RouteAttrs) -> str | None:
    return _text(carrier.path_params.get(param))


def from_query(carrier: Carrier, param: str, route: RouteAttrs) -> str | None:
    return _text(carrier.query.get(param))


def from_session(carrier: Carrier, param: str, route: RouteAttrs) -> str | None:
    """Read *param* from the session's ``"loc"`` mapping (loaded sessions only)."""
    session = carrier.session
    if not session:
        return None
    stored = session.get(SESSION_KEY)
    if not isinstance(stored, Mapping):
        return None
    return _text(stored.get(param))


EXTRACTORS: Mapping[Source, Extractor] = {
    Source.ACCEPT_LANGUAGE: from_accept_language,
    Source.ASSIGNS: from_assigns,
    Source.ATTRS: from_attrs,
    Source.BODY: from_body,
    Source.COOKIE: from_cookie,
    Source.HOST: from_host,
    Source.PATH: from_path,
    Source.QUERY: from_query,
    Source.SESSION: from_session,
}

_unregistered = set(Source) - set(EXTRACTORS)
if _unregistered:  # pragma: no cover
    msg = f"No extractor registered for source(s): {sorted(_unregistered)}"
    raise RuntimeError(msg)


def extract(
    source: Source,
    carrier: Carrier,
    param: str,
    route_attrs: RouteAttrs | None = None,
) -> str | None:
    """Run the extractor registered for *source*."""
    return EXTRACTORS[source](carrier, param, route_attrs or {})
