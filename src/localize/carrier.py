"""The request carrier — the per-request object threaded through resolution.

Two concrete carriers implement the protocol:

- ``localize.http.request.Request`` — a plain HTTP request
- ``localize.live.Socket`` — a live-session socket after client-side navigation

Both are frozen dataclasses. Every write goes through ``replace()`` and
returns a new carrier, so a carrier handed to one middleware is never
changed underneath another.
"""

from collections.abc import Callable, Mapping
from typing import Any, Protocol, Self, runtime_checkable


# Loads session data for a carrier whose session has not been fetched yet
type SessionLoader = Callable[[Any], Mapping[str, Any]]


@runtime_checkable
class Carrier(Protocol):
    """Read/write surface shared by ``Request`` and ``Socket``.

    ``private`` is the internal slot (holds the attribute store under
    ``"loc"``); ``assigns`` is the user-visible slot read by templates and
    handlers. ``session`` is ``None`` until the session has been loaded.
    """

    @property
    def path_params(self) -> Mapping[str, Any]: ...

    @property
    def query(self) -> Mapping[str, str]: ...

    @property
    def headers(self) -> Mapping[str, str]: ...

    @property
    def host(self) -> str | None: ...

    @property
    def cookies(self) -> Mapping[str, str]: ...

    @property
    def body_params(self) -> Mapping[str, Any]: ...

    @property
    def session(self) -> Mapping[str, Any] | None: ...

    @property
    def session_loader(self) -> SessionLoader | None: ...

    @property
    def private(self) -> Mapping[str, Any] | None: ...

    @property
    def assigns(self) -> Mapping[str, Any]: ...

    def replace(self, **changes: Any) -> Self: ...


def assign[C: Carrier](carrier: C, key: str, value: Any) -> C:
    """Return *carrier* with ``assigns[key] = value``."""
    return carrier.replace(assigns={**carrier.assigns, key: value})


def assign_all[C: Carrier](carrier: C, values: Mapping[str, Any]) -> C:
    """Return *carrier* with every pair of *values* assigned.

    ``None`` values are skipped; an assign is never set to ``None``.
    """
    present = {k: v for k, v in values.items() if v is not None}
    if not present:
        return carrier
    return carrier.replace(assigns={**carrier.assigns, **present})
