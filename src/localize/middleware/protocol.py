"""Middleware calling convention.

A middleware is any callable matching::

    async def my_mw(request: Request, next: Next) -> Any: ...

Locale middleware only needs the response to support ``with_header()``
when it has a session cookie to set.
"""

from collections.abc import Awaitable, Callable
from typing import Any, Protocol, Self, runtime_checkable

from localize.http.request import Request

# The next handler in the middleware chain
type Next = Callable[[Request], Awaitable[Any]]


@runtime_checkable
class HeaderResponse(Protocol):
    """A response that returns a copy of itself with an extra header."""

    def with_header(self, name: str, value: str) -> Self: ...
