"""Middleware — Protocol-based, no inheritance required.

A middleware is any callable matching:
    async def mw(request: Request, next: Next) -> response

Built-in middleware:
    LocaleMiddleware -- Resolve locale attributes and keep them in the session
"""

from localize.middleware.locale import LocaleMiddleware, localize_request
from localize.middleware.protocol import HeaderResponse, Next

__all__ = [
    "HeaderResponse",
    "LocaleMiddleware",
    "Next",
    "localize_request",
]
