"""Localize — resolve locale, language and region for every request.

Each attribute is read from its own ordered list of sources (route
attributes, assigns, query string, path, host, cookie, session,
``Accept-Language``), and the result is kept on the request and in the
session.

Basic usage::

    from localize import LocaleConfig, localize_request

    request = localize_request(request, LocaleConfig())
    request.assigns["locale"]

As middleware::

    from localize import LocaleMiddleware

    app.add_middleware(LocaleMiddleware())
"""

from importlib import import_module

__version__ = "0.1.0-dev"

# Public name -> module that defines it
_LAZY_IMPORTS: dict[str, str] = {
    "Carrier": "localize.carrier",
    "ConfigurationError": "localize.errors",
    "FieldConfig": "localize.config",
    "LocaleConfig": "localize.config",
    "LocaleMiddleware": "localize.middleware.locale",
    "LocalizeError": "localize.errors",
    "MissingAttribute": "localize.errors",
    "Request": "localize.http.request",
    "Signal": "localize.live",
    "Socket": "localize.live",
    "Source": "localize.sources",
    "handle_params": "localize.live",
    "localize_request": "localize.middleware.locale",
    "resolve": "localize.resolver",
}

__all__ = sorted(_LAZY_IMPORTS)


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import localize`` fast while providing a clean top-level API.
    """
    module = _LAZY_IMPORTS.get(name)
    if module is None:
        msg = f"module {__name__!r} has no attribute {name!r}"
        raise AttributeError(msg)
    return getattr(import_module(module), name)
