"""Localize exception hierarchy.

Shared across the attribute store, resolver, configuration and hooks
so every module raises and catches the same types.
"""

from collections.abc import Mapping
from typing import Any


class LocalizeError(Exception):
    """Base for all localize-specific errors."""


class ConfigurationError(LocalizeError):
    """Raised when locale configuration is invalid.

    Raised at construction time (``FieldConfig``, ``LocaleConfig``,
    ``SessionConfig``), never while a request is being resolved.
    """


class MissingAttribute(LocalizeError, KeyError):  # noqa: N818
    """A required attribute is absent from a carrier's attribute store.

    Raised only by ``attrs.require()``. Signals a programming error:
    callers use ``require`` when prior resolution guarantees the key.
    """

    def __init__(
        self,
        key: str,
        attrs: Mapping[str, Any] | None = None,
        message: str | None = None,
    ) -> None:
        self.key = key
        self.attrs = dict(attrs or {})
        self.message = message or f"Key {key!r} not found in {self.attrs!r}"
        super().__init__(self.message)

    def __str__(self) -> str:
        return self.message
