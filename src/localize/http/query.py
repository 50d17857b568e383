"""Decoded query string parameters as a read-only mapping."""

from collections.abc import Iterator, Mapping
from urllib.parse import parse_qsl


class QueryParams(Mapping[str, str]):
    """Query parameters; a repeated name reads as its first value.

    Accepts the raw ``bytes`` of an ASGI scope or the ``str`` query of a
    parsed URL. A ``str`` is parsed as is, so non-ASCII text survives.
    """

    __slots__ = ("_first",)

    _first: dict[str, str]

    def __init__(self, query_string: bytes | str = b"") -> None:
        if isinstance(query_string, bytes):
            query_string = query_string.decode("latin-1")
        first: dict[str, str] = {}
        for name, value in parse_qsl(query_string, keep_blank_values=True):
            first.setdefault(name, value)
        object.__setattr__(self, "_first", first)

    def __getitem__(self, key: str) -> str:
        return self._first[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._first)

    def __len__(self) -> int:
        return len(self._first)

    def __repr__(self) -> str:
        return f"QueryParams({self._first!r})"
