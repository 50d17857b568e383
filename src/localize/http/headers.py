"""Request headers as a case-insensitive, read-only mapping.

Names are lowercased and values decoded once, at construction. A name
sent more than once reads as its first value.
"""

from collections.abc import Iterable, Iterator, Mapping


class Headers(Mapping[str, str]):
    """Case-insensitive view over ``(name, value)`` header pairs."""

    __slots__ = ("_first",)

    _first: dict[str, str]

    def __init__(self, raw: Iterable[tuple[bytes, bytes]] = ()) -> None:
        first: dict[str, str] = {}
        for name, value in raw:
            first.setdefault(name.decode("latin-1").lower(), value.decode("latin-1"))
        object.__setattr__(self, "_first", first)

    @classmethod
    def from_pairs(cls, pairs: Iterable[tuple[str, str]] | Mapping[str, str]) -> "Headers":
        """Build headers from ``(name, value)`` string pairs or a dict."""
        items = pairs.items() if isinstance(pairs, Mapping) else pairs
        return cls((k.encode("latin-1"), v.encode("latin-1")) for k, v in items)

    def __getitem__(self, key: str) -> str:
        return self._first[key.lower()]

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and key.lower() in self._first

    def __iter__(self) -> Iterator[str]:
        return iter(self._first)

    def __len__(self) -> int:
        return len(self._first)

    def __repr__(self) -> str:
        return f"Headers({self._first!r})"
