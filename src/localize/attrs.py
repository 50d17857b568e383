"""Attribute store — locale attributes kept in a carrier's private slot.

The store is a plain ``dict[str, Any]`` under the ``"loc"`` key of
``carrier.private``. It holds the resolved ``locale``, ``language`` and
``region`` plus anything else a route layer or hook wants to keep next
to them. Keys starting with ``__`` are *private*: internal bookkeeping
that is never copied into assigns.

Every function takes a carrier and, for writes, returns a new one::

    from localize import attrs

    request = attrs.put(request, "region", "CH")
    attrs.get(request, "region")        # "CH"
    attrs.require(request, "locale")    # raises MissingAttribute
"""

from collections.abc import Callable, Iterable, Mapping
from typing import Any, overload

from localize.carrier import Carrier
from localize.errors import MissingAttribute

SLOT = "loc"
PRIVATE_PREFIX = "__"

type Attrs = dict[str, Any]

_MISSING: Any = object()


def is_private(key: str | tuple[str, Any]) -> bool:
    """Return True if *key* (or the key of a ``(key, value)`` pair) is private."""
    if isinstance(key, tuple):
        key = key[0]
    return str(key).startswith(PRIVATE_PREFIX)


def _current(carrier: Carrier) -> Attrs | None:
    private = carrier.private
    if private is None:
        return None
    attrs = private.get(SLOT)
    return attrs if isinstance(attrs, dict) else None


def _ensure_localized[C: Carrier](carrier: C) -> C:
    """Give *carrier* an empty store unless it already has one.

    Sibling keys of the private slot are kept.
    """
    private = carrier.private or {}
    if isinstance(private.get(SLOT), dict):
        return carrier
    return carrier.replace(private={**private, SLOT: {}})


def _with_attrs[C: Carrier](carrier: C, attrs: Attrs) -> C:
    carrier = _ensure_localized(carrier)
    return carrier.replace(private={**(carrier.private or {}), SLOT: attrs})


# -- Reads --


@overload
def get(carrier: Carrier) -> Attrs: ...
@overload
def get(carrier: Carrier, key: str, default: Any = None) -> Any: ...


def get(carrier: Carrier, key: str | None = None, default: Any = None) -> Any:
    """Return the value for *key*, or *default* when absent.

    Without *key*, return a copy of the whole store (empty when the
    carrier has not been localized yet).
    """
    attrs = _current(carrier)
    if key is None:
        if attrs is None:
            return dict(default) if default is not None else {}
        return dict(attrs)
    if attrs is None:
        return default
    return attrs.get(key, default)


def require(carrier: Carrier, key: str, message: str | None = None) -> Any:
    """Return the value for *key*.

    Raises ``MissingAttribute`` (with *message*, or a default message
    listing the current store) when the key is absent.
    """
    attrs = _current(carrier) or {}
    try:
        return attrs[key]
    except KeyError:
        raise MissingAttribute(key, attrs, message) from None


def split(carrier: Carrier) -> tuple[Attrs, Attrs]:
    """Partition the store into ``(internal, visible)`` by ``is_private``."""
    internal: Attrs = {}
    visible: Attrs = {}
    for key, value in get(carrier).items():
        (internal if is_private(key) else visible)[key] = value
    return internal, visible


# -- Writes --


@overload
def put[C: Carrier](carrier: C, key: Mapping[str, Any]) -> C: ...
@overload
def put[C: Carrier](carrier: C, key: str, value: Any) -> C: ...


def put[C: Carrier](carrier: C, key: str | Mapping[str, Any], value: Any = _MISSING) -> C:
    """Set one attribute, or replace the whole store with a mapping."""
    if isinstance(key, Mapping):
        if value is not _MISSING:
            msg = "put() takes either a mapping or a key and a value, not both"
            raise TypeError(msg)
        return _with_attrs(carrier, dict(key))
    if value is _MISSING:
        msg = f"put() missing value for key {key!r}"
        raise TypeError(msg)
    carrier = _ensure_localized(carrier)
    return _with_attrs(carrier, {**(_current(carrier) or {}), key: value})


def merge[C: Carrier](carrier: C, values: Mapping[str, Any] | Iterable[tuple[str, Any]]) -> C:
    """Put every pair of *values*; later pairs win when keys repeat."""
    pairs = values.items() if isinstance(values, Mapping) else values
    for k, v in pairs:
        carrier = put(carrier, k, v)
    return carrier


@overload
def update[C: Carrier](carrier: C, key: Callable[[Attrs], Any]) -> C: ...
@overload
def update[C: Carrier](carrier: C, key: str, fun: Callable[[Any], Any]) -> C: ...


def update[C: Carrier](
    carrier: C,
    key: str | Callable[[Attrs], Any],
    fun: Callable[[Any], Any] | None = None,
) -> C:
    """Transform the store, or a single value, with a function.

    ``update(carrier, fun)`` replaces the store with ``dict(fun(store))``;
    *fun* may return any mapping or iterable of pairs, so it can filter::

        attrs.update(request, lambda a: (p for p in a.items() if not attrs.is_private(p)))

    ``update(carrier, key, fun)`` replaces one value with ``fun(current)``,
    where *current* is ``None`` when the key is absent.
    """
    if fun is None:
        if not callable(key):
            msg = "update() needs a function"
            raise TypeError(msg)
        return put(carrier, dict(key(get(carrier))))
    if not isinstance(key, str):
        msg = f"update() key must be a string, got {type(key).__name__}"
        raise TypeError(msg)
    return put(carrier, key, fun(get(carrier, key)))
