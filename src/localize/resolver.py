"""Resolver — per-field, source-priority locale resolution.

For each field (``locale``, ``language``, ``region``, in that order) the
resolver walks the field's sources in configured order and, within each
source, its parameter names in configured order. The first non-empty
value wins and no later source is consulted for that field. When every
source comes up empty, the extra attributes supply the value; when they
do not either, the field is left out of the result.

Pure: the carrier is only read.
"""

import logging
from collections.abc import Mapping
from typing import Any

from localize.carrier import Carrier
from localize.config import FIELDS, LocaleConfig
from localize.sources import Source, extract

logger = logging.getLogger("localize.resolver")


def resolve_field(
    carrier: Carrier,
    name: str,
    config: LocaleConfig,
    route_attrs: Mapping[str, Any] | None = None,
) -> tuple[str, Source] | None:
    """Resolve a single field.

    Returns ``(value, source)`` for the first hit, or ``None``.
    """
    field_config = config.field_config(name)
    route_attrs = route_attrs or {}
    for source in field_config.sources:
        for param in field_config.params:
            value = extract(source, carrier, param, route_attrs)
            if value:
                return value, source
    return None


def resolve(
    carrier: Carrier,
    config: LocaleConfig | None = None,
    extra: Mapping[str, Any] | None = None,
    route_attrs: Mapping[str, Any] | None = None,
) -> dict[str, str]:
    """Resolve ``locale``, ``language`` and ``region`` for *carrier*.

    Args:
        carrier: The request or socket to read from.
        config: Field configuration; defaults to ``LocaleConfig()``.
        extra: Caller-supplied values used when no source yields one.
        route_attrs: Precompiled route attributes read by the ``attrs`` source.

    Returns:
        Mapping of resolved fields to non-empty strings. Unresolved fields
        are absent, never ``None``.
    """
    config = config or LocaleConfig()
    extra = extra or {}
    resolved: dict[str, str] = {}

    for name in FIELDS:
        hit = resolve_field(carrier, name, config, route_attrs)
        if hit is not None:
            value, source = hit
            logger.debug("Resolved %s=%r from %s", name, value, source.value)
            resolved[name] = value
            continue

        fallback = extra.get(name)
        if isinstance(fallback, str) and fallback:
            logger.debug("Resolved %s=%r from extra attributes", name, fallback)
            resolved[name] = fallback
        else:
            logger.debug("No source yielded %s", name)

    return resolved
