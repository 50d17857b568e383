"""Locale resolution configuration.

``LocaleConfig`` is a frozen dataclass: built once by the embedding
application and passed explicitly to the resolver and hooks. There is
no global configuration.

Each field (``locale``, ``language``, ``region``) gets its own ordered
source list and parameter names::

    config = LocaleConfig(
        locale=FieldConfig(sources=(Source.QUERY, Source.SESSION, Source.ACCEPT_LANGUAGE)),
        language=FieldConfig(sources=(Source.PATH, Source.HOST), params=("lang",)),
        region=FieldConfig(sources=(Source.ATTRS,)),
    )

or, with the keyword form::

    config = LocaleConfig.from_options(
        locale_sources=["query", "session", "accept_language"],
        language_sources=["path", "host"],
        language_params=["lang"],
        region_sources=["attrs"],
    )
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

from localize.errors import ConfigurationError
from localize.sources import Source

FIELDS: tuple[str, ...] = ("locale", "language", "region")

# Explicit request signals first, inferred ones last
DEFAULT_SOURCES: tuple[Source, ...] = (
    Source.ATTRS,
    Source.ASSIGNS,
    Source.QUERY,
    Source.PATH,
    Source.HOST,
    Source.COOKIE,
    Source.SESSION,
    Source.ACCEPT_LANGUAGE,
)


def _coerce_sources(values: Iterable[Source | str]) -> tuple[Source, ...]:
    if isinstance(values, str):
        values = (values,)
    elif not isinstance(values, Iterable):
        msg = f"Locale sources must be a source name or an iterable of them, got {values!r}"
        raise ConfigurationError(msg)
    sources: list[Source] = []
    for value in values:
        try:
            sources.append(Source(value))
        except ValueError:
            known = ", ".join(s.value for s in Source)
            msg = f"Unknown locale source {value!r}. Known sources: {known}"
            raise ConfigurationError(msg) from None
    return tuple(sources)


@dataclass(frozen=True, slots=True)
class FieldConfig:
    """Sources and parameter names for one locale field.

    ``params`` left empty means "the field's own name", filled in by
    ``LocaleConfig``.
    """

    sources: tuple[Source, ...] = DEFAULT_SOURCES
    params: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "sources", _coerce_sources(self.sources))
        if not isinstance(self.params, Iterable):
            msg = f"Parameter names must be a string or an iterable of strings, got {self.params!r}"
            raise ConfigurationError(msg)
        params = (self.params,) if isinstance(self.params, str) else tuple(self.params)
        for param in params:
            if not isinstance(param, str):
                msg = f"Parameter names must be strings, got {param!r}"
                raise ConfigurationError(msg)
        object.__setattr__(self, "params", params)


@dataclass(frozen=True, slots=True)
class LocaleConfig:
    """Per-field resolution configuration. Immutable after creation.

    Every field defaults independently to ``DEFAULT_SOURCES`` and to its
    own name as the only parameter.
    """

    locale: FieldConfig = field(default_factory=FieldConfig)
    language: FieldConfig = field(default_factory=FieldConfig)
    region: FieldConfig = field(default_factory=FieldConfig)

    def __post_init__(self) -> None:
        for name in FIELDS:
            cfg = getattr(self, name)
            if not isinstance(cfg, FieldConfig):
                msg = f"LocaleConfig.{name} must be a FieldConfig, got {type(cfg).__name__}"
                raise ConfigurationError(msg)
            if not cfg.params:
                object.__setattr__(self, name, FieldConfig(sources=cfg.sources, params=(name,)))

    def field_config(self, name: str) -> FieldConfig:
        """Return the configuration for field *name*."""
        if name not in FIELDS:
            msg = f"Unknown locale field {name!r}. Known fields: {', '.join(FIELDS)}"
            raise ConfigurationError(msg)
        return getattr(self, name)

    def uses(self, source: Source) -> bool:
        """True if any field lists *source*."""
        return any(source in self.field_config(name).sources for name in FIELDS)

    @classmethod
    def from_options(cls, options: Mapping[str, Any] | None = None, /, **kwargs: Any) -> "LocaleConfig":
        """Build a config from ``<field>_sources`` / ``<field>_params`` options.

        Source names may be strings. Unknown option names raise
        ``ConfigurationError``.
        """
        opts = {**(options or {}), **kwargs}
        allowed = {f"{name}_{kind}" for name in FIELDS for kind in ("sources", "params")}
        unknown = sorted(set(opts) - allowed)
        if unknown:
            msg = f"Unknown locale option(s): {', '.join(unknown)}"
            raise ConfigurationError(msg)

        fields: dict[str, FieldConfig] = {}
        for name in FIELDS:
            sources = opts.get(f"{name}_sources")
            params = opts.get(f"{name}_params")
            fields[name] = FieldConfig(
                sources=DEFAULT_SOURCES if sources is None else sources,
                params=() if params is None else params,
            )
        return cls(**fields)
