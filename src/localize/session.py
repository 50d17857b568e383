"""Session bridge — keeps resolved locale fields in the session.

Resolved fields are stored under one reserved session key::

    session["loc"] == {"locale": "nl", "region": "BE"}

so the next request can read them back through the ``session`` source.

The session itself is whatever mapping the carrier's ``session_loader``
returns. ``SignedCookieSessions`` is a ready-made loader: session data is
serialized as JSON and signed using ``itsdangerous``, then carried in a
cookie.
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from itsdangerous import BadData, URLSafeTimedSerializer

from localize import attrs
from localize.carrier import Carrier
from localize.config import FIELDS
from localize.errors import ConfigurationError
from localize.sources import SESSION_KEY

logger = logging.getLogger("localize.session")

__all__ = [
    "SESSION_KEY",
    "SessionConfig",
    "SignedCookieSessions",
    "fetch_session",
    "persist",
]


def fetch_session[C: Carrier](carrier: C) -> C:
    """Load the session for *carrier* unless it is already loaded.

    Uses ``carrier.session_loader``; a carrier without a loader gets an
    empty session.
    """
    if carrier.session is not None:
        return carrier
    loader = carrier.session_loader
    data = dict(loader(carrier)) if loader is not None else {}
    return carrier.replace(session=data)


def persist[C: Carrier](carrier: C, resolved: Mapping[str, Any] | None = None) -> C:
    """Merge resolved locale fields into ``session["loc"]``.

    *resolved* defaults to the carrier's attribute store. Only non-empty
    ``locale``/``language``/``region`` values are written, merged over the
    stored ones. With nothing to write the carrier is returned as is and
    the session is not loaded.
    """
    source = attrs.get(carrier) if resolved is None else resolved
    to_persist = {k: v for k, v in source.items() if k in FIELDS and isinstance(v, str) and v}
    if not to_persist:
        return carrier

    carrier = fetch_session(carrier)
    session = dict(carrier.session or {})
    stored = session.get(SESSION_KEY)
    merged = {**(stored if isinstance(stored, Mapping) else {}), **to_persist}
    if merged == stored:
        return carrier

    session[SESSION_KEY] = merged
    logger.debug("Stored %r in session", merged)
    return carrier.replace(session=session)


# -- Signed cookie sessions --


@dataclass(frozen=True, slots=True)
class SessionConfig:
    """Signed session cookie configuration.

    ``secret_key`` is required — sessions are signed, not encrypted.
    """

    secret_key: str
    cookie_name: str = "localize_session"
    max_age: int = 86400  # 24 hours
    path: str = "/"
    domain: str | None = None
    secure: bool = False
    httponly: bool = True
    samesite: str = "lax"

    def __post_init__(self) -> None:
        if not self.secret_key:
            msg = "SessionConfig.secret_key must not be empty."
            raise ConfigurationError(msg)


class SignedCookieSessions:
    """Load and dump sessions carried in a signed cookie.

    ``load`` has the ``SessionLoader`` shape, so it plugs straight into a
    request::

        sessions = SignedCookieSessions(SessionConfig(secret_key="s3cr3t"))
        request = Request.from_asgi(scope, session_loader=sessions.load)

    Tampered, expired or malformed cookies load as an empty session.
    """

    __slots__ = ("_config", "_serializer")

    def __init__(self, config: SessionConfig) -> None:
        self._config = config
        self._serializer = URLSafeTimedSerializer(config.secret_key)

    @property
    def config(self) -> SessionConfig:
        return self._config

    def load(self, carrier: Carrier) -> dict[str, Any]:
        """Deserialize and verify the session cookie of *carrier*."""
        cookie_value = carrier.cookies.get(self._config.cookie_name)
        if not cookie_value:
            return {}

        try:
            data = self._serializer.loads(cookie_value, max_age=self._config.max_age)
        except BadData:
            logger.debug("Ignoring invalid session cookie %r", self._config.cookie_name)
            return {}

        if not isinstance(data, dict):
            return {}
        return data

    def dumps(self, session: Mapping[str, Any]) -> str:
        """Serialize and sign *session*."""
        return self._serializer.dumps(dict(session))

    def set_cookie(self, session: Mapping[str, Any]) -> str:
        """Render the ``Set-Cookie`` header value carrying *session*."""
        cfg = self._config
        parts = [f"{cfg.cookie_name}={self.dumps(session)}", f"Max-Age={cfg.max_age}"]
        if cfg.path:
            parts.append(f"Path={cfg.path}")
        if cfg.domain:
            parts.append(f"Domain={cfg.domain}")
        if cfg.secure:
            parts.append("Secure")
        if cfg.httponly:
            parts.append("HttpOnly")
        if cfg.samesite:
            parts.append(f"SameSite={cfg.samesite}")
        return "; ".join(parts)
