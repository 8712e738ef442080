"""
Client Settings

ClientConfig is the primary entry point for building a client. Reading it
from the process environment is a thin adapter kept separate so the
selection logic stays testable without touching os.environ.

LIBSQL_CLIENT_URL       - endpoint locator (required), e.g. https://db.example.com
                          or file:///tmp/example.db
LIBSQL_CLIENT_BACKEND   - optional explicit backend kind (local, requests, workers, spin)
LIBSQL_CLIENT_ENABLED_BACKENDS - optional comma-separated list narrowing the
                          installed backends
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass

from ..errors import ConfigError

URL_ENV = "LIBSQL_CLIENT_URL"
BACKEND_ENV = "LIBSQL_CLIENT_BACKEND"
TOKEN_ENV = "LIBSQL_CLIENT_TOKEN"
ENABLED_BACKENDS_ENV = "LIBSQL_CLIENT_ENABLED_BACKENDS"


@dataclass(frozen=True)
class ClientConfig:
    """Endpoint locator plus an optional explicit backend kind."""

    url: str
    backend: str | None = None

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> ClientConfig:
        """
        Build a ClientConfig from environment variables.

        Raises:
            ConfigError: if LIBSQL_CLIENT_URL is missing or empty.
        """
        env = os.environ if environ is None else environ

        url = (env.get(URL_ENV) or "").strip()
        if not url:
            raise ConfigError(
                f"{URL_ENV} variable should point to your libSQL/sqld database, "
                "e.g. https://<host> or file:///tmp/example.db"
            )

        backend = (env.get(BACKEND_ENV) or "").strip().lower() or None
        return cls(url=url, backend=backend)


def enabled_backends_override(environ: Mapping[str, str] | None = None) -> frozenset[str] | None:
    """Return the backend kinds listed in LIBSQL_CLIENT_ENABLED_BACKENDS, if set."""
    env = os.environ if environ is None else environ
    raw = env.get(ENABLED_BACKENDS_ENV)
    if raw is None or not raw.strip():
        return None
    return frozenset(part.strip().lower() for part in raw.split(",") if part.strip())
