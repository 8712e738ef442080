"""
Workers Backend

Backend for edge-worker runtimes. The endpoint and token live in the
worker's secret bindings and HTTP goes through the runtime's fetch, so this
backend cannot be built from a plain ClientConfig. Use
WorkersClient.connect_from_ctx() inside the worker instead.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from ..config.settings import TOKEN_ENV, URL_ENV
from ..errors import ConfigError
from .host_transport import HostTransportClient
from .protocol import HostHttpClient
from .remote import bearer, split_credentials


def _binding(env: Any, name: str) -> str | None:
    if isinstance(env, Mapping):
        value = env.get(name)
    else:
        value = getattr(env, name, None)
    return str(value) if value is not None else None


class WorkersClient(HostTransportClient):
    backend_name = "workers"

    def __init__(self, url: str, token: str | None, http: HostHttpClient) -> None:
        clean_url, auth = split_credentials(url)
        if token:
            auth = bearer(token)
        super().__init__(clean_url, http, auth)

    @classmethod
    def connect_from_ctx(cls, env: Any, http: HostHttpClient) -> WorkersClient:
        """
        Build a client from the worker's bindings.

        Args:
            env: the worker's environment bindings (mapping or attribute object)
                 holding LIBSQL_CLIENT_URL and optionally LIBSQL_CLIENT_TOKEN
            http: the runtime's fetch, adapted to HostHttpClient

        Raises:
            ConfigError: if LIBSQL_CLIENT_URL is not bound.
        """
        url = _binding(env, URL_ENV)
        if not url:
            raise ConfigError(f"{URL_ENV} secret is not bound in the worker environment")
        return cls(url, _binding(env, TOKEN_ENV), http)
