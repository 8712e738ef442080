"""
Database Client Factory

Selects a backend from a ClientConfig and returns a GenericClient wrapping it.

Selection, when no backend is named explicitly:
    http://, https://, libsql://  -> first enabled of: requests, workers, spin
    anything else (file:, paths)  -> local

A backend is enabled when its extra is installed (local: aiosqlite,
requests: requests); workers and spin need none. LIBSQL_CLIENT_ENABLED_BACKENDS
narrows the set further.
"""

from __future__ import annotations

import importlib.util
from collections.abc import Iterable
from urllib.parse import urlsplit

from ..config.logfire_config import get_logger, safe_logfire_info
from ..config.settings import ClientConfig, enabled_backends_override
from ..errors import ContextRequiredError, UnsupportedBackendError
from .generic_client import BackendKind, GenericClient
from .protocol import DatabaseClient
from .remote import NETWORK_SCHEMES

logger = get_logger(__name__)

NETWORK_PRIORITY = (BackendKind.REQUESTS, BackendKind.WORKERS, BackendKind.SPIN)

# Backend kind -> import name of the library it needs
_REQUIRED_MODULES = {
    BackendKind.LOCAL: "aiosqlite",
    BackendKind.REQUESTS: "requests",
}

# Module-level singleton used by get_client()
_client: GenericClient | None = None


def enabled_backends() -> frozenset[BackendKind]:
    """Backend kinds usable in this installation."""
    installed = {
        kind
        for kind in BackendKind
        if kind not in _REQUIRED_MODULES
        or importlib.util.find_spec(_REQUIRED_MODULES[kind]) is not None
    }
    override = enabled_backends_override()
    if override is not None:
        installed = {kind for kind in installed if kind.value in override}
    return frozenset(installed)


def _is_network_url(url: str) -> bool:
    return urlsplit(url).scheme.lower() in NETWORK_SCHEMES


def select_backend(
    config: ClientConfig, enabled: Iterable[BackendKind] | None = None
) -> BackendKind:
    """
    Resolve the backend kind for a configuration.

    Raises:
        UnsupportedBackendError: the requested kind is unknown or not enabled,
            or a network URL was given and no network backend is enabled.
    """
    available = frozenset(enabled) if enabled is not None else enabled_backends()
    names = tuple(kind.value for kind in BackendKind if kind in available)

    if config.backend:
        requested = config.backend.strip().lower()
        try:
            kind = BackendKind(requested)
        except ValueError:
            raise UnsupportedBackendError(requested, names) from None
        if kind not in available:
            raise UnsupportedBackendError(kind.value, names)
        return kind

    if _is_network_url(config.url):
        for kind in NETWORK_PRIORITY:
            if kind in available:
                return kind
        raise UnsupportedBackendError(NETWORK_PRIORITY[0].value, names)

    if BackendKind.LOCAL not in available:
        raise UnsupportedBackendError(BackendKind.LOCAL.value, names)
    return BackendKind.LOCAL


def new_client_with_config(
    config: ClientConfig, enabled: Iterable[BackendKind] | None = None
) -> GenericClient:
    """
    Build a client from an explicit configuration.

    Raises:
        UnsupportedBackendError: see select_backend()
        ContextRequiredError: the selected backend needs host-provided context
        ConfigError: the URL does not suit the selected backend
    """
    kind = select_backend(config, enabled)

    if kind is BackendKind.LOCAL:
        backend = _build_local_client(config.url)
    elif kind is BackendKind.REQUESTS:
        backend = _build_requests_client(config.url)
    elif kind is BackendKind.WORKERS:
        raise ContextRequiredError(
            kind.value,
            "sqld_client.WorkersClient.connect_from_ctx",
            "needs the worker's secret bindings and fetch",
        )
    else:
        raise ContextRequiredError(
            kind.value,
            "sqld_client.SpinClient.connect_from_url",
            "needs the Spin SDK's outbound HTTP",
        )

    logger.info("DatabaseClient initialised (backend=%s)", kind.value)
    safe_logfire_info("sqld client initialised", backend=kind.value)
    return GenericClient(kind, backend)


def new_client() -> GenericClient:
    """
    Build a client from environment variables.

    Env:
        LIBSQL_CLIENT_URL: endpoint, e.g. https://<host> or file:///tmp/example.db
        LIBSQL_CLIENT_BACKEND: optional backend kind; deduced from the URL if unset

    Raises:
        ConfigError: on missing or invalid configuration.
    """
    return new_client_with_config(ClientConfig.from_env())


def get_client() -> GenericClient:
    """
    Return the process-wide client, creating it from the environment on first call.
    """
    global _client
    if _client is None:
        _client = new_client()
    return _client


def reset_client() -> None:
    """
    Drop the cached client (used in tests to re-initialise with a different env).
    Does not close it.
    """
    global _client
    _client = None


def _build_local_client(url: str) -> DatabaseClient:
    from .local_adapter import LocalClient

    return LocalClient(url)


def _build_requests_client(url: str) -> DatabaseClient:
    from .requests_adapter import RequestsClient

    return RequestsClient.from_url(url)
