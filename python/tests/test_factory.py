"""Tests for backend selection, the generic dispatcher and env bootstrap."""

import pytest

from conftest import RecordingBackend
from sqld_client.config.settings import ClientConfig
from sqld_client.db.factory import (
    enabled_backends,
    get_client,
    new_client,
    new_client_with_config,
    reset_client,
    select_backend,
)
from sqld_client.db.generic_client import BackendKind, GenericClient
from sqld_client.db.local_adapter import LocalClient
from sqld_client.db.requests_adapter import RequestsClient
from sqld_client.db.types import Statement
from sqld_client.errors import ConfigError, ContextRequiredError, UnsupportedBackendError

ALL = frozenset(BackendKind)


# =============================================================================
# select_backend
# =============================================================================


@pytest.mark.parametrize("url", ["file:///tmp/x.db", "file:x.db", "/tmp/x.db", ":memory:"])
def test_local_urls_select_local(url):
    assert select_backend(ClientConfig(url), ALL) is BackendKind.LOCAL


@pytest.mark.parametrize("url", ["https://host/db", "http://localhost:8080", "libsql://db.example.com"])
def test_network_urls_select_highest_priority(url):
    assert select_backend(ClientConfig(url), ALL) is BackendKind.REQUESTS


def test_network_priority_skips_disabled_backends():
    config = ClientConfig("https://host/db")
    assert select_backend(config, {BackendKind.LOCAL, BackendKind.WORKERS, BackendKind.SPIN}) is BackendKind.WORKERS
    assert select_backend(config, {BackendKind.LOCAL, BackendKind.SPIN}) is BackendKind.SPIN


def test_network_url_without_network_backend_fails():
    with pytest.raises(UnsupportedBackendError) as exc:
        select_backend(ClientConfig("https://host/db"), {BackendKind.LOCAL})
    assert exc.value.kind == "requests"


def test_explicit_backend_overrides_url():
    assert select_backend(ClientConfig("https://host/db", backend="spin"), ALL) is BackendKind.SPIN
    assert select_backend(ClientConfig("https://host/db", backend=" LOCAL "), ALL) is BackendKind.LOCAL


def test_explicit_backend_not_enabled_fails_naming_it():
    with pytest.raises(UnsupportedBackendError) as exc:
        select_backend(ClientConfig("file:///tmp/x.db", backend="requests"), {BackendKind.LOCAL})
    assert exc.value.kind == "requests"
    assert "requests" in str(exc.value)


def test_unknown_backend_fails_naming_it():
    with pytest.raises(UnsupportedBackendError) as exc:
        select_backend(ClientConfig("https://host/db", backend="reqwest"), ALL)
    assert exc.value.kind == "reqwest"
    assert isinstance(exc.value, ConfigError)


def test_local_url_with_local_disabled_fails():
    with pytest.raises(UnsupportedBackendError) as exc:
        select_backend(ClientConfig("file:///tmp/x.db"), {BackendKind.REQUESTS})
    assert exc.value.kind == "local"


def test_enabled_backends_reflects_installed_extras():
    assert enabled_backends() == ALL


def test_enabled_backends_env_override(monkeypatch):
    monkeypatch.setenv("LIBSQL_CLIENT_ENABLED_BACKENDS", "local, spin")
    assert enabled_backends() == {BackendKind.LOCAL, BackendKind.SPIN}


# =============================================================================
# new_client_with_config
# =============================================================================


def test_builds_local_client(tmp_path):
    client = new_client_with_config(ClientConfig(f"file://{tmp_path}/x.db"))
    assert isinstance(client, GenericClient)
    assert client.kind is BackendKind.LOCAL
    assert isinstance(client.backend, LocalClient)
    assert client.backend.path == f"{tmp_path}/x.db"


def test_builds_requests_client_with_credentials():
    client = new_client_with_config(ClientConfig("https://db.example.com/?jwt=abc"))
    assert client.kind is BackendKind.REQUESTS
    assert isinstance(client.backend, RequestsClient)
    assert client.backend.url == "https://db.example.com"


@pytest.mark.parametrize(
    "backend, constructor",
    [("workers", "WorkersClient.connect_from_ctx"), ("spin", "SpinClient.connect_from_url")],
)
def test_context_bound_backends_require_specific_constructor(backend, constructor):
    with pytest.raises(ContextRequiredError) as exc:
        new_client_with_config(ClientConfig("https://host/db", backend=backend), ALL)
    assert exc.value.kind == backend
    assert constructor in str(exc.value)


def test_inferred_workers_backend_requires_context():
    with pytest.raises(ContextRequiredError):
        new_client_with_config(ClientConfig("https://host/db"), {BackendKind.WORKERS})


# =============================================================================
# GenericClient dispatch
# =============================================================================


@pytest.mark.asyncio
async def test_generic_client_forwards_batch_unchanged():
    backend = RecordingBackend()
    client = GenericClient(BackendKind.LOCAL, backend)

    results = await client.batch(["SELECT 1", "SELECT 2"])

    assert backend.calls == [[Statement("SELECT 1"), Statement("SELECT 2")]]
    assert [r.rows_affected for r in results] == [0, 1]


@pytest.mark.asyncio
async def test_generic_client_derived_operations_go_through_backend():
    backend = RecordingBackend()
    client = GenericClient(BackendKind.REQUESTS, backend)

    await client.transaction(["SELECT 1"])
    await client.execute("SELECT 2")

    assert backend.calls == [
        [Statement("BEGIN"), Statement("SELECT 1"), Statement("END")],
        [Statement("SELECT 2")],
    ]


@pytest.mark.asyncio
async def test_generic_client_close_forwards():
    backend = RecordingBackend()
    async with GenericClient(BackendKind.LOCAL, backend):
        pass
    assert backend.closed


# =============================================================================
# Environment bootstrap
# =============================================================================


def test_config_from_env_requires_url():
    with pytest.raises(ConfigError, match="LIBSQL_CLIENT_URL"):
        ClientConfig.from_env({})
    with pytest.raises(ConfigError):
        ClientConfig.from_env({"LIBSQL_CLIENT_URL": "  "})


def test_config_from_env_reads_backend():
    config = ClientConfig.from_env(
        {"LIBSQL_CLIENT_URL": "https://host", "LIBSQL_CLIENT_BACKEND": "Spin"}
    )
    assert config == ClientConfig("https://host", "spin")
    assert ClientConfig.from_env({"LIBSQL_CLIENT_URL": "file:x.db"}).backend is None


def test_new_client_missing_url_fails():
    with pytest.raises(ConfigError):
        new_client()


def test_new_client_from_env(monkeypatch, tmp_path):
    monkeypatch.setenv("LIBSQL_CLIENT_URL", f"file://{tmp_path}/env.db")
    client = new_client()
    assert client.kind is BackendKind.LOCAL


def test_new_client_env_backend_override(monkeypatch):
    monkeypatch.setenv("LIBSQL_CLIENT_URL", "https://host/db")
    monkeypatch.setenv("LIBSQL_CLIENT_BACKEND", "workers")
    with pytest.raises(ContextRequiredError):
        new_client()


def test_get_client_is_cached_until_reset(monkeypatch, tmp_path):
    monkeypatch.setenv("LIBSQL_CLIENT_URL", f"file://{tmp_path}/a.db")
    first = get_client()
    assert get_client() is first

    reset_client()
    monkeypatch.setenv("LIBSQL_CLIENT_URL", "https://host/db")
    second = get_client()
    assert second is not first
    assert second.kind is BackendKind.REQUESTS
