"""Shared fixtures: fake backends and transports that stand in for the network."""

import json

import pytest

from sqld_client.db.factory import reset_client
from sqld_client.db.protocol import DatabaseClient, HttpRequest, HttpResponse
from sqld_client.db.types import QueryResult, Statement


class RecordingBackend(DatabaseClient):
    """Backend that records every batch and answers with scripted results."""

    def __init__(self, responder=None):
        self.calls = []
        self.closed = False
        self._responder = responder or (
            lambda stmts: [QueryResult(columns=["sql"], rows=[], rows_affected=i) for i, _ in enumerate(stmts)]
        )

    async def batch(self, statements):
        stmts = [Statement.of(s) for s in statements]
        self.calls.append(stmts)
        return self._responder(stmts)

    async def close(self):
        self.closed = True


class FakeHostHttp:
    """HostHttpClient returning canned responses and recording requests."""

    def __init__(self, status=200, body=None):
        self.requests: list[HttpRequest] = []
        self.status = status
        self.body = body

    async def send(self, request: HttpRequest) -> HttpResponse:
        self.requests.append(request)
        if self.body is not None:
            return HttpResponse(self.status, self.body)
        count = len(json.loads(request.body)["statements"])
        results = [{"results": {"columns": [], "rows": []}} for _ in range(count)]
        return HttpResponse(self.status, json.dumps(results))


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in (
        "LIBSQL_CLIENT_URL",
        "LIBSQL_CLIENT_BACKEND",
        "LIBSQL_CLIENT_TOKEN",
        "LIBSQL_CLIENT_ENABLED_BACKENDS",
        "LOGFIRE_ENABLED",
    ):
        monkeypatch.delenv(name, raising=False)
    reset_client()
    yield
    reset_client()


@pytest.fixture
def recording_backend():
    return RecordingBackend()


@pytest.fixture
def host_http():
    return FakeHostHttp()
