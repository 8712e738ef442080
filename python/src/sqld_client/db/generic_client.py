"""
Generic Client

Wraps exactly one backend instance and forwards every batch to it unchanged.
Lets callers hold a single client type regardless of which backend the
configuration selected.
"""

from __future__ import annotations

from collections.abc import Iterable
from enum import Enum

from .protocol import DatabaseClient
from .types import QueryResult, StatementLike


class BackendKind(str, Enum):
    LOCAL = "local"
    REQUESTS = "requests"
    WORKERS = "workers"
    SPIN = "spin"


class GenericClient(DatabaseClient):
    def __init__(self, kind: BackendKind, backend: DatabaseClient) -> None:
        self._kind = kind
        self._backend = backend

    @property
    def kind(self) -> BackendKind:
        return self._kind

    @property
    def backend(self) -> DatabaseClient:
        return self._backend

    async def batch(self, statements: Iterable[StatementLike]) -> list[QueryResult]:
        return await self._backend.batch(statements)

    async def close(self) -> None:
        await self._backend.close()

    def __repr__(self) -> str:
        return f"GenericClient(kind={self._kind.value!r}, backend={type(self._backend).__name__})"
