"""
Database Client Protocol

Defines the interface every backend implements. Backends only provide
batch(); execute() and transaction() are derived from it here, so all
backends share identical semantics for them.

Host runtimes that bring their own HTTP stack (edge workers, embedded
runtimes) plug in through HostHttpClient, a structural Protocol: they do not
need to inherit from it.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable

from ..errors import InvariantViolationError
from .types import QueryResult, Statement, StatementLike

BEGIN = Statement("BEGIN")
END = Statement("END")


class DatabaseClient(ABC):
    """
    Capabilities of a database client: executing statements, batches and
    transactions.
    """

    @abstractmethod
    async def batch(self, statements: Iterable[StatementLike]) -> list[QueryResult]:
        """
        Execute a batch of statements.

        Each statement runs in its own transaction unless the batch itself is
        wrapped in BEGIN and END. Returns one result per statement, in order.
        """

    async def execute(self, statement: StatementLike) -> QueryResult:
        """Execute a single statement."""
        results = await self.batch([statement])
        if not results:
            raise InvariantViolationError(
                f"{type(self).__name__}.batch() returned no result for a single statement"
            )
        return results[0]

    async def transaction(self, statements: Iterable[StatementLike]) -> list[QueryResult]:
        """
        Execute statements inside a BEGIN/END pair.

        Nested transactions are not supported: do not use BEGIN or END inside
        the given statements. Results for BEGIN and END are dropped.
        """
        framed = [BEGIN, *(Statement.of(stmt) for stmt in statements), END]
        results = await self.batch(framed)
        if len(results) < 2:
            raise InvariantViolationError(
                f"{type(self).__name__}.batch() returned {len(results)} results "
                f"for a transaction of {len(framed)} statements"
            )
        return results[1:-1]

    async def close(self) -> None:
        """Release backend resources. No-op unless a backend holds any."""

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()


@dataclass
class HttpRequest:
    url: str
    body: str
    headers: dict[str, str] = field(default_factory=dict)
    method: str = "POST"


@dataclass
class HttpResponse:
    status: int
    body: str


@runtime_checkable
class HostHttpClient(Protocol):
    """HTTP transport supplied by a hosting runtime."""

    async def send(self, request: HttpRequest) -> HttpResponse: ...
