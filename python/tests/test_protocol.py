"""Tests for the execute/transaction operations derived from batch."""

import pytest

from conftest import RecordingBackend
from sqld_client.db.protocol import DatabaseClient
from sqld_client.db.types import QueryResult, Statement
from sqld_client.errors import InvariantViolationError


def _echo(stmts):
    return [QueryResult(columns=["sql"], rows=[], rows_affected=i, error=None) for i, _ in enumerate(stmts)]


@pytest.mark.asyncio
async def test_batch_empty_returns_empty(recording_backend):
    assert await recording_backend.batch([]) == []
    assert recording_backend.calls == [[]]


@pytest.mark.asyncio
async def test_execute_is_single_statement_batch():
    backend = RecordingBackend(lambda stmts: [QueryResult(rows_affected=42)])
    result = await backend.execute("SELECT 1")
    assert result.rows_affected == 42
    assert backend.calls == [[Statement("SELECT 1")]]


@pytest.mark.asyncio
async def test_execute_with_no_results_is_invariant_violation():
    backend = RecordingBackend(lambda stmts: [])
    with pytest.raises(InvariantViolationError):
        await backend.execute("SELECT 1")


@pytest.mark.asyncio
async def test_transaction_frames_statements_with_begin_end():
    backend = RecordingBackend(_echo)
    results = await backend.transaction(["INSERT INTO t VALUES (1)", "INSERT INTO t VALUES (2)"])

    assert backend.calls == [
        [
            Statement("BEGIN"),
            Statement("INSERT INTO t VALUES (1)"),
            Statement("INSERT INTO t VALUES (2)"),
            Statement("END"),
        ]
    ]
    # BEGIN's and END's results (positions 0 and 3) are dropped
    assert [r.rows_affected for r in results] == [1, 2]


@pytest.mark.asyncio
async def test_empty_transaction_returns_no_results():
    backend = RecordingBackend(_echo)
    assert await backend.transaction([]) == []
    assert backend.calls == [[Statement("BEGIN"), Statement("END")]]


@pytest.mark.asyncio
async def test_transaction_short_result_is_invariant_violation():
    backend = RecordingBackend(lambda stmts: [QueryResult()])
    with pytest.raises(InvariantViolationError):
        await backend.transaction(["SELECT 1"])


@pytest.mark.asyncio
async def test_batch_failure_propagates_unchanged():
    class Failing(DatabaseClient):
        async def batch(self, statements):
            raise ConnectionError("link down")

    client = Failing()
    with pytest.raises(ConnectionError, match="link down"):
        await client.execute("SELECT 1")
    with pytest.raises(ConnectionError, match="link down"):
        await client.transaction(["SELECT 1"])


@pytest.mark.asyncio
async def test_async_context_manager_closes(recording_backend):
    async with recording_backend as db:
        await db.execute("SELECT 1")
    assert recording_backend.closed
