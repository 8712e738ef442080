"""
Local Backend

Runs statements against a local SQLite file through aiosqlite.
Active for file: URLs, plain paths and :memory: when the `local` extra is
installed.

The connection is opened lazily in autocommit mode (isolation_level=None):
each statement commits on its own unless the batch carries BEGIN/END.
"""

from __future__ import annotations

import asyncio
from collections.abc import Iterable
from urllib.parse import quote, unquote, urlsplit

import aiosqlite

from ..config.logfire_config import get_logger, safe_set_attribute, safe_span
from ..errors import ConfigError
from .protocol import DatabaseClient
from .types import QueryResult, Row, Statement, StatementLike

logger = get_logger(__name__)

MEMORY = ":memory:"


def path_from_url(url: str) -> str:
    """
    Resolve a local database locator to a filesystem path.

    file:///tmp/x.db -> /tmp/x.db, file:x.db -> x.db, anything without a
    scheme is taken as a path as is. A file: URL with a query string
    (file:///tmp/x.db?mode=ro) is kept as an SQLite URI: file:/tmp/x.db?mode=ro.
    """
    if url == MEMORY:
        return MEMORY
    if not url.startswith("file:"):
        if "://" in url:
            raise ConfigError(f"Not a local database URL: {url!r}")
        return url

    parts = urlsplit(url)
    if parts.netloc and parts.netloc != "localhost":
        raise ConfigError(f"file: URL must not name a remote host: {url!r}")
    path = unquote(parts.path)
    if not path:
        raise ConfigError(f"file: URL has no path: {url!r}")
    if parts.query:
        return f"file:{quote(path)}?{parts.query}"
    return path


class LocalClient(DatabaseClient):
    """
    SQLite-backed client.

    A SQLite error in one statement is reported as an error QueryResult at
    that position and the rest of the batch still runs, the same way a sqld
    server reports per-statement errors. Batches on one client never
    interleave. A batch that is interrupted (cancellation, unexpected error)
    while a BEGIN is open rolls it back before the exception propagates, so a
    later batch never commits the abandoned statements.
    """

    backend_name = "local"

    def __init__(self, url: str) -> None:
        self._path = path_from_url(url)
        self._db: aiosqlite.Connection | None = None
        self._lock = asyncio.Lock()

    @classmethod
    def in_memory(cls) -> LocalClient:
        return cls(MEMORY)

    @property
    def path(self) -> str:
        return self._path

    async def _connection(self) -> aiosqlite.Connection:
        if self._db is None:
            self._db = await aiosqlite.connect(
                self._path, isolation_level=None, uri=self._path.startswith("file:")
            )
            logger.debug("Opened local database %s", self._path)
        return self._db

    async def batch(self, statements: Iterable[StatementLike]) -> list[QueryResult]:
        stmts = [Statement.of(stmt) for stmt in statements]
        if not stmts:
            return []

        with safe_span("sqld_client.local.batch", statements=len(stmts)) as span:
            async with self._lock:
                db = await self._connection()
                try:
                    results = [await self._run(db, stmt) for stmt in stmts]
                except BaseException:
                    await self._abandon_transaction(db)
                    raise
            safe_set_attribute(span, "errors", sum(1 for r in results if r.is_error))
            return results

    async def _abandon_transaction(self, db: aiosqlite.Connection) -> None:
        """Roll back a BEGIN left open by an interrupted batch; drop the connection if that fails."""
        if not db.in_transaction:
            return
        logger.warning("Batch interrupted inside a transaction on %s, rolling back", self._path)
        try:
            await db.rollback()
        except aiosqlite.Error:
            logger.exception("Rollback failed, closing local database %s", self._path)
            self._db = None
            await db.close()

    async def _run(self, db: aiosqlite.Connection, stmt: Statement) -> QueryResult:
        try:
            async with db.execute(stmt.sql, stmt.args) as cursor:
                raw_rows = await cursor.fetchall()
                columns = [col[0] for col in cursor.description or ()]
                rows_affected = max(cursor.rowcount, 0)
                last_insert_rowid = cursor.lastrowid if rows_affected else None
        except (aiosqlite.Error, OverflowError, ValueError) as e:
            # OverflowError/ValueError: argument the driver cannot bind, e.g. int beyond 64 bits
            logger.debug("Statement failed: %s | %s", stmt.sql, e)
            return QueryResult(error=str(e))

        return QueryResult(
            columns=columns,
            rows=[Row(columns, raw) for raw in raw_rows],
            rows_affected=rows_affected,
            last_insert_rowid=last_insert_rowid,
        )

    async def close(self) -> None:
        if self._db is not None:
            await self._db.close()
            self._db = None
            logger.debug("Closed local database %s", self._path)
