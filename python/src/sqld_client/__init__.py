"""
sqld_client

Async client for libSQL/sqld databases with interchangeable backends:

    import asyncio
    import sqld_client

    async def main():
        async with sqld_client.new_client() as db:
            await db.batch(["CREATE TABLE t(x)", ("INSERT INTO t VALUES (?)", [1])])
            result = await db.execute("SELECT x FROM t")
            print(result.rows)

    asyncio.run(main())
"""

from .config.settings import ClientConfig
from .db import (
    BackendKind,
    DatabaseClient,
    GenericClient,
    HostHttpClient,
    HttpRequest,
    HttpResponse,
    QueryResult,
    Row,
    Statement,
    get_client,
    new_client,
    new_client_with_config,
    reset_client,
)
from .db.spin_adapter import SpinClient
from .db.workers_adapter import WorkersClient
from .errors import (
    ConfigError,
    ContextRequiredError,
    HttpStatusError,
    InvariantViolationError,
    ResponseCountMismatchError,
    ResponseShapeError,
    SQLClientError,
    StatementExecutionError,
    StatementParseError,
    UnsupportedBackendError,
)

__version__ = "0.1.0"

__all__ = [
    "BackendKind",
    "ClientConfig",
    "ConfigError",
    "ContextRequiredError",
    "DatabaseClient",
    "GenericClient",
    "HostHttpClient",
    "HttpRequest",
    "HttpResponse",
    "HttpStatusError",
    "InvariantViolationError",
    "QueryResult",
    "ResponseCountMismatchError",
    "ResponseShapeError",
    "Row",
    "SQLClientError",
    "SpinClient",
    "Statement",
    "StatementExecutionError",
    "StatementParseError",
    "UnsupportedBackendError",
    "WorkersClient",
    "get_client",
    "new_client",
    "new_client_with_config",
    "reset_client",
]
