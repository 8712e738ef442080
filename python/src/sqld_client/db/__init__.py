"""
Database client layer.

Provides one DatabaseClient interface over local SQLite and remote sqld
backends. Backend is deduced from LIBSQL_CLIENT_URL, or set explicitly with
LIBSQL_CLIENT_BACKEND.
"""

from .factory import (
    enabled_backends,
    get_client,
    new_client,
    new_client_with_config,
    reset_client,
    select_backend,
)
from .generic_client import BackendKind, GenericClient
from .protocol import DatabaseClient, HostHttpClient, HttpRequest, HttpResponse
from .types import QueryResult, Row, Statement

__all__ = [
    "BackendKind",
    "DatabaseClient",
    "GenericClient",
    "HostHttpClient",
    "HttpRequest",
    "HttpResponse",
    "QueryResult",
    "Row",
    "Statement",
    "enabled_backends",
    "get_client",
    "new_client",
    "new_client_with_config",
    "reset_client",
    "select_backend",
]
