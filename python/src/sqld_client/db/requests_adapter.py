"""
Requests Backend

Remote HTTP backend built on requests. The blocking POST runs in a worker
thread via asyncio.to_thread so the event loop is never blocked.
Active for http(s):// and libsql:// URLs when the `requests` extra is installed.
"""

from __future__ import annotations

import asyncio
from typing import Any

import requests

from .codec import loads_response
from .remote import RemoteBatchClient, bearer, split_credentials

DEFAULT_TIMEOUT = 30.0


class RequestsClient(RemoteBatchClient):
    """
    sqld client over requests.

    HTTP errors (requests.HTTPError from raise_for_status, connection errors,
    timeouts) are raised unchanged.
    """

    backend_name = "requests"

    def __init__(
        self,
        url: str,
        token: str | None = None,
        *,
        auth: str | None = None,
        session: requests.Session | None = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        if token is not None:
            auth = bearer(token)
        super().__init__(url, auth)
        self._session = session if session is not None else requests.Session()
        self._timeout = timeout

    @classmethod
    def from_url(
        cls,
        url: str,
        *,
        session: requests.Session | None = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> RequestsClient:
        """Build a client from a URL that may carry credentials (jwt/authToken or user:pass)."""
        clean_url, auth = split_credentials(url)
        return cls(clean_url, auth=auth, session=session, timeout=timeout)

    async def _post(self, body: str) -> Any:
        response = await asyncio.to_thread(
            self._session.post,
            self._url,
            data=body.encode("utf-8"),
            headers=self._headers(),
            timeout=self._timeout,
        )
        response.raise_for_status()
        return loads_response(response.content)

    async def close(self) -> None:
        self._session.close()
