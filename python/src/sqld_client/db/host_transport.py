"""
Host Transport Backend Base

Shared send path for backends whose HTTP stack is provided by the hosting
runtime (see HostHttpClient).
"""

from __future__ import annotations

from typing import Any

from ..errors import HttpStatusError
from .codec import loads_response
from .protocol import HostHttpClient, HttpRequest
from .remote import RemoteBatchClient


class HostTransportClient(RemoteBatchClient):
    def __init__(self, url: str, http: HostHttpClient, auth: str | None = None) -> None:
        super().__init__(url, auth)
        self._http = http

    async def _post(self, body: str) -> Any:
        response = await self._http.send(
            HttpRequest(url=self._url, body=body, headers=self._headers())
        )
        if not 200 <= response.status < 300:
            raise HttpStatusError(response.status, response.body)
        return loads_response(response.body)
