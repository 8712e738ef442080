"""
Spin Backend

Backend for embedded WebAssembly runtimes (Spin). Outbound HTTP must go
through the runtime's SDK, so the caller passes it in as a HostHttpClient
via SpinClient.connect_from_url().
"""

from __future__ import annotations

from .host_transport import HostTransportClient
from .protocol import HostHttpClient
from .remote import split_credentials


class SpinClient(HostTransportClient):
    backend_name = "spin"

    @classmethod
    def connect_from_url(cls, url: str, http: HostHttpClient) -> SpinClient:
        """Build a client from a URL, taking credentials from its userinfo or query."""
        clean_url, auth = split_credentials(url)
        return cls(clean_url, http, auth)
