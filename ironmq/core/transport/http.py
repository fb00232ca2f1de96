"""
HTTP transport for the IronMQ client.

The client only depends on the narrow ``Transport`` protocol; ``HttpxTransport``
is the default implementation and owns connection pooling, TLS verification
and timeouts.
"""

from dataclasses import dataclass
from typing import Any, Mapping, Optional, Protocol

import httpx

from ..errors import TransportError
from ..logging import get_logger


@dataclass(frozen=True)
class TransportResponse:
    """Raw response returned by a transport."""

    status_code: int
    body: bytes = b""

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300

    @property
    def text(self) -> str:
        return self.body.decode("utf-8", errors="replace")


class Transport(Protocol):
    """Protocol describing the minimal HTTP surface used by the client."""

    def send(
        self,
        method: str,
        url: str,
        headers: Mapping[str, str],
        params: Optional[Mapping[str, Any]] = None,
        content: Optional[bytes] = None,
    ) -> TransportResponse:
        """Perform one HTTP request; raise ``TransportError`` if no response."""
        ...

    def close(self) -> None:
        """Release any held connections."""
        ...


class HttpxTransport:
    """Transport backed by a synchronous ``httpx.Client``."""

    def __init__(
        self,
        timeout: Optional[float] = 30.0,
        verify_ssl: bool = True,
        client: Optional[httpx.Client] = None,
    ):
        """
        Initialize the transport.

        Args:
            timeout: Request timeout in seconds, passed to httpx as is
            verify_ssl: Whether to verify TLS certificates
            client: Pre-built httpx client; the transport then does not own it
        """
        self.logger = get_logger("ironmq.transport")
        self._owns_client = client is None
        self.client = client or httpx.Client(timeout=timeout, verify=verify_ssl)

    def send(
        self,
        method: str,
        url: str,
        headers: Mapping[str, str],
        params: Optional[Mapping[str, Any]] = None,
        content: Optional[bytes] = None,
    ) -> TransportResponse:
        try:
            response = self.client.request(
                method,
                url,
                headers=dict(headers),
                params=dict(params) if params else None,
                content=content,
            )
        except (httpx.HTTPError, httpx.InvalidURL, UnicodeEncodeError) as e:
            self.logger.debug(
                "HTTP request failed", method=method, url=url, reason=repr(e)
            )
            raise TransportError(
                f"{method} {url} failed: {str(e) or type(e).__name__}",
                error_context={"method": method, "reason": type(e).__name__},
            ) from e
        return TransportResponse(status_code=response.status_code, body=response.content)

    def close(self) -> None:
        if self._owns_client:
            self.client.close()
