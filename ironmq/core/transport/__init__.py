"""HTTP transport and JSON codec used by the IronMQ client."""

from .codec import JsonCodec
from .http import HttpxTransport, Transport, TransportResponse

__all__ = [
    "HttpxTransport",
    "JsonCodec",
    "Transport",
    "TransportResponse",
]
