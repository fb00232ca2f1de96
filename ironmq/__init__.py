"""
IronMQ - Python client for the IronMQ hosted message queue.

Push, pull and delete messages on named queues and list the queues of a
project over the IronMQ HTTP API.
"""

__version__ = "0.1.0"
__author__ = "IronMQ Python Team"
__description__ = "Python client for the IronMQ message queue service"

from .client import IronMQClient
from .core.config import IronMQConfig
from .core.errors import (
    ApiError,
    ConfigurationError,
    IronMQError,
    ProtocolError,
    TransportError,
    ValidationError,
)
from .core.logging import setup_logging
from .core.messaging import MAX_EXPIRES_IN, NO_MESSAGES, Message, NoMessages

__all__ = [
    "__version__",
    "__author__",
    "__description__",
    "IronMQClient",
    "IronMQConfig",
    "Message",
    "MAX_EXPIRES_IN",
    "NO_MESSAGES",
    "NoMessages",
    "IronMQError",
    "ValidationError",
    "ConfigurationError",
    "TransportError",
    "ApiError",
    "ProtocolError",
    "setup_logging",
]
