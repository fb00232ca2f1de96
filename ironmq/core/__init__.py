"""
Core module for the IronMQ client.

This module contains configuration management, logging setup, the error
taxonomy, the messaging protocol and the HTTP transport.
"""

from .config import IronMQConfig
from .errors import (
    ApiError,
    ConfigurationError,
    ErrorType,
    IronMQError,
    ProtocolError,
    TransportError,
    ValidationError,
    create_error_response,
    is_retryable_error,
)
from .logging import get_logger, setup_logging

__all__ = [
    "IronMQConfig",
    "setup_logging",
    "get_logger",
    "ErrorType",
    "IronMQError",
    "ValidationError",
    "ConfigurationError",
    "TransportError",
    "ApiError",
    "ProtocolError",
    "create_error_response",
    "is_retryable_error",
]
