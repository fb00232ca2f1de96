"""
Error taxonomy for the IronMQ client.

This module provides error categorization and the exception classes raised by
every public client operation, plus the structured error response used when
failures are logged.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional


class ErrorType(Enum):
    """Types of errors that can occur in the client."""

    VALIDATION_ERROR = "validation_error"  # Invalid caller input
    CONFIGURATION_ERROR = "configuration_error"  # Missing client setup
    TRANSPORT_ERROR = "transport_error"  # No response obtained
    API_ERROR = "api_error"  # Non-success response from the service
    PROTOCOL_ERROR = "protocol_error"  # Response could not be decoded


def create_error_response(
    error_type: ErrorType,
    error_code: str,
    error_message: str,
    error_context: Optional[Dict[str, Any]] = None,
    source: Optional[str] = None,
) -> Dict[str, Any]:
    """Create error response data structure."""
    return {
        "error_type": error_type.value,
        "error_code": error_code,
        "error_message": error_message,
        "error_context": error_context or {},
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "source": source,
    }


class IronMQError(Exception):
    """Base class for every error raised by the client."""

    error_type: ErrorType = ErrorType.API_ERROR
    default_code: str = "IRONMQ_ERROR"
    source: str = "ironmq"

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        error_context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.default_code
        self.error_context: Dict[str, Any] = error_context or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert the error to its structured response form."""
        return create_error_response(
            error_type=self.error_type,
            error_code=self.error_code,
            error_message=self.message,
            error_context=self.error_context,
            source=self.source,
        )


class ValidationError(IronMQError, ValueError):
    """Invalid caller input. Never sent over the wire."""

    error_type = ErrorType.VALIDATION_ERROR
    default_code = "MESSAGE_VALIDATION_FAILED"
    source = "message_validation"


class ConfigurationError(IronMQError):
    """Required client setup (token, project id) is missing or invalid."""

    error_type = ErrorType.CONFIGURATION_ERROR
    default_code = "CONFIGURATION_MISSING"
    source = "configuration"


class TransportError(IronMQError):
    """The request failed before any response was obtained."""

    error_type = ErrorType.TRANSPORT_ERROR
    default_code = "TRANSPORT_FAILED"
    source = "transport"


class ApiError(IronMQError):
    """The service answered with a non-success status code."""

    error_type = ErrorType.API_ERROR
    default_code = "API_REQUEST_FAILED"
    source = "api"

    def __init__(
        self,
        status_code: int,
        body: Any = None,
        method: Optional[str] = None,
        path: Optional[str] = None,
    ):
        detail = None
        if isinstance(body, dict):
            detail = body.get("msg") or body.get("message")
        elif isinstance(body, str) and body:
            detail = body
        message = f"IronMQ request failed ({status_code})"
        if detail:
            message = f"{message}: {detail}"

        context: Dict[str, Any] = {"status_code": status_code}
        if method:
            context["method"] = method
        if path:
            context["path"] = path
        super().__init__(message, error_context=context)
        self.status_code = status_code
        self.body = body


class ProtocolError(IronMQError):
    """The response body could not be decoded into the expected shape."""

    error_type = ErrorType.PROTOCOL_ERROR
    default_code = "MALFORMED_RESPONSE"
    source = "codec"


def is_retryable_error(error: BaseException) -> bool:
    """
    Check if an error is worth retrying at a higher layer.

    The client never retries on its own; this only classifies failures.
    """
    if isinstance(error, TransportError):
        return True
    if isinstance(error, ApiError):
        return error.status_code == 429 or error.status_code >= 500
    return False
