"""
Logging configuration for the IronMQ client using structlog.

This module provides structured logging configuration and the helper used to
record one event per API request.
"""

import logging
import sys
from typing import Any, Dict, Optional

import structlog

from .. import __version__
from .config import LoggingConfig

CLIENT_NAME = "iron_mq_python"

# Silent until the application configures logging
logging.getLogger("ironmq").addHandler(logging.NullHandler())


def _add_client_metadata(
    logger: Any, method_name: str, event_dict: Dict[str, Any]
) -> Dict[str, Any]:
    """Add client metadata for filtering."""
    event_dict.setdefault("client_name", CLIENT_NAME)
    event_dict.setdefault("client_version", __version__)
    return event_dict


def setup_logging(
    level: Optional[str] = None,
    json_output: Optional[bool] = None,
) -> None:
    """
    Set up structured logging for the client.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_output: Whether to output JSON logs; console output otherwise
    """
    config = LoggingConfig()

    log_level = (level or config.level).upper()
    use_json = config.json_output if json_output is None else json_output

    processors: list[Any] = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        _add_client_metadata,
    ]

    if use_json:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, log_level),
    )
    logging.getLogger("ironmq").setLevel(getattr(logging, log_level))


def get_logger(name: str) -> Any:
    """
    Get a structured logger instance.

    Args:
        name: Logger name (usually __name__)

    Records always go through the standard library logger of the same name,
    so the application decides where they end up.

    Returns:
        Structured logger instance
    """
    return structlog.wrap_logger(logging.getLogger(name))


def log_api_call(
    method: str,
    path: str,
    status: str = "completed",
    status_code: Optional[int] = None,
    duration_ms: Optional[float] = None,
    details: Optional[Dict[str, Any]] = None,
) -> None:
    """
    Log one API request with structured data.

    Args:
        method: HTTP method
        path: Resource path relative to the API root
        status: Outcome of the call (completed, failed)
        status_code: HTTP status code, when a response was obtained
        duration_ms: Round trip time in milliseconds
        details: Additional details about the call
    """
    logger = get_logger("ironmq.api")

    log_data: Dict[str, Any] = {
        "method": method,
        "path": path,
        "status": status,
        "event_type": "api_call",
    }
    if status_code is not None:
        log_data["status_code"] = status_code
    if duration_ms is not None:
        log_data["duration_ms"] = round(duration_ms, 2)

    if details:
        log_data.update(details)

    if status == "failed":
        logger.warning("API call failed", **log_data)
    else:
        logger.info("API call completed", **log_data)
