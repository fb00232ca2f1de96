"""
Response interpretation for the IronMQ API.

Queue info and queue list payloads are passed through to the caller as
decoded JSON. Pull responses are checked for their ``messages`` container.
"""

from typing import Any, Dict, List

from ..errors import ProtocolError


class NoMessages:
    """Result of a successful pull that found nothing on the queue."""

    _instance = None

    def __new__(cls) -> "NoMessages":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "NO_MESSAGES"


NO_MESSAGES = NoMessages()


def extract_messages(payload: Any) -> List[Dict[str, Any]]:
    """
    Get the message list out of a decoded pull response.

    Raises:
        ProtocolError: if the payload has no ``messages`` list
    """
    if not isinstance(payload, dict) or "messages" not in payload:
        raise ProtocolError(
            "Pull response has no 'messages' container",
            error_code="MISSING_MESSAGES",
            error_context={"payload_type": type(payload).__name__},
        )
    messages = payload["messages"]
    if not isinstance(messages, list):
        raise ProtocolError(
            "Pull response 'messages' is not a list",
            error_code="MISSING_MESSAGES",
            error_context={"messages_type": type(messages).__name__},
        )
    return messages
