"""
IronMQ messaging protocol.

This package provides the message model, the request builders mapping client
operations to API calls, and the pull response interpretation.
"""

from .message import MAX_EXPIRES_IN, Message
from .requests import (
    ApiRequest,
    HttpMethod,
    build_headers,
    build_url,
    delete_message_request,
    encode_segment,
    get_messages_request,
    get_queue_request,
    list_queues_request,
    post_messages_request,
)
from .responses import NO_MESSAGES, NoMessages, extract_messages

__all__ = [
    "Message",
    "MAX_EXPIRES_IN",
    "ApiRequest",
    "HttpMethod",
    "build_headers",
    "build_url",
    "encode_segment",
    "list_queues_request",
    "get_queue_request",
    "post_messages_request",
    "get_messages_request",
    "delete_message_request",
    "NO_MESSAGES",
    "NoMessages",
    "extract_messages",
]
