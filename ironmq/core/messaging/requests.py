"""
Request building for the IronMQ API.

Each builder is a pure function mapping an operation and its arguments to an
``ApiRequest``: HTTP method, resource path relative to the API root, query
parameters and JSON body. Headers are built per call and never shared.
"""

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Iterable, Mapping, Optional
from urllib.parse import quote

from ..errors import ConfigurationError
from .message import Message


class HttpMethod(str, Enum):
    """HTTP methods used by the API."""

    GET = "GET"
    POST = "POST"
    DELETE = "DELETE"


@dataclass(frozen=True)
class ApiRequest:
    """A fully described API call, ready for the transport."""

    method: HttpMethod
    path: str
    params: Mapping[str, Any] = field(default_factory=dict)
    body: Optional[Dict[str, Any]] = None


def encode_segment(value: str) -> str:
    """Percent-encode a value for use as a single path segment."""
    return quote(str(value), safe="")


def queues_path(project_id: str) -> str:
    if not project_id:
        raise ConfigurationError(
            "Please set project_id", error_code="PROJECT_ID_MISSING"
        )
    return f"projects/{encode_segment(project_id)}/queues"


def queue_path(project_id: str, queue_name: str) -> str:
    return f"{queues_path(project_id)}/{encode_segment(queue_name)}"


def messages_path(project_id: str, queue_name: str) -> str:
    return f"{queue_path(project_id, queue_name)}/messages"


def list_queues_request(project_id: str, page: int = 0) -> ApiRequest:
    """List queues of a project; ``page`` is sent only when positive."""
    params: Dict[str, Any] = {}
    if page > 0:
        params["page"] = page
    return ApiRequest(HttpMethod.GET, queues_path(project_id), params)


def get_queue_request(project_id: str, queue_name: str) -> ApiRequest:
    """Get queue info, including its size."""
    return ApiRequest(HttpMethod.GET, queue_path(project_id, queue_name))


def post_messages_request(
    project_id: str, queue_name: str, messages: Iterable[Message]
) -> ApiRequest:
    """Push a batch of messages. The body is always an array."""
    body = {"messages": [message.to_wire() for message in messages]}
    return ApiRequest(
        HttpMethod.POST, messages_path(project_id, queue_name), body=body
    )


def get_messages_request(
    project_id: str, queue_name: str, count: int = 1
) -> ApiRequest:
    """Pull up to ``count`` messages; ``n`` is sent only when count > 1."""
    params: Dict[str, Any] = {}
    if count > 1:
        params["n"] = count
    return ApiRequest(HttpMethod.GET, messages_path(project_id, queue_name), params)


def delete_message_request(
    project_id: str, queue_name: str, message_id: str
) -> ApiRequest:
    """Delete a message by id."""
    path = f"{messages_path(project_id, queue_name)}/{encode_segment(message_id)}"
    return ApiRequest(HttpMethod.DELETE, path)


def build_headers(token: str, user_agent: str) -> Mapping[str, str]:
    """Build the header set for one API call."""
    return MappingProxyType(
        {
            "Authorization": f"OAuth {token}",
            "Content-Type": "application/json",
            "Accept": "application/json",
            "User-Agent": user_agent,
        }
    )


def build_url(base_url: str, path: str) -> str:
    """Join the API root and a resource path."""
    return f"{base_url.rstrip('/')}/{path.lstrip('/')}"
