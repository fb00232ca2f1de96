"""
IronMQ API client.

This module provides the public client: list queues, get queue info, push,
pull and delete messages. Every operation issues at most one HTTP request and
either returns the decoded result or raises one of the errors defined in
``ironmq.core.errors``. The client never retries.
"""

import time
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Union

from . import __version__
from .core.config import IronMQConfig, load_config
from .core.config.loader import ConfigSource
from .core.errors import (
    ApiError,
    ConfigurationError,
    IronMQError,
    ProtocolError,
    ValidationError,
)
from .core.logging import CLIENT_NAME, get_logger, log_api_call
from .core.messaging import (
    NO_MESSAGES,
    ApiRequest,
    Message,
    NoMessages,
    build_headers,
    build_url,
    delete_message_request,
    extract_messages,
    get_messages_request,
    get_queue_request,
    list_queues_request,
    post_messages_request,
)
from .core.transport import HttpxTransport, JsonCodec, Transport, TransportResponse

MessageSpec = Union[Message, str, Mapping[str, Any]]


class IronMQClient:
    """
    Client for the IronMQ message queue service.

    Configuration (token, project id, endpoint) is held for the lifetime of
    the client. The project id can be switched explicitly with
    :meth:`set_project_id`; nothing else changes between calls.
    """

    def __init__(
        self,
        config_file_or_options: ConfigSource = None,
        *,
        config: Optional[IronMQConfig] = None,
        transport: Optional[Transport] = None,
        codec: Optional[JsonCodec] = None,
    ):
        """
        Initialize the client.

        Args:
            config_file_or_options: Options mapping or path to a config file.
                Missing settings are read from iron.ini / iron.json, IRON_*
                environment variables and ~/.iron.ini / ~/.iron.json.
            config: Ready configuration; skips loading entirely
            transport: HTTP transport; an ``HttpxTransport`` by default
            codec: JSON codec; a ``JsonCodec`` by default

        Raises:
            ConfigurationError: if no token can be resolved
        """
        self.logger = get_logger("ironmq.client")
        self.config = config or load_config(config_file_or_options)

        if not self.config.token:
            raise ConfigurationError(
                "IronMQ token is required. "
                "Set it in options, a config file, "
                "or the IRON_TOKEN environment variable.",
                error_code="TOKEN_MISSING",
            )

        self._project_id = self.config.project_id
        self.transport: Transport = transport or HttpxTransport(
            timeout=self.config.timeout, verify_ssl=self.config.verify_ssl
        )
        self.codec = codec or JsonCodec()
        self.user_agent = f"{CLIENT_NAME}-{__version__}"

        self.logger.debug(
            "IronMQ client initialized",
            base_url=self.base_url,
            project_id=self._project_id,
        )

    def __enter__(self) -> "IronMQClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def close(self) -> None:
        """Close the underlying transport."""
        self.transport.close()

    @property
    def project_id(self) -> Optional[str]:
        return self._project_id

    @property
    def base_url(self) -> str:
        return self.config.base_url

    def set_project_id(self, project_id: Optional[str]) -> None:
        """
        Switch the active project.

        An empty value keeps the current project.

        Raises:
            ConfigurationError: if no project id is held afterwards
        """
        if project_id:
            self._project_id = project_id
            self.logger.info("Switched project", project_id=project_id)
        self._require_project_id()

    # ------------------------------------------------------------------
    # Queues
    # ------------------------------------------------------------------
    def list_queues(self, page: int = 0) -> Any:
        """
        List queues of the active project.

        Args:
            page: Page number, starting at 1; 0 or less requests the first page

        Returns:
            Decoded queue list as returned by the service
        """
        project_id = self._require_project_id()
        return self._call(list_queues_request(project_id, page))

    def get_queue(self, queue_name: str) -> Any:
        """
        Get information about a queue, including its size.

        Args:
            queue_name: Name of the queue

        Returns:
            Decoded queue info as returned by the service
        """
        project_id = self._require_project_id()
        return self._call(get_queue_request(project_id, queue_name))

    # ------------------------------------------------------------------
    # Messages
    # ------------------------------------------------------------------
    def post_message(self, queue_name: str, message: MessageSpec) -> Any:
        """
        Push a message on the queue.

        Examples:
            client.post_message("test_queue", "Hello world")
            client.post_message("test_queue", {
                "body": "Test Message",
                "timeout": 120,
                "delay": 2,
                "expires_in": 2 * 24 * 3600,
            })

        Args:
            queue_name: Name of the queue
            message: Message body, mapping of message fields, or ``Message``

        Returns:
            Decoded acceptance response, typically with the assigned ids
        """
        project_id = self._require_project_id()
        msg = Message.create(message)
        return self._call(post_messages_request(project_id, queue_name, [msg]))

    def post_messages(self, queue_name: str, messages: Iterable[MessageSpec]) -> Any:
        """
        Push several messages on the queue in one request.

        Every message is validated before anything is sent; one invalid entry
        fails the whole call.

        Args:
            queue_name: Name of the queue
            messages: Messages, each as accepted by :meth:`post_message`

        Returns:
            Decoded acceptance response
        """
        project_id = self._require_project_id()
        if isinstance(messages, (str, bytes, Mapping, Message)):
            raise ValidationError(
                "post_messages expects a sequence of messages",
                error_context={"type": type(messages).__name__},
            )

        batch: List[Message] = []
        for index, message in enumerate(messages):
            try:
                batch.append(Message.create(message))
            except ValidationError as e:
                e.error_context.setdefault("index", index)
                raise
        if not batch:
            raise ValidationError("At least one message is required")

        return self._call(post_messages_request(project_id, queue_name, batch))

    def get_messages(
        self, queue_name: str, count: int = 1
    ) -> Union[List[Dict[str, Any]], NoMessages]:
        """
        Pull up to ``count`` messages from the queue.

        Pulled messages stay on the queue until deleted or their timeout
        expires.

        Args:
            queue_name: Name of the queue
            count: Maximum number of messages; 1 or less uses the server
                default of one

        Returns:
            List of messages, or ``NO_MESSAGES`` if the queue had none
        """
        project_id = self._require_project_id()
        messages = self._call(
            get_messages_request(project_id, queue_name, count),
            extract=extract_messages,
        )
        if not messages:
            return NO_MESSAGES
        return messages

    def get_message(self, queue_name: str) -> Union[Dict[str, Any], NoMessages]:
        """
        Pull a single message from the queue.

        Returns:
            The message, or ``NO_MESSAGES`` if the queue had none
        """
        messages = self.get_messages(queue_name, 1)
        if isinstance(messages, NoMessages):
            return NO_MESSAGES
        return messages[0]

    def delete_message(self, queue_name: str, message_id: str) -> Any:
        """
        Delete a message from the queue.

        Args:
            queue_name: Name of the queue
            message_id: Id of the message, usually from a previous pull

        Returns:
            Decoded confirmation; ``{}`` if the service sent an empty body
        """
        project_id = self._require_project_id()
        return self._call(
            delete_message_request(project_id, queue_name, message_id),
            allow_empty=True,
        )

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------
    def _require_project_id(self) -> str:
        if not self._project_id:
            raise ConfigurationError(
                "Please set project_id",
                error_code="PROJECT_ID_MISSING",
            )
        return self._project_id

    def _call(
        self,
        request: ApiRequest,
        allow_empty: bool = False,
        extract: Optional[Callable[[Any], Any]] = None,
    ) -> Any:
        """
        Send one request and decode its response.

        ``extract`` runs on the decoded payload; its errors count as a failed
        call.
        """
        method = request.method.value
        url = build_url(self.base_url, request.path)
        headers = build_headers(self.config.token or "", self.user_agent)
        content = self.codec.encode(request.body) if request.body is not None else None

        status_code: Optional[int] = None
        start_time = time.perf_counter()
        try:
            response = self.transport.send(
                method, url, headers, params=request.params, content=content
            )
            status_code = response.status_code
            duration_ms = (time.perf_counter() - start_time) * 1000

            if not response.ok:
                raise ApiError(
                    response.status_code,
                    self._decode_error_body(response),
                    method=method,
                    path=request.path,
                )
            if allow_empty and not response.body.strip():
                result: Any = {}
            else:
                result = self.codec.decode(response.body)
            if extract is not None:
                result = extract(result)
        except IronMQError as e:
            log_api_call(
                method,
                request.path,
                status="failed",
                status_code=status_code,
                duration_ms=(time.perf_counter() - start_time) * 1000,
                details={"error_code": e.error_code, "error_type": e.error_type.value},
            )
            raise

        log_api_call(
            method,
            request.path,
            status_code=response.status_code,
            duration_ms=duration_ms,
        )
        return result

    def _decode_error_body(self, response: TransportResponse) -> Any:
        if not response.body.strip():
            return None
        try:
            return self.codec.decode(response.body)
        except ProtocolError:
            return response.text
