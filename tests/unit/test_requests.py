"""
Tests for request building.
"""

import pytest

from ironmq.core.errors import ConfigurationError
from ironmq.core.messaging import (
    HttpMethod,
    Message,
    build_headers,
    build_url,
    delete_message_request,
    encode_segment,
    get_messages_request,
    get_queue_request,
    list_queues_request,
    post_messages_request,
)


@pytest.mark.unit
class TestRequestPaths:
    """Test method, path and parameters per operation."""

    def test_list_queues_first_page(self) -> None:
        """Test that page 0 is not sent."""
        request = list_queues_request("p1", 0)

        assert request.method == HttpMethod.GET
        assert request.path == "projects/p1/queues"
        assert dict(request.params) == {}
        assert request.body is None

    def test_list_queues_with_page(self) -> None:
        """Test that a positive page is sent."""
        assert dict(list_queues_request("p1", 2).params) == {"page": 2}

    def test_list_queues_negative_page(self) -> None:
        """Test that a negative page means the default."""
        assert dict(list_queues_request("p1", -3).params) == {}

    def test_get_queue(self) -> None:
        request = get_queue_request("p1", "test_queue")

        assert request.method == HttpMethod.GET
        assert request.path == "projects/p1/queues/test_queue"

    def test_post_single_message_is_a_batch(self) -> None:
        """Test that one message is still sent as an array."""
        request = post_messages_request(
            "p1", "test_queue", [Message.create("Test Message")]
        )

        assert request.method == HttpMethod.POST
        assert request.path == "projects/p1/queues/test_queue/messages"
        assert request.body == {"messages": [{"body": "Test Message"}]}

    def test_post_many_messages(self) -> None:
        messages = [Message.create("a"), Message.create({"body": "b", "delay": 0})]
        request = post_messages_request("p1", "q", messages)

        assert request.body == {"messages": [{"body": "a"}, {"body": "b", "delay": 0}]}

    @pytest.mark.parametrize("count", [1, 0, -1])
    def test_get_messages_default_count(self, count: int) -> None:
        """Test that counts of one or less omit n."""
        request = get_messages_request("p1", "q", count)

        assert request.method == HttpMethod.GET
        assert request.path == "projects/p1/queues/q/messages"
        assert dict(request.params) == {}

    def test_get_messages_with_count(self) -> None:
        assert dict(get_messages_request("p1", "q", 5).params) == {"n": 5}

    def test_delete_message(self) -> None:
        request = delete_message_request("p1", "q", "5924625841136130921")

        assert request.method == HttpMethod.DELETE
        assert request.path == "projects/p1/queues/q/messages/5924625841136130921"
        assert request.body is None

    def test_missing_project_id(self) -> None:
        """Test that no path is built without a project."""
        with pytest.raises(ConfigurationError):
            get_queue_request("", "q")


@pytest.mark.unit
class TestQueueNameEncoding:
    """Test percent-encoding of queue names."""

    @pytest.mark.parametrize(
        "request_path",
        [
            get_queue_request("p1", "a b").path,
            post_messages_request("p1", "a b", [Message.create("x")]).path,
            get_messages_request("p1", "a b", 3).path,
            delete_message_request("p1", "a b", "1").path,
        ],
    )
    def test_space_encoded_in_all_queue_operations(self, request_path: str) -> None:
        assert request_path.startswith("projects/p1/queues/a%20b")

    def test_reserved_characters(self) -> None:
        """Test that slashes and query characters cannot leak into the path."""
        assert encode_segment("a/b?c#d&e") == "a%2Fb%3Fc%23d%26e"

    def test_unreserved_characters_kept(self) -> None:
        assert encode_segment("queue-1_name.v2~x") == "queue-1_name.v2~x"

    def test_unicode_name(self) -> None:
        assert encode_segment("cola") == "cola"
        assert encode_segment("é") == "%C3%A9"


@pytest.mark.unit
class TestHeadersAndUrl:
    """Test header sets and URL joining."""

    def test_headers(self) -> None:
        headers = build_headers("secret", "iron_mq_python-0.1.0")

        assert headers["Authorization"] == "OAuth secret"
        assert headers["Content-Type"] == "application/json"
        assert headers["Accept"] == "application/json"
        assert headers["User-Agent"] == "iron_mq_python-0.1.0"

    def test_headers_are_immutable(self) -> None:
        headers = build_headers("secret", "ua")
        with pytest.raises(TypeError):
            headers["Authorization"] = "OAuth other"  # type: ignore[index]

    def test_headers_are_built_per_call(self) -> None:
        assert build_headers("a", "ua") is not build_headers("a", "ua")

    def test_build_url(self) -> None:
        url = build_url("https://mq-aws-us-east-1.iron.io:443/1/", "projects/p/queues")
        assert url == "https://mq-aws-us-east-1.iron.io:443/1/projects/p/queues"
