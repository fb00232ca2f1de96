"""
Pytest configuration and fixtures for IronMQ client tests.

This module provides common test fixtures that are used across all test types.
No fixture here opens a network connection.
"""

from unittest.mock import Mock

import pytest

from ironmq.client import IronMQClient
from ironmq.core.config import IronMQConfig
from ironmq.core.transport import TransportResponse


def json_response(status_code: int, body: str) -> TransportResponse:
    """Build a transport response from a JSON string."""
    return TransportResponse(status_code=status_code, body=body.encode("utf-8"))


@pytest.fixture(autouse=True)
def clean_iron_env(monkeypatch, tmp_path):
    """Keep real IRON_* variables and config files out of the tests."""
    import os

    for key in list(os.environ):
        if key.startswith("IRON_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    yield


@pytest.fixture
def iron_config():
    """Create a configuration with credentials set."""
    return IronMQConfig(token="test-token", project_id="test-project")


@pytest.fixture
def mock_transport():
    """Create a mock transport answering with an empty JSON object."""
    transport = Mock()
    transport.send.return_value = json_response(200, "{}")
    return transport


@pytest.fixture
def client(iron_config, mock_transport):
    """Create a client wired to the mock transport."""
    return IronMQClient(config=iron_config, transport=mock_transport)


# Test markers
def pytest_collection_modifyitems(config, items):
    """Add markers to tests based on their location."""
    for item in items:
        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)
