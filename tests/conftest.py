"""Pytest configuration and fixtures."""

import random

import pytest

from handlertest.models import Response
from tests.handlers import EchoHandler


@pytest.fixture
def echo_handler():
    return EchoHandler()


@pytest.fixture
def seeded_rng():
    """Deterministic random source for boundary generation."""
    return random.Random(1234)


@pytest.fixture
def upload_file(tmp_path):
    """A file.txt containing "Hello, world!"."""
    path = tmp_path / "file.txt"
    path.write_bytes(b"Hello, world!")
    return path


@pytest.fixture
def mock_handler(mocker):
    """A mock handler whose handle() returns an empty 200 response."""
    handler = mocker.Mock(spec=["handle"])
    handler.handle.return_value = Response(200, b"")
    return handler
