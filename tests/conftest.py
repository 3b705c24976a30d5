"""Pytest fixtures for jsonstore tests."""

import logging
from typing import Generator
from unittest.mock import AsyncMock, MagicMock

import pytest
import structlog

from jsonstore.client import JsonStore
from tests.helpers import FakeJsonRedis


@pytest.fixture(autouse=True)
def reset_logging_state() -> Generator[None, None, None]:
    """Reset structlog, root handlers and CLI settings around each test."""
    import jsonstore.cli.helpers as cli_helpers

    cli_helpers.reset_settings()
    structlog.reset_defaults()

    root_logger = logging.getLogger()
    original_handlers = root_logger.handlers[:]
    original_level = root_logger.level
    for handler in original_handlers:
        root_logger.removeHandler(handler)

    yield

    cli_helpers.reset_settings()
    structlog.reset_defaults()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
    for handler in original_handlers:
        root_logger.addHandler(handler)
    root_logger.setLevel(original_level)


@pytest.fixture
def fake_redis() -> FakeJsonRedis:
    """Empty in-memory RedisJSON connection."""
    return FakeJsonRedis()


@pytest.fixture
def store(fake_redis: FakeJsonRedis) -> JsonStore:
    """JsonStore wired to the in-memory connection."""
    return JsonStore(connection=fake_redis)


@pytest.fixture
def mock_connection() -> MagicMock:
    """Connection whose execute_command records calls and answers "OK"."""
    connection = MagicMock()
    connection.execute_command = AsyncMock(return_value="OK")
    connection.ping = AsyncMock(return_value=True)
    connection.aclose = AsyncMock(return_value=None)
    return connection
