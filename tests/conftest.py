import sys

from loguru import logger
import pytest


@pytest.fixture
def binary_alphabet():
    return [0, 1]


@pytest.fixture
def log_messages():
    """Collect loguru messages emitted during a test."""
    messages: list[str] = []
    handler_id = logger.add(messages.append, level="DEBUG", format="{message}")
    yield messages
    logger.remove(handler_id)


@pytest.fixture
def restore_logger():
    yield
    logger.remove()
    logger.add(sys.stderr)
