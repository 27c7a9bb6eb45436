import sys

import pytest
from loguru import logger


@pytest.fixture(autouse=True)
def reset_logger():
    """insert_assets reconfigures the global loguru logger; put stderr back afterwards."""
    yield
    logger.remove()
    logger.add(sys.stderr)


@pytest.fixture
def log_messages():
    """Collect formatted loguru messages at DEBUG level."""
    messages = []
    logger.remove()
    logger.add(messages.append, format="{message}", level="DEBUG")
    return messages


@pytest.fixture
def fixed_timestamp():
    return lambda path: 1234
