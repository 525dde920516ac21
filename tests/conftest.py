"""Shared pytest fixtures."""

import pytest
from loguru import logger


@pytest.fixture(autouse=True)
def reset_logger():
    """Drop loguru sinks bound to a test's captured streams."""
    yield
    logger.remove()
