"""
Pytest configuration for Ignition test suite.

This conftest.py provides:
- Machine-mode logging (suppresses console output)
- A loguru capture fixture for asserting on log messages
- Common fixtures for configs, databases and shutdown coordinators
"""

import os

import pytest
from loguru import logger

from ignition.logging_config import setup_logging


# ============================================================================
# GLOBAL CONFIGURATION
# ============================================================================

def pytest_configure(config):
    """Configure pytest for quiet operation."""
    os.environ.setdefault("IGNITION_MACHINE_MODE", "1")


# ============================================================================
# LOGGING FIXTURES
# ============================================================================

@pytest.fixture(autouse=True)
def setup_test_logging():
    """
    Machine mode by default - suppress console logs for clean test output.
    """
    setup_logging(level="DEBUG", suppress_console=True, enable_file_logging=False, force=True)


@pytest.fixture
def log_messages():
    """
    Collect loguru messages emitted during the test.

    Usage:
        def test_something(log_messages):
            do_work()
            assert "Loaded 1 users" in log_messages
    """
    messages = []
    handler_id = logger.add(lambda m: messages.append(m.record["message"]), level="DEBUG")
    yield messages
    logger.remove(handler_id)


# ============================================================================
# APPLICATION FIXTURES
# ============================================================================

@pytest.fixture
def valid_config():
    from ignition.config import AppConfig

    return AppConfig.from_dict({
        "databaseUrl": "http://x",
        "cacheSettings": {"enabled": True, "ttl": 300},
    })


@pytest.fixture
def mock_db():
    from ignition.database import MockDatabase

    return MockDatabase()


@pytest.fixture
def coordinator():
    """A ShutdownCoordinator whose signal bindings are undone after the test."""
    from ignition.shutdown import ShutdownCoordinator

    coord = ShutdownCoordinator()
    yield coord
    coord.uninstall()


@pytest.fixture
def clean_env():
    """Remove IGNITION_* config variables for the duration of the test."""
    keys = ("IGNITION_DATABASE_URL", "IGNITION_CACHE_ENABLED", "IGNITION_CACHE_TTL")
    saved = {k: os.environ.pop(k) for k in keys if k in os.environ}
    yield
    for k in keys:
        os.environ.pop(k, None)
    os.environ.update(saved)
