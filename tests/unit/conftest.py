"""Unit test fixtures (mocks and stubs).

Provides mock loggers and zero-delay policies so unit tests never sleep.
"""

from unittest.mock import Mock

import pytest

from persevere.models.policy import PolicyConfig
from persevere.retry.engine import RetryEngine


@pytest.fixture
def mock_logger():
    """Mock structlog-style logger (accepts event + key/value pairs)."""
    mock = Mock()
    mock.warning = Mock()
    mock.info = Mock()
    mock.debug = Mock()
    return mock


@pytest.fixture
def engine() -> RetryEngine:
    return RetryEngine()


@pytest.fixture
def make_policy(mock_logger, recording_backoff):
    """Factory fixture for PolicyConfig with no real sleeping.

    Usage:
        def test_something(make_policy):
            policy = make_policy(max_attempts=3, retry_on=[KeyError])
    """

    def _create(**overrides) -> PolicyConfig:
        options = {
            "name": "unit",
            "max_attempts": 4,
            "base_delay": 0.0,
            "on_retry": recording_backoff,
            "logger": mock_logger,
        }
        options.update(overrides)
        return PolicyConfig(**options)

    return _create
