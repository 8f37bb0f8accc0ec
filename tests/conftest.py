"""Shared test fixtures and configuration for all tests.

This conftest.py provides scripted operations and recording hooks used
across unit and integration tests.
"""

from typing import Any

import pytest
import structlog

from persevere.config import Settings


class ScriptedFailer:
    """
    Operation that raises a fixed number of times, then succeeds.

    Attributes:
        fails: Failures still to raise
        result: Value returned once the failures are used up
        calls: Total invocations
        successes: Invocations that returned
    """

    def __init__(
        self,
        fails: int = 2,
        result: Any = 2,
        error_class: type[Exception] = RuntimeError,
        message: str = "Dying",
    ):
        self.fails = fails
        self.result = result
        self.error_class = error_class
        self.message = message
        self.calls = 0
        self.successes = 0

    def __call__(self) -> Any:
        self.calls += 1
        if self.fails > 0:
            self.fails -= 1
            raise self.error_class(self.message)
        self.successes += 1
        return self.result

    async def run_async(self) -> Any:
        return self()


class RecordingBackoff:
    """Backoff strategy that records its calls instead of sleeping."""

    def __init__(self) -> None:
        self.calls: list[tuple[int, float]] = []

    def __call__(self, attempt_index: int, base_delay: float) -> None:
        self.calls.append((attempt_index, base_delay))


class RecordingHandler:
    """Terminal handler that records its calls and returns a fallback."""

    def __init__(self, fallback: Any = None) -> None:
        self.fallback = fallback
        self.calls: list[tuple[Any, int, BaseException]] = []

    def __call__(self, logger: Any, max_attempts: int, last_error: BaseException) -> Any:
        self.calls.append((logger, max_attempts, last_error))
        return self.fallback


@pytest.fixture
def scripted_failer():
    """Factory fixture for ScriptedFailer.

    Usage:
        def test_something(scripted_failer):
            operation = scripted_failer(fails=2, result="ok")
    """
    return ScriptedFailer


@pytest.fixture
def recording_backoff() -> RecordingBackoff:
    return RecordingBackoff()


@pytest.fixture
def recording_handler():
    """Factory fixture for RecordingHandler."""
    return RecordingHandler


@pytest.fixture
def test_settings() -> Settings:
    """Settings with zero delays for fast tests."""
    return Settings(
        LOG_LEVEL="DEBUG",
        ENVIRONMENT="development",
        DEFAULT_MAX_ATTEMPTS=4,
        DEFAULT_BASE_DELAY=0.0,
        EXPONENTIAL_BASE_DELAY=0.0,
        METRICS_ENABLED=True,
    )


@pytest.fixture(autouse=True)
def reset_structlog():
    """Undo any structlog configuration a test applied."""
    yield
    structlog.reset_defaults()
