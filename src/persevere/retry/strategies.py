"""
Backoff strategies for suspending between attempts.

A backoff strategy is any callable ``(attempt_index, base_delay)`` that
performs the suspend before the next attempt. The built-in strategies split
this into a pure ``compute_delay`` and the sleep itself, so the delay
formulas can be inspected without waiting.

Built-in strategies:
    - ConstantBackoff: ``base_delay``
    - LinearBackoff: ``attempt_index * base_delay``
    - ExponentialBackoff: ``(2 ** attempt_index - 1) * base_delay``

Each strategy also provides an awaitable ``wait`` built on ``asyncio.sleep``
so asyncio callers get a cancellable suspend. A ``sleep`` override only
applies to the blocking call; pass ``async_sleep`` for ``wait``.
"""

import asyncio
import time
from abc import ABC, abstractmethod
from typing import Any, Awaitable, Callable, Protocol

import structlog

logger = structlog.get_logger(__name__)


class BackoffStrategy(Protocol):
    """
    Protocol for backoff strategies.

    Called by the engine after a retryable failure when attempts remain.
    The return value is ignored.
    """

    def __call__(self, attempt_index: int, base_delay: float) -> Any:
        """
        Suspend before the next attempt.

        Args:
            attempt_index: 0-based index of the attempt that just failed
            base_delay: Seed delay in seconds from the policy
        """
        ...


class SleepBackoff(ABC):
    """
    Base class for strategies that sleep for a computed delay.

    Args:
        sleep: Blocking sleep function. Looked up from ``time.sleep`` at call
            time when omitted, so it can be patched in tests.
        async_sleep: Coroutine function awaited by ``wait``. Defaults to
            ``asyncio.sleep``, looked up the same way.
    """

    name: str = "sleep"

    def __init__(
        self,
        sleep: Callable[[float], None] | None = None,
        async_sleep: Callable[[float], Awaitable[None]] | None = None,
    ):
        self._sleep = sleep
        self._async_sleep = async_sleep

    @abstractmethod
    def compute_delay(self, attempt_index: int, base_delay: float) -> float:
        """Return the delay in seconds before the attempt after ``attempt_index``."""

    def __call__(self, attempt_index: int, base_delay: float) -> float:
        delay = self.compute_delay(attempt_index, base_delay)
        logger.debug(
            "Backing off",
            strategy=self.name,
            attempt_index=attempt_index,
            delay_seconds=delay,
        )
        sleep = self._sleep or time.sleep
        sleep(delay)
        return delay

    async def wait(self, attempt_index: int, base_delay: float) -> float:
        """Cancellable counterpart of ``__call__`` for asyncio callers."""
        delay = self.compute_delay(attempt_index, base_delay)
        logger.debug(
            "Backing off (async)",
            strategy=self.name,
            attempt_index=attempt_index,
            delay_seconds=delay,
        )
        async_sleep = self._async_sleep or asyncio.sleep
        await async_sleep(delay)
        return delay

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class ConstantBackoff(SleepBackoff):
    """Wait the same ``base_delay`` between every attempt."""

    name = "constant"

    def compute_delay(self, attempt_index: int, base_delay: float) -> float:
        return base_delay


class LinearBackoff(SleepBackoff):
    """
    Wait ``attempt_index * base_delay``.

    With ``base_delay=2`` the waits are 0, 2, 4, 6... seconds.
    """

    name = "linear"

    def compute_delay(self, attempt_index: int, base_delay: float) -> float:
        return attempt_index * base_delay


class ExponentialBackoff(SleepBackoff):
    """
    Wait ``(2 ** attempt_index - 1) * base_delay``.

    With ``base_delay=1`` the waits are 0, 1, 3, 7, 15... seconds.
    """

    name = "exponential"

    def compute_delay(self, attempt_index: int, base_delay: float) -> float:
        return (2**attempt_index - 1) * base_delay


# Shared instances; strategies hold no per-execution state
CONSTANT = ConstantBackoff()
LINEAR = LinearBackoff()
EXPONENTIAL = ExponentialBackoff()
