"""
Retry engine.

This module implements the RetryEngine that drives the attempt loop for a
caller-supplied operation under a PolicyConfig. It provides a single entry
point for blocking callers and one for asyncio callers; both share the same
state machine.

Attempt loop:
    1. Run the operation; a returned value ends the loop immediately.
    2. On failure, evaluate the policy (``should_retry``):
       - mismatch: log and re-raise the original error
       - attempts left: log, back off via ``on_retry``, try again
       - no attempts left: return ``on_exhausted(logger, max_attempts, error)``

Usage:
    engine = RetryEngine()
    result = engine.execute(PolicyConfig(max_attempts=3, base_delay=0.5), fetch)
"""

import inspect
import time
from enum import Enum
from typing import TYPE_CHECKING, Any, Awaitable, Callable, TypeVar

import structlog

from persevere.models.failure import Failure
from persevere.monitoring.metrics import (
    backoff_seconds,
    policy_mismatch_total,
    retries_total,
    retry_attempts_total,
    retry_exhausted_total,
)
from persevere.retry.state import AttemptState

if TYPE_CHECKING:
    from persevere.models.policy import PolicyConfig

logger = structlog.get_logger(__name__)

T = TypeVar("T")


class Verdict(str, Enum):
    """What the engine does after a failed attempt."""

    RERAISE = "reraise"
    RETRY = "retry"
    EXHAUSTED = "exhausted"


def should_retry(failure: Failure, config: "PolicyConfig") -> bool:
    """
    Decide whether a failure is eligible for retry under ``config``.

    Precedence:
        1. ``retry_on`` (ANDed with ``retry_on_message`` when both are set)
        2. ``retry_on_message`` alone
        3. ``reraise_on``
        4. no matcher: always retry
    """
    if config.retry_on is not None:
        if config.retry_on_message is not None:
            return failure.matches_kind(config.retry_on) and failure.matches_message(
                config.retry_on_message
            )
        return failure.matches_kind(config.retry_on)
    if config.retry_on_message is not None:
        return failure.matches_message(config.retry_on_message)
    if config.reraise_on is not None:
        return not failure.matches_kind(config.reraise_on)
    return True


class RetryEngine:
    """
    Executes operations under a retry policy.

    The engine holds no per-execution state: every call builds its own
    AttemptState, so one engine can serve concurrent callers.

    Attributes:
        metrics_enabled: Record Prometheus metrics for each execution
    """

    def __init__(self, metrics_enabled: bool = True):
        self.metrics_enabled = metrics_enabled

    def execute(self, config: "PolicyConfig", operation: Callable[[], T]) -> T | None:
        """
        Run ``operation`` until it succeeds or the policy gives up.

        Args:
            config: Retry policy
            operation: Zero-argument callable

        Returns:
            The operation's result, the terminal handler's result on
            exhaustion, or None when ``max_attempts <= 0``

        Raises:
            ConfigurationError: Policy sets both retry_on and reraise_on
            Exception: The operation's error on policy mismatch, or whatever
                the terminal handler raises
        """
        config.ensure_consistent()
        state = AttemptState(max_attempts=config.max_attempts)

        while state.has_attempts():
            try:
                result = operation()
            except Exception as exc:
                verdict = self._on_failure(config, state, exc)
                if verdict is Verdict.RERAISE:
                    raise
                if verdict is Verdict.EXHAUSTED:
                    return config.on_exhausted(config.logger, config.max_attempts, exc)

                started = time.monotonic()
                config.on_retry(state.attempt_index, config.base_delay)
                self._record_backoff(config, started)
                state.advance()
            else:
                self._on_success(config, state)
                return result

        logger.debug("Operation never attempted", policy=config.name, max_attempts=config.max_attempts)
        return None

    async def execute_async(
        self, config: "PolicyConfig", operation: Callable[[], Awaitable[T]]
    ) -> T | None:
        """
        Asyncio counterpart of ``execute``.

        Backoff uses the strategy's ``wait`` coroutine when it has one, so the
        suspend is cancellable. Plain strategies are called and awaited if they
        return an awaitable. A terminal handler returning an awaitable is
        awaited too.
        """
        config.ensure_consistent()
        state = AttemptState(max_attempts=config.max_attempts)

        while state.has_attempts():
            try:
                result = await operation()
            except Exception as exc:
                verdict = self._on_failure(config, state, exc)
                if verdict is Verdict.RERAISE:
                    raise
                if verdict is Verdict.EXHAUSTED:
                    outcome = config.on_exhausted(config.logger, config.max_attempts, exc)
                    if inspect.isawaitable(outcome):
                        outcome = await outcome
                    return outcome

                started = time.monotonic()
                await self._suspend(config, state.attempt_index)
                self._record_backoff(config, started)
                state.advance()
            else:
                self._on_success(config, state)
                return result

        logger.debug("Operation never attempted", policy=config.name, max_attempts=config.max_attempts)
        return None

    @staticmethod
    async def _suspend(config: "PolicyConfig", attempt_index: int) -> None:
        wait = getattr(config.on_retry, "wait", None)
        if wait is not None and inspect.iscoroutinefunction(wait):
            await wait(attempt_index, config.base_delay)
            return
        pending = config.on_retry(attempt_index, config.base_delay)
        if inspect.isawaitable(pending):
            await pending

    def _on_failure(self, config: "PolicyConfig", state: AttemptState, exc: Exception) -> Verdict:
        failure = state.record_failure(exc)
        if self.metrics_enabled:
            retry_attempts_total.labels(policy=config.name, outcome="failure").inc()

        if not should_retry(failure, config):
            config.logger.warning(
                "Reraising due to policy mismatch",
                policy=config.name,
                attempt=state.attempt_number,
                error_type=failure.kind_name,
                error=failure.message,
            )
            if self.metrics_enabled:
                policy_mismatch_total.labels(policy=config.name, error_type=failure.kind_name).inc()
            return Verdict.RERAISE

        if state.is_last_attempt:
            if self.metrics_enabled:
                retry_exhausted_total.labels(policy=config.name).inc()
            return Verdict.EXHAUSTED

        config.logger.warning(
            "Failure encountered, backing off and retrying",
            policy=config.name,
            attempt=state.attempt_number,
            attempts_left=state.attempts_left,
            error_type=failure.kind_name,
            error=failure.message,
            exc_info=exc,
        )
        if self.metrics_enabled:
            retries_total.labels(policy=config.name).inc()
        return Verdict.RETRY

    def _on_success(self, config: "PolicyConfig", state: AttemptState) -> None:
        if self.metrics_enabled:
            retry_attempts_total.labels(policy=config.name, outcome="success").inc()
        logger.debug(
            "Operation succeeded",
            policy=config.name,
            attempt=state.attempt_number,
            failures=len(state.failures),
            elapsed_ms=state.elapsed_ms,
        )

    def _record_backoff(self, config: "PolicyConfig", started: float) -> None:
        if self.metrics_enabled:
            backoff_seconds.labels(policy=config.name).observe(time.monotonic() - started)
