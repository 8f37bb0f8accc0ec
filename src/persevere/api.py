"""
Convenience entry points.

Each function builds a PolicyConfig from keyword options layered over the
library Settings and runs it on a shared RetryEngine. They add no retry
logic of their own.

Usage:
    >>> from persevere import retry_with_backoff
    >>> retry_with_backoff(fetch_rows, retry_on=ConnectionError, base_delay=2)

    >>> @retrying(max_attempts=3, base_delay=0.5)
    ... def fetch_rows():
    ...     ...
"""

import functools
import inspect
from typing import Any, Awaitable, Callable, TypeVar

from persevere.config import settings
from persevere.models.policy import PolicyConfig
from persevere.retry.engine import RetryEngine
from persevere.retry.strategies import CONSTANT, EXPONENTIAL, LINEAR

T = TypeVar("T")

engine = RetryEngine(metrics_enabled=settings.METRICS_ENABLED)


def build_policy(**options: Any) -> PolicyConfig:
    """Build a PolicyConfig from ``options`` over the Settings defaults."""
    defaults = {
        "max_attempts": settings.DEFAULT_MAX_ATTEMPTS,
        "base_delay": settings.DEFAULT_BASE_DELAY,
    }
    return PolicyConfig(**{**defaults, **options})


def retry_action(operation: Callable[[], T], **options: Any) -> T | None:
    """
    Run ``operation`` with retries.

    Options are PolicyConfig fields: max_attempts, base_delay, retry_on,
    retry_on_message, reraise_on, on_retry, on_exhausted, logger, name.
    """
    return engine.execute(build_policy(**options), operation)


def retry(operation: Callable[[], T], **options: Any) -> T | None:
    """Retry with a constant ``base_delay`` between attempts."""
    return retry_action(operation, **{**options, "on_retry": CONSTANT})


def retry_with_backoff(operation: Callable[[], T], **options: Any) -> T | None:
    """Retry waiting ``attempt_index * base_delay`` between attempts."""
    return retry_action(operation, **{**options, "on_retry": LINEAR})


def retry_with_exponential_backoff(operation: Callable[[], T], **options: Any) -> T | None:
    """
    Retry waiting ``(2 ** attempt_index - 1) * base_delay`` between attempts.

    ``base_delay`` defaults to EXPONENTIAL_BASE_DELAY rather than the general
    default, since the general default grows too fast here.
    """
    options = {"base_delay": settings.EXPONENTIAL_BASE_DELAY, **options}
    return retry_action(operation, **{**options, "on_retry": EXPONENTIAL})


def retrying(policy: PolicyConfig | None = None, **options: Any) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    """
    Decorate a function so each call runs under a retry policy.

    Coroutine functions are executed with ``execute_async``.

    Args:
        policy: Ready-made policy; ``options`` are applied on top of it
        **options: PolicyConfig fields used when building a policy
    """
    if policy is None:
        config = build_policy(**options)
    elif options:
        config = policy.merged(**options)
    else:
        config = policy

    def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
        if inspect.iscoroutinefunction(func):

            @functools.wraps(func)
            async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
                return await engine.execute_async(config, lambda: func(*args, **kwargs))

            async_wrapper.retry_policy = config  # type: ignore[attr-defined]
            return async_wrapper

        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            return engine.execute(config, lambda: func(*args, **kwargs))

        wrapper.retry_policy = config  # type: ignore[attr-defined]
        return wrapper

    return decorator


async def retry_action_async(operation: Callable[[], Awaitable[T]], **options: Any) -> T | None:
    """Asyncio counterpart of ``retry_action``."""
    return await engine.execute_async(build_policy(**options), operation)
