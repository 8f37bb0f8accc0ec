"""
Retry decision engine.

Runs a caller-supplied operation and, on failure, decides whether to retry,
how long to wait, and what to do once attempts are exhausted.

Main Components:
    - RetryEngine: Drives the attempt loop (sync and asyncio)
    - should_retry: Pure policy evaluation over a Failure
    - Backoff strategies: ConstantBackoff, LinearBackoff, ExponentialBackoff
    - Terminal handlers: warn_and_reraise, raise_exhausted, return_fallback
    - AttemptState: Per-execution attempt bookkeeping

Usage:
    >>> from persevere.retry import RetryEngine
    >>> from persevere.models import PolicyConfig
    >>> RetryEngine().execute(PolicyConfig(max_attempts=3, base_delay=0.1), fetch)
"""

from persevere.retry.engine import RetryEngine, Verdict, should_retry
from persevere.retry.exceptions import (
    ConfigurationError,
    PersevereError,
    RetryExhausted,
    UnknownPolicyError,
)
from persevere.retry.handlers import (
    TerminalHandler,
    raise_exhausted,
    return_fallback,
    warn_and_reraise,
)
from persevere.retry.state import AttemptState
from persevere.retry.strategies import (
    CONSTANT,
    EXPONENTIAL,
    LINEAR,
    BackoffStrategy,
    ConstantBackoff,
    ExponentialBackoff,
    LinearBackoff,
    SleepBackoff,
)

__all__ = [
    "RetryEngine",
    "Verdict",
    "should_retry",
    "AttemptState",
    # Strategies
    "BackoffStrategy",
    "SleepBackoff",
    "ConstantBackoff",
    "LinearBackoff",
    "ExponentialBackoff",
    "CONSTANT",
    "LINEAR",
    "EXPONENTIAL",
    # Terminal handlers
    "TerminalHandler",
    "warn_and_reraise",
    "raise_exhausted",
    "return_fallback",
    # Exceptions
    "PersevereError",
    "ConfigurationError",
    "RetryExhausted",
    "UnknownPolicyError",
]
