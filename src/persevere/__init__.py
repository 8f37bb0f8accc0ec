"""
persevere: retry-policy executor.

Runs a caller-supplied operation and, on failure, decides whether to retry
it, how long to wait, and what to do once attempts run out:
- Class/message matchers select which failures are retried
- Constant, linear and exponential backoff
- Pluggable terminal handlers (re-raise, wrap, fallback value)

Architecture: RetryEngine + frozen PolicyConfig, structlog events, Prometheus counters

The constant-delay entry point lives at ``persevere.api.retry``; the name
``persevere.retry`` is the engine subpackage.
"""

__version__ = "0.1.0"

from persevere.api import (
    build_policy,
    retry_action,
    retry_action_async,
    retry_with_backoff,
    retry_with_exponential_backoff,
    retrying,
)
from persevere.models import Failure, PolicyConfig
from persevere.registry import PolicyRegistry
from persevere.retry import (
    ConfigurationError,
    RetryEngine,
    RetryExhausted,
    UnknownPolicyError,
    raise_exhausted,
    return_fallback,
    warn_and_reraise,
)

__all__ = [
    "__version__",
    "build_policy",
    "retry_action",
    "retry_action_async",
    "retry_with_backoff",
    "retry_with_exponential_backoff",
    "retrying",
    "Failure",
    "PolicyConfig",
    "PolicyRegistry",
    "RetryEngine",
    "ConfigurationError",
    "RetryExhausted",
    "UnknownPolicyError",
    "warn_and_reraise",
    "raise_exhausted",
    "return_fallback",
]
