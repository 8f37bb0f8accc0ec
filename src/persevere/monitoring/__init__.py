"""Monitoring and metrics instrumentation for the retry engine.

Exports custom Prometheus metrics for operational monitoring and alerting.
"""

from persevere.monitoring.metrics import (
    backoff_seconds,
    policy_mismatch_total,
    retries_total,
    retry_attempts_total,
    retry_exhausted_total,
)

__all__ = [
    "retry_attempts_total",
    "retries_total",
    "policy_mismatch_total",
    "retry_exhausted_total",
    "backoff_seconds",
]
