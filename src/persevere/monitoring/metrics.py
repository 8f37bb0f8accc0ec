"""Custom Prometheus metrics for the retry engine.

Collectors are registered on the default prometheus_client registry; the
embedding application decides whether and where to expose them.
Alert rules worth configuring:
- retries_total (rising retry rate indicates a degrading dependency)
- retry_exhausted_total (operations failing despite retries)
- policy_mismatch_total (failures the policy refuses to retry)
"""

from prometheus_client import Counter, Histogram

# === Attempt Metrics ===

retry_attempts_total = Counter(
    "persevere_retry_attempts_total",
    "Total operation attempts by policy and outcome",
    ["policy", "outcome"],
)
"""
Attempts counter by policy name and outcome.

Labels:
- policy: PolicyConfig.name
- outcome: success (operation returned), failure (operation raised)
"""

retries_total = Counter(
    "persevere_retries_total",
    "Total backoffs performed before a further attempt",
    ["policy"],
)
"""
Retries counter by policy name.

Incremented once per retryable failure that still has attempts left.

Alert thresholds:
- WARN: retries > 10% of attempts
- CRITICAL: retries > 30% of attempts
"""

# === Termination Metrics ===

policy_mismatch_total = Counter(
    "persevere_policy_mismatch_total",
    "Total failures re-raised because the policy does not retry them",
    ["policy", "error_type"],
)
"""
Policy mismatch counter by policy name and exception class name.
"""

retry_exhausted_total = Counter(
    "persevere_retry_exhausted_total",
    "Total executions that ran out of attempts",
    ["policy"],
)
"""
Exhaustion counter by policy name.

Counted before the terminal handler runs, whether it re-raises or returns
a fallback.
"""

# === Backoff Metrics ===

backoff_seconds = Histogram(
    "persevere_backoff_seconds",
    "Measured time spent in the backoff strategy between attempts",
    ["policy"],
    buckets=[0.01, 0.1, 0.5, 1.0, 2.0, 5.0, 15.0, 30.0, 60.0, 120.0],
)
"""
Backoff duration histogram by policy name.

Measures wall time around the strategy call, so custom strategies are
covered too.
"""
