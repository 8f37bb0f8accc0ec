"""
Attempt state tracking.

``AttemptState`` is created fresh for every engine execution and never
shared, so concurrent executions of the same policy do not interfere.
"""

import time
from dataclasses import dataclass, field

from persevere.models.failure import Failure


@dataclass
class AttemptState:
    """
    Mutable per-execution state of the attempt loop.

    Attributes:
        max_attempts: Attempts permitted by the policy
        attempt_index: 0-based index of the current attempt
        last_error: Failure of the most recent attempt (None before any failure)
        failures: History of every failure in this execution
        started_at: Monotonic timestamp of the first attempt
    """

    max_attempts: int
    attempt_index: int = 0
    last_error: Failure | None = None
    failures: list[Failure] = field(default_factory=list)
    started_at: float = field(default_factory=time.monotonic)

    @property
    def attempt_number(self) -> int:
        """1-based attempt number, as shown in logs."""
        return self.attempt_index + 1

    @property
    def attempts_left(self) -> int:
        """Attempts remaining after the current one."""
        return max(self.max_attempts - self.attempt_index - 1, 0)

    @property
    def is_last_attempt(self) -> bool:
        return self.attempt_index >= self.max_attempts - 1

    @property
    def elapsed_ms(self) -> int:
        return int((time.monotonic() - self.started_at) * 1000)

    def has_attempts(self) -> bool:
        return self.attempt_index < self.max_attempts

    def record_failure(self, error: BaseException) -> Failure:
        failure = Failure.from_exception(error)
        self.last_error = failure
        self.failures.append(failure)
        return failure

    def advance(self) -> None:
        if self.is_last_attempt:
            raise RuntimeError("Cannot advance past the final attempt")
        self.attempt_index += 1
