"""
Retry engine exceptions.

This module defines the exceptions raised by the engine itself. Failures
raised by the wrapped operation are never converted into these types: a
policy mismatch or an exhausted policy re-raises the original error unless a
terminal handler decides otherwise.
"""

from typing import Any


class PersevereError(Exception):
    """
    Base exception for all errors raised by the retry engine.

    Carries a human-readable message plus structured details for logging.
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ConfigurationError(PersevereError):
    """
    Raised when a policy is internally inconsistent.

    Currently the only inconsistency is supplying both ``retry_on`` and
    ``reraise_on``. Not a ValueError subclass, so it escapes pydantic
    validators unwrapped.
    """

    pass


class RetryExhausted(PersevereError):
    """
    Raised by the ``raise_exhausted`` terminal handler.

    Signals that every permitted attempt failed while the failures still
    matched the retry policy.

    Attributes:
        max_attempts: Number of attempts the policy allowed
        last_error: Exception raised by the final attempt
    """

    def __init__(self, max_attempts: int, last_error: BaseException) -> None:
        self.max_attempts = max_attempts
        self.last_error = last_error

        super().__init__(
            f"All {max_attempts} attempts exhausted. "
            f"Final error: {type(last_error).__name__}",
            {"last_error": str(last_error)},
        )


class UnknownPolicyError(PersevereError, KeyError):
    """Raised when a named policy is not present in a registry."""

    def __init__(self, name: str, known: list[str]):
        self.name = name
        super().__init__(f"Unknown retry policy: {name!r}", {"known_policies": known})

    def __str__(self) -> str:
        return PersevereError.__str__(self)
