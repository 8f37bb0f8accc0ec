"""
Terminal handlers invoked when a policy runs out of attempts.

A terminal handler is called as ``handler(logger, max_attempts, last_error)``
and its return value becomes the engine's return value. Handlers are called
while the last error is being handled, so a bare re-raise of ``last_error``
keeps its traceback.
"""

from typing import Any, Callable, Protocol

from persevere.retry.exceptions import RetryExhausted


class TerminalHandler(Protocol):
    """Protocol for handlers invoked on exhaustion."""

    def __call__(self, logger: Any, max_attempts: int, last_error: Exception) -> Any:
        ...


def warn_and_reraise(logger: Any, max_attempts: int, last_error: Exception) -> Any:
    """Default handler: log the exhaustion, then re-raise the last error."""
    logger.warning(
        "Max attempts exceeded, re-raising",
        max_attempts=max_attempts,
        error_type=type(last_error).__name__,
        error=str(last_error),
        exc_info=last_error,
    )
    raise last_error


def raise_exhausted(logger: Any, max_attempts: int, last_error: Exception) -> Any:
    """Log the exhaustion and raise ``RetryExhausted`` chained from the last error."""
    logger.warning(
        "Max attempts exceeded, raising RetryExhausted",
        max_attempts=max_attempts,
        error_type=type(last_error).__name__,
        error=str(last_error),
    )
    raise RetryExhausted(max_attempts, last_error) from last_error


def return_fallback(value: Any) -> Callable[[Any, int, Exception], Any]:
    """
    Build a handler that masks exhaustion by returning ``value``.

    Usage:
        >>> policy = PolicyConfig(on_exhausted=return_fallback([]))
    """

    def _handler(logger: Any, max_attempts: int, last_error: Exception) -> Any:
        logger.warning(
            "Max attempts exceeded, returning fallback",
            max_attempts=max_attempts,
            error_type=type(last_error).__name__,
            error=str(last_error),
        )
        return value

    return _handler
