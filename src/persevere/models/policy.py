"""
Retry policy configuration.

``PolicyConfig`` is the complete input to the retry engine besides the
operation itself. It is frozen once constructed, so a single instance can be
shared across threads and tasks.
"""

import logging
import re
from typing import Any, Callable, Iterable, Optional

import structlog
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from persevere.retry.exceptions import ConfigurationError
from persevere.retry.handlers import warn_and_reraise
from persevere.retry.strategies import CONSTANT

DEFAULT_MAX_ATTEMPTS = 4
DEFAULT_BASE_DELAY = 30.0


def _default_logger() -> Any:
    return structlog.get_logger("persevere")


class PolicyConfig(BaseModel):
    """
    Immutable retry policy.

    Matcher fields accept a single value or any iterable of values and are
    normalized to tuples. ``None`` means the matcher is not set; an empty
    tuple is set and matches nothing.

    Raises:
        ConfigurationError: Both ``retry_on`` and ``reraise_on`` are set
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    name: str = Field(default="default", description="Label for log events and metrics")
    max_attempts: int = Field(
        default=DEFAULT_MAX_ATTEMPTS,
        description="Total attempts, not retries (1 = no retry, <= 0 = never run)",
    )
    base_delay: float = Field(
        default=DEFAULT_BASE_DELAY, ge=0.0, description="Seed delay in seconds for the backoff strategy"
    )
    retry_on: Optional[tuple[type[BaseException], ...]] = Field(
        default=None, description="Only these exception classes are retried"
    )
    retry_on_message: Optional[tuple[Any, ...]] = Field(
        default=None, description="Substrings or compiled patterns the message must match"
    )
    reraise_on: Optional[tuple[type[BaseException], ...]] = Field(
        default=None, description="These exception classes are never retried"
    )
    on_retry: Callable[..., Any] = Field(default=CONSTANT, description="Backoff strategy")
    on_exhausted: Callable[..., Any] = Field(
        default=warn_and_reraise, description="Terminal handler called on exhaustion"
    )
    logger: Any = Field(
        default_factory=_default_logger,
        description="structlog-style logger; stdlib loggers are wrapped on assignment",
    )

    @field_validator("retry_on", "reraise_on", "retry_on_message", mode="before")
    @classmethod
    def _coerce_to_tuple(cls, value: Any) -> Any:
        if value is None:
            return None
        if isinstance(value, (str, bytes, re.Pattern, type)):
            return (value,)
        if isinstance(value, Iterable):
            return tuple(value)
        return (value,)

    @field_validator("retry_on_message")
    @classmethod
    def _check_message_matchers(cls, value: Optional[tuple[Any, ...]]) -> Optional[tuple[Any, ...]]:
        if value is None:
            return value
        for matcher in value:
            if not isinstance(matcher, (str, re.Pattern)):
                raise ValueError(
                    f"retry_on_message entries must be str or re.Pattern, got {type(matcher).__name__}"
                )
        return value

    @field_validator("logger")
    @classmethod
    def _wrap_stdlib_logger(cls, value: Any) -> Any:
        # Engine events pass key-values as keyword arguments, which
        # logging.Logger only accepts through ``extra``.
        if isinstance(value, logging.Logger):
            return structlog.wrap_logger(
                value,
                wrapper_class=structlog.stdlib.BoundLogger,
                processors=[structlog.stdlib.render_to_log_kwargs],
            )
        return value

    @model_validator(mode="after")
    def _check_exclusive_matchers(self) -> "PolicyConfig":
        self.ensure_consistent()
        return self

    def ensure_consistent(self) -> None:
        """Raise ConfigurationError if the policy cannot be evaluated."""
        if self.retry_on is not None and self.reraise_on is not None:
            raise ConfigurationError(
                "You can only have one of retry_on or reraise_on",
                {
                    "policy": self.name,
                    "retry_on": [kind.__name__ for kind in self.retry_on],
                    "reraise_on": [kind.__name__ for kind in self.reraise_on],
                },
            )

    def merged(self, **overrides: Any) -> "PolicyConfig":
        """Return a validated copy with ``overrides`` applied."""
        return PolicyConfig(**{**dict(self), **overrides})
