"""
Data models for the retry engine.

Includes:
- Failure (frozen dataclass: exception kind + message)
- PolicyConfig (frozen pydantic model: the complete retry policy)
"""

from persevere.models.failure import Failure, MessageMatcher
from persevere.models.policy import DEFAULT_BASE_DELAY, DEFAULT_MAX_ATTEMPTS, PolicyConfig

__all__ = [
    "Failure",
    "MessageMatcher",
    "PolicyConfig",
    "DEFAULT_MAX_ATTEMPTS",
    "DEFAULT_BASE_DELAY",
]
