"""
Structured failure value.

The retry decision never introspects a live exception directly. Instead the
engine captures each failure as a ``Failure`` exposing a discriminable kind
and a message, and the policy is evaluated as a pure function over it.
"""

import re
from dataclasses import dataclass, field
from typing import Iterable, Union

MessageMatcher = Union[str, re.Pattern]


@dataclass(frozen=True)
class Failure:
    """
    A single failed attempt, reduced to what the retry policy inspects.

    Attributes:
        kind: Exception class raised by the operation
        message: ``str()`` of the exception
        error: The original exception (excluded from equality)
    """

    kind: type[BaseException]
    message: str
    error: BaseException = field(compare=False, repr=False)

    @classmethod
    def from_exception(cls, error: BaseException) -> "Failure":
        return cls(kind=type(error), message=str(error), error=error)

    @property
    def kind_name(self) -> str:
        return self.kind.__name__

    def matches_kind(self, kinds: Iterable[type[BaseException]]) -> bool:
        """Exact class match; subclasses of a listed class do not match."""
        return any(self.kind is kind for kind in kinds)

    def matches_message(self, matchers: Iterable[MessageMatcher]) -> bool:
        """
        True if any matcher matches the message.

        A ``str`` matcher matches by substring containment, a compiled
        pattern matches anywhere in the message.
        """
        for matcher in matchers:
            if isinstance(matcher, re.Pattern):
                if matcher.search(self.message):
                    return True
            elif matcher in self.message:
                return True
        return False
