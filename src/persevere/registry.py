"""
Named retry policies.

A PolicyRegistry maps a name to a PolicyConfig so an application can define
its policies once ("database", "http", ...) and run operations by name.
Each registry is an ordinary object; there is no process-wide registry.
"""

from typing import Any, Awaitable, Callable, Iterator, Mapping, TypeVar

import structlog

from persevere.models.policy import PolicyConfig
from persevere.retry.engine import RetryEngine
from persevere.retry.exceptions import UnknownPolicyError

logger = structlog.get_logger(__name__)

T = TypeVar("T")


class PolicyRegistry:
    """
    Mapping of policy name to PolicyConfig.

    Args:
        policies: Initial policies, each a PolicyConfig or a mapping of
            PolicyConfig fields
        engine: Engine used by ``execute``/``execute_async``

    Usage:
        >>> registry = PolicyRegistry({"database": {"max_attempts": 5, "base_delay": 0.2}})
        >>> registry.execute("database", lambda: conn.execute(query))
    """

    def __init__(
        self,
        policies: Mapping[str, PolicyConfig | Mapping[str, Any]] | None = None,
        engine: RetryEngine | None = None,
    ):
        self.engine = engine or RetryEngine()
        self._policies: dict[str, PolicyConfig] = {}
        for name, policy in (policies or {}).items():
            self.register(name, policy)

    def register(self, name: str, policy: PolicyConfig | Mapping[str, Any]) -> PolicyConfig:
        """
        Register ``policy`` under ``name``, replacing any previous entry.

        The stored config carries ``name`` so log events and metrics are
        labelled with it.

        Raises:
            TypeError: ``policy`` is neither a PolicyConfig nor a mapping
        """
        if isinstance(policy, PolicyConfig):
            config = policy.merged(name=name)
        elif isinstance(policy, Mapping):
            config = PolicyConfig(**{**policy, "name": name})
        else:
            raise TypeError(
                f"Policy {name!r} must be a PolicyConfig or a mapping, got {type(policy).__name__}"
            )

        if name in self._policies:
            logger.info("Replacing retry policy", policy=name)
        self._policies[name] = config
        return config

    def get(self, name: str) -> PolicyConfig:
        try:
            return self._policies[name]
        except KeyError:
            raise UnknownPolicyError(name, self.names()) from None

    def names(self) -> list[str]:
        return sorted(self._policies)

    def execute(self, name: str, operation: Callable[[], T]) -> T | None:
        """Run ``operation`` under the policy registered as ``name``."""
        return self.engine.execute(self.get(name), operation)

    async def execute_async(self, name: str, operation: Callable[[], Awaitable[T]]) -> T | None:
        return await self.engine.execute_async(self.get(name), operation)

    def __getitem__(self, name: str) -> PolicyConfig:
        return self.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self._policies

    def __iter__(self) -> Iterator[str]:
        return iter(self.names())

    def __len__(self) -> int:
        return len(self._policies)
