"""
Process-wide cache shared by invocations of a warm Lambda environment.

Lambda reuses an execution environment (and so this module) across
sequential invocations. Resolvers and contexts may memoize lookups here
during one invocation, but nothing may survive into the next one: the
request adapter evicts the cache at the end of every invocation.
"""

from collections.abc import Callable, Hashable
from typing import Any, Dict, TypeVar

from src.logging.config import get_logger

logger = get_logger(__name__)

T = TypeVar("T")

_MISSING = object()


class InvocationCache:
    """
    In-memory key/value store with an explicit, idempotent eviction.

    Not thread safe; a Lambda environment runs one invocation at a time.
    """

    def __init__(self) -> None:
        self._cache: Dict[Hashable, Any] = {}

    def get(self, key: Hashable, default: Any = None) -> Any:
        """Return the cached value for ``key`` or ``default``."""
        return self._cache.get(key, default)

    def set(self, key: Hashable, value: Any) -> None:
        """Store ``value`` under ``key`` until the next eviction."""
        self._cache[key] = value

    def get_or_set(self, key: Hashable, factory: Callable[[], T]) -> T:
        """
        Return the cached value for ``key``, computing it on a miss.

        Args:
            key: Cache key
            factory: Called with no arguments to produce a missing value

        Returns:
            Cached or freshly computed value
        """
        value = self._cache.get(key, _MISSING)
        if value is _MISSING:
            value = factory()
            self._cache[key] = value
        return value

    def evict(self) -> None:
        """Drop every entry. Safe to call on an empty cache."""
        if not self._cache:
            return
        size = len(self._cache)
        self._cache.clear()
        logger.debug(
            "Invocation cache evicted",
            extra={"context": {"evicted_entries": size}},
        )

    def __contains__(self, key: object) -> bool:
        return key in self._cache

    def __len__(self) -> int:
        return len(self._cache)


# Global cache instance, one per execution environment
invocation_cache = InvocationCache()
