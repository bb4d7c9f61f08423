"""
Listener registry with a lazily resolved dispatch order.

Listeners are stored per event key in priority buckets. The flattened
order (descending priority, registration order inside a bucket) is
memoized per key and evicted on every effective mutation of that key.
"""

from collections.abc import Hashable, Iterator
from typing import Generic, TypeVar

from .base import DEFAULT_PRIORITY, EventListener

K = TypeVar("K", bound=Hashable)


class ListenerRegistry(Generic[K]):
    """
    Priority-bucketed listener storage plus resolved-order cache.

    Invariants:
    - A key is present in _buckets only while it holds at least one listener
    - A priority bucket is present only while it is non-empty
    - A cached order always matches the current buckets of its key

    Example:
        >>> registry = ListenerRegistry[str]()
        >>> registry.add("order.created", low, priority=-10)
        >>> registry.add("order.created", high, priority=10)
        >>> registry.resolve("order.created")
        (high, low)
    """

    def __init__(self) -> None:
        self._buckets: dict[K, dict[int, list[EventListener]]] = {}
        self._resolved: dict[K, tuple[EventListener, ...]] = {}

    def add(self, key: K, listener: EventListener, priority: int = DEFAULT_PRIORITY) -> None:
        """
        Append a listener to the (key, priority) bucket.

        The same listener may be added any number of times; every copy is
        invoked and every copy is removed by remove().
        """
        self._buckets.setdefault(key, {}).setdefault(priority, []).append(listener)
        self._resolved.pop(key, None)

    def remove(self, key: K, listener: EventListener) -> int:
        """
        Remove every occurrence of listener (by identity) under key.

        Returns:
            Number of removed registrations (0 when nothing matched)
        """
        buckets = self._buckets.get(key)
        if buckets is None:
            return 0

        removed = 0
        for priority in list(buckets):
            kept = [registered for registered in buckets[priority] if registered is not listener]
            removed += len(buckets[priority]) - len(kept)
            if kept:
                buckets[priority] = kept
            else:
                del buckets[priority]

        if removed:
            if not buckets:
                del self._buckets[key]
            self._resolved.pop(key, None)

        return removed

    def has(self, key: K) -> bool:
        """Check whether key has at least one listener."""
        return any(self._buckets.get(key, {}).values())

    def resolve(self, key: K) -> tuple[EventListener, ...]:
        """
        Get listeners for key in dispatch order.

        The returned tuple is immutable, so callers can iterate it while
        the registry changes underneath.
        """
        resolved = self._resolved.get(key)
        if resolved is not None:
            return resolved

        buckets = self._buckets.get(key)
        if buckets is None:
            return ()

        resolved = tuple(
            listener
            for priority in sorted(buckets, reverse=True)
            for listener in buckets[priority]
        )
        self._resolved[key] = resolved
        return resolved

    def count(self, key: K) -> int:
        """Number of registrations under key."""
        return sum(len(listeners) for listeners in self._buckets.get(key, {}).values())

    def keys(self) -> list[K]:
        """Event keys currently holding listeners."""
        return [key for key in self._buckets if self.has(key)]

    def clear(self, key: K | None = None) -> None:
        """Drop listeners for one key, or for every key when key is None."""
        if key is None:
            self._buckets.clear()
            self._resolved.clear()
            return

        self._buckets.pop(key, None)
        self._resolved.pop(key, None)

    def __len__(self) -> int:
        return sum(self.count(key) for key in self._buckets)

    def __iter__(self) -> Iterator[K]:
        return iter(self.keys())

    def __contains__(self, key: object) -> bool:
        return self.has(key)  # type: ignore[arg-type]
