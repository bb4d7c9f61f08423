"""
EventDispatcher - Central point of the listener system.

Responsibilities:
- Register/unregister listeners and subscribers
- Resolve listener order by priority
- Dispatch events to listeners one at a time
- Stop dispatching once an event's propagation is stopped

Architecture:
- In-memory, single process
- Sequential async invocation (each listener is awaited before the next)
- Order is snapshotted per dispatch, so listeners may add or remove
  listeners for the key being dispatched without affecting that dispatch
- Listener errors propagate to the caller of dispatch()
"""

from collections.abc import Hashable
import inspect
import logging
from typing import Any, Generic, TypeVar

from .base import DEFAULT_PRIORITY, Event, EventListener, EventSubscriber
from .registry import ListenerRegistry

logger = logging.getLogger(__name__)

K = TypeVar("K", bound=Hashable)
E = TypeVar("E", bound=Event)


class EventDispatcher(Generic[K]):
    """
    Registers listeners per event key and dispatches events through them.

    Features:
    - Priority ordering (higher first, registration order on ties)
    - Propagation stop checked before every listener
    - Snapshot semantics for listeners mutating the registry mid-dispatch
    - Subscribers that declare their own listeners

    Usage:
        dispatcher = EventDispatcher[str]()
        dispatcher.add_listener("order.created", on_order_created, priority=10)
        event = await dispatcher.dispatch("order.created", OrderEvent(order))
        if not event.is_propagation_stopped:
            ...
    """

    def __init__(self) -> None:
        self._registry: ListenerRegistry[K] = ListenerRegistry()
        self._subscribers: dict[int, tuple[EventSubscriber, list[tuple[K, EventListener]]]] = {}

    def add_listener(
        self, event_key: K, listener: EventListener, priority: int = DEFAULT_PRIORITY
    ) -> None:
        """
        Add a listener for an event key.

        The same listener can be added several times, even with the same
        priority; each copy is invoked.

        Args:
            event_key: Key of the event to listen to
            listener: Async callable taking (event_key, event)
            priority: Higher values are triggered earlier (defaults to 0)
        """
        self._registry.add(event_key, listener, priority)
        logger.info(
            f"Registered listener {_listener_name(listener)} for '{event_key}' (priority {priority})"
        )

    def remove_listener(self, event_key: K, listener: EventListener) -> None:
        """
        Remove a listener from an event key.

        Every copy of the listener is removed if it was registered several
        times. Unknown keys and listeners are ignored.
        """
        removed = self._registry.remove(event_key, listener)
        if removed:
            logger.info(
                f"Unregistered listener {_listener_name(listener)} from '{event_key}' "
                f"({removed} registration(s))"
            )

    def has_listeners(self, event_key: K) -> bool:
        """Check whether an event key has any registered listeners."""
        return self._registry.has(event_key)

    def get_listeners(self, event_key: K) -> tuple[EventListener, ...]:
        """Get listeners of an event key sorted by descending priority."""
        return self._registry.resolve(event_key)

    async def dispatch(self, event_key: K, event: E | None = None) -> E | Event:
        """
        Dispatch an event to all listeners of event_key.

        Listeners run one after another in priority order. Before each one
        the event is checked and the loop stops if propagation was stopped.

        Args:
            event_key: Key of the event to dispatch
            event: Event to pass to listeners; a plain Event is created when omitted

        Returns:
            The event instance passed to the listeners

        Raises:
            Exception: Whatever a listener raised; remaining listeners are skipped
        """
        if event is None:
            event = Event()

        listeners = self.get_listeners(event_key)
        if not listeners:
            logger.debug(f"No listeners registered for '{event_key}'")
            return event

        logger.debug(f"Dispatching '{event_key}' to {len(listeners)} listener(s)")

        for index, listener in enumerate(listeners):
            if event.is_propagation_stopped:
                logger.debug(
                    f"Propagation of '{event_key}' stopped after {index}/{len(listeners)} listener(s)"
                )
                break
            await self._call_listener(listener, event_key, event)

        return event

    async def _call_listener(self, listener: EventListener, event_key: K, event: Event) -> None:
        """
        Invoke a single listener and wait for it to finish.

        Raises:
            Exception: Listener exceptions are propagated unchanged
        """
        try:
            result = listener(event_key, event)
            if inspect.isawaitable(result):
                await result
        except Exception:
            logger.debug(
                f"Listener {_listener_name(listener)} failed while handling '{event_key}'",
                exc_info=True,
            )
            raise

    def add_subscriber(self, subscriber: EventSubscriber) -> None:
        """
        Register every subscription declared by subscriber.

        The registered listener objects are remembered so remove_subscriber()
        can remove exactly those objects later.
        """
        registered: list[tuple[K, EventListener]] = []
        for subscription in subscriber.subscribed_events:
            self._registry.add(subscription.key, subscription.listener, subscription.priority)
            registered.append((subscription.key, subscription.listener))

        _, previous = self._subscribers.get(id(subscriber), (subscriber, []))
        self._subscribers[id(subscriber)] = (subscriber, previous + registered)
        logger.info(
            f"Registered subscriber {subscriber.subscriber_name} "
            f"for {len(registered)} subscription(s)"
        )

    def remove_subscriber(self, subscriber: EventSubscriber) -> None:
        """Remove every listener registered through add_subscriber(subscriber)."""
        entry = self._subscribers.pop(id(subscriber), None)
        if entry is None:
            return

        _, registered = entry
        for event_key, listener in registered:
            self._registry.remove(event_key, listener)
        logger.info(f"Unregistered subscriber {subscriber.subscriber_name}")

    def clear_listeners(self, event_key: K | None = None) -> None:
        """Remove all listeners of one event key, or of every key when None."""
        self._registry.clear(event_key)
        if event_key is None:
            self._subscribers.clear()

    def get_listener_count(self, event_key: K) -> int:
        """Get number of registered listeners for an event key."""
        return self._registry.count(event_key)

    def get_stats(self) -> dict[str, Any]:
        """Get dispatcher statistics for monitoring."""
        return {
            "total_event_keys": len(self._registry.keys()),
            "total_listeners": len(self._registry),
            "listeners_by_key": {
                event_key: self._registry.count(event_key) for event_key in self._registry.keys()
            },
        }


def _listener_name(listener: EventListener) -> str:
    name = getattr(listener, "subscriber_name", None) or getattr(listener, "__qualname__", None)
    return name or type(listener).__name__


_global_dispatcher: EventDispatcher[Any] | None = None


def get_event_dispatcher() -> EventDispatcher[Any]:
    """
    Get the global EventDispatcher instance.

    Creates a singleton instance on first call.
    Can be overridden for testing via set_event_dispatcher().
    """
    global _global_dispatcher
    if _global_dispatcher is None:
        _global_dispatcher = EventDispatcher()
    return _global_dispatcher


def set_event_dispatcher(dispatcher: EventDispatcher[Any] | None) -> None:
    """
    Set the global EventDispatcher instance.

    Passing None drops the current instance so the next
    get_event_dispatcher() call creates a fresh one.

    Args:
        dispatcher: EventDispatcher instance to use globally
    """
    global _global_dispatcher
    _global_dispatcher = dispatcher


__all__ = [
    "EventDispatcher",
    "get_event_dispatcher",
    "set_event_dispatcher",
]
