"""
Base Event System - building blocks shared by the registry and dispatcher.

Core Concepts:
- Event: Mutable carrier passed through a dispatch, can stop propagation
- EventListener: Async callable receiving (event_key, event)
- EventSubscriber: Object that declares its own listeners
- event_listener: Decorator turning a function into a subscriber

Design Principles:
- Events are mutable and owned by one dispatch at a time
- Listeners are async and run one after another
- Listener identity is object identity
"""

from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable, Hashable
from dataclasses import dataclass
from typing import Any, TypeVar

EventT = TypeVar("EventT", bound="Event")
DEFAULT_PRIORITY = 0


class Event:
    """
    Base class for all events passed through an EventDispatcher.

    Subclass it (plain class or dataclass) to carry payload. Any listener
    may call stop_propagation() to prevent the remaining listeners of the
    current dispatch from running.

    Example:
        >>> @dataclass
        ... class OrderEvent(Event):
        ...     order_id: str
        >>> event = OrderEvent("A-1")
        >>> event.is_propagation_stopped
        False
    """

    # Class-level default so dataclass subclasses never need to call super().__init__().
    _propagation_stopped: bool = False

    @property
    def is_propagation_stopped(self) -> bool:
        """Whether no further listeners should be triggered."""
        return self._propagation_stopped

    def stop_propagation(self) -> None:
        """
        Stop the propagation of the event to further listeners.

        Once called the flag stays set; calling it again has no effect.
        """
        self._propagation_stopped = True


EventListener = Callable[[Hashable, Event], Awaitable[None] | None]


@dataclass(frozen=True, slots=True)
class Subscription:
    """One (event key, listener, priority) triple declared by a subscriber."""

    key: Hashable
    listener: EventListener
    priority: int = DEFAULT_PRIORITY


class EventSubscriber(ABC):
    """
    Base class for objects that know which events they listen to.

    Register with EventDispatcher.add_subscriber(); the dispatcher keeps the
    exact listener objects it registered, so remove_subscriber() works even
    for bound methods.
    """

    @property
    @abstractmethod
    def subscribed_events(self) -> list[Subscription]:
        """
        Subscriptions to register for this subscriber.
        Used by EventDispatcher for routing.
        """

    @property
    def subscriber_name(self) -> str:
        """Human-readable name for logging/debugging."""
        return self.__class__.__name__


def event_listener(*event_keys: Hashable, priority: int = DEFAULT_PRIORITY):
    """
    Decorator for turning an async function into an EventSubscriber.

    Usage:
        @event_listener("order.created", "order.updated", priority=10)
        async def on_order(event_key: str, event: OrderEvent) -> None:
            ...

        dispatcher.add_subscriber(on_order)

    The decorated object is itself the registered listener, so it can also
    be passed to add_listener() and remove_listener() directly.

    Args:
        *event_keys: Event keys to listen for
        priority: Priority used for every key (higher runs earlier)

    Returns:
        Decorator that wraps the function as an EventSubscriber
    """

    def decorator(func: Callable[[Hashable, Any], Awaitable[None]]) -> EventSubscriber:
        class FunctionSubscriber(EventSubscriber):
            async def __call__(self, event_key: Hashable, event: Event) -> None:
                await func(event_key, event)

            @property
            def subscribed_events(self) -> list[Subscription]:
                return [Subscription(key, self, priority) for key in event_keys]

            @property
            def subscriber_name(self) -> str:
                return func.__name__

        return FunctionSubscriber()

    return decorator


__all__ = [
    "DEFAULT_PRIORITY",
    "Event",
    "EventListener",
    "EventSubscriber",
    "EventT",
    "Subscription",
    "event_listener",
]
