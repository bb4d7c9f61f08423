"""
mediator - In-process event dispatcher with priorities and propagation control.

Main Features:
- Listeners registered per event name with integer priorities
- Sequential async dispatch, highest priority first
- Any listener can stop propagation to the remaining ones
- Listeners may add/remove listeners while a dispatch is running

Quick Start:
    >>> from mediator import EventDispatcher, Event
    >>> dispatcher = EventDispatcher()
    >>> dispatcher.add_listener("new_order", order_cost_limit, priority=10)
    >>> event = await dispatcher.dispatch("new_order", OrderEvent(order))
    >>> if not event.is_propagation_stopped:
    ...     complete(order)

Architecture:
    Producer → EventDispatcher.dispatch() → ListenerRegistry (resolved order) → Listeners
"""

__version__ = "0.1.0"

from mediator.core.config import MediatorConfig
from mediator.core.events import (
    DEFAULT_PRIORITY,
    Event,
    EventDispatcher,
    EventListener,
    EventSubscriber,
    ListenerRegistry,
    Subscription,
    event_listener,
    get_event_dispatcher,
    set_event_dispatcher,
)
from mediator.core.exceptions import ConfigurationError, MediatorError

__all__ = [
    "DEFAULT_PRIORITY",
    "ConfigurationError",
    "Event",
    "EventDispatcher",
    "EventListener",
    "EventSubscriber",
    "ListenerRegistry",
    "MediatorConfig",
    "MediatorError",
    "Subscription",
    "__version__",
    "event_listener",
    "get_event_dispatcher",
    "set_event_dispatcher",
]
