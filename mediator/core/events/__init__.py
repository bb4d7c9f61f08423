"""
Event System - priority-ordered, short-circuiting event dispatch.

Core Components:
- Event: Mutable event carrying the propagation flag
- EventDispatcher: Listener registry and dispatcher
- ListenerRegistry: Priority buckets plus resolved-order cache
- EventSubscriber: Object declaring its own listeners
- event_listener: Subscriber decorator

Design Philosophy:
- Listeners = async callables taking (event_key, event)
- Higher priority runs first, ties keep registration order
- Any listener can stop propagation for the rest of the dispatch
- Listener errors reach the caller of dispatch()

Quick Start:
    from mediator.core.events import Event, get_event_dispatcher, event_listener

    @dataclass
    class OrderEvent(Event):
        cost: int

    @event_listener("order.created", priority=10)
    async def limit_cost(event_key: str, event: OrderEvent):
        if event.cost > 100_000:
            event.stop_propagation()

    dispatcher = get_event_dispatcher()
    dispatcher.add_subscriber(limit_cost)

    event = await dispatcher.dispatch("order.created", OrderEvent(cost=500))
"""

from .base import (
    DEFAULT_PRIORITY,
    Event,
    EventListener,
    EventSubscriber,
    EventT,
    Subscription,
    event_listener,
)
from .dispatcher import EventDispatcher, get_event_dispatcher, set_event_dispatcher
from .registry import ListenerRegistry

__all__ = [
    "DEFAULT_PRIORITY",
    "Event",
    "EventDispatcher",
    "EventListener",
    "EventSubscriber",
    "EventT",
    "ListenerRegistry",
    "Subscription",
    "event_listener",
    "get_event_dispatcher",
    "set_event_dispatcher",
]
