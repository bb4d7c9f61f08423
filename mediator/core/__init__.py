"""Core module for mediator - configuration, errors and the event system."""

from mediator.core.config import MediatorConfig
from mediator.core.events import Event, EventDispatcher, EventSubscriber
from mediator.core.exceptions import ConfigurationError, MediatorError

__all__ = [
    "ConfigurationError",
    "Event",
    "EventDispatcher",
    "EventSubscriber",
    "MediatorConfig",
    "MediatorError",
]
