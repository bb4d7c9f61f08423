"""Shared fixtures for mediator tests."""

from __future__ import annotations

import pytest

from mediator import Event, EventDispatcher, set_event_dispatcher


class EventA(Event):
    pass


class EventB(Event):
    pass


class RecordingListener:
    """Async listener that records its calls and can stop propagation."""

    def __init__(self, calls: list, name: str, stop: bool = False) -> None:
        self.calls = calls
        self.name = name
        self.stop = stop
        self.calls_amount = 0
        self.received: list[tuple[str, Event]] = []

    async def __call__(self, event_key: str, event: Event) -> None:
        self.calls_amount += 1
        self.calls.append(self.name)
        self.received.append((event_key, event))
        if self.stop:
            event.stop_propagation()

    def __repr__(self) -> str:
        return f"RecordingListener({self.name!r})"


@pytest.fixture()
def dispatcher() -> EventDispatcher[str]:
    return EventDispatcher()


@pytest.fixture()
def calls() -> list[str]:
    return []


@pytest.fixture()
def listener_a(calls) -> RecordingListener:
    return RecordingListener(calls, "a")


@pytest.fixture()
def listener_b(calls) -> RecordingListener:
    return RecordingListener(calls, "b")


@pytest.fixture()
def listener_c(calls) -> RecordingListener:
    return RecordingListener(calls, "c")


@pytest.fixture(autouse=True)
def reset_global_dispatcher():
    set_event_dispatcher(None)
    yield
    set_event_dispatcher(None)
