from mediator import ListenerRegistry


async def high(event_key, event):
    pass


async def middle(event_key, event):
    pass


async def low(event_key, event):
    pass


def test_resolve_unknown_key_is_empty():
    registry = ListenerRegistry[str]()
    assert registry.resolve("missing") == ()
    assert not registry.has("missing")
    assert "missing" not in registry


def test_resolve_orders_by_descending_priority():
    registry = ListenerRegistry[str]()
    registry.add("order", low, priority=-10)
    registry.add("order", high, priority=10)
    registry.add("order", middle)

    assert registry.resolve("order") == (high, middle, low)


def test_resolve_keeps_registration_order_within_priority():
    registry = ListenerRegistry[str]()
    registry.add("order", low)
    registry.add("order", high)
    registry.add("order", middle)

    assert registry.resolve("order") == (low, high, middle)


def test_resolve_is_memoized_until_mutation():
    registry = ListenerRegistry[str]()
    registry.add("order", high)

    first = registry.resolve("order")
    assert registry.resolve("order") is first

    registry.add("order", low)
    assert registry.resolve("order") == (high, low)


def test_remove_counts_every_occurrence():
    registry = ListenerRegistry[str]()
    registry.add("order", high)
    registry.add("order", high, priority=5)
    registry.add("order", low)

    assert registry.remove("order", high) == 2
    assert registry.resolve("order") == (low,)


def test_ineffective_remove_keeps_cache():
    registry = ListenerRegistry[str]()
    registry.add("order", high)
    resolved = registry.resolve("order")

    assert registry.remove("order", low) == 0
    assert registry.remove("other", high) == 0
    assert registry.resolve("order") is resolved


def test_full_removal_drops_key():
    registry = ListenerRegistry[str]()
    registry.add("order", high, priority=3)
    registry.remove("order", high)

    assert not registry.has("order")
    assert registry.keys() == []
    assert registry.resolve("order") == ()
    assert len(registry) == 0


def test_count_len_and_clear():
    registry = ListenerRegistry[str]()
    registry.add("order", high)
    registry.add("order", high)
    registry.add("refund", low)

    assert registry.count("order") == 2
    assert len(registry) == 3
    assert sorted(registry) == ["order", "refund"]

    registry.clear("order")
    assert not registry.has("order")
    assert registry.has("refund")

    registry.clear()
    assert len(registry) == 0
    assert registry.resolve("refund") == ()


def test_non_string_keys():
    class Tick:
        pass

    registry = ListenerRegistry[type]()
    registry.add(Tick, high)

    assert registry.resolve(Tick) == (high,)
