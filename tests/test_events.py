"""
Event manager tests - observer registration and dispatch.
"""

import pytest

from catalog_graphql.events import EventManager


def test_dispatch_calls_observers_in_order():
    manager = EventManager()
    calls = []
    manager.subscribe("evt", lambda **data: calls.append(("first", data)))
    manager.subscribe("evt", lambda **data: calls.append(("second", data)))
    manager.dispatch("evt", value=1)
    assert calls == [("first", {"value": 1}), ("second", {"value": 1})]


def test_dispatch_without_observers_is_noop():
    EventManager().dispatch("nothing", value=1)


def test_unsubscribe():
    manager = EventManager()
    calls = []

    def observer(**data):
        calls.append(data)

    manager.subscribe("evt", observer)
    manager.unsubscribe("evt", observer)
    manager.unsubscribe("other", observer)
    manager.dispatch("evt")
    assert calls == []


def test_observer_errors_propagate():
    manager = EventManager()

    def broken(**data):
        raise RuntimeError("observer failed")

    manager.subscribe("evt", broken)
    with pytest.raises(RuntimeError, match="observer failed"):
        manager.dispatch("evt")
