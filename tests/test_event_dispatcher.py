"""Unit tests for EventDispatcher."""
from __future__ import annotations

from core.event_dispatcher import EventDispatcher


def _call(handler, args) -> bool:
    handler(*args)
    return True


def test_handlers_fire_in_registration_order():
    """All N handlers run, in the order they were registered."""
    events = EventDispatcher(_call)
    order = []
    for name in "abc":
        events.register("onChat", lambda sender, msg, name=name: order.append((name, sender, msg)))

    events.raise_event("onChat", "bob", "hi")

    assert order == [("a", "bob", "hi"), ("b", "bob", "hi"), ("c", "bob", "hi")]


def test_raise_without_handlers_is_noop():
    """Empty and unknown events raise nothing."""
    events = EventDispatcher(_call, {"onDeath": []})
    events.raise_event("onDeath")
    events.raise_event("onSomethingCustom", 1, 2)

    assert events.on("onSomethingCustom") == []


def test_handler_removing_itself_still_runs_this_cycle():
    """Self-removal takes effect from the next dispatch."""
    events = EventDispatcher(_call)
    calls = []

    def once():
        calls.append("once")
        events.unregister("onDeath", once)

    events.register("onDeath", once)
    events.register("onDeath", lambda: calls.append("always"))

    events.raise_event("onDeath")
    events.raise_event("onDeath")

    assert calls == ["once", "always", "always"]


def test_handler_removing_later_handler_does_not_skip_it():
    """The snapshot still holds handlers removed mid-dispatch."""
    events = EventDispatcher(_call)
    calls = []

    def second():
        calls.append("second")

    def first():
        calls.append("first")
        events.unregister("onDeath", second)

    events.register("onDeath", first)
    events.register("onDeath", second)
    events.raise_event("onDeath")
    events.raise_event("onDeath")

    assert calls == ["first", "second", "first"]


def test_handler_added_mid_dispatch_waits_for_next_cycle():
    """Handlers appended during a dispatch are not part of it."""
    events = EventDispatcher(_call)
    calls = []

    def late():
        calls.append("late")

    def adder():
        calls.append("adder")
        events.register("onConnected", late)

    events.register("onConnected", adder)
    events.raise_event("onConnected")
    assert calls == ["adder"]

    events.raise_event("onConnected")
    assert calls == ["adder", "adder", "late"]


def test_invoke_false_aborts_cycle():
    """When invoke reports failure the remaining handlers are skipped."""
    calls = []

    def invoke(handler, args) -> bool:
        handler(*args)
        return handler is not failing

    def failing():
        calls.append("failing")

    events = EventDispatcher(invoke)
    events.register("onHealthChanged", failing)
    events.register("onHealthChanged", lambda: calls.append("never"))
    events.raise_event("onHealthChanged")

    assert calls == ["failing"]


def test_unregister_unknown_is_noop():
    """Removing something never registered does nothing."""
    events = EventDispatcher(_call)
    events.unregister("onChat", print)
    events.register("onChat", print)
    events.unregister("onChat", len)

    assert events.on("onChat") == [print]


def test_clear_all():
    """clear_all empties the handler map."""
    events = EventDispatcher(_call, {"onChat": [print]})
    events.clear_all()

    assert events.handler_map == {}
