"""Tests for SignalBus publish/flush semantics."""
from __future__ import annotations

from tick_idle import SignalBus


def test_publish_is_queued_until_flush():
    bus = SignalBus()
    received = []
    bus.subscribe("resources", lambda name, data: received.append((name, data)))
    bus.publish("resources", unlocked="wood")
    assert received == []
    assert bus.pending() == ["resources"]
    bus.flush()
    assert received == [("resources", {"unlocked": "wood"})]
    assert bus.pending() == []


def test_flush_delivers_in_publish_order():
    bus = SignalBus()
    order = []
    bus.subscribe("a", lambda name, data: order.append(name))
    bus.subscribe("b", lambda name, data: order.append(name))
    bus.publish("b")
    bus.publish("a")
    bus.publish("b")
    bus.flush()
    assert order == ["b", "a", "b"]


def test_publish_during_flush_waits_for_next_flush():
    bus = SignalBus()
    seen = []

    def relay(name, data):
        seen.append(name)
        bus.publish("second")

    bus.subscribe("first", relay)
    bus.subscribe("second", lambda name, data: seen.append(name))
    bus.publish("first")
    bus.flush()
    assert seen == ["first"]
    bus.flush()
    assert seen == ["first", "second"]


def test_unsubscribe():
    bus = SignalBus()
    received = []

    def handler(name, data):
        received.append(name)

    bus.subscribe("x", handler)
    bus.unsubscribe("x", handler)
    bus.unsubscribe("x", handler)
    bus.unsubscribe("never", handler)
    bus.publish("x")
    bus.flush()
    assert received == []


def test_clear_drops_queue():
    bus = SignalBus()
    bus.publish("x")
    bus.clear()
    assert bus.pending() == []


def test_signal_without_subscribers_is_dropped():
    bus = SignalBus()
    bus.publish("nobody")
    bus.flush()
    assert bus.pending() == []


def test_flush_reports_handler_calls():
    bus = SignalBus()
    bus.subscribe("buildings", lambda name, data: None)
    bus.subscribe("buildings", lambda name, data: None)
    bus.publish("buildings", constructed="field", count=1)
    bus.publish("upgrades")
    assert bus.flush() == 2
    assert bus.flush() == 0
