"""Refresh signals from the economy to the presentation layer.

Signals are queued while a tick (or a player action) mutates state and are
delivered together by ``flush``, so a panel redraws once per change set
rather than once per mutation. Payloads are plain keyword data:

    resources   unlocked=<id> | gathered=<id> | shown=[ids], hidden=[ids]
    buildings   constructed=<id>, count=<n> | unlocked=<id> | shown/hidden
    upgrades    purchased=<id> | unlocked=<id> | shown/hidden
    day         day=<n>
    season      season=<Season value>
    weather     weather=<Weather value>
    year        year=<n>
    offline     seconds=<float>, ticks=<n>

A bare signal with no payload means "refresh everything of this kind".
"""
from __future__ import annotations

import logging
from typing import Any, Callable

logger = logging.getLogger(__name__)

RESOURCES = "resources"
BUILDINGS = "buildings"
UPGRADES = "upgrades"
NEW_DAY = "day"
SEASON = "season"
WEATHER = "weather"
NEW_YEAR = "year"
OFFLINE = "offline"

Payload = dict[str, Any]
Handler = Callable[[str, Payload], None]


class SignalBus:
    """Queue of pending refresh signals plus the handlers listening for them."""

    def __init__(self) -> None:
        self._handlers: dict[str, list[Handler]] = {}
        self._pending: list[tuple[str, Payload]] = []

    def subscribe(self, signal_name: str, handler: Handler) -> None:
        self._handlers.setdefault(signal_name, []).append(handler)

    def unsubscribe(self, signal_name: str, handler: Handler) -> None:
        """Remove a handler; unknown names or handlers are ignored."""
        handlers = self._handlers.get(signal_name, [])
        if handler in handlers:
            handlers.remove(handler)

    def publish(self, signal_name: str, **payload: Any) -> None:
        self._pending.append((signal_name, payload))

    def pending(self) -> list[str]:
        return [name for name, _ in self._pending]

    def flush(self) -> int:
        """Deliver everything queued so far. Returns the number of handler calls.

        Signals published by a handler stay queued for the next flush.
        """
        batch, self._pending = self._pending, []
        delivered = 0
        for signal_name, payload in batch:
            for handler in list(self._handlers.get(signal_name, ())):
                handler(signal_name, payload)
                delivered += 1
        if batch:
            logger.debug("flushed %d signals to %d handlers", len(batch), delivered)
        return delivered

    def clear(self) -> None:
        self._pending.clear()
