"""Publish/subscribe notifications from the simulation to the presentation layer."""
from __future__ import annotations

from collections import defaultdict
from typing import Callable, Dict, List

# Event names and their payloads:
#   ORDER_SPAWNED    {"order": Order}
#   ORDER_ABANDONED  {"order": Order}
#   ORDER_READY      {"order": Order}
#   LEVEL_UP         {"level": int}
#   SESSION_WON      {"score": int, "completed": int}
ORDER_SPAWNED = "ORDER_SPAWNED"
ORDER_ABANDONED = "ORDER_ABANDONED"
ORDER_READY = "ORDER_READY"
LEVEL_UP = "LEVEL_UP"
SESSION_WON = "SESSION_WON"

Listener = Callable[[dict], None]


class EventBus:
    """Fire-and-forget callbacks keyed by event name.

    One bus belongs to one simulation; there is no module-level instance.
    """

    def __init__(self) -> None:
        self._listeners: Dict[str, List[Listener]] = defaultdict(list)

    def subscribe(self, event_type: str, callback: Listener) -> None:
        self._listeners[event_type].append(callback)

    def publish(self, event_type: str, data: dict | None = None) -> None:
        for callback in list(self._listeners[event_type]):
            callback(data or {})
