"""SignalBus - run events queued during a tick and delivered to the host."""
from __future__ import annotations

from collections import defaultdict
from enum import Enum
from typing import Any, Callable

Handler = Callable[[str, dict[str, Any]], None]


class Signal(str, Enum):
    """Events the scheduler publishes, with the payload keys each carries."""

    RUN_STARTED = "run_started"          # grid, fire, target, path
    FIRE_ADVANCED = "fire_advanced"      # tick, fire, path, sample, crumbled
    WALLS_CRUMBLED = "walls_crumbled"    # cells, forced
    CASCADE_RING = "cascade_ring"        # ring
    PHASE_CHANGED = "phase_changed"      # old, new
    RUN_SUMMARIZED = "run_summarized"    # summary


def _name(signal: Signal | str) -> str:
    return signal.value if isinstance(signal, Signal) else signal


class SignalBus:
    """Holds published signals until ``flush()``.

    Handlers are called as ``handler(name, data)`` in the order they
    subscribed, for signals in the order they were published. A handler
    that publishes during a flush has its signal held for the next flush.
    """

    def __init__(self) -> None:
        self._handlers: defaultdict[str, list[Handler]] = defaultdict(list)
        self._outbox: list[tuple[str, dict[str, Any]]] = []

    def subscribe(self, signal: Signal | str, handler: Handler) -> None:
        self._handlers[_name(signal)].append(handler)

    def unsubscribe(self, signal: Signal | str, handler: Handler) -> None:
        handlers = self._handlers.get(_name(signal), [])
        if handler in handlers:
            handlers.remove(handler)

    def publish(self, signal: Signal | str, **data: Any) -> None:
        self._outbox.append((_name(signal), data))

    def pending(self) -> int:
        return len(self._outbox)

    def flush(self) -> None:
        batch, self._outbox = self._outbox, []
        for name, data in batch:
            # Copy so a handler may unsubscribe itself mid-delivery.
            for handler in tuple(self._handlers.get(name, ())):
                handler(name, data)

    def clear(self) -> None:
        self._outbox = []
