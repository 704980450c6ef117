"""Clock for the fixed-interval simulation tick."""
from __future__ import annotations


class Clock:
    def __init__(self, interval: float) -> None:
        if interval <= 0:
            raise ValueError("interval must be positive")
        self._interval = interval
        self._tick_number = 0

    @property
    def interval(self) -> float:
        return self._interval

    @property
    def tick_number(self) -> int:
        return self._tick_number

    def advance(self) -> int:
        self._tick_number += 1
        return self._tick_number

    def reset(self, tick_number: int = 0, interval: float | None = None) -> None:
        if interval is not None:
            if interval <= 0:
                raise ValueError("interval must be positive")
            self._interval = interval
        self._tick_number = tick_number
