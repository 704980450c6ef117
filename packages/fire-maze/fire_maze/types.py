"""Shared value types, enums and errors for the fire maze."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import NamedTuple


@dataclass(frozen=True, slots=True)
class Cell:
    x: int
    y: int

    def offset(self, dx: int, dy: int) -> Cell:
        return Cell(self.x + dx, self.y + dy)

    def manhattan(self, other: Cell) -> int:
        return abs(self.x - other.x) + abs(self.y - other.y)


class SearchResult(NamedTuple):
    path: list[Cell]
    tiles_checked: int


class Algorithm(str, Enum):
    BFS = "bfs"
    DFS = "dfs"
    ASTAR = "astar"

    @classmethod
    def parse(cls, name: str | Algorithm) -> Algorithm:
        """Resolve an algorithm from its name. ``"a*"`` is accepted for A*."""
        if isinstance(name, Algorithm):
            return name
        key = name.strip().lower()
        if key == "a*":
            key = "astar"
        try:
            return cls(key)
        except ValueError:
            raise ValueError(f"Unknown algorithm {name!r}") from None


class Phase(str, Enum):
    IDLE = "idle"
    RUNNING = "running"
    CASCADING = "cascading"
    SUMMARIZED = "summarized"


class InvalidDimensionError(ValueError):
    """Raised when a maze size is even or below the minimum."""

    def __init__(self, width: int, height: int, message: str) -> None:
        self.width = width
        self.height = height
        super().__init__(message)


class OutOfBoundsError(ValueError):
    """Raised when a grid accessor is called outside the grid."""
