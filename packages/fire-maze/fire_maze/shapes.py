"""Path segment shapes, used by hosts to orient path sprites."""
from __future__ import annotations

from enum import Enum
from typing import Sequence

from fire_maze.types import Cell


class PathShape(str, Enum):
    SINGLE = "single"
    END_LEFT = "end_left"
    END_DOWN = "end_down"
    END_RIGHT = "end_right"
    END_UP = "end_up"
    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"
    CORNER_DOWN_LEFT = "corner_down_left"
    CORNER_DOWN_RIGHT = "corner_down_right"
    CORNER_UP_LEFT = "corner_up_left"
    CORNER_UP_RIGHT = "corner_up_right"


_STEP_NAMES = {(-1, 0): "left", (0, -1): "down", (1, 0): "right", (0, 1): "up"}

_ENDS = {
    "left": PathShape.END_LEFT,
    "down": PathShape.END_DOWN,
    "right": PathShape.END_RIGHT,
    "up": PathShape.END_UP,
}

_JOINS = {
    frozenset(("left", "right")): PathShape.HORIZONTAL,
    frozenset(("down", "up")): PathShape.VERTICAL,
    frozenset(("down", "left")): PathShape.CORNER_DOWN_LEFT,
    frozenset(("down", "right")): PathShape.CORNER_DOWN_RIGHT,
    frozenset(("up", "left")): PathShape.CORNER_UP_LEFT,
    frozenset(("up", "right")): PathShape.CORNER_UP_RIGHT,
}


def _toward(frm: Cell, to: Cell) -> str:
    try:
        return _STEP_NAMES[(to.x - frm.x, to.y - frm.y)]
    except KeyError:
        raise ValueError(f"{frm} and {to} are not 4-adjacent") from None


def classify_path(path: Sequence[Cell]) -> list[PathShape]:
    """Return one shape per path cell.

    Endpoints are named for the direction of their single path neighbour;
    interior cells for the two directions they join.
    """
    n = len(path)
    if n == 0:
        return []
    if n == 1:
        return [PathShape.SINGLE]
    shapes: list[PathShape] = [_ENDS[_toward(path[0], path[1])]]
    for i in range(1, n - 1):
        joined = frozenset((_toward(path[i], path[i - 1]), _toward(path[i], path[i + 1])))
        if len(joined) != 2:
            raise ValueError(f"path doubles back at {path[i]}")
        shapes.append(_JOINS[joined])
    shapes.append(_ENDS[_toward(path[-1], path[-2])])
    return shapes
