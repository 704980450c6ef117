"""MazeBuilder - randomized backtracker carving a perfect maze around the target."""
from __future__ import annotations

import logging
import random
from typing import MutableSequence, TypeVar

from fire_maze.grid import Grid
from fire_maze.types import Cell, InvalidDimensionError

logger = logging.getLogger(__name__)

T = TypeVar("T")

MIN_DIMENSION = 5

# down, left, right, up; carving advances two cells at a time
_CARVE_DIRS: tuple[tuple[int, int], ...] = ((0, -1), (-1, 0), (1, 0), (0, 1))


def shuffle(items: MutableSequence[T], rng: random.Random) -> MutableSequence[T]:
    """Fisher-Yates shuffle in place, drawing only from *rng*."""
    n = len(items)
    for i in range(n - 1):
        j = rng.randrange(i, n)
        items[i], items[j] = items[j], items[i]
    return items


def validate_dimensions(width: int, height: int) -> None:
    """Raise InvalidDimensionError unless both sides are odd and >= 5.

    Even sides leave the last row or column unreachable by the 2-cell
    carve, so they are rejected rather than corrected.
    """
    for name, value in (("width", width), ("height", height)):
        if value < MIN_DIMENSION:
            raise InvalidDimensionError(
                width, height, f"{name} must be at least {MIN_DIMENSION}, got {value}"
            )
        if value % 2 == 0:
            raise InvalidDimensionError(
                width, height, f"{name} must be odd, got {value}"
            )


def _snap(value: int) -> int:
    return value - value % 2


class MazeBuilder:
    """Generates maze grids.

    The carve visits the even lattice (both coordinates even) from the
    target outward. With odd sides every corner lies on that lattice, so the
    corners are always floor and the fire can start on any of them that
    is not the target.
    """

    def generate(
        self,
        width: int,
        height: int,
        rng: random.Random,
        target_hint: Cell | None = None,
    ) -> Grid:
        validate_dimensions(width, height)
        grid = Grid(width, height)

        hint = target_hint if target_hint is not None else Cell(width // 2, height // 2)
        target = Cell(_snap(hint.x), _snap(hint.y))
        grid.set_target(target)
        self._carve(grid, target, rng)

        corners = [
            corner
            for corner in (
                Cell(0, 0),
                Cell(width - 1, 0),
                Cell(0, height - 1),
                Cell(width - 1, height - 1),
            )
            if corner != target
        ]
        fire = corners[rng.randrange(len(corners))]
        grid.move_fire(fire)

        logger.debug(
            "generated %dx%d maze: target=%s fire=%s floors=%d",
            width, height, target, fire, grid.floor_count(),
        )
        return grid

    def _carve(self, grid: Grid, start: Cell, rng: random.Random) -> None:
        # Each frame is (cell, shuffled directions, next direction index).
        # Directions are shuffled when a cell is entered, matching the
        # visiting order of the recursive formulation.
        stack: list[tuple[Cell, list[tuple[int, int]], int]] = [
            (start, shuffle(list(_CARVE_DIRS), rng), 0)
        ]
        while stack:
            cell, dirs, i = stack[-1]
            if i == len(dirs):
                stack.pop()
                continue
            stack[-1] = (cell, dirs, i + 1)
            dx, dy = dirs[i]
            nx, ny = cell.x + 2 * dx, cell.y + 2 * dy
            if not grid.in_bounds(nx, ny):
                continue
            far = grid.tile(nx, ny)
            if far.floor:
                continue
            far.set_floor()
            grid.tile(cell.x + dx, cell.y + dy).set_floor()
            nxt = Cell(nx, ny)
            stack.append((nxt, shuffle(list(_CARVE_DIRS), rng), 0))


def generate(
    width: int,
    height: int,
    rng: random.Random,
    target_hint: Cell | None = None,
) -> Grid:
    return MazeBuilder().generate(width, height, rng, target_hint)
