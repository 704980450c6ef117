"""Cascade - end-of-run flood fill that burns the maze ring by ring."""
from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from fire_maze.grid import Grid
    from fire_maze.types import Cell


class Cascade:
    """Breadth-first burn outward from *origin*, one ring per ``step()``.

    Each step puts out the previous ring (leaving it burned) and ignites the
    next one. Walls met by the fire are locked and crumbled on the spot, so
    the spread reaches every tile of the grid. Each tile is ignited once.
    """

    def __init__(self, grid: Grid, origin: Cell) -> None:
        self._grid = grid
        grid.tile_at(origin).fire = False
        self._visited: set[Cell] = {origin}
        self._pending: list[Cell] = [origin]
        self._burning: list[Cell] = []
        self._rings: list[list[Cell]] = []

    @property
    def done(self) -> bool:
        return not self._burning and not self._pending

    @property
    def started(self) -> bool:
        """True once the first ring has been ignited."""
        return bool(self._rings)

    @property
    def rings(self) -> list[list[Cell]]:
        return [list(ring) for ring in self._rings]

    @property
    def burning(self) -> list[Cell]:
        return list(self._burning)

    def step(self) -> list[Cell]:
        """Advance one ring. Returns the newly ignited cells, empty when finished."""
        if self._burning:
            self._pending = self._extinguish(self._burning)
            self._burning = []
        if not self._pending:
            return []

        ring = self._pending
        self._pending = []
        for cell in ring:
            tile = self._grid.tile_at(cell)
            tile.fire = True
            if not tile.floor:
                tile.lock(1)
                tile.crumble()
        self._burning = ring
        self._rings.append(list(ring))
        return list(ring)

    def _extinguish(self, ring: list[Cell]) -> list[Cell]:
        nxt: list[Cell] = []
        for cell in ring:
            tile = self._grid.tile_at(cell)
            tile.fire = False
            tile.burned = True
            for neighbor in self._grid.neighbors(cell):
                if neighbor not in self._visited:
                    self._visited.add(neighbor)
                    nxt.append(neighbor)
        return nxt

    def run(self) -> list[list[Cell]]:
        """Burn to completion without pacing; returns every ring."""
        while not self.done:
            self.step()
        return self.rings
