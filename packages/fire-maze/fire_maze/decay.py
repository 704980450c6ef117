"""Wall placement, aging and collapse."""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from fire_maze.grid import Grid
    from fire_maze.types import Cell

logger = logging.getLogger(__name__)


def place_wall(grid: Grid, cell: Cell, lifespan: int) -> bool:
    """Lock an unplaced wall where it stands. Returns False if rejected."""
    tile = grid.tile_at(cell)
    if not tile.is_unplaced_wall or tile.target or tile.fire:
        logger.debug("rejected wall placement at %s", cell)
        return False
    tile.lock(lifespan)
    return True


def move_wall(grid: Grid, source: Cell, destination: Cell, lifespan: int) -> bool:
    """Pick up an unplaced wall and drop it on an open floor as a locked wall.

    The source becomes floor. Returns False, changing nothing, unless the
    source is an unplaced wall and the destination is open.
    """
    src = grid.tile_at(source)
    dst = grid.tile_at(destination)
    if source == destination or not src.is_unplaced_wall or not dst.is_open:
        logger.debug("rejected wall move %s -> %s", source, destination)
        return False
    src.set_floor()
    dst.lock(lifespan)
    return True


def age_walls(grid: Grid) -> list[Cell]:
    """Decrement every locked wall; return the cells that crumbled."""
    crumbled: list[Cell] = []
    for cell, tile in list(grid.locked_tiles()):
        if tile.decrement():
            crumbled.append(cell)
    if crumbled:
        logger.debug("walls crumbled: %s", crumbled)
    return crumbled


def crumble_lowest(grid: Grid) -> list[Cell]:
    """Crumble all locked walls sharing the lowest counter.

    Used when the fire has no path; the lifespan bounds how long it can
    stay boxed in.
    """
    locked = list(grid.locked_tiles())
    if not locked:
        return []
    lowest = min(tile.counter for _, tile in locked)
    crumbled: list[Cell] = []
    for cell, tile in locked:
        if tile.counter == lowest:
            tile.crumble()
            crumbled.append(cell)
    logger.debug("forced collapse at counter %d: %s", lowest, crumbled)
    return crumbled
