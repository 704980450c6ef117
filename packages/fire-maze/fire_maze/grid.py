"""Grid - rectangular tile-state table for the maze."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Sequence

from fire_maze.types import Cell, OutOfBoundsError

# left, down, right, up
_DIRS4: tuple[tuple[int, int], ...] = ((-1, 0), (0, -1), (1, 0), (0, 1))

WALL_CHAR = "#"
FLOOR_CHAR = "."
LOCKED_CHAR = "L"
TARGET_CHAR = "T"
FIRE_CHAR = "F"
BURNED_CHAR = "*"


@dataclass
class Tile:
    """State of one maze cell.

    A tile is an unplaced wall, a locked (player placed) wall, or a floor.
    ``counter`` is the remaining lifespan of a locked wall and reads 0
    otherwise.
    """

    floor: bool = False
    locked: bool = False
    counter: int = 0
    target: bool = False
    fire: bool = False
    burned: bool = False

    @property
    def is_unplaced_wall(self) -> bool:
        return not self.floor and not self.locked

    @property
    def is_open(self) -> bool:
        """True when a wall may be dropped here."""
        return self.floor and not self.target and not self.fire

    def set_floor(self) -> None:
        self.floor = True
        self.locked = False
        self.counter = 0

    def lock(self, lifespan: int) -> None:
        self.floor = False
        self.locked = True
        self.counter = lifespan

    def decrement(self) -> bool:
        """Count down one tick. Returns True if the wall crumbled."""
        self.counter -= 1
        if self.counter <= 0:
            self.crumble()
            return True
        return False

    def crumble(self) -> None:
        self.set_floor()


class Grid:
    def __init__(self, width: int, height: int) -> None:
        self._width = width
        self._height = height
        self._tiles: list[list[Tile]] = [
            [Tile() for _ in range(height)] for _ in range(width)
        ]
        self._target: Cell | None = None
        self._fire: Cell | None = None

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def target(self) -> Cell | None:
        return self._target

    @property
    def fire(self) -> Cell | None:
        return self._fire

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self._width and 0 <= y < self._height

    def _check_bounds(self, x: int, y: int) -> None:
        if not self.in_bounds(x, y):
            raise OutOfBoundsError(
                f"({x}, {y}) out of bounds for {self._width}x{self._height} grid"
            )

    def tile(self, x: int, y: int) -> Tile:
        self._check_bounds(x, y)
        return self._tiles[x][y]

    def tile_at(self, cell: Cell) -> Tile:
        return self.tile(cell.x, cell.y)

    def is_floor(self, cell: Cell) -> bool:
        return self.tile(cell.x, cell.y).floor

    def set_target(self, cell: Cell) -> None:
        tile = self.tile(cell.x, cell.y)
        if self._target is not None:
            self._tiles[self._target.x][self._target.y].target = False
        tile.set_floor()
        tile.target = True
        self._target = cell

    def move_fire(self, cell: Cell) -> None:
        tile = self.tile(cell.x, cell.y)
        if self._fire is not None:
            self._tiles[self._fire.x][self._fire.y].fire = False
        tile.fire = True
        self._fire = cell

    def cells(self) -> Iterator[Cell]:
        """Yield every coordinate, column by column."""
        for x in range(self._width):
            for y in range(self._height):
                yield Cell(x, y)

    def neighbors(self, cell: Cell) -> list[Cell]:
        self._check_bounds(cell.x, cell.y)
        result: list[Cell] = []
        for dx, dy in _DIRS4:
            nx, ny = cell.x + dx, cell.y + dy
            if 0 <= nx < self._width and 0 <= ny < self._height:
                result.append(Cell(nx, ny))
        return result

    def locked_tiles(self) -> Iterator[tuple[Cell, Tile]]:
        for x, column in enumerate(self._tiles):
            for y, tile in enumerate(column):
                if tile.locked:
                    yield Cell(x, y), tile

    def floor_count(self) -> int:
        return sum(tile.floor for column in self._tiles for tile in column)

    # --- Text form ---

    @classmethod
    def from_rows(cls, rows: Sequence[str], wall_lifespan: int = 1) -> Grid:
        """Build a grid from text rows; row ``i`` holds the tiles with ``y == i``.

        ``#`` unplaced wall, ``.`` floor, ``L`` locked wall (counter set to
        *wall_lifespan*), ``T`` target, ``F`` fire, ``*`` burned floor.
        """
        if not rows:
            raise ValueError("rows must not be empty")
        width = len(rows[0])
        for row in rows:
            if len(row) != width:
                raise ValueError("all rows must have the same length")
        grid = cls(width, len(rows))
        for y, row in enumerate(rows):
            for x, ch in enumerate(row):
                tile = grid._tiles[x][y]
                if ch == FLOOR_CHAR:
                    tile.set_floor()
                elif ch == LOCKED_CHAR:
                    tile.lock(wall_lifespan)
                elif ch == TARGET_CHAR:
                    grid.set_target(Cell(x, y))
                elif ch == FIRE_CHAR:
                    tile.set_floor()
                    grid.move_fire(Cell(x, y))
                elif ch == BURNED_CHAR:
                    tile.set_floor()
                    tile.burned = True
                elif ch != WALL_CHAR:
                    raise ValueError(f"Unknown tile character {ch!r} at ({x}, {y})")
        return grid

    def to_rows(self) -> list[str]:
        rows: list[str] = []
        for y in range(self._height):
            chars: list[str] = []
            for x in range(self._width):
                tile = self._tiles[x][y]
                if tile.fire:
                    chars.append(FIRE_CHAR)
                elif tile.target:
                    chars.append(TARGET_CHAR)
                elif tile.burned:
                    chars.append(BURNED_CHAR)
                elif tile.locked:
                    chars.append(LOCKED_CHAR)
                elif tile.floor:
                    chars.append(FLOOR_CHAR)
                else:
                    chars.append(WALL_CHAR)
            rows.append("".join(chars))
        return rows

    def __repr__(self) -> str:
        return f"Grid({self._width}x{self._height}, target={self._target}, fire={self._fire})"
