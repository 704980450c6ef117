"""
Test suite for Grid and Tile.

Tests cover:
- Constructor and properties
- Bounds checking on every accessor
- Neighbor order and edge clipping
- Target and fire bookkeeping
- Tile lifecycle (lock, countdown, crumble)
- Text round trip
"""

import pytest
from fire_maze import Cell, Grid, OutOfBoundsError, Tile


class TestGridConstruction:
    """Test Grid initialization and properties."""

    def test_constructor_sets_dimensions(self):
        grid = Grid(7, 5)
        assert grid.width == 7
        assert grid.height == 5

    def test_all_tiles_start_as_unplaced_walls(self):
        grid = Grid(5, 5)
        for cell in grid.cells():
            tile = grid.tile_at(cell)
            assert tile.is_unplaced_wall
            assert not tile.floor and not tile.locked
        assert grid.floor_count() == 0

    def test_no_target_or_fire_initially(self):
        grid = Grid(5, 5)
        assert grid.target is None
        assert grid.fire is None

    def test_cells_iterates_column_major(self):
        grid = Grid(2, 3)
        assert list(grid.cells()) == [
            Cell(0, 0), Cell(0, 1), Cell(0, 2),
            Cell(1, 0), Cell(1, 1), Cell(1, 2),
        ]


class TestGridBounds:
    """Out-of-range access fails fast instead of clamping."""

    @pytest.mark.parametrize("x,y", [(-1, 0), (0, -1), (5, 0), (0, 5), (10, 10)])
    def test_tile_out_of_bounds_raises(self, x, y):
        grid = Grid(5, 5)
        with pytest.raises(OutOfBoundsError):
            grid.tile(x, y)

    def test_out_of_bounds_is_a_value_error(self):
        grid = Grid(5, 5)
        with pytest.raises(ValueError):
            grid.tile(5, 5)

    def test_is_floor_out_of_bounds_raises(self):
        grid = Grid(5, 5)
        with pytest.raises(OutOfBoundsError):
            grid.is_floor(Cell(-1, 2))

    def test_move_fire_out_of_bounds_raises(self):
        grid = Grid(5, 5)
        with pytest.raises(OutOfBoundsError):
            grid.move_fire(Cell(2, 9))

    def test_in_bounds(self):
        grid = Grid(5, 3)
        assert grid.in_bounds(4, 2)
        assert not grid.in_bounds(5, 2)
        assert not grid.in_bounds(4, 3)


class TestGridNeighbors:
    """Test 4-neighbor queries."""

    def test_interior_neighbors_left_down_right_up(self):
        grid = Grid(5, 5)
        assert grid.neighbors(Cell(2, 2)) == [
            Cell(1, 2), Cell(2, 1), Cell(3, 2), Cell(2, 3),
        ]

    def test_corner_neighbors_clipped(self):
        grid = Grid(5, 5)
        assert grid.neighbors(Cell(0, 0)) == [Cell(1, 0), Cell(0, 1)]
        assert grid.neighbors(Cell(4, 4)) == [Cell(3, 4), Cell(4, 3)]

    def test_no_diagonals(self):
        grid = Grid(3, 3)
        assert Cell(1, 1) not in grid.neighbors(Cell(0, 0))


class TestTargetAndFire:
    """Test target and fire flags stay unique."""

    def test_set_target_makes_floor(self):
        grid = Grid(5, 5)
        grid.set_target(Cell(2, 2))
        tile = grid.tile(2, 2)
        assert tile.floor
        assert tile.target
        assert grid.target == Cell(2, 2)

    def test_set_target_twice_moves_flag(self):
        grid = Grid(5, 5)
        grid.set_target(Cell(2, 2))
        grid.set_target(Cell(0, 0))
        assert not grid.tile(2, 2).target
        assert grid.tile(0, 0).target

    def test_move_fire_clears_previous(self):
        grid = Grid(5, 5)
        grid.move_fire(Cell(0, 0))
        grid.move_fire(Cell(1, 0))
        assert not grid.tile(0, 0).fire
        assert grid.tile(1, 0).fire
        assert grid.fire == Cell(1, 0)
        fires = [c for c in grid.cells() if grid.tile_at(c).fire]
        assert fires == [Cell(1, 0)]


class TestTileLifecycle:
    """Test lock, countdown and crumble."""

    def test_lock_sets_counter(self):
        tile = Tile(floor=True)
        tile.lock(3)
        assert tile.locked
        assert not tile.floor
        assert tile.counter == 3

    def test_crumbles_exactly_on_last_decrement(self):
        tile = Tile(floor=True)
        tile.lock(3)
        assert tile.decrement() is False
        assert tile.decrement() is False
        assert tile.locked and tile.counter == 1
        assert tile.decrement() is True
        assert tile.floor
        assert not tile.locked

    def test_crumble_resets_counter(self):
        tile = Tile()
        tile.lock(5)
        tile.crumble()
        assert tile.counter == 0
        assert tile.floor

    def test_is_open(self):
        assert Tile(floor=True).is_open
        assert not Tile(floor=True, target=True).is_open
        assert not Tile(floor=True, fire=True).is_open
        assert not Tile().is_open


class TestGridText:
    """Test the text representation used by tests and hosts."""

    ROWS = [
        "F.#..",
        "#.L.#",
        "..T..",
        "#####",
        "*....",
    ]

    def test_round_trip(self):
        grid = Grid.from_rows(self.ROWS, wall_lifespan=4)
        assert grid.to_rows() == self.ROWS

    def test_from_rows_row_index_is_y(self):
        grid = Grid.from_rows(self.ROWS)
        assert grid.fire == Cell(0, 0)
        assert grid.target == Cell(2, 2)
        assert grid.tile(2, 1).locked
        assert grid.tile(0, 4).burned

    def test_locked_counter_from_lifespan(self):
        grid = Grid.from_rows(self.ROWS, wall_lifespan=4)
        assert grid.tile(2, 1).counter == 4
        assert [c for c, _ in grid.locked_tiles()] == [Cell(2, 1)]

    def test_ragged_rows_rejected(self):
        with pytest.raises(ValueError):
            Grid.from_rows(["...", ".."])

    def test_unknown_character_rejected(self):
        with pytest.raises(ValueError):
            Grid.from_rows(["..?"])
