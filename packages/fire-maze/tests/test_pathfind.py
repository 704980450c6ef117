"""
Test suite for BFS, DFS and A* path searches.

Tests cover:
- Path structure (source excluded, destination included, 4-adjacent steps)
- Optimality of BFS and A* against a reference search
- DFS validity
- Unreachable destinations and source == destination
- Destination treated as passable even when walled
- tiles_checked accounting on small hand-built grids
- A* tie-breaking and determinism
- Dispatch by algorithm name
"""

import random
from collections import deque

import pytest
from fire_maze import (
    Algorithm,
    Cell,
    Grid,
    OutOfBoundsError,
    astar,
    bfs,
    dfs,
    find,
    generate,
)

ALL = [bfs, dfs, astar]
OPTIMAL = [bfs, astar]


def reference_distance(grid, source, destination):
    """Plain BFS distance over floor cells, destination always passable."""
    dist = {source: 0}
    queue = deque([source])
    while queue:
        cell = queue.popleft()
        if cell == destination:
            return dist[cell]
        for nxt in grid.neighbors(cell):
            if nxt in dist:
                continue
            if nxt != destination and not grid.is_floor(nxt):
                continue
            dist[nxt] = dist[cell] + 1
            queue.append(nxt)
    return None


def assert_valid_path(grid, source, destination, path):
    assert path, "expected a path"
    assert path[-1] == destination
    assert source not in path
    prev = source
    for cell in path:
        assert abs(cell.x - prev.x) + abs(cell.y - prev.y) == 1
        assert cell == destination or grid.is_floor(cell)
        prev = cell
    assert len(set(path)) == len(path)


def open_grid(width, height):
    return Grid.from_rows(["." * width] * height)


class TestPathStructure:
    """Test the shared return contract."""

    @pytest.mark.parametrize("search", ALL)
    def test_straight_corridor(self, search):
        grid = Grid.from_rows(["F..T"])
        path, checked = search(grid, Cell(0, 0), Cell(3, 0))
        assert path == [Cell(1, 0), Cell(2, 0), Cell(3, 0)]
        assert checked == 3

    @pytest.mark.parametrize("search", ALL)
    def test_adjacent_destination(self, search):
        grid = Grid.from_rows(["FT"])
        path, _ = search(grid, Cell(0, 0), Cell(1, 0))
        assert path == [Cell(1, 0)]

    @pytest.mark.parametrize("search", ALL)
    def test_same_source_and_destination_is_empty(self, search):
        grid = open_grid(3, 3)
        result = search(grid, Cell(1, 1), Cell(1, 1))
        assert result.path == []
        assert result.tiles_checked == 0

    @pytest.mark.parametrize("search", ALL)
    def test_out_of_bounds_source_raises(self, search):
        grid = open_grid(3, 3)
        with pytest.raises(OutOfBoundsError):
            search(grid, Cell(-1, 0), Cell(2, 2))

    @pytest.mark.parametrize("search", ALL)
    @pytest.mark.parametrize("seed", range(6))
    def test_paths_on_generated_mazes_are_valid(self, search, seed):
        grid = generate(13, 13, random.Random(seed))
        path, checked = search(grid, grid.fire, grid.target)
        assert_valid_path(grid, grid.fire, grid.target, path)
        assert checked >= len(path)


class TestOptimality:
    """BFS and A* return minimal paths of equal length."""

    @pytest.mark.parametrize("seed", range(8))
    def test_bfs_and_astar_agree_with_reference_on_mazes(self, seed):
        grid = generate(25, 25, random.Random(seed))
        expected = reference_distance(grid, grid.fire, grid.target)
        for search in OPTIMAL:
            path, _ = search(grid, grid.fire, grid.target)
            assert len(path) == expected

    @pytest.mark.parametrize("seed", range(8))
    def test_optimal_on_grids_with_loops(self, seed):
        # Knock random holes into a maze so several routes exist.
        rng = random.Random(seed)
        grid = generate(13, 13, rng)
        for _ in range(30):
            grid.tile(rng.randrange(13), rng.randrange(13)).set_floor()
        source, destination = grid.fire, grid.target
        expected = reference_distance(grid, source, destination)
        bfs_path, _ = bfs(grid, source, destination)
        astar_path, _ = astar(grid, source, destination)
        assert len(bfs_path) == len(astar_path) == expected
        assert_valid_path(grid, source, destination, astar_path)

    def test_open_grid_manhattan_length(self):
        grid = open_grid(9, 7)
        for search in OPTIMAL:
            path, _ = search(grid, Cell(0, 0), Cell(8, 6))
            assert len(path) == 14

    def test_rectangular_grid_taller_than_wide(self):
        grid = open_grid(3, 9)
        path, _ = astar(grid, Cell(0, 0), Cell(2, 8))
        assert len(path) == 10
        assert path[-1] == Cell(2, 8)


class TestDepthFirst:
    """DFS returns some valid path, not necessarily the shortest."""

    def test_dfs_path_valid_on_open_grid(self):
        grid = open_grid(7, 7)
        path, _ = dfs(grid, Cell(0, 0), Cell(6, 6))
        assert_valid_path(grid, Cell(0, 0), Cell(6, 6), path)
        assert len(path) >= 12

    def test_dfs_can_be_longer_than_bfs(self):
        grid = open_grid(5, 5)
        dfs_path, _ = dfs(grid, Cell(0, 0), Cell(4, 0))
        bfs_path, _ = bfs(grid, Cell(0, 0), Cell(4, 0))
        assert len(bfs_path) == 4
        assert len(dfs_path) > len(bfs_path)


class TestUnreachable:
    """No route is a valid, empty result."""

    ROWS = [
        "F.#..",
        "..#..",
        "###..",
        "....T",
    ]

    @pytest.mark.parametrize("search", ALL)
    def test_walled_off_destination(self, search):
        grid = Grid.from_rows(self.ROWS)
        path, _ = search(grid, Cell(0, 0), Cell(4, 3))
        assert path == []

    @pytest.mark.parametrize("search", [bfs, dfs])
    def test_exhausted_region_counted_once(self, search):
        grid = Grid.from_rows(self.ROWS)
        _, checked = search(grid, Cell(0, 0), Cell(4, 3))
        assert checked == 3

    def test_astar_counts_open_reexamination(self):
        # (1, 1) is examined from (0, 1) and again from (1, 0)
        grid = Grid.from_rows(self.ROWS)
        _, checked = astar(grid, Cell(0, 0), Cell(4, 3))
        assert checked == 4

    @pytest.mark.parametrize("search", ALL)
    def test_locked_walls_block(self, search):
        grid = Grid.from_rows(["F.L.T"])
        path, _ = search(grid, Cell(0, 0), Cell(4, 0))
        assert path == []


class TestDestinationPassable:
    """The destination is reachable even when it is not floor."""

    @pytest.mark.parametrize("search", ALL)
    def test_locked_destination(self, search):
        grid = Grid.from_rows(["F..L"])
        path, _ = search(grid, Cell(0, 0), Cell(3, 0))
        assert path == [Cell(1, 0), Cell(2, 0), Cell(3, 0)]

    @pytest.mark.parametrize("search", ALL)
    def test_only_destination_is_passable_wall(self, search):
        grid = Grid.from_rows(["F.##"])
        path, _ = search(grid, Cell(0, 0), Cell(3, 0))
        assert path == []


class TestTilesChecked:
    """Search-cost accounting on a 2x2 room.

    With the fire at (0, 0) and the destination at (1, 1), BFS and DFS
    discover three cells. A* also re-examines (1, 1) while it is open,
    so it reports four.
    """

    ROWS = ["F.", ".T"]

    def test_bfs_counts(self):
        grid = Grid.from_rows(self.ROWS)
        path, checked = bfs(grid, Cell(0, 0), Cell(1, 1))
        assert path == [Cell(1, 0), Cell(1, 1)]
        assert checked == 3

    def test_dfs_counts(self):
        grid = Grid.from_rows(self.ROWS)
        path, checked = dfs(grid, Cell(0, 0), Cell(1, 1))
        assert path == [Cell(0, 1), Cell(1, 1)]
        assert checked == 3

    def test_astar_counts_reexamined_open_cells(self):
        grid = Grid.from_rows(self.ROWS)
        path, checked = astar(grid, Cell(0, 0), Cell(1, 1))
        assert path == [Cell(0, 1), Cell(1, 1)]
        assert checked == 4

    def test_bfs_counts_each_cell_once(self):
        grid = open_grid(6, 6)
        _, checked = bfs(grid, Cell(0, 0), Cell(5, 5))
        assert checked <= 35


class TestAStarTieBreak:
    """Equal-f candidates resolve to the first discovered."""

    def test_prefers_up_first_on_open_square(self):
        grid = open_grid(3, 3)
        path, _ = astar(grid, Cell(0, 0), Cell(2, 2))
        assert path == [Cell(0, 1), Cell(0, 2), Cell(1, 2), Cell(2, 2)]

    @pytest.mark.parametrize("seed", range(5))
    def test_repeat_runs_identical(self, seed):
        rng = random.Random(seed)
        grid = generate(25, 25, rng)
        for _ in range(60):
            grid.tile(rng.randrange(25), rng.randrange(25)).set_floor()
        first = astar(grid, grid.fire, grid.target)
        second = astar(grid, grid.fire, grid.target)
        assert first == second


class TestFind:
    """Dispatch by algorithm."""

    @pytest.mark.parametrize(
        "algorithm,search",
        [(Algorithm.BFS, bfs), (Algorithm.DFS, dfs), (Algorithm.ASTAR, astar)],
    )
    def test_dispatch(self, algorithm, search):
        grid = generate(13, 13, random.Random(4))
        assert find(algorithm, grid, grid.fire, grid.target) == search(grid, grid.fire, grid.target)

    @pytest.mark.parametrize("name", ["bfs", "DFS", "astar", "a*", " A* "])
    def test_dispatch_by_name(self, name):
        grid = Grid.from_rows(["F.T"])
        path, _ = find(name, grid, Cell(0, 0), Cell(2, 0))
        assert path == [Cell(1, 0), Cell(2, 0)]

    def test_unknown_name_raises(self):
        grid = Grid.from_rows(["F.T"])
        with pytest.raises(ValueError):
            find("dijkstra", grid, Cell(0, 0), Cell(2, 0))
