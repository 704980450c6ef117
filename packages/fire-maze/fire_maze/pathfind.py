"""BFS, DFS and A* path searches over a maze Grid.

All three share one contract: the returned path excludes the source,
ends at the destination, and is empty when the destination cannot be
reached. ``tiles_checked`` is the search-cost metric reported to the
statistics feed.
"""
from __future__ import annotations

import heapq
from collections import deque
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable

from fire_maze.types import Algorithm, Cell, SearchResult

if TYPE_CHECKING:
    from fire_maze.grid import Grid

# A* expands up, right, down, left
_ASTAR_DIRS: tuple[tuple[int, int], ...] = ((0, 1), (1, 0), (0, -1), (-1, 0))


def _passable(grid: Grid, cell: Cell, destination: Cell) -> bool:
    return cell == destination or grid.is_floor(cell)


def _adjacent(grid: Grid, cell: Cell, destination: Cell) -> list[Cell]:
    return [c for c in grid.neighbors(cell) if _passable(grid, c, destination)]


def _rebuild(pred: dict[Cell, Cell], source: Cell, destination: Cell) -> list[Cell]:
    path: list[Cell] = [destination]
    current = destination
    while current != source:
        current = pred[current]
        path.append(current)
    path.reverse()
    return path[1:]


def _walk(grid: Grid, source: Cell, destination: Cell, lifo: bool) -> SearchResult:
    grid.tile_at(source)
    grid.tile_at(destination)
    if source == destination:
        return SearchResult([], 0)

    frontier: deque[Cell] = deque([source])
    visited: set[Cell] = {source}
    pred: dict[Cell, Cell] = {}
    checked = 0
    pop = frontier.pop if lifo else frontier.popleft

    while frontier:
        current = pop()
        for nxt in _adjacent(grid, current, destination):
            if nxt in visited:
                continue
            checked += 1
            visited.add(nxt)
            pred[nxt] = current
            frontier.append(nxt)
            if nxt == destination:
                return SearchResult(_rebuild(pred, source, destination), checked)

    return SearchResult([], checked)


def bfs(grid: Grid, source: Cell, destination: Cell) -> SearchResult:
    """Breadth-first search. The path is shortest in steps."""
    return _walk(grid, source, destination, lifo=False)


def dfs(grid: Grid, source: Cell, destination: Cell) -> SearchResult:
    """Depth-first search. Returns some path, not necessarily the shortest."""
    return _walk(grid, source, destination, lifo=True)


@dataclass(slots=True)
class _Node:
    cell: Cell
    g: int
    f: int
    parent: _Node | None


def astar(grid: Grid, source: Cell, destination: Cell) -> SearchResult:
    """A* with a Manhattan heuristic.

    Open entries are ranked by ``f``; equal ``f`` goes to the entry that
    entered the open set first, and a replaced entry counts as entering
    anew. A neighbour already open is replaced only when its ``f`` is
    strictly greater than the ``f`` of the cell being expanded.
    """
    grid.tile_at(source)
    grid.tile_at(destination)
    if source == destination:
        return SearchResult([], 0)

    start = _Node(source, 0, source.manhattan(destination), None)
    open_heap: list[tuple[int, int, _Node]] = [(start.f, 0, start)]
    open_nodes: dict[Cell, _Node] = {source: start}
    closed: set[Cell] = set()
    counter = 1
    checked = 0

    while open_heap:
        _, _, current = heapq.heappop(open_heap)
        if open_nodes.get(current.cell) is not current:
            continue
        if current.cell == destination:
            path: list[Cell] = []
            node: _Node | None = current
            for _ in range(current.g):
                assert node is not None
                path.append(node.cell)
                node = node.parent
            path.reverse()
            return SearchResult(path, checked)

        del open_nodes[current.cell]
        closed.add(current.cell)

        for dx, dy in _ASTAR_DIRS:
            nx, ny = current.cell.x + dx, current.cell.y + dy
            if not grid.in_bounds(nx, ny):
                continue
            cell = Cell(nx, ny)
            if not _passable(grid, cell, destination) or cell in closed:
                continue
            checked += 1
            g = current.g + 1
            candidate = _Node(cell, g, g + cell.manhattan(destination), current)
            existing = open_nodes.get(cell)
            if existing is not None and existing.f <= current.f:
                continue
            open_nodes[cell] = candidate
            heapq.heappush(open_heap, (candidate.f, counter, candidate))
            counter += 1

    return SearchResult([], checked)


_STRATEGIES: dict[Algorithm, Callable[[Grid, Cell, Cell], SearchResult]] = {
    Algorithm.BFS: bfs,
    Algorithm.DFS: dfs,
    Algorithm.ASTAR: astar,
}


def find(
    algorithm: Algorithm | str,
    grid: Grid,
    source: Cell,
    destination: Cell,
) -> SearchResult:
    return _STRATEGIES[Algorithm.parse(algorithm)](grid, source, destination)
