"""fire-maze - maze generation, path search and the burning-maze tick scheduler."""
from __future__ import annotations

from fire_maze.bus import Signal, SignalBus
from fire_maze.cascade import Cascade
from fire_maze.clock import Clock
from fire_maze.config import (
    DEFAULT_CASCADE_DELAY,
    DEFAULT_CASCADE_INTERVAL,
    DEFAULT_WALL_LIFESPAN,
    GAME_SPEEDS,
    MAZE_SIZES,
    RunConfig,
)
from fire_maze.decay import age_walls, crumble_lowest, move_wall, place_wall
from fire_maze.fsm import PhaseGuards, PhaseMachine, make_phase_system, run_transitions
from fire_maze.grid import Grid, Tile
from fire_maze.maze import MazeBuilder, generate, shuffle, validate_dimensions
from fire_maze.pathfind import astar, bfs, dfs, find
from fire_maze.scheduler import SimulationScheduler
from fire_maze.shapes import PathShape, classify_path
from fire_maze.stats import MetricSummary, RunSummary, Sample, summarize, summarize_metric
from fire_maze.types import (
    Algorithm,
    Cell,
    InvalidDimensionError,
    OutOfBoundsError,
    Phase,
    SearchResult,
)

__all__ = [
    "Algorithm",
    "Cascade",
    "Cell",
    "Clock",
    "DEFAULT_CASCADE_DELAY",
    "DEFAULT_CASCADE_INTERVAL",
    "DEFAULT_WALL_LIFESPAN",
    "GAME_SPEEDS",
    "Grid",
    "InvalidDimensionError",
    "MAZE_SIZES",
    "MazeBuilder",
    "MetricSummary",
    "OutOfBoundsError",
    "PathShape",
    "Phase",
    "PhaseGuards",
    "PhaseMachine",
    "RunConfig",
    "RunSummary",
    "Sample",
    "SearchResult",
    "Signal",
    "SignalBus",
    "SimulationScheduler",
    "Tile",
    "age_walls",
    "astar",
    "bfs",
    "classify_path",
    "crumble_lowest",
    "dfs",
    "find",
    "generate",
    "make_phase_system",
    "move_wall",
    "place_wall",
    "run_transitions",
    "shuffle",
    "summarize",
    "summarize_metric",
    "validate_dimensions",
]
