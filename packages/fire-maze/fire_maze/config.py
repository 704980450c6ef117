"""Run configuration, presets and defaults."""
from __future__ import annotations

from dataclasses import dataclass

from fire_maze.types import Algorithm

DEFAULT_WALL_LIFESPAN = 10
"""Ticks a placed wall survives before it crumbles."""

DEFAULT_CASCADE_DELAY = 0.5
"""Seconds between the fire reaching the target and the first cascade ring."""

DEFAULT_CASCADE_INTERVAL = 0.1
"""Seconds between cascade rings."""

MAZE_SIZES: dict[str, int] = {"small": 13, "medium": 25, "large": 37}
"""Square maze side length per size preset."""

GAME_SPEEDS: dict[str, float] = {"slow": 0.8, "fast": 0.4, "turbo": 0.1}
"""Tick interval in seconds per speed preset."""


@dataclass(frozen=True)
class RunConfig:
    """Parameters of one run.

    Maze dimensions are validated by the maze builder when the run starts,
    not here.
    """

    width: int
    height: int
    wall_lifespan: int = DEFAULT_WALL_LIFESPAN
    tick_interval: float = GAME_SPEEDS["slow"]
    algorithm: Algorithm = Algorithm.BFS
    seed: int | None = None
    cascade_delay: float = DEFAULT_CASCADE_DELAY
    cascade_interval: float = DEFAULT_CASCADE_INTERVAL

    def __post_init__(self) -> None:
        object.__setattr__(self, "algorithm", Algorithm.parse(self.algorithm))
        if self.wall_lifespan < 1:
            raise ValueError(f"wall_lifespan must be at least 1, got {self.wall_lifespan}")
        if self.tick_interval <= 0:
            raise ValueError("tick_interval must be positive")
        if self.cascade_delay < 0:
            raise ValueError("cascade_delay must not be negative")
        if self.cascade_interval < 0:
            raise ValueError("cascade_interval must not be negative")

    @classmethod
    def from_presets(
        cls,
        size: str = "small",
        speed: str = "slow",
        algorithm: Algorithm | str = Algorithm.BFS,
        wall_lifespan: int = DEFAULT_WALL_LIFESPAN,
        seed: int | None = None,
    ) -> RunConfig:
        if size not in MAZE_SIZES:
            raise ValueError(f"Unknown maze size {size!r}; expected one of {sorted(MAZE_SIZES)}")
        if speed not in GAME_SPEEDS:
            raise ValueError(f"Unknown game speed {speed!r}; expected one of {sorted(GAME_SPEEDS)}")
        side = MAZE_SIZES[size]
        return cls(
            width=side,
            height=side,
            wall_lifespan=wall_lifespan,
            tick_interval=GAME_SPEEDS[speed],
            algorithm=Algorithm.parse(algorithm),
            seed=seed,
        )
