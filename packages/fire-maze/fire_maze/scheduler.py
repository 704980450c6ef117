"""SimulationScheduler - the tick loop driving fire, walls and the cascade."""
from __future__ import annotations

import logging
import os
import random
import time
from typing import Callable

from fire_maze.bus import Signal, SignalBus
from fire_maze.cascade import Cascade
from fire_maze.clock import Clock
from fire_maze.config import RunConfig
from fire_maze.decay import age_walls, crumble_lowest, move_wall, place_wall
from fire_maze.fsm import PhaseGuards, PhaseMachine, make_phase_system
from fire_maze.grid import Grid
from fire_maze.maze import MazeBuilder
from fire_maze.pathfind import find
from fire_maze.stats import RunSummary, Sample, summarize
from fire_maze.types import Algorithm, Cell, Phase

logger = logging.getLogger(__name__)


class SimulationScheduler:
    """Owns the grid of the current run and advances it one tick at a time.

    The host calls ``start()`` to begin a run, ``tick()`` at the pace given
    by ``next_delay`` (or hands control to ``run_forever()``), and
    ``place_wall()`` / ``move_wall()`` between ticks. Everything happens on
    the caller's thread; events go out through the signal bus at the end of
    each call.
    """

    def __init__(
        self,
        bus: SignalBus | None = None,
        builder: MazeBuilder | None = None,
    ) -> None:
        self._bus = bus if bus is not None else SignalBus()
        self._builder = builder if builder is not None else MazeBuilder()

        self._machine = PhaseMachine()
        guards = PhaseGuards()
        guards.register("start_requested", lambda s: s._start_requested)
        guards.register("fire_at_target", lambda s: s._fire_at_target())
        guards.register("cascade_done", lambda s: s._cascade is not None and s._cascade.done)
        self._advance_phase = make_phase_system(guards, SimulationScheduler._on_transition)

        self._config: RunConfig | None = None
        self._clock: Clock | None = None
        self._grid: Grid | None = None
        self._seed: int | None = None
        self._path: list[Cell] = []
        self._samples: list[Sample] = []
        self._summary: RunSummary | None = None
        self._cascade: Cascade | None = None
        self._steps = 0
        self._generation = 0
        self._start_requested = False
        self._stop_requested = False

    # --- Read access ---

    @property
    def phase(self) -> Phase:
        return self._machine.state

    @property
    def bus(self) -> SignalBus:
        return self._bus

    @property
    def config(self) -> RunConfig | None:
        return self._config

    @property
    def grid(self) -> Grid | None:
        return self._grid

    @property
    def seed(self) -> int | None:
        return self._seed

    @property
    def path(self) -> list[Cell]:
        return list(self._path)

    @property
    def samples(self) -> list[Sample]:
        return list(self._samples)

    @property
    def summary(self) -> RunSummary | None:
        return self._summary

    @property
    def cascade(self) -> Cascade | None:
        return self._cascade

    @property
    def steps(self) -> int:
        return self._steps

    @property
    def generation(self) -> int:
        """Incremented by every successful ``start()``."""
        return self._generation

    @property
    def tick_number(self) -> int:
        return self._clock.tick_number if self._clock is not None else 0

    @property
    def next_delay(self) -> float | None:
        """Seconds the host should wait before the next tick, None when idle."""
        phase = self._machine.state
        if phase is Phase.RUNNING:
            assert self._clock is not None
            return self._clock.interval
        if phase is Phase.CASCADING:
            assert self._config is not None and self._cascade is not None
            if not self._cascade.started:
                return self._config.cascade_delay
            return self._config.cascade_interval
        return None

    # --- Commands ---

    def start(self, config: RunConfig) -> None:
        """Begin a new run, abandoning any run in progress.

        Raises InvalidDimensionError, leaving the scheduler untouched, if
        the maze size is rejected.
        """
        seed = config.seed
        if seed is None:
            seed = int.from_bytes(os.urandom(8), "big")
        grid = self._builder.generate(config.width, config.height, random.Random(seed))

        self._generation += 1
        self._config = config
        self._seed = seed
        self._grid = grid
        if self._clock is None:
            self._clock = Clock(config.tick_interval)
        else:
            self._clock.reset(interval=config.tick_interval)
        self._path = []
        self._samples = []
        self._summary = None
        self._cascade = None
        self._steps = 0

        self._start_requested = True
        try:
            self._advance_phase(self._machine, self)
        finally:
            self._start_requested = False

        logger.info(
            "run %d started: %dx%d %s lifespan=%d seed=%d",
            self._generation, config.width, config.height,
            config.algorithm.value, config.wall_lifespan, seed,
        )
        # The opening path is for display only; samples come from ticks.
        self._compute_path(record=False)
        self._bus.publish(
            Signal.RUN_STARTED,
            grid=grid,
            fire=grid.fire,
            target=grid.target,
            path=list(self._path),
        )
        self._bus.flush()

    def place_wall(self, x: int, y: int) -> bool:
        """Lock the unplaced wall at (x, y). Silently rejected unless running."""
        if self._machine.state is not Phase.RUNNING:
            return False
        assert self._grid is not None and self._config is not None
        return place_wall(self._grid, Cell(x, y), self._config.wall_lifespan)

    def move_wall(self, source: Cell, destination: Cell) -> bool:
        """Drag an unplaced wall onto an open floor. Silently rejected unless running."""
        if self._machine.state is not Phase.RUNNING:
            return False
        assert self._grid is not None and self._config is not None
        return move_wall(self._grid, source, destination, self._config.wall_lifespan)

    def stop(self) -> None:
        """Ask ``run_forever()`` to return after the current tick."""
        self._stop_requested = True

    # --- Ticking ---

    def tick(self) -> None:
        phase = self._machine.state
        if phase is Phase.RUNNING:
            self._tick_running()
        elif phase is Phase.CASCADING:
            self._tick_cascading()
        else:
            return
        self._advance_phase(self._machine, self)
        self._bus.flush()

    def run(self, n: int) -> int:
        """Tick up to *n* times without pacing. Returns the ticks taken."""
        taken = 0
        for _ in range(n):
            if self.next_delay is None:
                break
            self.tick()
            taken += 1
        return taken

    def run_until_done(self, max_ticks: int = 100_000) -> bool:
        """Tick without pacing until the run is summarized.

        Returns False if *max_ticks* ran out first.
        """
        self.run(max_ticks)
        return self._machine.state is Phase.SUMMARIZED

    def run_forever(self, sleep: Callable[[float], None] = time.sleep) -> None:
        """Tick at the pace of ``next_delay`` until summarized or stopped."""
        self._stop_requested = False
        last = time.monotonic()
        while not self._stop_requested:
            delay = self.next_delay
            if delay is None:
                break
            remaining = delay - (time.monotonic() - last)
            if remaining > 0:
                sleep(remaining)
            self.tick()
            last = time.monotonic()

    # --- Internals ---

    def _fire_at_target(self) -> bool:
        return self._grid is not None and self._grid.fire == self._grid.target

    def _compute_path(self, record: bool = True) -> Sample:
        grid = self._grid
        assert grid is not None and self._config is not None
        assert grid.fire is not None and grid.target is not None
        began = time.perf_counter()
        result = find(self._config.algorithm, grid, grid.fire, grid.target)
        elapsed_ms = (time.perf_counter() - began) * 1000.0
        self._path = result.path
        sample = Sample(elapsed_ms, len(result.path), result.tiles_checked)
        if record:
            self._samples.append(sample)
        logger.debug(
            "path from %s: length=%d checked=%d in %.3fms",
            grid.fire, sample.path_length, sample.tiles_checked, elapsed_ms,
        )
        return sample

    def _can_reuse_path(self) -> bool:
        grid = self._grid
        assert grid is not None and self._config is not None
        if self._config.algorithm is not Algorithm.DFS or not self._path:
            return False
        # The head must be where the fire stands; dropping it then yields the next step.
        if self._path[0] != grid.fire:
            return False
        return all(grid.is_floor(cell) for cell in self._path)

    def _tick_running(self) -> None:
        grid = self._grid
        assert grid is not None and self._clock is not None
        tick_number = self._clock.advance()

        sample: Sample | None = None
        if self._can_reuse_path():
            self._path = self._path[1:]
        else:
            sample = self._compute_path()

        forced = False
        if self._path:
            grid.move_fire(self._path[0])
            self._steps += 1
            crumbled = age_walls(grid)
        else:
            forced = True
            crumbled = crumble_lowest(grid)

        if crumbled:
            self._bus.publish(Signal.WALLS_CRUMBLED, cells=crumbled, forced=forced)
        self._bus.publish(
            Signal.FIRE_ADVANCED,
            tick=tick_number,
            fire=grid.fire,
            path=list(self._path),
            sample=sample,
            crumbled=crumbled,
        )

    def _tick_cascading(self) -> None:
        assert self._cascade is not None and self._clock is not None
        self._clock.advance()
        ring = self._cascade.step()
        if ring:
            self._bus.publish(Signal.CASCADE_RING, ring=ring)

    def _on_transition(self, old: Phase, new: Phase) -> None:
        if new is Phase.CASCADING:
            grid = self._grid
            assert grid is not None and grid.fire is not None
            logger.info("fire reached target after %d steps; cascading", self._steps)
            self._path = []
            self._cascade = Cascade(grid, grid.fire)
        elif new is Phase.SUMMARIZED:
            self._summary = summarize(self._samples, steps=self._steps)
            logger.info(
                "run %d summarized: %d samples, median path %s, median checked %s",
                self._generation, self._summary.samples,
                self._summary.path_length.median, self._summary.tiles_checked.median,
            )
        self._bus.publish(Signal.PHASE_CHANGED, old=old, new=new)
        if new is Phase.SUMMARIZED:
            self._bus.publish(Signal.RUN_SUMMARIZED, summary=self._summary)
