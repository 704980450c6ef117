"""Fire Maze - interactive burning-maze demo with pygame."""
from __future__ import annotations

import logging
import sys

import pygame

from fire_maze import (
    GAME_SPEEDS,
    MAZE_SIZES,
    Algorithm,
    Cell,
    PathShape,
    Phase,
    RunConfig,
    SimulationScheduler,
    classify_path,
)

GRID_PX = 740
SIDEBAR_W = 220
STATUS_H = 32
SCREEN_W = GRID_PX + SIDEBAR_W
SCREEN_H = GRID_PX + STATUS_H
FPS = 60

COLORS = {
    "background": (20, 20, 30),
    "wall": (70, 70, 80),
    "locked": (150, 110, 60),
    "floor": (205, 200, 185),
    "burned": (60, 40, 35),
    "target": (80, 170, 90),
    "fire": (240, 110, 30),
    "path": (220, 60, 60),
    "selected": (90, 160, 255),
    "sidebar": (25, 25, 35),
    "text": (200, 200, 200),
}

# Arms drawn from a path cell's centre; "up" is +y in maze coordinates.
_ARMS: dict[PathShape, tuple[str, ...]] = {
    PathShape.SINGLE: (),
    PathShape.END_LEFT: ("left",),
    PathShape.END_DOWN: ("down",),
    PathShape.END_RIGHT: ("right",),
    PathShape.END_UP: ("up",),
    PathShape.HORIZONTAL: ("left", "right"),
    PathShape.VERTICAL: ("down", "up"),
    PathShape.CORNER_DOWN_LEFT: ("down", "left"),
    PathShape.CORNER_DOWN_RIGHT: ("down", "right"),
    PathShape.CORNER_UP_LEFT: ("up", "left"),
    PathShape.CORNER_UP_RIGHT: ("up", "right"),
}

_SCREEN_DIRS = {"left": (-1, 0), "right": (1, 0), "up": (0, -1), "down": (0, 1)}

ALGORITHM_KEYS = {pygame.K_1: Algorithm.BFS, pygame.K_2: Algorithm.DFS, pygame.K_3: Algorithm.ASTAR}
SIZE_KEYS = {pygame.K_s: "small", pygame.K_m: "medium", pygame.K_l: "large"}
SPEED_KEYS = {pygame.K_q: "slow", pygame.K_w: "fast", pygame.K_e: "turbo"}


class StatusBar:
    """Displays messages at the bottom of the screen."""

    def __init__(self) -> None:
        self._message = ""
        self._color = COLORS["text"]

    def set(self, message: str, color: tuple[int, int, int] = COLORS["text"]) -> None:
        self._message = message
        self._color = color

    def draw(self, surface: pygame.Surface, font: pygame.font.Font) -> None:
        bar_rect = pygame.Rect(0, GRID_PX, SCREEN_W, STATUS_H)
        pygame.draw.rect(surface, (30, 30, 40), bar_rect)
        if self._message:
            surface.blit(font.render(self._message, True, self._color), (8, GRID_PX + 8))


class GameState:
    """Holds the scheduler, the current settings and the wall being dragged."""

    def __init__(self) -> None:
        self.scheduler = SimulationScheduler()
        self.status = StatusBar()
        self.size = "small"
        self.speed = "slow"
        self.algorithm = Algorithm.BFS
        self.selected: Cell | None = None
        self.summary_lines: list[str] = []

        bus = self.scheduler.bus
        bus.subscribe("walls_crumbled", self._on_crumbled)
        bus.subscribe("phase_changed", self._on_phase)
        bus.subscribe("run_summarized", self._on_summary)

    @property
    def tile_size(self) -> int:
        grid = self.scheduler.grid
        return GRID_PX // grid.width if grid is not None else GRID_PX

    def restart(self) -> None:
        config = RunConfig.from_presets(self.size, self.speed, self.algorithm)
        self.selected = None
        self.summary_lines = []
        self.scheduler.start(config)
        self.status.set(f"Seed {self.scheduler.seed}: {self.size} / {self.speed} / {self.algorithm.value}")

    def to_cell(self, pos: tuple[int, int]) -> Cell | None:
        grid = self.scheduler.grid
        if grid is None:
            return None
        ts = self.tile_size
        x, row = pos[0] // ts, pos[1] // ts
        y = grid.height - 1 - row
        if grid.in_bounds(x, y):
            return Cell(x, y)
        return None

    def click(self, cell: Cell, button: int) -> None:
        sched = self.scheduler
        if sched.phase is not Phase.RUNNING:
            return
        tile = sched.grid.tile_at(cell)
        if button == 3:
            if sched.place_wall(cell.x, cell.y):
                self.status.set(f"Locked wall at ({cell.x}, {cell.y})", (100, 255, 100))
            else:
                self.status.set("Only unplaced walls can be locked", (255, 80, 80))
            return
        if self.selected is None:
            if tile.is_unplaced_wall:
                self.selected = cell
                self.status.set(f"Picked up wall at ({cell.x}, {cell.y})")
            return
        if sched.move_wall(self.selected, cell):
            self.status.set(f"Moved wall to ({cell.x}, {cell.y})", (100, 255, 100))
        else:
            self.status.set("Walls can only be dropped on open floor", (255, 80, 80))
        self.selected = None

    def _on_crumbled(self, signal_name: str, data: dict) -> None:
        if data["forced"]:
            self.status.set(f"Fire trapped: {len(data['cells'])} wall(s) collapsed", (255, 180, 80))
        if self.selected in data["cells"]:
            self.selected = None

    def _on_phase(self, signal_name: str, data: dict) -> None:
        if data["new"] is Phase.CASCADING:
            self.selected = None
            self.status.set("The fire reached the target!", (255, 180, 80))

    def _on_summary(self, signal_name: str, data: dict) -> None:
        summary = data["summary"]
        self.summary_lines = [
            f"steps        {summary.steps}",
            f"samples      {summary.samples}",
            f"path median  {summary.path_length.median}",
            f"path IQR     {summary.path_length.iqr}",
            f"checked med. {summary.tiles_checked.median}",
            f"checked IQR  {summary.tiles_checked.iqr}",
            f"ms median    {summary.calculation_ms.median:.3f}",
        ]
        self.status.set("Run complete - press R to play again", (100, 255, 100))


def draw_grid(surface: pygame.Surface, state: GameState) -> None:
    grid = state.scheduler.grid
    if grid is None:
        return
    ts = state.tile_size
    counter_font = pygame.font.SysFont("monospace", ts // 2) if ts >= 16 else None
    for cell in grid.cells():
        tile = grid.tile_at(cell)
        if tile.fire:
            color = COLORS["fire"]
        elif tile.target:
            color = COLORS["target"]
        elif tile.burned:
            color = COLORS["burned"]
        elif tile.locked:
            color = COLORS["locked"]
        elif tile.floor:
            color = COLORS["floor"]
        else:
            color = COLORS["wall"]
        rect = pygame.Rect(cell.x * ts, (grid.height - 1 - cell.y) * ts, ts, ts)
        pygame.draw.rect(surface, color, rect)
        if tile.locked and counter_font is not None:
            label = counter_font.render(str(tile.counter), True, (20, 20, 20))
            surface.blit(label, label.get_rect(center=rect.center))
    if state.selected is not None:
        rect = pygame.Rect(
            state.selected.x * ts, (grid.height - 1 - state.selected.y) * ts, ts, ts,
        )
        pygame.draw.rect(surface, COLORS["selected"], rect, 3)


def draw_path(surface: pygame.Surface, state: GameState) -> None:
    grid = state.scheduler.grid
    path = state.scheduler.path
    if grid is None or not path:
        return
    if grid.fire is not None and path[0] != grid.fire:
        path = [grid.fire] + path
    ts = state.tile_size
    half = ts // 2
    for cell, shape in zip(path, classify_path(path)):
        cx = cell.x * ts + half
        cy = (grid.height - 1 - cell.y) * ts + half
        for arm in _ARMS[shape]:
            dx, dy = _SCREEN_DIRS[arm]
            pygame.draw.line(surface, COLORS["path"], (cx, cy), (cx + dx * half, cy + dy * half), 3)
        pygame.draw.circle(surface, COLORS["path"], (cx, cy), max(2, ts // 8))


def draw_sidebar(surface: pygame.Surface, font: pygame.font.Font, state: GameState) -> None:
    pygame.draw.rect(surface, COLORS["sidebar"], pygame.Rect(GRID_PX, 0, SIDEBAR_W, GRID_PX))
    sched = state.scheduler
    lines = [
        f"phase   {sched.phase.value}",
        f"tick    {sched.tick_number}",
        f"steps   {sched.steps}",
        "",
        f"[1-3] algo  {state.algorithm.value}",
        f"[S/M/L] size {state.size} ({MAZE_SIZES[state.size]})",
        f"[Q/W/E] speed {state.speed} ({GAME_SPEEDS[state.speed]}s)",
        "[R] start / restart",
        "",
        "L-click: pick up wall,",
        "  then drop on floor",
        "R-click: lock wall",
        "",
    ] + state.summary_lines
    for i, line in enumerate(lines):
        surface.blit(font.render(line, True, COLORS["text"]), (GRID_PX + 10, 10 + i * 20))


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(name)s %(levelname)s %(message)s")
    pygame.init()
    screen = pygame.display.set_mode((SCREEN_W, SCREEN_H))
    pygame.display.set_caption("Fire Maze")
    clock = pygame.time.Clock()
    font = pygame.font.SysFont("monospace", 14)

    state = GameState()
    state.status.set("Press R to start")

    # Tick accumulator paced by the scheduler's next_delay
    accumulator = 0.0

    running = True
    while running:
        dt = clock.tick(FPS) / 1000.0
        accumulator += dt

        # --- Events ---
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False

            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    running = False
                elif event.key == pygame.K_r:
                    state.restart()
                    accumulator = 0.0
                elif event.key in ALGORITHM_KEYS:
                    state.algorithm = ALGORITHM_KEYS[event.key]
                    state.status.set(f"Algorithm: {state.algorithm.value} (applies on restart)")
                elif event.key in SIZE_KEYS:
                    state.size = SIZE_KEYS[event.key]
                    state.status.set(f"Size: {state.size} (applies on restart)")
                elif event.key in SPEED_KEYS:
                    state.speed = SPEED_KEYS[event.key]
                    state.status.set(f"Speed: {state.speed} (applies on restart)")

            elif event.type == pygame.MOUSEBUTTONDOWN and event.button in (1, 3):
                cell = state.to_cell(event.pos)
                if cell is not None:
                    state.click(cell, event.button)

        # --- Tick the scheduler at its own pace ---
        delay = state.scheduler.next_delay
        if delay is None:
            accumulator = 0.0
        while delay is not None and accumulator >= delay:
            state.scheduler.tick()
            accumulator -= delay
            delay = state.scheduler.next_delay

        # --- Render ---
        screen.fill(COLORS["background"])
        draw_grid(screen, state)
        draw_path(screen, state)
        draw_sidebar(screen, font, state)
        state.status.draw(screen, font)

        pygame.display.flip()

    pygame.quit()
    sys.exit()


if __name__ == "__main__":
    main()
