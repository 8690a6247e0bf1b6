# Core Snake game state and rules, independent from GUI/benchmark code.
from __future__ import annotations

from collections import deque
from dataclasses import dataclass
import logging
import random
from typing import Callable, Sequence

try:
    from .autopilot import MoveDecision, select_move
    from .food import FoodSpawner
    from .grid_topology import (
        DIRECTION_NAMES,
        Cell,
        Direction,
        GridTopology,
        add,
        is_unit_direction,
        manhattan,
    )
except ImportError:
    from autopilot import MoveDecision, select_move
    from food import FoodSpawner
    from grid_topology import (
        DIRECTION_NAMES,
        Cell,
        Direction,
        GridTopology,
        add,
        is_unit_direction,
        manhattan,
    )


logger = logging.getLogger(__name__)

# Bounds used by the GUI when validating user input.
MIN_CELL_SIZE = 12
MAX_CELL_SIZE = 48
MIN_SPEED_MS = 40
MAX_SPEED_MS = 500

# Smallest board the rules themselves can run on.
MIN_BOARD_SIZE = 2

END_NO_LEGAL_MOVE = "no_legal_move"
END_INVALID_MOVE = "invalid_move"
END_WALL = "wall"
END_COLLISION = "collision"
END_BOARD_FULL = "board_full"

MoveSelector = Callable[[Cell, Cell, Sequence[Cell], Direction, GridTopology], MoveDecision]


class ConfigurationError(ValueError):
    """Starting board described by a SnakeConfig is not playable."""


@dataclass
class SnakeConfig:
    """Runtime settings shared between the logic layer and GUI."""
    grid_size: int = 20
    initial_snake: tuple[Cell, ...] = ((10, 10), (9, 10))
    initial_direction: Direction = (1, 0)
    initial_food: Cell = (15, 15)
    speed_ms: int = 100
    cell_size: int = 28
    autopilot: bool = True
    seed: int | None = None

    @classmethod
    def centered(cls, grid_size: int, **overrides) -> SnakeConfig:
        """Two-cell snake heading right from the centre, food toward the far corner."""
        center = grid_size // 2
        far = (3 * grid_size) // 4
        params = {
            "grid_size": grid_size,
            "initial_snake": ((center, center), (center - 1, center)),
            "initial_direction": (1, 0),
            "initial_food": (far, far),
        }
        params.update(overrides)
        return cls(**params)

    @classmethod
    def classic(cls) -> SnakeConfig:
        """Keyboard-driven preset: 15x15 board, single-cell snake, slower ticks."""
        return cls(
            grid_size=15,
            initial_snake=((7, 7),),
            initial_direction=(1, 0),
            initial_food=(5, 5),
            speed_ms=200,
            cell_size=28,
            autopilot=False,
        )


@dataclass(frozen=True)
class GameSnapshot:
    """Read-only copy of the board handed to renderers."""
    snake: tuple[Cell, ...]
    direction: Direction
    food: Cell | None
    score: int
    terminal: bool
    won: bool
    end_reason: str | None
    ticks: int


def _as_cell(value, label: str) -> Cell:
    """Coerce *value* to an (x, y) int pair or raise ConfigurationError."""
    try:
        cell = tuple(value)
    except TypeError:
        raise ConfigurationError(f"{label} {value!r} is not an (x, y) pair.")
    # bool is an int subclass but never a coordinate.
    if len(cell) != 2 or not all(isinstance(c, int) and not isinstance(c, bool) for c in cell):
        raise ConfigurationError(f"{label} {value!r} is not an (x, y) pair of integers.")
    return cell


def validate_config(config: SnakeConfig) -> None:
    """Raise ConfigurationError unless *config* describes a legal starting board."""
    size = config.grid_size
    if not isinstance(size, int) or size < MIN_BOARD_SIZE:
        raise ConfigurationError(f"grid_size must be an integer >= {MIN_BOARD_SIZE}, got {size!r}")
    if config.speed_ms <= 0:
        raise ConfigurationError(f"speed_ms must be > 0, got {config.speed_ms}")

    grid = GridTopology(size)
    snake = [_as_cell(cell, "Snake cell") for cell in config.initial_snake]
    if not snake:
        raise ConfigurationError("initial_snake cannot be empty.")
    for cell in snake:
        if not grid.in_bounds(cell):
            raise ConfigurationError(f"Snake cell {cell} is outside the {size}x{size} board.")
    if len(set(snake)) != len(snake):
        raise ConfigurationError("initial_snake contains repeated cells.")
    for prev, cur in zip(snake, snake[1:]):
        if manhattan(prev, cur) != 1:
            raise ConfigurationError(f"Snake cells {prev} and {cur} are not adjacent.")

    if not is_unit_direction(config.initial_direction):
        raise ConfigurationError(f"initial_direction must be a unit vector, got {config.initial_direction}")

    food = _as_cell(config.initial_food, "Food")
    if not grid.in_bounds(food):
        raise ConfigurationError(f"Food {food} is outside the {size}x{size} board.")
    if food in set(snake):
        raise ConfigurationError(f"Food {food} overlaps the snake.")


class SnakeGame:
    """Pure game state + rules (no Tkinter/UI code)."""
    def __init__(self, config: SnakeConfig | None = None, selector: MoveSelector | None = None) -> None:
        self.config = config if config is not None else SnakeConfig()
        self.selector: MoveSelector = selector if selector is not None else select_move
        self.reset()

    def reset(self, config: SnakeConfig | None = None) -> None:
        """Rebuild the starting board; works mid-game and after game over."""
        cfg = config if config is not None else self.config
        validate_config(cfg)

        self.config = cfg
        self.grid = GridTopology(cfg.grid_size)
        self.spawner = FoodSpawner(self.grid, random.Random(cfg.seed))
        self.snake: deque[Cell] = deque(tuple(cell) for cell in cfg.initial_snake)  # head at index 0
        self.direction: Direction = tuple(cfg.initial_direction)
        self.pending_direction: Direction = self.direction  # manual input, applied next tick
        self.food: Cell | None = tuple(cfg.initial_food)
        self.score = 0
        self.ticks = 0
        self.terminal = False
        self.won = False
        self.end_reason: str | None = None
        self.running = False  # scheduler flag owned by the GUI
        logger.info("New %dx%d game (%s)", cfg.grid_size, cfg.grid_size, "autopilot" if cfg.autopilot else "manual")

    @property
    def head(self) -> Cell:
        return self.snake[0]

    def tick(self) -> bool:
        """Advance one step. Returns False once the game is over."""
        if self.terminal:
            return False

        head = self.snake[0]
        if self.config.autopilot:
            decision = self.selector(head, self.food, tuple(self.snake), self.direction, self.grid)
            if decision.is_loss:
                self._finish(END_NO_LEGAL_MOVE)
                return False
            move = tuple(decision.cell)
        else:
            move = add(head, self.pending_direction)

        growing = move == self.food
        blocked = set(self.snake)
        # The tail leaves its cell this tick unless the snake grows.
        if not growing:
            blocked.discard(self.snake[-1])

        if manhattan(move, head) != 1:
            self._finish(END_INVALID_MOVE)
            return False
        if not self.grid.in_bounds(move):
            self._finish(END_INVALID_MOVE if self.config.autopilot else END_WALL)
            return False
        if move in blocked:
            self._finish(END_INVALID_MOVE if self.config.autopilot else END_COLLISION)
            return False

        self.snake.appendleft(move)
        if growing:
            self.score += 1
            self.food = self.spawner.spawn(self.snake)
        else:
            self.snake.pop()

        self.direction = (move[0] - head[0], move[1] - head[1])
        self.pending_direction = self.direction
        self.ticks += 1

        if self.food is None:
            self.won = True
            self._finish(END_BOARD_FULL)
            return False
        return True

    def _finish(self, reason: str) -> None:
        self.terminal = True
        self.running = False
        self.end_reason = reason
        logger.info("Game ended after %d ticks: %s (score %d)", self.ticks, reason, self.score)

    def queue_direction(self, new_direction: str | Direction) -> None:
        """Queue a manual input direction; reject instant 180-degree turns."""
        if self.config.autopilot:
            return
        if isinstance(new_direction, str):
            vector = DIRECTION_NAMES.get(new_direction)
        else:
            vector = tuple(new_direction) if is_unit_direction(new_direction) else None
        if vector is None:
            return
        reverse = (-self.direction[0], -self.direction[1])
        if len(self.snake) > 1 and vector == reverse:
            return
        self.pending_direction = vector

    def snapshot(self) -> GameSnapshot:
        return GameSnapshot(
            snake=tuple(self.snake),
            direction=self.direction,
            food=self.food,
            score=self.score,
            terminal=self.terminal,
            won=self.won,
            end_reason=self.end_reason,
            ticks=self.ticks,
        )

    def get_snake(self) -> list[Cell]:
        return list(self.snake)

    def get_food(self) -> Cell | None:
        return self.food

    def get_score(self) -> int:
        return self.score

    def is_terminal(self) -> bool:
        return self.terminal
