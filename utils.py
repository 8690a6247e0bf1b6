# Shared headless helpers: game factory, episode driver and score statistics.
from __future__ import annotations

from dataclasses import dataclass, replace
import threading
from typing import Callable

import numpy as np

try:
    from .game_logic import SnakeConfig, SnakeGame
except ImportError:
    from game_logic import SnakeConfig, SnakeGame


MIN_HEADLESS_GRID_SIZE = 4


@dataclass
class EpisodeResult:
    score: int
    length: int
    ticks: int
    end_reason: str | None
    won: bool


def make_game(grid_size: int = 20, seed: int | None = None, autopilot: bool = True) -> SnakeGame:
    """Centred two-cell snake heading right, food placed by the seeded spawner."""
    if grid_size < MIN_HEADLESS_GRID_SIZE:
        raise ValueError(f"grid_size must be >= {MIN_HEADLESS_GRID_SIZE}")

    cfg = SnakeConfig.centered(grid_size, autopilot=autopilot, seed=seed)
    game = SnakeGame(cfg)
    food = game.spawner.spawn(game.snake)
    game.reset(replace(cfg, initial_food=food))
    return game


def run_episode(
    game: SnakeGame,
    max_ticks: int = 10_000,
    on_tick: Callable[[SnakeGame, int], None] | None = None,
    stop_flag: threading.Event | None = None,
) -> EpisodeResult:
    """Reset *game* and tick it until it ends, *max_ticks* pass, or *stop_flag* is set."""
    if max_ticks <= 0:
        raise ValueError("max_ticks must be > 0")

    game.reset()
    for step in range(max_ticks):
        if stop_flag and stop_flag.is_set():
            break
        alive = game.tick()
        if on_tick is not None:
            on_tick(game, step)
        if not alive:
            break

    return EpisodeResult(
        score=game.score,
        length=len(game.snake),
        ticks=game.ticks,
        end_reason=game.end_reason,
        won=game.won,
    )


def summarize_scores(scores: list[float]) -> dict[str, float]:
    """Mean/median/max/min/std and quartiles of a non-empty score list."""
    if not scores:
        raise ValueError("scores cannot be empty")

    arr = np.asarray(scores, dtype=np.float32)
    return {
        "mean": float(arr.mean()),
        "median": float(np.median(arr)),
        "max": float(arr.max()),
        "min": float(arr.min()),
        "std": float(arr.std()),
        "p25": float(np.percentile(arr, 25)),
        "p75": float(np.percentile(arr, 75)),
    }


def score_trend(scores: list[float], window: int = 10) -> tuple[np.ndarray, np.ndarray]:
    """Episode number closing each window of *window* games, and that window's mean score."""
    if window <= 0:
        raise ValueError("window must be > 0")

    arr = np.asarray(scores, dtype=np.float32)
    if arr.size == 0:
        return np.zeros(0, dtype=np.int64), np.zeros(0, dtype=np.float32)

    starts = np.arange(0, arr.size, window)
    ends = np.minimum(starts + window, arr.size)
    means = np.add.reduceat(arr, starts) / (ends - starts)
    return ends, means.astype(np.float32)
