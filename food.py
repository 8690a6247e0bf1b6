# Food placement on free board cells.
from __future__ import annotations

import random
from typing import Iterable

try:
    from .grid_topology import Cell, GridTopology
except ImportError:
    from grid_topology import Cell, GridTopology


class FoodSpawner:
    """Uniform rejection sampler over the board, seeded for reproducible games."""

    def __init__(self, grid: GridTopology, rng: random.Random | None = None) -> None:
        self.grid = grid
        self.rng = rng if rng is not None else random.Random()

    def spawn(self, occupied: Iterable[Cell]) -> Cell | None:
        """Random cell outside *occupied*, or None once the board is full."""
        blocked = {cell for cell in occupied if self.grid.in_bounds(cell)}
        if len(blocked) >= self.grid.area:
            return None

        last = self.grid.size - 1
        while True:
            pos = (self.rng.randint(0, last), self.rng.randint(0, last))
            if pos not in blocked:
                return pos
