# Board geometry: cells, direction vectors, bounds and neighbor queries.
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

Cell = tuple[int, int]
Direction = tuple[int, int]

LEFT: Direction = (-1, 0)
RIGHT: Direction = (1, 0)
UP: Direction = (0, -1)
DOWN: Direction = (0, 1)

# Enumeration order doubles as the tie-break for search and fallback moves.
NEIGHBOR_ORDER: tuple[Direction, ...] = (LEFT, RIGHT, UP, DOWN)

DIRECTION_NAMES: dict[str, Direction] = {
    "left": LEFT,
    "right": RIGHT,
    "up": UP,
    "down": DOWN,
}


def add(cell: Cell, direction: Direction) -> Cell:
    return cell[0] + direction[0], cell[1] + direction[1]


def manhattan(a: Cell, b: Cell) -> int:
    return abs(a[0] - b[0]) + abs(a[1] - b[1])


def is_unit_direction(direction: Direction) -> bool:
    return tuple(direction) in NEIGHBOR_ORDER


@dataclass(frozen=True)
class GridTopology:
    """Square N x N board with a fixed left/right/up/down neighbor order."""
    size: int

    @property
    def area(self) -> int:
        return self.size * self.size

    def in_bounds(self, cell: Cell) -> bool:
        x, y = cell
        return 0 <= x < self.size and 0 <= y < self.size

    def neighbors(self, cell: Cell, occupied: Iterable[Cell] = ()) -> list[Cell]:
        """Adjacent in-bounds cells not in *occupied*, always in NEIGHBOR_ORDER."""
        blocked = occupied if isinstance(occupied, (set, frozenset)) else set(occupied)
        result: list[Cell] = []
        for direction in NEIGHBOR_ORDER:
            nxt = add(cell, direction)
            if self.in_bounds(nxt) and nxt not in blocked:
                result.append(nxt)
        return result
