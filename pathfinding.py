# Breadth-first shortest path search over the snake board.
from __future__ import annotations

from collections import deque
from typing import Iterable

try:
    from .grid_topology import Cell, GridTopology
except ImportError:
    from grid_topology import Cell, GridTopology


def find_path(
    start: Cell,
    goal: Cell,
    occupied: Iterable[Cell],
    grid: GridTopology,
) -> list[Cell] | None:
    """
    Shortest path from *start* to *goal* (both inclusive) avoiding *occupied*.

    Frontier expansion follows GridTopology.neighbors, so among equal-length
    paths the one whose first diverging step comes earliest in the
    left/right/up/down order wins. The goal is enterable even when it sits
    in *occupied*; the start cell is never checked.

    Returns None when the goal cannot be reached.
    """
    blocked = set(occupied)
    blocked.discard(goal)

    parents: dict[Cell, Cell | None] = {start: None}
    frontier: deque[Cell] = deque([start])

    while frontier:
        pos = frontier.popleft()
        if pos == goal:
            return _reconstruct(parents, goal)

        for nxt in grid.neighbors(pos, blocked):
            if nxt in parents:
                continue
            parents[nxt] = pos
            frontier.append(nxt)

    return None


def _reconstruct(parents: dict[Cell, Cell | None], goal: Cell) -> list[Cell]:
    path: list[Cell] = []
    node: Cell | None = goal
    while node is not None:
        path.append(node)
        node = parents[node]
    path.reverse()
    return path
