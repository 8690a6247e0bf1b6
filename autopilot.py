# Greedy move policy: shortest path to food, then local-safety fallbacks.
from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Sequence

try:
    from .grid_topology import Cell, Direction, GridTopology, add
    from .pathfinding import find_path
except ImportError:
    from grid_topology import Cell, Direction, GridTopology, add
    from pathfinding import find_path


logger = logging.getLogger(__name__)

STRATEGY_PATH = "path"
STRATEGY_CONTINUE = "continue"
STRATEGY_FIRST_SAFE = "first_safe"
STRATEGY_NO_LEGAL_MOVE = "no_legal_move"


@dataclass(frozen=True)
class MoveDecision:
    """Next head cell plus the rule that produced it (cell is None on loss)."""
    cell: Cell | None
    strategy: str

    @property
    def is_loss(self) -> bool:
        return self.cell is None


def select_move(
    head: Cell,
    food: Cell,
    body: Sequence[Cell],
    last_direction: Direction,
    grid: GridTopology,
) -> MoveDecision:
    """
    Pick the next head cell.

    1. First step of the BFS path to food, when one exists.
    2. Otherwise keep going in *last_direction* if that cell is free.
    3. Otherwise the first free neighbor in left/right/up/down order.
    4. Otherwise loss.

    The policy never looks further ahead than the current board, so it will
    happily walk into a pocket it cannot leave if food is at the end of it.
    """
    occupied = set(body)

    path = find_path(head, food, occupied, grid)
    if path is not None and len(path) >= 2:
        return MoveDecision(path[1], STRATEGY_PATH)

    safe = grid.neighbors(head, occupied)
    ahead = add(head, last_direction)
    if ahead in safe:
        logger.debug("Food %s unreachable from %s; continuing to %s", food, head, ahead)
        return MoveDecision(ahead, STRATEGY_CONTINUE)

    if safe:
        logger.debug("Food %s unreachable from %s; turning to %s", food, head, safe[0])
        return MoveDecision(safe[0], STRATEGY_FIRST_SAFE)

    logger.debug("No legal move from %s", head)
    return MoveDecision(None, STRATEGY_NO_LEGAL_MOVE)
