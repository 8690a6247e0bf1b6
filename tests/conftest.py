import pytest

from game_logic import SnakeConfig, SnakeGame
from grid_topology import GridTopology


@pytest.fixture
def grid5():
    return GridTopology(5)


@pytest.fixture
def build_game():
    """Factory for small hand-built boards."""
    def _build(snake, food, direction=(1, 0), size=5, autopilot=True, seed=7, selector=None):
        config = SnakeConfig(
            grid_size=size,
            initial_snake=tuple(snake),
            initial_direction=direction,
            initial_food=food,
            autopilot=autopilot,
            seed=seed,
        )
        return SnakeGame(config, selector=selector)

    return _build
