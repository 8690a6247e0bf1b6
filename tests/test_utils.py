"""Tests for utils.py - headless episodes and score statistics."""

import threading

import numpy as np
import pytest

from utils import EpisodeResult, make_game, run_episode, score_trend, summarize_scores


class TestMakeGame:
    """Tests for make_game."""

    def test_centred_snake_and_spawned_food(self):
        game = make_game(grid_size=10, seed=5)
        assert game.get_snake() == [(5, 5), (4, 5)]
        assert game.get_food() not in game.get_snake()
        assert game.config.autopilot is True

    def test_same_seed_same_food(self):
        assert make_game(grid_size=12, seed=9).get_food() == make_game(grid_size=12, seed=9).get_food()

    def test_rejects_tiny_board(self):
        with pytest.raises(ValueError):
            make_game(grid_size=3)


class TestRunEpisode:
    """Tests for run_episode."""

    def test_board_stays_consistent_every_tick(self):
        """Cells stay distinct, in bounds, and length tracks score."""
        game = make_game(grid_size=8, seed=3)
        initial_length = len(game.snake)
        seen = []

        def check(g, step):
            body = g.get_snake()
            assert len(set(body)) == len(body)
            assert all(g.grid.in_bounds(cell) for cell in body)
            assert len(body) == initial_length + g.get_score()
            if g.get_food() is not None:
                assert g.get_food() not in body
            seen.append(step)

        result = run_episode(game, max_ticks=2_000, on_tick=check)
        assert isinstance(result, EpisodeResult)
        assert seen == list(range(len(seen)))
        assert result.length == initial_length + result.score
        assert result.ticks <= 2_000

    def test_repeat_runs_match(self):
        """run_episode resets the game, so a seeded game replays exactly."""
        game = make_game(grid_size=8, seed=21)
        assert run_episode(game, max_ticks=500) == run_episode(game, max_ticks=500)

    def test_tick_limit(self):
        game = make_game(grid_size=10, seed=1)
        result = run_episode(game, max_ticks=3)
        assert result.ticks <= 3

    def test_stop_flag(self):
        flag = threading.Event()
        flag.set()
        result = run_episode(make_game(grid_size=10, seed=1), stop_flag=flag)
        assert result.ticks == 0
        assert result.end_reason is None

    def test_rejects_non_positive_limit(self):
        with pytest.raises(ValueError):
            run_episode(make_game(grid_size=10), max_ticks=0)


class TestStatistics:
    """Tests for score summaries."""

    def test_summarize_scores(self):
        stats = summarize_scores([1, 2, 3, 4])
        assert stats["mean"] == pytest.approx(2.5)
        assert stats["median"] == pytest.approx(2.5)
        assert stats["max"] == 4
        assert stats["min"] == 1
        assert stats["p25"] == pytest.approx(1.75)
        assert stats["p75"] == pytest.approx(3.25)

    def test_summarize_empty_rejected(self):
        with pytest.raises(ValueError):
            summarize_scores([])

    def test_score_trend(self):
        """The last, shorter window is averaged over its own length."""
        x_end, means = score_trend([1, 2, 3, 4, 5], window=2)
        np.testing.assert_allclose(x_end, [2, 4, 5])
        np.testing.assert_allclose(means, [1.5, 3.5, 5])

    def test_score_trend_empty(self):
        x_end, means = score_trend([], window=10)
        assert x_end.size == 0 and means.size == 0

    def test_score_trend_bad_window(self):
        with pytest.raises(ValueError):
            score_trend([1.0], window=0)
