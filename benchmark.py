"""Run the pathfinding autopilot headlessly and report how it scores."""
from __future__ import annotations

import argparse
from collections import Counter
import logging
import os

# Keep matplotlib cache local for environments without writable home config.
LOCAL_MPLCONFIG = os.path.join(os.path.dirname(os.path.abspath(__file__)), ".mplconfig")
os.makedirs(LOCAL_MPLCONFIG, exist_ok=True)
os.environ.setdefault("MPLCONFIGDIR", LOCAL_MPLCONFIG)

import matplotlib.pyplot as plt
import numpy as np

try:
    from .utils import EpisodeResult, make_game, run_episode, score_trend, summarize_scores
except ImportError:
    from utils import EpisodeResult, make_game, run_episode, score_trend, summarize_scores


logger = logging.getLogger(__name__)


def run_benchmark(
    episodes: int = 100,
    grid_size: int = 20,
    seed: int = 0,
    max_ticks: int = 10_000,
) -> list[EpisodeResult]:
    """Play *episodes* autopilot games, episode i seeded with seed + i."""
    if episodes <= 0:
        raise ValueError("episodes must be > 0")

    results: list[EpisodeResult] = []
    for episode in range(1, episodes + 1):
        if episode % 10 == 0 or episode == episodes:
            print(f"Episode {episode}/{episodes}", end="\r", flush=True)
        game = make_game(grid_size=grid_size, seed=seed + episode - 1)
        result = run_episode(game, max_ticks=max_ticks)
        logger.debug(
            "Episode %d: score=%d ticks=%d reason=%s", episode, result.score, result.ticks, result.end_reason
        )
        results.append(result)
    print()
    return results


def print_report(results: list[EpisodeResult], grid_size: int) -> None:
    scores = [float(r.score) for r in results]
    ticks = [float(r.ticks) for r in results]
    stats = summarize_scores(scores)

    print("=" * 44)
    print(f"AUTOPILOT RESULTS ({grid_size}x{grid_size}, {len(results)} episodes)")
    print("=" * 44)
    print(f"{'Metric':<20} {'Score':>10} {'Ticks':>10}")
    print("-" * 44)
    tick_arr = np.asarray(ticks, dtype=np.float32)
    print(f"{'Mean':<20} {stats['mean']:>10.2f} {float(tick_arr.mean()):>10.1f}")
    print(f"{'Median':<20} {stats['median']:>10.2f} {float(np.median(tick_arr)):>10.1f}")
    print(f"{'Max':<20} {stats['max']:>10.2f} {float(tick_arr.max()):>10.1f}")
    print(f"{'Min':<20} {stats['min']:>10.2f} {float(tick_arr.min()):>10.1f}")
    print(f"{'Std dev':<20} {stats['std']:>10.2f} {float(tick_arr.std()):>10.1f}")
    print(f"{'25th percentile':<20} {stats['p25']:>10.2f}")
    print(f"{'75th percentile':<20} {stats['p75']:>10.2f}")
    print("=" * 44)

    reasons = Counter(r.end_reason or "tick_limit" for r in results)
    for reason, count in reasons.most_common():
        print(f"{reason:<20} {count:>5} ({count / len(results) * 100:.1f}%)")


def plot_scores(scores: list[float], save_path: str | None = None, show: bool = True) -> None:
    """Score trend (mean per 10 episodes) above a score histogram."""
    fig, (ax_trend, ax_hist) = plt.subplots(2, 1, figsize=(10, 8))
    fig.subplots_adjust(hspace=0.35)

    ax_trend.set_title("Score Trend (Average per 10 Episodes)")
    ax_trend.set_xlabel("Episode")
    ax_trend.set_ylabel("Score")
    ax_trend.grid(alpha=0.25)
    x10, mean10 = score_trend(scores, window=10)
    if x10.size > 0:
        ax_trend.plot(x10, mean10, color="#1f77b4", linewidth=2.2, marker="o", markersize=3)

    ax_hist.set_title("Score Distribution")
    ax_hist.set_xlabel("Score")
    ax_hist.set_ylabel("Count")
    ax_hist.grid(alpha=0.2)
    if scores:
        bins = np.arange(-0.5, int(max(scores)) + 1.5, 1.0)
        ax_hist.hist(scores, bins=bins, color="#44b5a4", alpha=0.85, edgecolor="#17323a")
        mean_all = float(np.mean(scores))
        ax_hist.axvline(mean_all, color="#1f77b4", linestyle="--", linewidth=1.6, label=f"Mean: {mean_all:.2f}")
        ax_hist.legend(loc="upper right")

    if save_path:
        fig.savefig(save_path, dpi=120)
        print(f"Saved plot: {save_path}")
    if show:
        plt.show()
    plt.close(fig)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Benchmark the Snake pathfinding autopilot")
    parser.add_argument("--episodes", type=int, default=100, help="Number of games to play")
    parser.add_argument("--grid-size", type=int, default=20, help="Board side length")
    parser.add_argument("--seed", type=int, default=0, help="Food RNG seed of the first episode")
    parser.add_argument("--max-ticks", type=int, default=10_000, help="Tick limit per episode")
    parser.add_argument("--plot", action="store_true", help="Show a matplotlib score plot")
    parser.add_argument("--save-plot", default=None, help="Write the score plot to this path")
    parser.add_argument("--verbose", action="store_true", help="Log every episode and fallback move")
    args = parser.parse_args(argv)

    if args.episodes <= 0:
        parser.error("--episodes must be > 0")
    if args.grid_size < 4:
        parser.error("--grid-size must be >= 4")
    if args.max_ticks <= 0:
        parser.error("--max-ticks must be > 0")
    return args


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    results = run_benchmark(
        episodes=args.episodes,
        grid_size=args.grid_size,
        seed=args.seed,
        max_ticks=args.max_ticks,
    )
    print_report(results, args.grid_size)

    if args.plot or args.save_plot:
        plot_scores([float(r.score) for r in results], save_path=args.save_plot, show=args.plot)


if __name__ == "__main__":
    main()
