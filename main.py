import argparse
import logging

from mc2048.benchmark import plot_records, run_benchmark, summarize
from mc2048.config import DEFAULT_SIZE, QUICK_DEPTH, SearchConfig


def parse_args() -> argparse.Namespace:
    env = SearchConfig.from_env(default_depth=QUICK_DEPTH)
    parser = argparse.ArgumentParser(description="Play 2048 with the Monte Carlo agent")
    parser.add_argument("--games", type=int, default=3, help="Number of games to play")
    parser.add_argument("--size", type=int, default=DEFAULT_SIZE, help="Board side")
    parser.add_argument(
        "--depth",
        type=int,
        default=env.depth,
        help="Random games played per move decision. Each one is a full playout "
        "(a few ms), so a 4x4 game at depth 1000 takes several seconds per move",
    )
    parser.add_argument(
        "--workers", type=int, default=env.workers, help="Search threads (default: CPUs)"
    )
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument("--plot", type=str, default=None, help="Save a summary PNG here")
    parser.add_argument("--log-level", type=str, default="INFO", help="Logging level")
    return parser.parse_args()


if __name__ == "__main__":
    args = parse_args()
    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    config = SearchConfig(depth=args.depth, workers=args.workers)
    print(f"Using {config.threads} search threads, depth {config.depth}")

    records = run_benchmark(
        args.games, args.size, config.depth, config.workers, seed=args.seed
    )
    stats = summarize(records)
    print(f"games: {stats['games']}")
    print(f"mean score: {stats['mean_score']:.1f}")
    print(f"median score: {stats['median_score']:.1f}")
    print(f"best score: {stats['best_score']}")
    print(f"mean moves: {stats['mean_moves']:.1f}")
    print(f"win rate: {stats['win_rate']:.0%}")
    for tile, count in stats["max_tiles"].items():
        print(f"  max tile {tile}: {count}")

    if args.plot:
        plot_records(records, args.plot)
        print(f"Saved plot to {args.plot}")
