import logging
import os
import random
from collections import Counter
from dataclasses import dataclass, field

import matplotlib.pyplot as plt
import numpy as np
from tqdm import tqdm

from mc2048.board import Board, Direction, max_tile
from mc2048.config import DEFAULT_DEPTH, DEFAULT_SIZE
from mc2048.game import Game
from mc2048.search import find_best_move

logger = logging.getLogger(__name__)


@dataclass
class GameRecord:
    states: list[Board] = field(default_factory=list)
    moves: list[Direction] = field(default_factory=list)
    scores: list[int] = field(default_factory=list)
    score: int = 0
    max_tile: int = 0
    won: bool = False


def play_game(
    size: int = DEFAULT_SIZE,
    depth: int = DEFAULT_DEPTH,
    workers: int | None = None,
    rng: random.Random | None = None,
    max_moves: int | None = None,
) -> GameRecord:
    """Play one game with the Monte Carlo agent, keeping every position."""

    game = Game(size, rng)
    record = GameRecord(states=[game.board], scores=[game.score])
    while not game.is_terminal():
        if max_moves is not None and len(record.moves) >= max_moves:
            break
        move = find_best_move(game, depth, workers, rng)
        game.apply_move(move)
        record.moves.append(move)
        record.states.append(game.board)
        record.scores.append(game.score)

    record.score = game.score
    record.max_tile = max_tile(game.board)
    record.won = game.is_won()
    logger.info(
        "game finished after %d moves: score %d, max tile %d",
        len(record.moves),
        record.score,
        record.max_tile,
    )
    return record


def run_benchmark(
    games: int,
    size: int = DEFAULT_SIZE,
    depth: int = DEFAULT_DEPTH,
    workers: int | None = None,
    seed: int | None = None,
    progress: bool = True,
    max_moves: int | None = None,
) -> list[GameRecord]:
    rng = random.Random(seed)
    records = []
    for _ in tqdm(range(games), desc="games", disable=not progress):
        records.append(play_game(size, depth, workers, rng, max_moves))
    return records


def summarize(records: list[GameRecord]) -> dict[str, float | int | dict[int, int]]:
    if not records:
        raise ValueError("no games to summarize")
    scores = np.array([r.score for r in records])
    lengths = np.array([len(r.moves) for r in records])
    return {
        "games": len(records),
        "mean_score": float(np.mean(scores)),
        "median_score": float(np.median(scores)),
        "best_score": int(np.max(scores)),
        "mean_moves": float(np.mean(lengths)),
        "win_rate": sum(r.won for r in records) / len(records),
        "max_tiles": dict(sorted(Counter(r.max_tile for r in records).items())),
    }


def plot_records(records: list[GameRecord], path: str):
    """Save a score histogram and a max-tile bar chart to `path`."""

    out_dir = os.path.dirname(path)
    if out_dir and not os.path.exists(out_dir):
        os.makedirs(out_dir, exist_ok=True)

    fig, (ax_hist, ax_tiles) = plt.subplots(1, 2, figsize=(10, 4))

    scores = np.array([r.score for r in records])
    ax_hist.hist(scores, bins=min(20, max(1, len(records))), color="#1f77b4")
    ax_hist.axvline(
        float(np.mean(scores)), color="red", linestyle="--", linewidth=1, label="mean"
    )
    ax_hist.set_title("Final score distribution")
    ax_hist.set_xlabel("score")
    ax_hist.set_ylabel("count")
    ax_hist.legend(loc="upper right", fontsize=8)

    tiles = Counter(r.max_tile for r in records)
    labels = sorted(tiles)
    ax_tiles.bar([str(t) for t in labels], [tiles[t] for t in labels], color="#ff7f0e")
    ax_tiles.set_title("Highest tile reached")
    ax_tiles.set_xlabel("tile")
    ax_tiles.set_ylabel("games")

    plt.tight_layout()
    fig.savefig(path)
    plt.close(fig)
