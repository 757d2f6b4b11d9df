import logging
import math
import random
import threading
from concurrent.futures import ThreadPoolExecutor

from mc2048.board import Direction
from mc2048.config import DEFAULT_DEPTH, worker_count
from mc2048.errors import NoValidMove
from mc2048.game import Game
from mc2048.rollout import rollout_total

logger = logging.getLogger(__name__)


def rollouts_per_worker(depth: int, moves: int, workers: int) -> int:
    """Rollouts each (move, worker) task plays: ceil(depth / (moves * workers))."""
    if depth < 1:
        raise ValueError(f"depth must be at least 1, got {depth}")
    return math.ceil(depth / (moves * workers))


def score_moves(
    game: Game,
    depth: int = DEFAULT_DEPTH,
    workers: int | None = None,
    rng: random.Random | None = None,
) -> dict[Direction, int]:
    """
    Run the rollouts for every legal move and return the summed scores.

    Blocks until all rollouts are done. `rng`, if given, only seeds the
    per-task generators.
    """

    moves = game.legal_moves()
    if not moves:
        raise NoValidMove()

    threads = worker_count(workers)
    per_worker = rollouts_per_worker(depth, len(moves), threads)
    seeder = rng if rng is not None else random.Random()
    board = game.board

    totals = {move: 0 for move in moves}
    lock = threading.Lock()

    def work(move: Direction, seed: int):
        partial = rollout_total(board, move, per_worker, random.Random(seed))
        with lock:
            totals[move] += partial

    logger.debug(
        "searching %d moves with %d threads, %d rollouts each",
        len(moves),
        threads,
        per_worker,
    )
    with ThreadPoolExecutor(max_workers=threads) as pool:
        futures = [
            pool.submit(work, move, seeder.getrandbits(64))
            for move in moves
            for _ in range(threads)
        ]
        for future in futures:
            # re-raise anything that went wrong inside a worker
            future.result()

    logger.debug("rollout totals: %s", {m.name: s for m, s in totals.items()})
    return totals


def best_of(totals: dict[Direction, int]) -> Direction:
    """Highest total; ties go to the earliest direction in Direction order."""
    best = None
    for move in Direction:
        if move not in totals:
            continue
        if best is None or totals[move] > totals[best]:
            best = move
    if best is None:
        raise NoValidMove()
    return best


def find_best_move(
    game: Game,
    depth: int = DEFAULT_DEPTH,
    workers: int | None = None,
    rng: random.Random | None = None,
) -> Direction:
    """
    Pick the move with the highest expected final score.

    `depth` is the total number of random games to play; it is rounded up to
    a multiple of (legal moves x workers). Raises NoValidMove when the game
    is over. With a single legal move no rollouts are played.
    """

    if depth < 1:
        raise ValueError(f"depth must be at least 1, got {depth}")
    moves = game.legal_moves()
    if not moves:
        raise NoValidMove()
    if len(moves) == 1:
        return moves[0]

    best = best_of(score_moves(game, depth, workers, rng))
    logger.debug("best move: %s", best.name)
    return best
