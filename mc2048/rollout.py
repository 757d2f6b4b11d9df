import random

from mc2048.board import Board, Direction
from mc2048.game import Game


def playout(board: Board, first_move: Direction, rng: random.Random) -> Game:
    """
    Play a random game to the end, starting with `first_move`, and return
    the finished game.

    The board is copied, so playouts can run side by side as long as each
    one has its own `rng`.
    """

    game = Game._from_trusted(board, rng)
    game.apply_move(first_move)
    while not game.is_terminal():
        game.apply_move(rng.choice(game.legal_moves()))
    return game


def rollout(board: Board, first_move: Direction, rng: random.Random) -> int:
    """Final score of one random playout."""
    return playout(board, first_move, rng).score


def rollout_total(
    board: Board, first_move: Direction, count: int, rng: random.Random
) -> int:
    """Sum of `count` independent rollouts."""
    total = 0
    for _ in range(count):
        total += rollout(board, first_move, rng)
    return total
