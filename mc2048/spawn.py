import random

from mc2048.board import Board, empty_cells
from mc2048.config import SPAWN_TWO_PROBABILITY


def spawn_tile(board: Board, rng: random.Random):
    """
    Put a 2 (90%) or a 4 (10%) on a uniformly chosen empty cell.

    The board must have at least one empty cell.
    """

    places = empty_cells(board)
    assert places, "spawn_tile called on a full board"
    x, y = rng.choice(places)
    num = 2 if rng.random() < SPAWN_TWO_PROBABILITY else 4
    board[x][y] = num
