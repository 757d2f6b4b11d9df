from dataclasses import dataclass
from enum import Enum
from numbers import Integral

from mc2048.config import MIN_SIZE
from mc2048.errors import InvalidBoard, InvalidSize, InvalidValue


Board = list[list[int]]


class Direction(Enum):
    """
    Slide directions. The order doubles as the tie-break order when two
    directions score the same.
    """

    LEFT = 0
    RIGHT = 1
    UP = 2
    DOWN = 3


@dataclass(frozen=True)
class Transition:
    """What the board would look like after sliding in one direction."""

    board: Board
    score: int
    changed: bool


def slide_line(line: list[int]) -> tuple[list[int], int]:
    """
    Slide a single line towards index 0 and merge equal neighbours.

    Returns the new line and the score gained. A tile produced by a merge
    can't merge again in the same pass.
    """

    tiles = [e for e in line if e != 0]
    result = []
    score = 0
    i = 0
    while i < len(tiles):
        if i + 1 < len(tiles) and tiles[i] == tiles[i + 1]:
            merged = tiles[i] * 2
            result.append(merged)
            score += merged
            i += 2
        else:
            result.append(tiles[i])
            i += 1
    return result + [0] * (len(line) - len(result)), score


def transpose(board: Board) -> Board:
    return [list(row) for row in zip(*board)]


def _slide_rows(board: Board, reverse: bool) -> tuple[Board, int]:
    rows = []
    score = 0
    for row in board:
        if reverse:
            line, gained = slide_line(row[::-1])
            line = line[::-1]
        else:
            line, gained = slide_line(row)
        rows.append(line)
        score += gained
    return rows, score


def transform(board: Board, direction: Direction) -> Transition:
    """Slide the whole board. The input board is left untouched."""

    if direction in (Direction.LEFT, Direction.RIGHT):
        new_board, score = _slide_rows(board, direction is Direction.RIGHT)
    else:
        columns, score = _slide_rows(transpose(board), direction is Direction.DOWN)
        new_board = transpose(columns)
    return Transition(new_board, score, new_board != board)


def all_transitions(board: Board) -> dict[Direction, Transition]:
    return {direction: transform(board, direction) for direction in Direction}


def copy_board(board: Board) -> Board:
    return [row[:] for row in board]


def is_tile_value(value: int) -> bool:
    """0 or a power of two starting from 2."""
    if value == 0:
        return True
    return value >= 2 and value & (value - 1) == 0


def validate_board(board) -> Board:
    """
    Check an externally supplied board and return a private copy of it.

    Raises InvalidSize for fewer than MIN_SIZE rows, InvalidBoard when the
    grid isn't square and InvalidValue for anything that isn't a tile.
    """

    rows = [list(row) for row in board]
    n = len(rows)
    if n < MIN_SIZE:
        raise InvalidSize(n)
    for row in rows:
        if len(row) != n:
            raise InvalidBoard(f"expected {n} columns, got a row of {len(row)}")
    for i, row in enumerate(rows):
        for j, cell in enumerate(row):
            if isinstance(cell, bool) or not isinstance(cell, Integral):
                raise InvalidValue(cell, (i, j))
            if not is_tile_value(int(cell)):
                raise InvalidValue(cell, (i, j))
            row[j] = int(cell)
    return rows


def empty_cells(board: Board) -> list[tuple[int, int]]:
    places = []
    for i, row in enumerate(board):
        for j, cell in enumerate(row):
            if cell == 0:
                places.append((i, j))
    return places


def max_tile(board: Board) -> int:
    return max(max(row) for row in board)


def format_board(board: Board) -> str:
    """Render the board with every value right-aligned to the widest one."""
    width = len(str(max_tile(board))) + 1
    return "\n".join("".join(f"{cell:>{width}}" for cell in row) for row in board)
