import random

import pytest

from mc2048.board import Direction
from mc2048.errors import InvalidBoard, InvalidSize, InvalidValue
from mc2048.game import Game, GameResult, GameStatus, MoveOutcome

TERMINAL = [
    [2, 4, 2, 4],
    [4, 2, 4, 2],
    [2, 4, 2, 4],
    [4, 2, 4, 2],
]

# LEFT merges the leading 2s and leaves a single gap; whatever spawns there,
# nothing can move afterwards.
LAST_MOVE = [
    [2, 2, 8, 16],
    [32, 64, 128, 256],
    [2, 4, 8, 16],
    [32, 64, 128, 256],
]


def tiles(board):
    return sum(1 for row in board for cell in row if cell != 0)


def board_with(row0, n=4):
    board = [[0] * n for _ in range(n)]
    board[0] = row0 + [0] * (n - len(row0))
    return board


def test_new_game_has_one_tile():
    game = Game(4, random.Random(0))
    assert game.size == 4
    assert game.score == 0
    assert tiles(game.board) == 1
    assert max(map(max, game.board)) in (2, 4)
    assert game.status is GameStatus.IN_PROGRESS
    assert game.result is GameResult.PENDING
    assert not game.is_terminal()


def test_bigger_game():
    game = Game(6)
    assert game.size == 6
    assert tiles(game.board) == 1


def test_small_game_is_rejected():
    with pytest.raises(InvalidSize):
        Game(3)


def test_from_board_does_not_spawn():
    board = board_with([2, 2])
    game = Game.from_board(board)
    assert game.board == board
    assert game.score == 0


def test_from_board_rejects_bad_input():
    with pytest.raises(InvalidValue):
        Game.from_board(board_with([1]))
    with pytest.raises(InvalidBoard):
        Game.from_board([[0] * 4, [0] * 4, [0] * 5, [0] * 4])
    with pytest.raises(InvalidSize):
        Game.from_board([[0] * 3 for _ in range(3)])


def test_from_board_always_validates():
    with pytest.raises(InvalidSize):
        Game.from_board([[1, 3], [0, 0]])
    with pytest.raises(TypeError):
        Game.from_board([[1, 3], [0, 0]], validate=False)


def test_from_board_knows_legal_moves_immediately():
    game = Game.from_board(board_with([2, 2]))
    assert game.legal_moves() == [Direction.LEFT, Direction.RIGHT, Direction.DOWN]
    assert Direction.UP not in game.legal_moves()


def test_terminal_board():
    game = Game.from_board(TERMINAL)
    assert game.legal_moves() == []
    assert game.is_terminal()
    assert game.status is GameStatus.GAME_OVER
    assert game.result is GameResult.LOSS


def test_invalid_move_leaves_state_alone():
    game = Game.from_board(board_with([2]))
    before = game.board
    assert game.apply_move(Direction.LEFT) is MoveOutcome.INVALID_MOVE
    assert not MoveOutcome.INVALID_MOVE.succeeded
    assert game.board == before
    assert game.score == 0


def test_move_merges_scores_and_spawns():
    game = Game.from_board(board_with([2, 2]), random.Random(1))
    outcome = game.apply_move(Direction.LEFT)
    assert outcome is MoveOutcome.MOVED
    assert outcome.succeeded
    assert game.score == 4
    assert game.board[0][0] == 4
    # one tile left after the merge, plus the spawned one
    assert tiles(game.board) == 2


def test_move_to_game_over():
    game = Game.from_board(LAST_MOVE, random.Random(2))
    assert game.apply_move(Direction.LEFT) is MoveOutcome.GAME_OVER
    assert game.score == 4
    assert game.board[0][:3] == [4, 8, 16]
    assert game.board[0][3] in (2, 4)
    assert game.legal_moves() == []
    assert game.result is GameResult.LOSS


def test_moves_after_game_over_are_invalid():
    game = Game.from_board(TERMINAL)
    for direction in Direction:
        assert game.apply_move(direction) is MoveOutcome.INVALID_MOVE


def test_victory_is_reported_once():
    game = Game.from_board(board_with([1024, 1024]), random.Random(3))
    assert not game.is_won()
    assert game.apply_move(Direction.LEFT) is MoveOutcome.VICTORY
    assert game.is_won()
    assert game.result is GameResult.VICTORY

    # the 2048 tile can still slide right, and the game goes on
    assert game.apply_move(Direction.RIGHT) is MoveOutcome.MOVED
    assert game.is_won()


def test_board_with_2048_starts_won():
    game = Game.from_board(board_with([2048]))
    assert game.is_won()
    assert not game.is_terminal()


def test_board_property_is_a_copy():
    game = Game.from_board(board_with([2]))
    board = game.board
    board[3][3] = 1024
    assert game.board[3][3] == 0


def test_clone_is_independent():
    game = Game.from_board(board_with([2, 2]), random.Random(4))
    clone = game.clone(random.Random(5))
    clone.apply_move(Direction.LEFT)
    assert game.board == board_with([2, 2])
    assert game.score == 0
    assert clone.score == 4
    assert game.legal_moves() == [Direction.LEFT, Direction.RIGHT, Direction.DOWN]


def test_random_play_keeps_invariants():
    rng = random.Random(11)
    game = Game(4, rng)
    won = False
    while not game.is_terminal():
        assert game.legal_moves()
        direction = rng.choice(game.legal_moves())
        expected = game.transition(direction)
        score = game.score
        outcome = game.apply_move(direction)

        assert outcome.succeeded
        assert game.score == score + expected.score
        assert tiles(game.board) == tiles(expected.board) + 1
        assert sum(map(sum, game.board)) - sum(map(sum, expected.board)) in (2, 4)
        for row in game.board:
            for cell in row:
                assert cell == 0 or (cell >= 2 and cell & (cell - 1) == 0)
        if won:
            assert game.is_won()
        won = game.is_won()

    assert game.legal_moves() == []
    assert game.status is GameStatus.GAME_OVER


def test_str_shows_board_and_score():
    game = Game.from_board(board_with([2, 4]))
    text = str(game)
    assert text.startswith("Board:\n")
    assert text.endswith("Score: 0")
