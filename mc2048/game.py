import random
from enum import Enum

from mc2048.board import (
    Board,
    Direction,
    Transition,
    all_transitions,
    copy_board,
    format_board,
    max_tile,
    validate_board,
)
from mc2048.config import DEFAULT_SIZE, MIN_SIZE, WIN_TILE
from mc2048.errors import InvalidSize
from mc2048.spawn import spawn_tile


class MoveOutcome(Enum):
    """What happened when a move was requested."""

    MOVED = "moved"
    VICTORY = "victory"  # the move produced the first winning tile
    GAME_OVER = "game_over"  # the move was played and nothing is legal afterwards
    INVALID_MOVE = "invalid_move"  # nothing changed

    @property
    def succeeded(self) -> bool:
        return self is not MoveOutcome.INVALID_MOVE


class GameStatus(Enum):
    IN_PROGRESS = "in_progress"
    GAME_OVER = "game_over"


class GameResult(Enum):
    PENDING = "pending"
    VICTORY = "victory"
    LOSS = "loss"


class Game:
    """2048 game state on an n x n board"""

    score: int

    def __init__(self, size: int = DEFAULT_SIZE, rng: random.Random | None = None):
        if size < MIN_SIZE:
            raise InvalidSize(size)
        self._setup([[0] * size for _ in range(size)], rng)
        spawn_tile(self._board, self._rng)
        self._update()

    @classmethod
    def from_board(cls, board, rng: random.Random | None = None) -> "Game":
        """
        Start from an existing board. No tile is spawned; score starts at 0.

        Raises InvalidSize, InvalidBoard or InvalidValue if the board can't
        be a 2048 position.
        """

        return cls._from_trusted(validate_board(board), rng)

    @classmethod
    def _from_trusted(cls, board: Board, rng: random.Random | None = None) -> "Game":
        # rollouts only ever start from boards a Game already holds
        game = cls.__new__(cls)
        game._setup(copy_board(board), rng)
        game._update()
        return game

    def _setup(self, board: Board, rng: random.Random | None):
        self._board = board
        self._rng = rng if rng is not None else random.Random()
        self.score = 0
        self._transitions: dict[Direction, Transition] = {}
        self._status = GameStatus.IN_PROGRESS
        self._result = GameResult.PENDING

    def _update(self):
        # the cached transitions are always rebuilt from scratch
        self._transitions = all_transitions(self._board)

        if not any(t.changed for t in self._transitions.values()):
            self._status = GameStatus.GAME_OVER

        if self._result is GameResult.PENDING:
            if max_tile(self._board) >= WIN_TILE:
                self._result = GameResult.VICTORY
            elif self._status is GameStatus.GAME_OVER:
                self._result = GameResult.LOSS

    @property
    def board(self) -> Board:
        return copy_board(self._board)

    @property
    def size(self) -> int:
        return len(self._board)

    @property
    def status(self) -> GameStatus:
        return self._status

    @property
    def result(self) -> GameResult:
        return self._result

    def transition(self, direction: Direction) -> Transition:
        return self._transitions[direction]

    def legal_moves(self) -> list[Direction]:
        """Directions that would change the board, in Direction order."""
        return [d for d in Direction if self._transitions[d].changed]

    def is_terminal(self) -> bool:
        return self._status is GameStatus.GAME_OVER

    def is_won(self) -> bool:
        return self._result is GameResult.VICTORY

    def apply_move(self, direction: Direction) -> MoveOutcome:
        """
        Play a move. An illegal direction leaves the game untouched and
        returns INVALID_MOVE.
        """

        transition = self._transitions[direction]
        if not transition.changed:
            return MoveOutcome.INVALID_MOVE

        was_won = self.is_won()
        self._board = copy_board(transition.board)
        self.score += transition.score
        spawn_tile(self._board, self._rng)
        self._update()

        if self.is_terminal():
            return MoveOutcome.GAME_OVER
        if self.is_won() and not was_won:
            return MoveOutcome.VICTORY
        return MoveOutcome.MOVED

    def clone(self, rng: random.Random | None = None) -> "Game":
        g = Game.__new__(Game)
        g._setup(copy_board(self._board), rng)
        g.score = self.score
        g._transitions = dict(self._transitions)
        g._status = self._status
        g._result = self._result
        return g

    def __str__(self) -> str:
        return f"Board:\n{format_board(self._board)}\nScore: {self.score}"

    def display(self):
        print(self)
