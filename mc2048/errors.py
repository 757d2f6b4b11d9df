class Game2048Error(Exception):
    """Base class for everything this package raises on purpose."""


class InvalidSize(Game2048Error, ValueError):
    def __init__(self, size: int):
        super().__init__(f"Invalid game size {size}. Must be at least 4.")
        self.size = size


class InvalidBoard(Game2048Error, ValueError):
    def __init__(self, detail: str = ""):
        message = "Invalid board provided. Board must be square."
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)


class InvalidValue(Game2048Error, ValueError):
    def __init__(self, value, position: tuple[int, int]):
        super().__init__(
            f"Invalid value {value!r} at {position}. "
            "Must be 0 or a power of 2, starting from 2."
        )
        self.value = value
        self.position = position


class NoValidMove(Game2048Error):
    def __init__(self):
        super().__init__("There is no valid move to make. The game is over.")
