from mc2048.board import Direction
from mc2048.config import QUICK_DEPTH
from mc2048.errors import NoValidMove
from mc2048.game import Game, MoveOutcome
from mc2048.search import find_best_move


if __name__ == "__main__":
    game = Game()

    key_mapping = {
        "w": Direction.UP,
        "d": Direction.RIGHT,
        "s": Direction.DOWN,
        "a": Direction.LEFT,
    }

    game.display()

    while True:
        key = input()
        if key in key_mapping:
            outcome = game.apply_move(key_mapping[key])
            if not outcome.succeeded:
                print("Can't move that way")
                continue
            game.display()
            if outcome is MoveOutcome.VICTORY:
                print("You reached 2048! Keep going if you like.")
            elif outcome is MoveOutcome.GAME_OVER:
                print(f"Game over. Final score: {game.score}")
                break
        elif key == "h":
            try:
                print(f"Hint: {find_best_move(game, QUICK_DEPTH).name.lower()}")
            except NoValidMove as e:
                print(e)
                break
        else:
            break
