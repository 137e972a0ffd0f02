import argparse
import logging
from typing import Callable

from checkers.config import CONFIG
from checkers.core.types import GameStatus, Player
from checkers.main import Engine

RESULTS = {
    GameStatus.HUMAN_WINS: "You defeated Agatha!",
    GameStatus.AGATHA_WINS: "Agatha foresaw your defeat.",
    GameStatus.DRAW: "The future remains uncertain...",
}


def play(engine: Engine, read: Callable[[str], str] = input, write: Callable[[str], None] = print) -> GameStatus:
    """Human plays red (bottom), the engine plays Agatha. 'quit' abandons the game."""
    game = engine.game
    while not game.is_game_over:
        write(str(game.board))
        write("----------------------------")

        if game.current_player is Player.HUMAN:
            user_move = read("Enter your move (e.g. c3-d4 or c3xe5): ").strip()
            if user_move.lower() in ("quit", "exit"):
                break
            if not engine.make_move(user_move):
                write("Illegal move, try again.")
        else:
            move = engine.play_engine_move()
            write(f"Agatha plays: {move}")

    write("Game Over")
    write(RESULTS.get(game.status, "Game abandoned."))
    return game.status


def main(argv=None):
    parser = argparse.ArgumentParser(description="Play checkers against Agatha in the terminal.")
    parser.add_argument("--depth", type=int, default=CONFIG.search.depth, help="search depth in plies")
    parser.add_argument("--agatha-first", action="store_true", help="let Agatha make the first move")
    args = parser.parse_args(argv)

    logging.basicConfig(level=CONFIG.log_level, format="%(levelname)s %(name)s: %(message)s")
    first = Player.AGATHA if args.agatha_first else Player.HUMAN
    play(Engine(depth=args.depth, first_player=first))


if __name__ == "__main__":
    main()
