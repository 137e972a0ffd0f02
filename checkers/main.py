from typing import Optional, Tuple

from checkers.core.board import format_move
from checkers.core.evaluator import Evaluator
from checkers.core.search import SearchEngine
from checkers.core.types import Player
from checkers.game import Game


class Engine:
    def __init__(self, depth: Optional[int] = None, first_player: Player = Player.HUMAN):
        self.game = Game(first_player)
        self.search = SearchEngine(Evaluator(), depth=depth)

    def get_best_move(self) -> Tuple[Optional[str], float]:
        """Best move for the side to move, as notation, with its score for that side."""
        result = self.search.search(self.game.board, self.game.current_player)
        if result.move is None:
            return None, result.score
        move = result.move
        return format_move(move.from_square, move.to_square, move.is_capture), result.score

    def play_engine_move(self) -> Optional[str]:
        """Let the engine move for the side to move. Returns the move played."""
        if self.game.is_game_over:
            return None
        move = self.search.search(self.game.board, self.game.current_player).move
        if move is None or not self.game.make_move(move):
            return None
        return format_move(move.from_square, move.to_square, move.is_capture)

    def make_move(self, move_str: str) -> bool:
        return self.game.make_move(move_str)

    def print_board(self):
        self.game.print_board()
