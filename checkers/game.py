"""Game keeper: current board, side to move, status and move history."""

import logging
import re
from typing import Dict, List, Optional, Union

from checkers.core.board import Board, format_move, notation_to_position
from checkers.core.rules import execute_move, get_all_valid_moves, has_valid_moves
from checkers.core.types import GameStatus, Move, MoveRecord, Player

logger = logging.getLogger(__name__)

_SQUARE = re.compile(r"[a-h][1-8]", re.IGNORECASE)

_WINNER = {Player.HUMAN: GameStatus.HUMAN_WINS, Player.AGATHA: GameStatus.AGATHA_WINS}


def parse_move(text: str, legal_moves: List[Move]) -> Optional[Move]:
    """Match 'a3-b4', 'a3 x c5', 'a3xc5xe7' or 'a3b4' against the legal moves.

    The first and last squares named are the start and the landing square.
    Squares in between must match the landing squares of the hops in order.
    With only two squares named and several capture paths sharing them, the
    longest one is chosen.
    """
    squares = [notation_to_position(s) for s in _SQUARE.findall(text or "")]
    if len(squares) < 2:
        return None
    from_pos, to_pos = squares[0], squares[-1]
    candidates = [m for m in legal_moves if m.from_square == from_pos and m.to_square == to_pos]
    if len(squares) > 2:
        candidates = [m for m in candidates if m.path == tuple(squares[1:])]
    if not candidates:
        return None
    return max(candidates, key=lambda m: m.capture_count)


class Game:
    def __init__(self, first_player: Player = Player.HUMAN):
        self.first_player = first_player
        self.reset()

    def reset(self):
        """Reset to the initial position."""
        self.board = Board.initial()
        self.current_player = self.first_player
        self.status = GameStatus.PLAYING
        self.move_history: List[MoveRecord] = []
        self._snapshots: List[tuple] = []

    @property
    def is_game_over(self) -> bool:
        return self.status is not GameStatus.PLAYING

    def legal_moves(self) -> List[Move]:
        if self.is_game_over:
            return []
        return get_all_valid_moves(self.board, self.current_player)

    def make_move(self, move: Union[Move, str]) -> bool:
        """Play a Move or an algebraic move string for the side to move. Returns True if legal."""
        legal = self.legal_moves()
        if isinstance(move, str):
            move = parse_move(move, legal)
        if move is None or move not in legal:
            return False

        self._snapshots.append((self.board.copy(), self.current_player, self.status))
        execute_move(self.board, move)
        self.move_history.append(MoveRecord(
            move_number=len(self.move_history) // 2 + 1,
            player=self.current_player,
            from_square=move.from_square,
            to_square=move.to_square,
            captured=move.is_capture,
            promoted=move.is_promotion,
        ))
        logger.debug("%s plays %s", self.current_player.value,
                     format_move(move.from_square, move.to_square, move.is_capture))

        if not self._check_game_over():
            self.current_player = self.current_player.opponent
        return True

    def undo_move(self):
        """Take back the last move."""
        if not self._snapshots:
            return
        self.board, self.current_player, self.status = self._snapshots.pop()
        self.move_history.pop()

    def _check_game_over(self) -> bool:
        for player in (Player.HUMAN, Player.AGATHA):
            if self.board.count_pieces(player) == 0:
                self.status = _WINNER[player.opponent]
                return True
        next_player = self.current_player.opponent
        if not has_valid_moves(self.board, next_player):
            self.status = _WINNER[self.current_player]
            return True
        return False

    def piece_counts(self) -> Dict[Player, int]:
        return {p: self.board.count_pieces(p) for p in Player}

    def formatted_history(self) -> List[str]:
        lines = []
        for record in self.move_history:
            label = "You" if record.player is Player.HUMAN else "Agatha"
            lines.append(f"{record.move_number}. {label}: "
                         f"{format_move(record.from_square, record.to_square, record.captured)}")
        return lines

    def print_board(self):
        """Print ASCII representation."""
        print(self.board)
