"""
Evaluator Module
================

Static evaluation of checkers positions. Scores are always expressed from
Agatha's side of the board: positive favours Agatha, negative favours the
human.

Key Features:
    - Material (men vs. kings).
    - Positional terms: center columns, advancement, back-row defense,
      king edge penalty and protected-piece bonus.
    - Mobility (legal move count, mandatory captures included).
    - Terminal detection (no pieces / no legal moves).
"""

from dataclasses import dataclass
from typing import Optional, Set

from checkers.config import CONFIG, EvaluationWeights
from checkers.core.board import Board
from checkers.core.rules import get_all_valid_moves
from checkers.core.types import BOARD_SIZE, Piece, Player, Position

WIN_SCORE: int = 100000
END_GAME_PIECES: int = 8


@dataclass(frozen=True)
class DetailedEvaluation:
    total: float
    material: float
    positional: float
    mobility: float
    agatha_men: int
    agatha_kings: int
    human_men: int
    human_kings: int


class Evaluator:
    """
    Weighted static evaluator.

    Holds only its weights; evaluation itself is stateless.
    """

    def __init__(self, weights: Optional[EvaluationWeights] = None) -> None:
        self.weights = weights or CONFIG.eval.weights

    def evaluate(self, board: Board) -> float:
        """Agatha's aggregate minus the human's aggregate."""
        return self._player_score(board, Player.AGATHA) - self._player_score(board, Player.HUMAN)

    def _player_score(self, board: Board, player: Player) -> float:
        w = self.weights
        pieces = board.pieces(player)
        occupied = {p.position for p in pieces}

        score = 0.0
        for piece in pieces:
            score += w.king_value if piece.is_king else w.piece_value
            score += self._positional_bonus(piece, occupied)

        score += len(get_all_valid_moves(board, player)) * w.mobility_bonus
        return score

    def _positional_bonus(self, piece: Piece, occupied: Set[Position]) -> float:
        w = self.weights
        row, col = piece.position
        last = BOARD_SIZE - 1
        bonus = 0.0

        if 2 <= col <= 5:
            bonus += w.center_control
            if 3 <= col <= 4:
                bonus += w.center_control / 2

        if not piece.is_king:
            # Rows travelled toward the far row
            travelled = row if piece.player is Player.AGATHA else last - row
            bonus += travelled * w.advancement
            home_row = 0 if piece.player is Player.AGATHA else last
            if row == home_row:
                bonus += w.back_row_defense
        else:
            if col in (0, last):
                bonus -= w.center_control / 2
            if row in (0, last):
                bonus -= w.center_control / 2

        if self._is_protected(piece, occupied):
            bonus += w.back_row_defense
        return bonus

    @staticmethod
    def _is_protected(piece: Piece, occupied: Set[Position]) -> bool:
        """A friendly piece sits on either diagonal square directly behind."""
        row, col = piece.position
        behind = row - piece.player.forward
        return Position(behind, col - 1) in occupied or Position(behind, col + 1) in occupied

    def evaluate_end_game(self, board: Board, player: Player) -> Optional[int]:
        """
        +WIN_SCORE if `player` has won, -WIN_SCORE if lost, None if play goes on.

        A side with no pieces or no legal moves has lost.
        """
        for loser in (Player.HUMAN, Player.AGATHA):
            if board.count_pieces(loser) == 0:
                return WIN_SCORE if loser is not player else -WIN_SCORE
        for loser in (Player.HUMAN, Player.AGATHA):
            if not get_all_valid_moves(board, loser):
                return WIN_SCORE if loser is not player else -WIN_SCORE
        return None

    # ── Diagnostics ────────────────────────────────────────────────────────

    def detailed(self, board: Board) -> DetailedEvaluation:
        """Split the total into material, positional and mobility parts."""
        w = self.weights
        counts = {}
        for player in (Player.AGATHA, Player.HUMAN):
            kings = board.count_kings(player)
            counts[player] = (board.count_pieces(player) - kings, kings)

        def material_of(player: Player) -> float:
            men, kings = counts[player]
            return men * w.piece_value + kings * w.king_value

        material = material_of(Player.AGATHA) - material_of(Player.HUMAN)
        mobility = (
            len(get_all_valid_moves(board, Player.AGATHA))
            - len(get_all_valid_moves(board, Player.HUMAN))
        ) * w.mobility_bonus
        total = self.evaluate(board)

        return DetailedEvaluation(
            total=total,
            material=material,
            positional=total - material - mobility,
            mobility=mobility,
            agatha_men=counts[Player.AGATHA][0],
            agatha_kings=counts[Player.AGATHA][1],
            human_men=counts[Player.HUMAN][0],
            human_kings=counts[Player.HUMAN][1],
        )


def material_advantage(board: Board, player: Player) -> float:
    """Men count 1, kings 1.5; own material minus the opponent's."""
    def value(p: Player) -> float:
        return sum(1.5 if piece.is_king else 1.0 for piece in board.pieces(p))
    return value(player) - value(player.opponent)


def is_end_game(board: Board) -> bool:
    total = board.count_pieces(Player.HUMAN) + board.count_pieces(Player.AGATHA)
    return total <= END_GAME_PIECES


def king_safety(board: Board, player: Player) -> int:
    """Sum, over the player's kings, of the distance to the nearest enemy piece."""
    enemies = board.pieces(player.opponent)
    score = 0
    for king in (p for p in board.pieces(player) if p.is_king):
        if not enemies:
            score += BOARD_SIZE
            continue
        score += min(
            max(abs(king.position.row - e.position.row), abs(king.position.col - e.position.col))
            for e in enemies
        )
    return score
