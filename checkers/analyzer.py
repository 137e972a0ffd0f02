# checkers/analyzer.py
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from checkers.config import CONFIG
from checkers.core.board import Board, format_move
from checkers.core.rules import get_all_valid_moves, simulate_move
from checkers.core.search import SearchEngine
from checkers.core.types import Move, Player


@dataclass(frozen=True)
class Prediction:
    move: Move
    response: Optional[Move]
    score: float


@dataclass
class PositionAnalysis:
    best_move: Optional[Move]
    threat_level: str  # "low" | "medium" | "high"
    opportunities: List[Move] = field(default_factory=list)


class Analyzer:
    def __init__(self, search_engine: SearchEngine):
        self.search_engine = search_engine
        self.cfg = CONFIG.analyzer

    def prediction_for_move(self, board: Board, move: Move) -> Prediction:
        """Predicted reply to `move` and the move's score for its mover."""
        depth = CONFIG.search.precog_depth
        return Prediction(
            move=move,
            response=self.search_engine.get_predicted_response(board, move),
            score=self.search_engine.evaluate_move(board, move, depth),
        )

    def predictions(self, board: Board, moves: List[Move]) -> List[Prediction]:
        """Predictions for each candidate, best for the mover first."""
        result = [self.prediction_for_move(board, move) for move in moves]
        result.sort(key=lambda p: p.score, reverse=True)
        return result

    def is_move_dangerous(self, board: Board, move: Move) -> bool:
        """True when the predicted reply captures something."""
        response = self.prediction_for_move(board, move).response
        return response is not None and response.is_capture

    def best_move_for(self, board: Board, moves: List[Move]) -> Optional[Move]:
        if not moves:
            return None
        return self.predictions(board, moves)[0].move

    def analyze_position(self, board: Board, player: Player) -> PositionAnalysis:
        moves = get_all_valid_moves(board, player)
        if not moves:
            return PositionAnalysis(None, "high", [])

        captures = [m for m in moves if m.is_capture]
        promotions = [m for m in moves if m.is_promotion]

        opponent_captures = [m for m in get_all_valid_moves(board, player.opponent) if m.is_capture]
        if len(opponent_captures) >= self.cfg.THREAT_HIGH:
            threat = "high"
        elif len(opponent_captures) >= self.cfg.THREAT_MEDIUM:
            threat = "medium"
        else:
            threat = "low"

        return PositionAnalysis(
            best_move=self.best_move_for(board, moves),
            threat_level=threat,
            opportunities=captures + promotions,
        )

    def classify_move(self, board: Board, move: Move, best_move: Optional[Move] = None) -> Dict[str, Any]:
        """
        Classify a single move.
        - board: position BEFORE the move (unchanged by this function).
        - move: the move actually played.
        - best_move: engine's choice here; searched for when not given.
        Both moves are scored with the same reduced-depth search so the
        loss versus the best move is comparable.
        Returns a dict with label, deltas and diagnostics.
        """
        piece = board.get_piece_at(move.from_square)
        mover = piece.player if piece else Player.HUMAN
        evaluator = self.search_engine.evaluator
        sign = 1 if mover is Player.AGATHA else -1

        if best_move is None:
            best_move = self.search_engine.search(board, mover).move

        old_eval = sign * evaluator.evaluate(board)
        after = simulate_move(board, move)
        new_eval = sign * evaluator.evaluate(after)
        end_score = evaluator.evaluate_end_game(after, mover)

        played_score = self.search_engine.evaluate_move(board, move)
        best_score = self.search_engine.evaluate_move(board, best_move) if best_move else played_score
        delta_vs_best = best_score - played_score

        if end_score is not None and end_score > 0:
            label = "Winning move"
        elif best_move is not None and move == best_move:
            label = "Best move"
        elif delta_vs_best <= self.cfg.TH_EXCELLENT:
            label = "Excellent"
        elif delta_vs_best <= self.cfg.TH_GOOD:
            label = "Good"
        elif delta_vs_best <= self.cfg.TH_INACCURACY:
            label = "Inaccuracy"
        elif delta_vs_best <= self.cfg.TH_MISTAKE:
            label = "Mistake"
        else:
            label = "Blunder"

        return {
            "move": _notation(move),
            "old_eval": old_eval,
            "new_eval": new_eval,
            "best_move": _notation(best_move) if best_move else None,
            "best_score": best_score,
            "played_score": played_score,
            "delta_vs_best": delta_vs_best,
            "label": label,
            "player": mover.value,
        }


def _notation(move: Move) -> str:
    return format_move(move.from_square, move.to_square, move.is_capture)
