import logging
import threading
import time
from dataclasses import dataclass
from typing import Callable, Iterable, List, Optional

from checkers.config import CONFIG
from checkers.core.board import Board
from checkers.core.evaluator import WIN_SCORE, Evaluator
from checkers.core.rules import get_all_valid_moves, simulate_move
from checkers.core.types import Move, Player
from checkers.core.utils import format_info

logger = logging.getLogger(__name__)

INF = 1000000


@dataclass(frozen=True)
class SearchResult:
    move: Optional[Move]
    score: float
    nodes: int
    depth: int


@dataclass(frozen=True)
class ScoredMove:
    move: Move
    score: float


def order_moves(moves: Iterable[Move]) -> List[Move]:
    """More captures first, then promotions, then destinations nearer the center columns.

    The sort is stable, so ties keep generation order.
    """
    return sorted(
        moves,
        key=lambda m: (-m.capture_count, not m.is_promotion, abs(3.5 - m.to_square.col)),
    )


class SearchEngine:
    def __init__(self, evaluator: Optional[Evaluator] = None, depth: Optional[int] = None):
        self.evaluator = evaluator or Evaluator()
        self.max_depth = max(depth if depth is not None else CONFIG.search.depth, 1)
        self.nodes = 0

        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None

    # ── Fixed-depth search ─────────────────────────────────────────────────

    def search(self, board: Board, player: Player = Player.AGATHA, depth: Optional[int] = None) -> SearchResult:
        """Best move for `player` with its score from `player`'s side of the board."""
        depth = max(depth if depth is not None else self.max_depth, 1)
        self.nodes = 0
        start_time = time.monotonic()

        moves = get_all_valid_moves(board, player)
        if not moves:
            return SearchResult(None, -WIN_SCORE, 0, depth)
        if len(moves) == 1:
            score = self._minimax(simulate_move(board, moves[0]), 0, -INF, INF, False, player)
            return SearchResult(moves[0], score, self.nodes, depth)

        best_move = None
        best_score = -INF
        alpha = -INF

        for move in order_moves(moves):
            after = simulate_move(board, move)
            score = self._minimax(after, depth - 1, alpha, INF, False, player)
            if score > best_score:
                best_score = score
                best_move = move
            alpha = max(alpha, score)

        elapsed_ms = (time.monotonic() - start_time) * 1000
        logger.debug(format_info(depth, best_score, self.nodes, elapsed_ms, best_move, WIN_SCORE))
        return SearchResult(best_move, best_score, self.nodes, depth)

    def _minimax(self, board: Board, depth: int, alpha: float, beta: float,
                 maximizing: bool, ai_player: Player) -> float:
        self.nodes += 1

        end_score = self.evaluator.evaluate_end_game(board, ai_player)
        if end_score is not None:
            # Remaining depth rewards quick wins and delays losses
            return end_score + depth if end_score > 0 else end_score - depth

        if depth <= 0:
            return self._static_score(board, ai_player)

        side = ai_player if maximizing else ai_player.opponent
        moves = get_all_valid_moves(board, side)
        if not moves:
            return -(WIN_SCORE + depth) if maximizing else WIN_SCORE + depth

        if maximizing:
            best = -INF
            for move in order_moves(moves):
                score = self._minimax(simulate_move(board, move), depth - 1, alpha, beta, False, ai_player)
                best = max(best, score)
                alpha = max(alpha, score)
                if beta <= alpha:
                    break
            return best

        best = INF
        for move in order_moves(moves):
            score = self._minimax(simulate_move(board, move), depth - 1, alpha, beta, True, ai_player)
            best = min(best, score)
            beta = min(beta, score)
            if beta <= alpha:
                break
        return best

    def _static_score(self, board: Board, player: Player) -> float:
        score = self.evaluator.evaluate(board)
        return score if player is Player.AGATHA else -score

    # ── Move-selection helpers ─────────────────────────────────────────────

    def get_best_move(self, board: Board, depth: Optional[int] = None) -> Optional[Move]:
        return self.search(board, Player.AGATHA, depth).move

    def get_best_move_with_depth(self, board: Board, depth: int,
                                 player: Player = Player.AGATHA) -> Optional[Move]:
        return self.search(board, player, depth).move

    def get_nodes_evaluated(self) -> int:
        return self.nodes

    def evaluate_move(self, board: Board, move: Move, depth: Optional[int] = None) -> float:
        """Score `move` after a reduced-depth reply search; positive is good for its mover."""
        if depth is None:
            depth = self.max_depth - CONFIG.search.evaluate_move_depth_reduction
        self.nodes = 0
        mover = self._mover(board, move)
        after = simulate_move(board, move)
        return -self._minimax(after, max(depth, 0), -INF, INF, True, mover.opponent)

    def get_top_moves(self, board: Board, player: Player, count: int = 3) -> List[ScoredMove]:
        depth = CONFIG.search.top_moves_depth
        self.nodes = 0
        scored = [
            ScoredMove(move, -self._minimax(simulate_move(board, move), depth, -INF, INF, True, player.opponent))
            for move in get_all_valid_moves(board, player)
        ]
        scored.sort(key=lambda s: s.score, reverse=True)
        return scored[:max(count, 0)]

    def get_predicted_response(self, board: Board, move: Move) -> Optional[Move]:
        """The opponent's reduced-depth best reply to `move`."""
        mover = self._mover(board, move)
        after = simulate_move(board, move)
        return self.get_best_move_with_depth(after, CONFIG.search.precog_depth, mover.opponent)

    @staticmethod
    def _mover(board: Board, move: Move) -> Player:
        piece = board.get_piece_at(move.from_square)
        return piece.player if piece else Player.HUMAN

    # ── Iterative deepening ────────────────────────────────────────────────

    def iterative_deepening_search(self, board: Board, max_depth: Optional[int] = None,
                                   max_time_ms: Optional[float] = None,
                                   player: Player = Player.AGATHA) -> SearchResult:
        """
        Search even depths 2, 4, ... until `max_depth` or the time budget.

        The clock is checked between completed iterations only; the result of
        the last completed depth is returned.
        """
        if max_depth is None:
            max_depth = CONFIG.search.iterative_max_depth
        if max_time_ms is None:
            max_time_ms = CONFIG.search.time_limit_ms
        self._stop_event.clear()
        return self._deepen(board, player, max_depth, max_time_ms)

    def _deepen(self, board: Board, player: Player, max_depth: int, max_time_ms: float,
                callback: Optional[Callable[[SearchResult], None]] = None) -> SearchResult:
        start_time = time.monotonic()
        depths = list(range(2, max_depth + 1, 2)) or [max(max_depth, 1)]
        best = SearchResult(None, -WIN_SCORE, 0, 0)
        total_nodes = 0

        for i, depth in enumerate(depths):
            elapsed_ms = (time.monotonic() - start_time) * 1000
            # The first iteration always runs so a legal move is returned when one exists
            if i > 0 and (self._stop_event.is_set() or elapsed_ms >= max_time_ms):
                break

            result = self.search(board, player, depth)
            total_nodes += result.nodes
            if result.move is None:
                return result
            best = result

            elapsed_ms = (time.monotonic() - start_time) * 1000
            logger.info(format_info(depth, result.score, total_nodes, elapsed_ms, result.move, WIN_SCORE))
            if callback:
                callback(result)

        return best

    # ── Background search ──────────────────────────────────────────────────

    def start_search(self, board: Board, player: Player = Player.AGATHA, depth: Optional[int] = None,
                     callback: Optional[Callable[[SearchResult], None]] = None):
        """Run iterative deepening on a daemon thread.

        `callback` receives each completed depth, then a final result with depth -1.
        """
        if self._thread and self._thread.is_alive():
            return
        self._stop_event.clear()
        target_depth = max(depth if depth is not None else self.max_depth, 1)
        search_board = board.copy()

        def worker():
            result = self._deepen(search_board, player, target_depth, float("inf"), callback)
            if callback:
                callback(SearchResult(result.move, result.score, result.nodes, -1))

        self._thread = threading.Thread(target=worker, daemon=True)
        self._thread.start()

    def stop(self):
        self._stop_event.set()
        if self._thread:
            self._thread.join(timeout=0.2)
