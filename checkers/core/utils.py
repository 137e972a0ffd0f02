from typing import Optional

from checkers.core.board import format_move
from checkers.core.types import Move


def format_info(depth, score, nodes, elapsed_ms, move: Optional[Move], win_score) -> str:
    nps = int(nodes * 1000 / elapsed_ms) if elapsed_ms > 0 else 0
    move_str = format_move(move.from_square, move.to_square, move.is_capture) if move else "-"

    if abs(score) >= win_score:
        plies = max(depth - int(abs(score) - win_score), 0)
        score_str = f"win {plies if score > 0 else -plies}"
    else:
        score_str = f"score {score:g}"

    return f"info depth {depth} {score_str} nodes {nodes} nps {nps} time {int(elapsed_ms)} move {move_str}"
