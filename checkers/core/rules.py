"""American checkers move rules: simple moves, captures, multi-jumps, execution.

Every function here is a pure function of the board it is handed, except
`execute_move`, which mutates the board in place. Callers that need
isolation should use `simulate_move` or copy the board first.
"""

import logging
from typing import List, Tuple

from checkers.core.board import Board, should_promote
from checkers.core.types import Move, Piece, Player, Position, is_valid_position

logger = logging.getLogger(__name__)

# (row delta, col delta): up-left, up-right, down-left, down-right
ALL_DIRECTIONS: Tuple[Tuple[int, int], ...] = ((-1, -1), (-1, 1), (1, -1), (1, 1))


def valid_directions(piece: Piece) -> Tuple[Tuple[int, int], ...]:
    """Kings use all four diagonals, men only the two facing the far row."""
    if piece.is_king:
        return ALL_DIRECTIONS
    forward = piece.player.forward
    return tuple(d for d in ALL_DIRECTIONS if d[0] == forward)


def get_simple_moves(board: Board, piece: Piece) -> List[Move]:
    moves = []
    row, col = piece.position
    for dr, dc in valid_directions(piece):
        to = Position(row + dr, col + dc)
        if is_valid_position(to) and board.get_piece_at(to) is None:
            moves.append(Move(piece.position, to, (), should_promote(piece, to)))
    return moves


def get_single_captures(board: Board, piece: Piece) -> List[Move]:
    """One-hop jumps over an adjacent opposing piece onto an empty square."""
    actual = board.get_piece_at(piece.position)
    if actual is None or actual.player is not piece.player:
        logger.warning("Piece position mismatch at %s (found %s)", piece.position, actual)
        return []

    moves = []
    opponent = piece.player.opponent
    row, col = piece.position
    for dr, dc in valid_directions(piece):
        jumped = Position(row + dr, col + dc)
        landing = Position(row + 2 * dr, col + 2 * dc)
        if not is_valid_position(landing):
            continue
        victim = board.get_piece_at(jumped)
        if victim is not None and victim.player is opponent and board.get_piece_at(landing) is None:
            moves.append(Move(piece.position, landing, (jumped,), should_promote(piece, landing)))
    return moves


def _extend_jumps(
    board: Board, piece: Piece, captured: Tuple[Position, ...], start: Position
) -> List[Move]:
    """Grow every capture chain reachable from the piece's current square.

    A man promoted by a jump ends its turn on the spot. A chain with no
    further jumps is emitted from `start` to the current landing square.
    """
    moves = []
    for hop in get_single_captures(board, piece):
        victim = hop.captures[0]
        if victim in captured:
            continue
        chain = captured + (victim,)

        after = board.copy()
        after.remove_piece_at(victim)
        moved = after.move_piece(piece.position, hop.to_square)
        if moved is None:
            continue

        if moved.is_king and not piece.is_king:
            moves.append(Move(start, hop.to_square, chain, True))
            continue

        continuations = _extend_jumps(after, moved, chain, start)
        if continuations:
            moves.extend(continuations)
        else:
            moves.append(Move(start, hop.to_square, chain, False))
    return moves


def get_captures_for_piece(board: Board, piece: Piece) -> List[Move]:
    """All complete capture sequences (single and multi-jump) for one piece."""
    return _extend_jumps(board, piece, (), piece.position)


def _all_captures_for_player(board: Board, player: Player) -> List[Move]:
    captures = []
    for piece in board.pieces(player):
        captures.extend(get_captures_for_piece(board, piece))
    return captures


def get_valid_moves_for_piece(board: Board, piece: Piece) -> List[Move]:
    """Legal moves for one piece under the mandatory capture rule.

    When any piece of the same player can capture, only this piece's
    captures are returned (possibly none).
    """
    if has_captures(board, piece.player):
        return get_captures_for_piece(board, piece)
    return get_simple_moves(board, piece)


def get_all_valid_moves(board: Board, player: Player) -> List[Move]:
    captures = _all_captures_for_player(board, player)
    if captures:
        return captures
    moves = []
    for piece in board.pieces(player):
        moves.extend(get_simple_moves(board, piece))
    return moves


def is_valid_move(board: Board, piece: Piece, move: Move) -> bool:
    return any(
        m.from_square == move.from_square and m.to_square == move.to_square
        for m in get_valid_moves_for_piece(board, piece)
    )


def is_geometrically_valid(move: Move) -> bool:
    """Displacement must be one diagonal step, or an even reach of two squares per capture."""
    row_diff = abs(move.to_square.row - move.from_square.row)
    col_diff = abs(move.to_square.col - move.from_square.col)
    if not move.captures:
        return row_diff == 1 and col_diff == 1
    max_dist = 2 * len(move.captures)
    return (
        row_diff <= max_dist
        and col_diff <= max_dist
        and row_diff % 2 == 0
        and col_diff % 2 == 0
    )


def execute_move(board: Board, move: Move) -> bool:
    """Apply `move` in place. Returns False, leaving the board untouched, if rejected."""
    if board.get_piece_at(move.from_square) is None:
        return False
    if not is_geometrically_valid(move):
        logger.error(
            "Invalid move rejected: from=%s to=%s captures=%s",
            move.from_square, move.to_square, list(move.captures),
        )
        return False

    for pos in move.captures:
        board.remove_piece_at(pos)
    board.move_piece(move.from_square, move.to_square)
    return True


def has_captures(board: Board, player: Player) -> bool:
    return any(get_single_captures(board, piece) for piece in board.pieces(player))


def has_valid_moves(board: Board, player: Player) -> bool:
    return any(
        get_single_captures(board, piece) or get_simple_moves(board, piece)
        for piece in board.pieces(player)
    )


def simulate_move(board: Board, move: Move) -> Board:
    """Resulting board after `move`; the input board is never modified."""
    after = board.copy()
    execute_move(after, move)
    return after
