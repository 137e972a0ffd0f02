"""Board wrapper over an 8x8 grid providing piece management and notation."""

from typing import List, Optional

from checkers.core.types import (
    BOARD_SIZE,
    Piece,
    PieceType,
    Player,
    Position,
    is_playable_square,
    is_valid_position,
)

Grid = List[List[Optional[Piece]]]


class Board:
    def __init__(self, grid: Optional[Grid] = None):
        """Wrap an existing grid, or start from an empty board."""
        self.grid: Grid = grid if grid is not None else [
            [None] * BOARD_SIZE for _ in range(BOARD_SIZE)
        ]

    @classmethod
    def initial(cls) -> "Board":
        """Agatha's men on rows 0-2, human men on rows 5-7, dark squares only."""
        board = cls()
        for row in range(BOARD_SIZE):
            for col in range(BOARD_SIZE):
                if not is_playable_square(row, col):
                    continue
                if row < 3:
                    board.grid[row][col] = Piece(Player.AGATHA, PieceType.MAN, Position(row, col))
                elif row > 4:
                    board.grid[row][col] = Piece(Player.HUMAN, PieceType.MAN, Position(row, col))
        return board

    def copy(self) -> "Board":
        """Deep copy; pieces in the copy are independent objects."""
        return Board([
            [Piece(p.player, p.kind, p.position) if p else None for p in row]
            for row in self.grid
        ])

    def __eq__(self, other) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self.grid == other.grid

    def get_piece_at(self, pos: Position) -> Optional[Piece]:
        """Piece on `pos`, or None when empty or off the board."""
        if not is_valid_position(pos):
            return None
        return self.grid[pos.row][pos.col]

    def set_piece_at(self, pos: Position, piece: Optional[Piece]) -> None:
        """Place (or clear with None) a square. Off-board positions are ignored."""
        if not is_valid_position(pos):
            return
        pos = Position(pos.row, pos.col)
        self.grid[pos.row][pos.col] = piece
        if piece is not None:
            piece.position = pos

    def remove_piece_at(self, pos: Position) -> Optional[Piece]:
        piece = self.get_piece_at(pos)
        if piece is not None:
            self.grid[pos.row][pos.col] = None
        return piece

    def move_piece(self, from_pos: Position, to_pos: Position) -> Optional[Piece]:
        """Relocate a piece, promoting it in place on the far row.

        Returns the moved piece, or None if `from_pos` is empty.
        """
        piece = self.get_piece_at(from_pos)
        if piece is None or not is_valid_position(to_pos):
            return None

        self.grid[from_pos.row][from_pos.col] = None
        piece.position = Position(to_pos.row, to_pos.col)
        if should_promote(piece, to_pos):
            piece.kind = PieceType.KING
        self.grid[to_pos.row][to_pos.col] = piece
        return piece

    def pieces(self, player: Player) -> List[Piece]:
        """All pieces of `player`, scanning rows top to bottom."""
        return [p for row in self.grid for p in row if p is not None and p.player is player]

    def count_pieces(self, player: Player) -> int:
        return len(self.pieces(player))

    def count_kings(self, player: Player) -> int:
        return sum(1 for p in self.pieces(player) if p.is_king)

    def validate(self) -> bool:
        """Check dimensions, empty light squares and piece/cell agreement."""
        if len(self.grid) != BOARD_SIZE:
            return False
        for row in range(BOARD_SIZE):
            if len(self.grid[row]) != BOARD_SIZE:
                return False
            for col in range(BOARD_SIZE):
                piece = self.grid[row][col]
                if piece is None:
                    continue
                if not is_playable_square(row, col):
                    return False
                if piece.position != (row, col):
                    return False
        return True

    def __str__(self) -> str:
        lines = ["  a b c d e f g h"]
        for row in range(BOARD_SIZE):
            cells = []
            for col in range(BOARD_SIZE):
                piece = self.grid[row][col]
                if piece is not None:
                    symbol = "r" if piece.player is Player.HUMAN else "w"
                    cells.append(symbol.upper() if piece.is_king else symbol)
                elif is_playable_square(row, col):
                    cells.append(".")
                else:
                    cells.append(" ")
            rank = BOARD_SIZE - row
            lines.append(f"{rank} {' '.join(cells)} {rank}")
        lines.append("  a b c d e f g h")
        return "\n".join(lines)


def should_promote(piece: Piece, pos: Position) -> bool:
    return not piece.is_king and pos.row == piece.player.promotion_row


def position_to_notation(pos: Position) -> str:
    """(5, 0) -> 'a3'. Columns a-h left to right, rows 1-8 bottom to top."""
    return f"{chr(ord('a') + pos.col)}{BOARD_SIZE - pos.row}"


def notation_to_position(notation: str) -> Optional[Position]:
    if len(notation) != 2 or not notation[1].isdigit():
        return None
    pos = Position(BOARD_SIZE - int(notation[1]), ord(notation[0].lower()) - ord("a"))
    return pos if is_valid_position(pos) else None


def format_move(from_pos: Position, to_pos: Position, captured: bool) -> str:
    separator = " x " if captured else " -> "
    return f"{position_to_notation(from_pos)}{separator}{position_to_notation(to_pos)}"
