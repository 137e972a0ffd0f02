"""Core value types shared by the board, rules, evaluator and search."""

from dataclasses import dataclass
from enum import Enum
from typing import NamedTuple, Optional, Tuple

BOARD_SIZE = 8
INITIAL_PIECE_COUNT = 12


class Player(str, Enum):
    HUMAN = "human"
    AGATHA = "agatha"

    @property
    def opponent(self) -> "Player":
        return Player.AGATHA if self is Player.HUMAN else Player.HUMAN

    @property
    def forward(self) -> int:
        """Row delta of a man's advance: human moves up, Agatha moves down."""
        return -1 if self is Player.HUMAN else 1

    @property
    def promotion_row(self) -> int:
        return 0 if self is Player.HUMAN else BOARD_SIZE - 1


class PieceType(str, Enum):
    MAN = "man"
    KING = "king"


class GameStatus(str, Enum):
    PLAYING = "playing"
    HUMAN_WINS = "human_wins"
    AGATHA_WINS = "agatha_wins"
    DRAW = "draw"


class Position(NamedTuple):
    row: int
    col: int


@dataclass
class Piece:
    player: Player
    kind: PieceType
    position: Position

    @property
    def is_king(self) -> bool:
        return self.kind is PieceType.KING


@dataclass(frozen=True)
class Move:
    from_square: Position
    to_square: Position
    captures: Tuple[Position, ...] = ()
    is_promotion: bool = False

    @property
    def is_capture(self) -> bool:
        return len(self.captures) > 0

    @property
    def capture_count(self) -> int:
        return len(self.captures)

    @property
    def path(self) -> Tuple[Position, ...]:
        """Landing square of each hop; just the destination for a simple move."""
        if not self.captures:
            return (self.to_square,)
        squares = []
        current = self.from_square
        for jumped in self.captures:
            current = Position(2 * jumped.row - current.row, 2 * jumped.col - current.col)
            squares.append(current)
        return tuple(squares)


@dataclass(frozen=True)
class MoveRecord:
    """One entry of the append-only move history."""
    move_number: int
    player: Player
    from_square: Position
    to_square: Position
    captured: bool
    promoted: bool


def position_to_key(pos: Position) -> str:
    return f"{pos.row},{pos.col}"


def key_to_position(key: str) -> Optional[Position]:
    try:
        row, col = (int(part) for part in key.split(","))
    except ValueError:
        return None
    return Position(row, col)


def is_valid_position(pos: Position) -> bool:
    return 0 <= pos.row < BOARD_SIZE and 0 <= pos.col < BOARD_SIZE


def is_playable_square(row: int, col: int) -> bool:
    """Dark squares are the ones with an odd coordinate sum."""
    return (row + col) % 2 == 1
