"""Core engine components: board, rules, evaluator and search."""

from .board import Board
from .evaluator import Evaluator
from .search import SearchEngine, SearchResult
from .types import Move, Piece, PieceType, Player, Position
