"""Core domain layer — pure chess rules with zero external dependencies.

Quick start::

    from chessmatch.core import ChessMatch

    match = ChessMatch()
    match.perform_move("e2", "e4")
    mask = match.possible_moves("e7")
"""

from chessmatch.core.board import Board
from chessmatch.core.enums import Color, PieceType
from chessmatch.core.errors import ChessError, IllegalMoveError, IllegalStateError
from chessmatch.core.match import PROMOTION_CHOICES, ChessMatch
from chessmatch.core.move_generator import MoveGenerator
from chessmatch.core.piece import Piece
from chessmatch.core.rules import Rules
from chessmatch.core.types import (
    Mask,
    Position,
    empty_mask,
    from_algebraic,
    mask_any,
    mask_squares,
    parse_position,
    position_name,
)

__all__ = [
    # Enums
    "Color",
    "PieceType",
    # Errors
    "ChessError",
    "IllegalMoveError",
    "IllegalStateError",
    # Types / helpers
    "Mask",
    "Position",
    "empty_mask",
    "from_algebraic",
    "mask_any",
    "mask_squares",
    "parse_position",
    "position_name",
    # Domain objects
    "Board",
    "ChessMatch",
    "MoveGenerator",
    "PROMOTION_CHOICES",
    "Piece",
    "Rules",
]
