"""High-level chess rules: check and checkmate detection."""

from __future__ import annotations

from typing import TYPE_CHECKING

from chessmatch.core.enums import Color, PieceType
from chessmatch.core.errors import IllegalStateError
from chessmatch.core.piece import Piece
from chessmatch.core.types import mask_squares

if TYPE_CHECKING:
    from chessmatch.core.match import ChessMatch


class Rules:
    """Static rule-checker that operates on a :class:`ChessMatch`.

    Stalemate is not a rule of this match: a side that is not in check but has
    no legal move simply cannot move.
    """

    @staticmethod
    def king(match: ChessMatch, color: Color) -> Piece:
        for piece in match.pieces_on_the_board:
            if piece.color == color and piece.piece_type == PieceType.KING:
                return piece
        raise IllegalStateError(f"There is no {color} king on the board")

    @staticmethod
    def is_in_check(match: ChessMatch, color: Color) -> bool:
        """Is *color*'s king marked by any opposing pseudo-legal mask?"""
        king_pos = Rules.king(match, color).position
        assert king_pos is not None
        gen = match.move_generator()
        opponent = color.opposite
        for piece in match.pieces_on_the_board:
            if piece.color != opponent:
                continue
            if gen.possible_moves(piece)[king_pos.row][king_pos.column]:
                return True
        return False

    @staticmethod
    def is_checkmate(match: ChessMatch, color: Color) -> bool:
        if not Rules.is_in_check(match, color):
            return False
        return not Rules.has_legal_move(match, color)

    @staticmethod
    def has_legal_move(match: ChessMatch, color: Color) -> bool:
        """Whether any piece of *color* has a move that escapes check.

        Every candidate is tried with ``make_move`` / ``undo_move``; the match
        is left exactly as it was found.
        """
        for piece in [p for p in match.pieces_on_the_board if p.color == color]:
            source = piece.position
            assert source is not None
            for target in mask_squares(match.move_generator().possible_moves(piece)):
                captured = match.make_move(source, target)
                still_in_check = Rules.is_in_check(match, color)
                match.undo_move(source, target, captured)
                if not still_in_check:
                    return True
        return False
