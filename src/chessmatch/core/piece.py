"""Piece carrier: kind, color, move count and current square."""

from __future__ import annotations

from dataclasses import dataclass

from chessmatch.core.enums import Color, PieceType
from chessmatch.core.types import Position

_UNICODE: dict[tuple[Color, PieceType], str] = {
    (Color.BLACK, PieceType.KING): "♚",
    (Color.BLACK, PieceType.QUEEN): "♛",
    (Color.BLACK, PieceType.ROOK): "♜",
    (Color.BLACK, PieceType.BISHOP): "♝",
    (Color.BLACK, PieceType.KNIGHT): "♞",
    (Color.BLACK, PieceType.PAWN): "♟",
    (Color.RED, PieceType.KING): "♔",
    (Color.RED, PieceType.QUEEN): "♕",
    (Color.RED, PieceType.ROOK): "♖",
    (Color.RED, PieceType.BISHOP): "♗",
    (Color.RED, PieceType.KNIGHT): "♘",
    (Color.RED, PieceType.PAWN): "♙",
}


@dataclass(eq=False, slots=True)
class Piece:
    """A single piece of a match.

    Pieces are compared by identity: two red pawns are different pieces.
    ``position`` is maintained by :class:`~chessmatch.core.board.Board` and is
    ``None`` while the piece is off the board.
    """

    piece_type: PieceType
    color: Color
    move_count: int = 0
    position: Position | None = None

    def increase_move_count(self) -> None:
        self.move_count += 1

    def decrease_move_count(self) -> None:
        self.move_count -= 1

    @property
    def has_moved(self) -> bool:
        return self.move_count > 0

    @property
    def letter(self) -> str:
        return self.piece_type.letter

    @property
    def symbol(self) -> str:
        """Unicode chess symbol, e.g. ♞."""
        return _UNICODE[(self.color, self.piece_type)]

    def __str__(self) -> str:
        return self.letter

    def __repr__(self) -> str:
        where = self.position if self.position is not None else "-"
        return f"Piece({self.color.name} {self.piece_type.name} @ {where}, moves={self.move_count})"
