"""Core enumerations for the BLACK/RED chess variant."""

from __future__ import annotations

from enum import IntEnum


class Color(IntEnum):
    """Side color.

    BLACK starts on ranks 1–2 (rows 7 and 6) and moves first; RED starts on
    ranks 7–8 (rows 1 and 0).  Rows count from the top of the board, so
    BLACK advances towards row 0.
    """

    BLACK = 0
    RED = 1

    @property
    def opposite(self) -> Color:
        return Color(1 - self.value)

    @property
    def forward(self) -> int:
        """Row delta of a single pawn step."""
        return -1 if self == Color.BLACK else 1

    @property
    def back_row(self) -> int:
        return 7 if self == Color.BLACK else 0

    @property
    def pawn_row(self) -> int:
        return 6 if self == Color.BLACK else 1

    @property
    def promotion_row(self) -> int:
        return 0 if self == Color.BLACK else 7

    @property
    def en_passant_row(self) -> int:
        """Row a pawn must stand on to capture en passant."""
        return 3 if self == Color.BLACK else 4

    def __str__(self) -> str:
        return self.name

    def __format__(self, format_spec: str) -> str:
        return format(self.name, format_spec)


class PieceType(IntEnum):
    """Chess piece kinds."""

    KING = 1
    QUEEN = 2
    ROOK = 3
    BISHOP = 4
    KNIGHT = 5
    PAWN = 6

    @property
    def letter(self) -> str:
        return _LETTERS[self]

    @classmethod
    def from_letter(cls, letter: str) -> PieceType:
        """``"N"`` → :attr:`KNIGHT`."""
        try:
            return _FROM_LETTER[letter.upper()]
        except KeyError:
            raise ValueError(f"Invalid piece letter: {letter!r}") from None


_LETTERS: dict[PieceType, str] = {
    PieceType.KING: "K",
    PieceType.QUEEN: "Q",
    PieceType.ROOK: "R",
    PieceType.BISHOP: "B",
    PieceType.KNIGHT: "N",
    PieceType.PAWN: "P",
}

_FROM_LETTER: dict[str, PieceType] = {v: k for k, v in _LETTERS.items()}
