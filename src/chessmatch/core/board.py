"""Board - piece placement on an 8x8 grid."""

from __future__ import annotations

from collections.abc import Iterator

from chessmatch.core.enums import Color
from chessmatch.core.errors import IllegalStateError
from chessmatch.core.piece import Piece
from chessmatch.core.types import BOARD_SIZE, Position

Snapshot = tuple[tuple[Piece | None, ...], ...]


class Board:
    """Mutable grid of optional piece slots, indexed by :class:`Position`."""

    __slots__ = ("_grid",)

    def __init__(self) -> None:
        self._grid: list[list[Piece | None]] = [
            [None] * BOARD_SIZE for _ in range(BOARD_SIZE)
        ]

    # -- Element access -----------------------------------------------------

    def __getitem__(self, pos: Position) -> Piece | None:
        return self.piece(pos)

    def piece(self, pos: Position) -> Piece | None:
        self._require_on_board(pos)
        return self._grid[pos.row][pos.column]

    def position_exists(self, pos: Position) -> bool:
        return pos.is_on_board()

    def there_is_a_piece(self, pos: Position) -> bool:
        return self.piece(pos) is not None

    def is_empty(self, pos: Position) -> bool:
        return self.piece(pos) is None

    def is_opponent_piece(self, pos: Position, color: Color) -> bool:
        """Whether *pos* holds a piece of the side opposing *color*."""
        piece = self.piece(pos)
        return piece is not None and piece.color != color

    def is_friendly_piece(self, pos: Position, color: Color) -> bool:
        piece = self.piece(pos)
        return piece is not None and piece.color == color

    # -- Mutation -----------------------------------------------------------

    def place_piece(self, piece: Piece, pos: Position) -> None:
        """Put *piece* on the empty square *pos*."""
        if self.there_is_a_piece(pos):
            raise IllegalStateError(f"There is already a piece on position {pos}")
        self._grid[pos.row][pos.column] = piece
        piece.position = pos

    def remove_piece(self, pos: Position) -> Piece | None:
        """Lift whatever stands on *pos* (``None`` if the square is empty)."""
        piece = self.piece(pos)
        if piece is None:
            return None
        self._grid[pos.row][pos.column] = None
        piece.position = None
        return piece

    # -- Views --------------------------------------------------------------

    def snapshot(self) -> Snapshot:
        """Read-only 8×8 view of piece references."""
        return tuple(tuple(row) for row in self._grid)

    def pieces(self) -> Iterator[Piece]:
        for row in self._grid:
            for piece in row:
                if piece is not None:
                    yield piece

    def occupied_count(self) -> int:
        return sum(1 for _ in self.pieces())

    @staticmethod
    def _require_on_board(pos: Position) -> None:
        if not pos.is_on_board():
            raise IllegalStateError(f"Position {pos} is not on the board")

    # -- Dunder helpers -----------------------------------------------------

    def __repr__(self) -> str:
        rows: list[str] = []
        for i, row in enumerate(self._grid):
            cells = [str(p) if p is not None else "-" for p in row]
            rows.append(f"{BOARD_SIZE - i} {' '.join(cells)}")
        rows.append("  a b c d e f g h")
        return "\n".join(rows)
