"""Board coordinates, algebraic conversion and move masks.

Board layout (rows counted from the top)::

    row 0  →  rank 8
    row 7  →  rank 1
    column 0..7  →  files a..h
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import TypeAlias

from chessmatch.core.errors import IllegalMoveError

BOARD_SIZE = 8

FILES = "abcdefgh"
RANKS = "12345678"

Mask: TypeAlias = list[list[bool]]  # [row][column]


@dataclass(frozen=True, slots=True)
class Position:
    """A (row, column) pair.  May lie off the board while probing moves."""

    row: int
    column: int

    def offset(self, d_row: int, d_column: int) -> Position:
        return Position(self.row + d_row, self.column + d_column)

    def is_on_board(self) -> bool:
        return 0 <= self.row < BOARD_SIZE and 0 <= self.column < BOARD_SIZE

    def __str__(self) -> str:
        if self.is_on_board():
            return position_name(self)
        return f"({self.row}, {self.column})"


def parse_position(name: str) -> Position:
    """Parse an algebraic square, e.g. ``'e2'`` → ``Position(6, 4)``."""
    text = name.strip()
    if len(text) != 2 or text[0] not in FILES or text[1] not in RANKS:
        raise IllegalMoveError(
            f"Invalid position {name!r}. Valid values are from a1 to h8."
        )
    return from_algebraic(text[0], int(text[1]))


def from_algebraic(column: str, rank: int) -> Position:
    """``('e', 2)`` → ``Position(6, 4)``."""
    if column not in FILES or not 1 <= rank <= BOARD_SIZE:
        raise IllegalMoveError(
            f"Invalid position {column}{rank}. Valid values are from a1 to h8."
        )
    return Position(BOARD_SIZE - rank, ord(column) - ord("a"))


def position_name(pos: Position) -> str:
    """``Position(6, 4)`` → ``'e2'``."""
    return chr(ord("a") + pos.column) + str(BOARD_SIZE - pos.row)


def as_position(value: Position | str) -> Position:
    """Accept either an on-board :class:`Position` or an algebraic string."""
    if isinstance(value, Position):
        if not value.is_on_board():
            raise IllegalMoveError(
                f"Invalid position {value}. Valid values are from a1 to h8."
            )
        return value
    return parse_position(value)


# ── Masks ────────────────────────────────────────────────────────────────────


def empty_mask() -> Mask:
    return [[False] * BOARD_SIZE for _ in range(BOARD_SIZE)]


def mask_any(mask: Mask) -> bool:
    return any(any(row) for row in mask)


def mask_squares(mask: Mask) -> Iterator[Position]:
    """Yield every marked position, row by row."""
    for i, row in enumerate(mask):
        for j, marked in enumerate(row):
            if marked:
                yield Position(i, j)
