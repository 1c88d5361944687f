"""Pseudo-legal move masks for every piece kind.

A pseudo-legal move respects the piece's movement pattern and board
occupancy but may leave the mover's own king attacked; filtering those out
is the job of :class:`~chessmatch.core.match.ChessMatch`.
"""

from __future__ import annotations

from chessmatch.core.board import Board
from chessmatch.core.enums import PieceType
from chessmatch.core.piece import Piece
from chessmatch.core.types import Mask, Position, empty_mask, mask_any

KNIGHT_OFFSETS: tuple[tuple[int, int], ...] = (
    (-2, -1),
    (-2, 1),
    (-1, -2),
    (-1, 2),
    (1, -2),
    (1, 2),
    (2, -1),
    (2, 1),
)

KING_OFFSETS: tuple[tuple[int, int], ...] = (
    (-1, -1),
    (-1, 0),
    (-1, 1),
    (0, -1),
    (0, 1),
    (1, -1),
    (1, 0),
    (1, 1),
)

BISHOP_DIRS: tuple[tuple[int, int], ...] = ((-1, -1), (-1, 1), (1, -1), (1, 1))
ROOK_DIRS: tuple[tuple[int, int], ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))
QUEEN_DIRS: tuple[tuple[int, int], ...] = BISHOP_DIRS + ROOK_DIRS

KING_HOME_COLUMN = 4
KINGSIDE_ROOK_COLUMN = 7
QUEENSIDE_ROOK_COLUMN = 0


class MoveGenerator:
    """Computes 8×8 pseudo-legal masks.

    The board and the en-passant-vulnerable pawn are handed in explicitly, so
    pieces never need references back to the board or the match.  Masks are
    computed on every call and never cached.
    """

    __slots__ = ("_board", "_en_passant_vulnerable")

    def __init__(
        self, board: Board, en_passant_vulnerable: Piece | None = None
    ) -> None:
        self._board = board
        self._en_passant_vulnerable = en_passant_vulnerable

    # -- Public API ---------------------------------------------------------

    def possible_moves(self, piece: Piece) -> Mask:
        """Pseudo-legal destination mask for *piece* from its current square."""
        if piece.position is None:
            raise ValueError(f"{piece!r} is not on the board")

        mask = empty_mask()
        kind = piece.piece_type
        if kind == PieceType.PAWN:
            self._gen_pawn(piece, mask)
        elif kind == PieceType.KNIGHT:
            self._gen_steps(piece, KNIGHT_OFFSETS, mask)
        elif kind == PieceType.BISHOP:
            self._gen_sliding(piece, BISHOP_DIRS, mask)
        elif kind == PieceType.ROOK:
            self._gen_sliding(piece, ROOK_DIRS, mask)
        elif kind == PieceType.QUEEN:
            self._gen_sliding(piece, QUEEN_DIRS, mask)
        else:
            self._gen_steps(piece, KING_OFFSETS, mask)
            self._gen_castling(piece, mask)
        return mask

    def possible_move(self, piece: Piece, target: Position) -> bool:
        if not target.is_on_board():
            return False
        return self.possible_moves(piece)[target.row][target.column]

    def is_there_any_possible_move(self, piece: Piece) -> bool:
        return mask_any(self.possible_moves(piece))

    # -- Piece-specific generators (private) -------------------------------

    def _can_move(self, piece: Piece, pos: Position) -> bool:
        """On the board and not occupied by a friendly piece."""
        return pos.is_on_board() and not self._board.is_friendly_piece(
            pos, piece.color
        )

    def _gen_steps(
        self, piece: Piece, offsets: tuple[tuple[int, int], ...], mask: Mask
    ) -> None:
        origin = piece.position
        assert origin is not None
        for d_row, d_col in offsets:
            to = origin.offset(d_row, d_col)
            if self._can_move(piece, to):
                mask[to.row][to.column] = True

    def _gen_sliding(
        self, piece: Piece, directions: tuple[tuple[int, int], ...], mask: Mask
    ) -> None:
        board = self._board
        origin = piece.position
        assert origin is not None
        for d_row, d_col in directions:
            to = origin.offset(d_row, d_col)
            while to.is_on_board():
                target = board[to]
                if target is None:
                    mask[to.row][to.column] = True
                    to = to.offset(d_row, d_col)
                    continue
                if target.color != piece.color:
                    mask[to.row][to.column] = True
                break

    def _gen_pawn(self, piece: Piece, mask: Mask) -> None:
        board = self._board
        origin = piece.position
        assert origin is not None
        step = piece.color.forward

        one_step = origin.offset(step, 0)
        if one_step.is_on_board() and board.is_empty(one_step):
            mask[one_step.row][one_step.column] = True
            two_step = origin.offset(2 * step, 0)
            if (
                not piece.has_moved
                and two_step.is_on_board()
                and board.is_empty(two_step)
            ):
                mask[two_step.row][two_step.column] = True

        for d_col in (-1, 1):
            diagonal = origin.offset(step, d_col)
            if diagonal.is_on_board() and board.is_opponent_piece(
                diagonal, piece.color
            ):
                mask[diagonal.row][diagonal.column] = True

        # En passant
        vulnerable = self._en_passant_vulnerable
        if vulnerable is None or origin.row != piece.color.en_passant_row:
            return
        for d_col in (-1, 1):
            side = origin.offset(0, d_col)
            if (
                side.is_on_board()
                and board.is_opponent_piece(side, piece.color)
                and board[side] is vulnerable
            ):
                dest = side.offset(step, 0)
                mask[dest.row][dest.column] = True

    def _gen_castling(self, king: Piece, mask: Mask) -> None:
        # Check on the king square and attacked transit squares are not tested.
        origin = king.position
        assert origin is not None
        if king.has_moved or origin.column != KING_HOME_COLUMN:
            return

        board = self._board
        row = origin.row

        if self._is_castling_rook(king, Position(row, KINGSIDE_ROOK_COLUMN)) and all(
            board.is_empty(Position(row, col)) for col in (5, 6)
        ):
            mask[row][6] = True

        if self._is_castling_rook(king, Position(row, QUEENSIDE_ROOK_COLUMN)) and all(
            board.is_empty(Position(row, col)) for col in (1, 2, 3)
        ):
            mask[row][2] = True

    def _is_castling_rook(self, king: Piece, pos: Position) -> bool:
        rook = self._board[pos]
        return (
            rook is not None
            and rook.piece_type == PieceType.ROOK
            and rook.color == king.color
            and not rook.has_moved
        )
