"""ChessMatch — turn state machine, move application and legality filter."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from chessmatch.core.board import Board, Snapshot
from chessmatch.core.enums import Color, PieceType
from chessmatch.core.errors import IllegalMoveError, IllegalStateError
from chessmatch.core.move_generator import (
    KINGSIDE_ROOK_COLUMN,
    QUEENSIDE_ROOK_COLUMN,
    MoveGenerator,
)
from chessmatch.core.piece import Piece
from chessmatch.core.rules import Rules
from chessmatch.core.types import (
    Mask,
    Position,
    as_position,
    empty_mask,
    from_algebraic,
    mask_squares,
)

_LOGGER = logging.getLogger(__name__)

PROMOTION_CHOICES: tuple[str, ...] = ("B", "N", "R", "Q")

_BACK_RANK: tuple[PieceType, ...] = (
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.QUEEN,
    PieceType.KING,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.ROOK,
)


@dataclass(slots=True)
class _MoveState:
    """Saved by :meth:`ChessMatch.make_move` so the move can be undone."""

    captured: Piece | None
    capture_square: Position | None
    live_index: int


class ChessMatch:
    """A single BLACK vs RED match.

    The match owns the board and every piece.  BLACK moves first.  Flags
    (``check``, ``checkmate``, ``en_passant_vulnerable``, ``promoted``) and the
    turn counter are only changed by :meth:`perform_move`;
    :meth:`make_move` / :meth:`undo_move` touch the board, the piece move
    counts and the live/captured piece lists, and are exact inverses.
    """

    __slots__ = (
        "board",
        "turn",
        "current_player",
        "check",
        "checkmate",
        "en_passant_vulnerable",
        "promoted",
        "pieces_on_the_board",
        "captured_pieces",
        "_history",
    )

    def __init__(self, setup: bool = True) -> None:
        self.board = Board()
        self.turn = 1
        self.current_player = Color.BLACK
        self.check = False
        self.checkmate = False
        self.en_passant_vulnerable: Piece | None = None
        self.promoted: Piece | None = None
        self.pieces_on_the_board: list[Piece] = []
        self.captured_pieces: list[Piece] = []
        self._history: list[_MoveState] = []
        if setup:
            self.initial_setup()

    # ── Queries ──────────────────────────────────────────────────────────

    def snapshot(self) -> Snapshot:
        """8×8 read-only view of the board (``None`` = empty square)."""
        return self.board.snapshot()

    @property
    def pieces(self) -> Snapshot:
        return self.snapshot()

    def move_generator(self) -> MoveGenerator:
        return MoveGenerator(self.board, self.en_passant_vulnerable)

    def possible_moves(self, source: Position | str) -> Mask:
        """Legal destination mask for the piece on *source*."""
        source = as_position(source)
        self._validate_source_position(source)
        piece = self.board[source]
        assert piece is not None
        return self._legal_moves(piece)

    def opponent(self, color: Color) -> Color:
        return color.opposite

    def king(self, color: Color) -> Piece:
        return Rules.king(self, color)

    def in_check(self, color: Color) -> bool:
        return Rules.is_in_check(self, color)

    def in_checkmate(self, color: Color) -> bool:
        return Rules.is_checkmate(self, color)

    # ── Public move operation ────────────────────────────────────────────

    def perform_move(
        self, source_position: Position | str, target_position: Position | str
    ) -> Piece | None:
        """Validate and play a move for the current player.

        Returns the captured piece, if any.  Raises :class:`IllegalMoveError`
        and leaves the match untouched when the move is not allowed.
        """
        if self.checkmate:
            raise IllegalMoveError("The match is over")

        source = as_position(source_position)
        target = as_position(target_position)
        self._validate_source_position(source)
        self._validate_target_position(source, target)
        captured = self.make_move(source, target)

        if self.in_check(self.current_player):
            self.undo_move(source, target, captured)
            _LOGGER.debug("Rejected %s-%s: leaves own king in check", source, target)
            raise IllegalMoveError("You can't put yourself in check")
        # committed moves cannot be undone
        self._history.pop()

        moved = self.board[target]
        assert moved is not None

        self.promoted = None
        if (
            moved.piece_type == PieceType.PAWN
            and target.row == moved.color.promotion_row
        ):
            self.promoted = moved
            self.promoted = self.replace_promoted_piece("Q")

        opponent = self.opponent(self.current_player)
        self.check = self.in_check(opponent)

        if self.in_checkmate(opponent):
            self.checkmate = True
            _LOGGER.info("Checkmate: %s wins on turn %d", self.current_player, self.turn)
            # the mated side is left to move, the turn counter stops
            self.current_player = opponent
        else:
            self._next_turn()

        if moved.piece_type == PieceType.PAWN and abs(target.row - source.row) == 2:
            self.en_passant_vulnerable = moved
        else:
            self.en_passant_vulnerable = None

        _LOGGER.debug(
            "Played %s %s %s-%s (captured=%r, check=%s)",
            moved.color,
            moved.piece_type.name,
            source,
            target,
            captured,
            self.check,
        )
        return captured

    def replace_promoted_piece(self, piece_type: str) -> Piece:
        """Swap the pending promoted piece for a ``B``/``N``/``R``/``Q``.

        An unrecognised letter leaves the board alone and returns the piece
        currently awaiting promotion.
        """
        if self.promoted is None:
            raise IllegalStateError("There is no piece to be promoted")
        if piece_type not in PROMOTION_CHOICES:
            return self.promoted

        pos = self.promoted.position
        assert pos is not None
        old = self.board.remove_piece(pos)
        assert old is not None
        self._remove_live(old)

        new_piece = Piece(
            PieceType.from_letter(piece_type), old.color, old.move_count
        )
        self.board.place_piece(new_piece, pos)
        self.pieces_on_the_board.append(new_piece)
        self.promoted = new_piece
        _LOGGER.debug("Promoted %s on %s to %s", old.color, pos, new_piece.piece_type.name)
        return new_piece

    # ── Core move operations ─────────────────────────────────────────────

    def make_move(self, source: Position, target: Position) -> Piece | None:
        """Move the piece on *source* to *target* without any legality test.

        Handles the castling rook and the en-passant victim.  Returns the
        captured piece (``None`` if nothing was captured).  Every call must be
        followed by :meth:`undo_move`; :meth:`perform_move` is the only caller
        that keeps the move.
        """
        piece = self.board[source]
        if piece is None:
            raise IllegalStateError(f"No piece on {source}")

        victim_square = target
        if (
            self.board.is_empty(target)
            and piece.piece_type == PieceType.PAWN
            and source.column != target.column
        ):
            # En passant: the victim stands beside the source square
            victim_square = Position(source.row, target.column)
            if self.board.is_empty(victim_square):
                raise IllegalStateError(f"No en passant victim on {victim_square}")

        self.board.remove_piece(source)
        piece.increase_move_count()
        captured = self.board.remove_piece(victim_square)
        self.board.place_piece(piece, target)
        capture_square = victim_square if captured is not None else None

        live_index = -1
        if captured is not None:
            live_index = self._remove_live(captured)
            self.captured_pieces.append(captured)

        if piece.piece_type == PieceType.KING:
            self._slide_castling_rook(source, target, forward=True)

        self._history.append(_MoveState(captured, capture_square, live_index))
        return captured

    def undo_move(
        self, source: Position, target: Position, captured: Piece | None
    ) -> None:
        """Undo the last :meth:`make_move` of *source* → *target*."""
        if not self._history:
            raise IllegalStateError("There is no move to undo")
        state = self._history.pop()
        if state.captured is not captured:
            raise IllegalStateError("Captured piece does not match the last move")

        piece = self.board.remove_piece(target)
        if piece is None:
            raise IllegalStateError(f"No piece on {target}")
        piece.decrease_move_count()
        self.board.place_piece(piece, source)

        if captured is not None and state.capture_square is not None:
            self.board.place_piece(captured, state.capture_square)
            self.captured_pieces.pop()
            self.pieces_on_the_board.insert(state.live_index, captured)

        if piece.piece_type == PieceType.KING:
            self._slide_castling_rook(source, target, forward=False)

    # ── Setup ────────────────────────────────────────────────────────────

    def place_new_piece(self, column: str, rank: int, piece: Piece) -> None:
        """Place a fresh piece on an algebraic square, e.g. ``('e', 1)``."""
        self.board.place_piece(piece, from_algebraic(column, rank))
        self.pieces_on_the_board.append(piece)

    def initial_setup(self) -> None:
        for color in (Color.BLACK, Color.RED):
            back_rank = 8 - color.back_row
            pawn_rank = 8 - color.pawn_row
            for column, piece_type in zip("abcdefgh", _BACK_RANK):
                self.place_new_piece(column, back_rank, Piece(piece_type, color))
            for column in "abcdefgh":
                self.place_new_piece(column, pawn_rank, Piece(PieceType.PAWN, color))

    # ── Internal ─────────────────────────────────────────────────────────

    def _validate_source_position(self, position: Position) -> None:
        piece = self.board[position]
        if piece is None:
            raise IllegalMoveError("There is no piece on source position")
        if piece.color != self.current_player:
            raise IllegalMoveError("The chosen piece is not yours")
        if not self.move_generator().is_there_any_possible_move(piece):
            raise IllegalMoveError("There are no possible moves for the chosen piece")

    def _validate_target_position(self, source: Position, target: Position) -> None:
        piece = self.board[source]
        assert piece is not None
        if not self.move_generator().possible_move(piece, target):
            raise IllegalMoveError("The chosen piece can't move to target position")

    def _legal_moves(self, piece: Piece) -> Mask:
        """Pseudo-legal mask minus the moves that leave *piece*'s king attacked."""
        source = piece.position
        assert source is not None
        legal = empty_mask()
        for target in mask_squares(self.move_generator().possible_moves(piece)):
            captured = self.make_move(source, target)
            exposed = self.in_check(piece.color)
            self.undo_move(source, target, captured)
            if not exposed:
                legal[target.row][target.column] = True
        return legal

    def _next_turn(self) -> None:
        self.turn += 1
        self.current_player = self.current_player.opposite

    def _remove_live(self, piece: Piece) -> int:
        for index, live in enumerate(self.pieces_on_the_board):
            if live is piece:
                del self.pieces_on_the_board[index]
                return index
        raise IllegalStateError(f"{piece!r} is not on the board")

    def _slide_castling_rook(
        self, source: Position, target: Position, *, forward: bool
    ) -> None:
        delta = target.column - source.column
        if abs(delta) != 2:
            return
        row = source.row
        if delta > 0:
            home = Position(row, KINGSIDE_ROOK_COLUMN)
            castled = Position(row, source.column + 1)
        else:
            home = Position(row, QUEENSIDE_ROOK_COLUMN)
            castled = Position(row, source.column - 1)

        origin, dest = (home, castled) if forward else (castled, home)
        rook = self.board.remove_piece(origin)
        if rook is None:
            raise IllegalStateError(f"No castling rook on {origin}")
        self.board.place_piece(rook, dest)
        if forward:
            rook.increase_move_count()
        else:
            rook.decrease_move_count()
