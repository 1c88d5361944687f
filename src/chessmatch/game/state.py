"""Game state — phase transitions and move history around a ChessMatch."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from chessmatch.core.enums import Color, PieceType
from chessmatch.core.match import PROMOTION_CHOICES, ChessMatch
from chessmatch.core.piece import Piece
from chessmatch.core.types import Mask, Position, as_position, position_name
from chessmatch.game.interfaces import GamePhase

_LOGGER = logging.getLogger(__name__)


@dataclass
class MoveRecord:
    """A single entry in the move history."""

    number: int
    color: Color
    source: Position
    target: Position
    piece_type: PieceType
    captured: Piece | None = None
    promoted_to: PieceType | None = None
    was_check: bool = False
    was_checkmate: bool = False

    @property
    def notation(self) -> str:
        """Long algebraic form, e.g. ``e2-e4``, ``e5xd6``, ``a7-a8=Q+``."""
        sep = "x" if self.captured is not None else "-"
        text = f"{position_name(self.source)}{sep}{position_name(self.target)}"
        if self.piece_type != PieceType.PAWN:
            text = self.piece_type.letter + text
        if self.promoted_to is not None:
            text += f"={self.promoted_to.letter}"
        if self.was_checkmate:
            text += "#"
        elif self.was_check:
            text += "+"
        return text


@dataclass
class GameState:
    """Owns a :class:`ChessMatch` plus phase and move history.

    This is a pure data/logic class — no I/O, no UI.
    """

    match: ChessMatch = field(default_factory=ChessMatch, init=False)
    phase: GamePhase = field(default=GamePhase.NOT_STARTED, init=False)
    move_history: list[MoveRecord] = field(default_factory=list, init=False)

    # ── Initialisation ───────────────────────────────────────────────────

    def setup(self, match: ChessMatch | None = None) -> None:
        """Initialise (or reset) the game, optionally from a custom match."""
        self.match = match if match is not None else ChessMatch()
        self.phase = (
            GamePhase.GAME_OVER if self.match.checkmate else GamePhase.AWAITING_MOVE
        )
        self.move_history.clear()

    # ── Move application ─────────────────────────────────────────────────

    def apply_move(self, source: Position | str, target: Position | str) -> MoveRecord:
        """Play a move on the match and return its history record.

        :class:`~chessmatch.core.errors.IllegalMoveError` propagates unchanged.
        """
        source = as_position(source)
        target = as_position(target)
        match = self.match
        color = match.current_player
        number = match.turn
        piece = match.board[source]

        captured = match.perform_move(source, target)

        assert piece is not None
        promoted = match.promoted
        record = MoveRecord(
            number=number,
            color=color,
            source=source,
            target=target,
            piece_type=piece.piece_type,
            captured=captured,
            promoted_to=promoted.piece_type if promoted is not None else None,
            was_check=match.check,
            was_checkmate=match.checkmate,
        )
        self.move_history.append(record)

        if match.checkmate:
            self.phase = GamePhase.GAME_OVER
        elif promoted is not None:
            self.phase = GamePhase.AWAITING_PROMOTION
        else:
            self.phase = GamePhase.AWAITING_MOVE
        return record

    def choose_promotion(self, letter: str) -> Piece:
        """Replace the auto-queened piece with the user's choice.

        Unknown letters keep the current piece and leave the promotion pending.
        """
        match = self.match
        piece = match.replace_promoted_piece(letter.strip().upper())
        if letter.strip().upper() not in PROMOTION_CHOICES:
            return piece

        if self.move_history:
            self.move_history[-1].promoted_to = piece.piece_type
        if self.phase == GamePhase.AWAITING_PROMOTION:
            self.phase = GamePhase.AWAITING_MOVE
        _LOGGER.debug("Promotion resolved to %s", piece.piece_type.name)
        return piece

    # ── Query helpers ────────────────────────────────────────────────────

    @property
    def current_player(self) -> Color:
        return self.match.current_player

    @property
    def is_game_over(self) -> bool:
        return self.phase == GamePhase.GAME_OVER

    @property
    def winner(self) -> Color | None:
        """The mating side; after checkmate ``current_player`` is the mated one."""
        return self.match.current_player.opposite if self.match.checkmate else None

    @property
    def ply_count(self) -> int:
        return len(self.move_history)

    @property
    def last_move(self) -> MoveRecord | None:
        return self.move_history[-1] if self.move_history else None

    def captured_by(self, color: Color) -> list[Piece]:
        """Pieces of *color* that have been captured, in capture order."""
        return [p for p in self.match.captured_pieces if p.color == color]

    def legal_targets(self, source: Position | str) -> Mask:
        return self.match.possible_moves(source)
