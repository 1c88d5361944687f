"""GameController — the orchestrator front-ends talk to.

Coordinates: GameState, ChessMatch.
Emits events via simple callbacks so the UI / tests can subscribe.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from chessmatch.core.enums import Color
from chessmatch.core.errors import IllegalMoveError
from chessmatch.core.match import PROMOTION_CHOICES, ChessMatch
from chessmatch.core.piece import Piece
from chessmatch.core.types import Position
from chessmatch.game.interfaces import GamePhase
from chessmatch.game.state import GameState, MoveRecord

_LOGGER = logging.getLogger(__name__)

# ── Event definitions ────────────────────────────────────────────────────────

MoveCallback = Callable[[MoveRecord, GameState], None]
PromotionCallback = Callable[[Piece], None]  # piece awaiting a choice
GameOverCallback = Callable[[Color], None]  # winner
PhaseCallback = Callable[[GamePhase], None]
ErrorCallback = Callable[[str], None]


@dataclass
class GameEvents:
    """Observable callbacks. Multiple handlers per event."""

    on_move: list[MoveCallback] = field(default_factory=list)
    on_promotion: list[PromotionCallback] = field(default_factory=list)
    on_game_over: list[GameOverCallback] = field(default_factory=list)
    on_phase_changed: list[PhaseCallback] = field(default_factory=list)
    on_error: list[ErrorCallback] = field(default_factory=list)


# ── Controller ───────────────────────────────────────────────────────────────


class GameController:
    """Routes user input into the match and notifies listeners.

    While a promotion is pending, moves are refused until
    :meth:`choose_promotion` resolves it.  Methods are meant to be called
    from a single thread.
    """

    __slots__ = ("_state", "last_error", "events")

    def __init__(self) -> None:
        self._state = GameState()
        self.last_error: str | None = None
        self.events = GameEvents()

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def match(self) -> ChessMatch:
        return self._state.match

    @property
    def phase(self) -> GamePhase:
        return self._state.phase

    # ── Commands ─────────────────────────────────────────────────────────

    def new_game(self, match: ChessMatch | None = None) -> None:
        self._state = GameState()
        self._state.setup(match)
        self.last_error = None
        _LOGGER.debug("New game started")
        self._emit_phase(self._state.phase)

    def submit_move(self, source: Position | str, target: Position | str) -> bool:
        """Try a move. Returns True if it was legal and applied."""
        if self._state.phase == GamePhase.AWAITING_PROMOTION:
            return self._reject("Choose a piece for the promotion first")
        if self._state.phase != GamePhase.AWAITING_MOVE:
            return self._reject("The match is not accepting moves")

        try:
            record = self._state.apply_move(source, target)
        except IllegalMoveError as exc:
            return self._reject(str(exc))

        self.last_error = None
        self._emit_move(record)

        promoted = self.match.promoted
        if self._state.phase == GamePhase.AWAITING_PROMOTION and promoted is not None:
            self._emit_phase(GamePhase.AWAITING_PROMOTION)
            for cb in self.events.on_promotion:
                cb(promoted)
        elif self._state.is_game_over:
            winner = self._state.winner
            assert winner is not None
            self._emit_phase(GamePhase.GAME_OVER)
            for cb in self.events.on_game_over:
                cb(winner)
        return True

    def choose_promotion(self, letter: str) -> bool:
        """Resolve a pending promotion. Returns False for an unknown letter."""
        if (
            self._state.phase != GamePhase.AWAITING_PROMOTION
            or self.match.promoted is None
        ):
            return self._reject("There is no piece to be promoted")
        if letter.strip().upper() not in PROMOTION_CHOICES:
            return self._reject(f"Invalid promotion piece {letter!r}")
        before = self._state.phase
        self._state.choose_promotion(letter)
        self.last_error = None
        if self._state.phase != before:
            self._emit_phase(self._state.phase)
        return True

    # ── Internal helpers ─────────────────────────────────────────────────

    def _reject(self, message: str) -> bool:
        self.last_error = message
        _LOGGER.debug("Rejected input: %s", message)
        for cb in self.events.on_error:
            cb(message)
        return False

    def _emit_move(self, record: MoveRecord) -> None:
        for cb in self.events.on_move:
            cb(record, self._state)

    def _emit_phase(self, phase: GamePhase) -> None:
        for cb in self.events.on_phase_changed:
            cb(phase)
