"""Game-phase states shared by the session layer and the front-ends."""

from __future__ import annotations

from enum import IntEnum, auto


class GamePhase(IntEnum):
    """Finite-state-machine states for a match session."""

    NOT_STARTED = auto()
    AWAITING_MOVE = auto()
    AWAITING_PROMOTION = auto()  # pawn auto-queened, user may pick another piece
    GAME_OVER = auto()
