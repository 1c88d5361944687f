"""Game management layer — controller, state machine, move history.

Quick start::

    from chessmatch.game import GameController

    ctrl = GameController()
    ctrl.new_game()
    ctrl.submit_move("e2", "e4")
"""

from chessmatch.game.controller import GameController, GameEvents
from chessmatch.game.interfaces import GamePhase
from chessmatch.game.state import GameState, MoveRecord

__all__ = [
    "GameController",
    "GameEvents",
    "GamePhase",
    "GameState",
    "MoveRecord",
]
