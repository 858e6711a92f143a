"""Game management layer — state engine, history, controller.

Quick start::

    from rookwise.game import GameController

    ctrl = GameController()
    ctrl.new_game()
    ctrl.click((6, 4))  # select the e2 pawn
    ctrl.click((4, 4))  # play e2-e4
"""

from rookwise.game.controller import GameController, GameEvents
from rookwise.game.history import HistoryEntry, MoveHistory
from rookwise.game.interfaces import GamePhase, MoveResult
from rookwise.game.settings import GameSettings
from rookwise.game.state import GameState

__all__ = [
    "GameController",
    "GameEvents",
    "GamePhase",
    "GameSettings",
    "GameState",
    "HistoryEntry",
    "MoveHistory",
    "MoveResult",
]
