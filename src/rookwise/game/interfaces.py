"""Value types shared by the game layer."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum, auto

from rookwise.core.enums import CastlingSide
from rookwise.core.move import Move
from rookwise.core.piece import Piece
from rookwise.core.rules import GameStatus

# ── Game phase FSM states ────────────────────────────────────────────────────


class GamePhase(IntEnum):
    """Finite-state-machine states for a game.

    CHECKMATE and STALEMATE are terminal.
    """

    SELECTING = auto()  # waiting for the side to move to pick a piece
    MOVING = auto()  # a piece is selected, destinations are cached
    CHECK = auto()  # side to move is in check, nothing selected
    CHECKMATE = auto()
    STALEMATE = auto()


@dataclass(frozen=True, slots=True)
class MoveResult:
    """Outcome of a single applied move."""

    move: Move
    piece: Piece
    captured: Piece | None
    status: GameStatus
    promoted_to: Piece | None = None
    castled: CastlingSide | None = None
