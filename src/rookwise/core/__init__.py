"""Core domain layer — pure chess rules with zero external dependencies.

Quick start::

    from rookwise.core import Board, Rules, parse_square

    board = Board.initial()
    Rules.legal_moves(board, parse_square("g1"))  # knight on g1
"""

from rookwise.core.board import Board, BoardSnapshot
from rookwise.core.enums import (
    AttackStatus,
    CastlingRights,
    CastlingSide,
    Color,
    PieceType,
    StatusKind,
)
from rookwise.core.errors import (
    ChessError,
    InvalidIndex,
    InvalidMove,
    InvariantViolation,
)
from rookwise.core.move import Move
from rookwise.core.move_generator import MoveGenerator
from rookwise.core.notation import (
    STARTING_PLACEMENT,
    board_from_placement,
    move_label,
    placement_of,
)
from rookwise.core.piece import Piece
from rookwise.core.rules import AttackMap, GameStatus, Rules
from rookwise.core.types import (
    Square,
    parse_square,
    square_name,
)

__all__ = [
    # Enums / flags
    "AttackStatus",
    "CastlingRights",
    "CastlingSide",
    "Color",
    "PieceType",
    "StatusKind",
    # Errors
    "ChessError",
    "InvalidIndex",
    "InvalidMove",
    "InvariantViolation",
    # Types / helpers
    "Square",
    "parse_square",
    "square_name",
    # Domain objects
    "AttackMap",
    "Board",
    "BoardSnapshot",
    "GameStatus",
    "Move",
    "MoveGenerator",
    "Piece",
    "Rules",
    # Notation
    "STARTING_PLACEMENT",
    "board_from_placement",
    "move_label",
    "placement_of",
]
