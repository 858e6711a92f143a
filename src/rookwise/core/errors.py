"""Exceptions raised at the engine and history API boundary."""

from __future__ import annotations


class ChessError(Exception):
    """Base class for all rookwise errors."""


class InvalidMove(ChessError, ValueError):
    """Destination is not legal, or the game is already over."""


class InvalidIndex(ChessError, IndexError):
    """History index out of range."""


class InvariantViolation(ChessError, RuntimeError):
    """The board is in a state no legal game can reach (e.g. a missing king)."""
