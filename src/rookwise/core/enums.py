"""Core enumerations and flags for the rules engine."""

from __future__ import annotations

from enum import IntEnum, IntFlag


class Color(IntEnum):
    """Side color."""

    WHITE = 0
    BLACK = 1

    @property
    def opposite(self) -> Color:
        return Color(1 - self.value)

    def __str__(self) -> str:
        return self.name.lower()


class PieceType(IntEnum):
    """Chess piece types ordered by conventional value."""

    PAWN = 1
    KNIGHT = 2
    BISHOP = 3
    ROOK = 4
    QUEEN = 5
    KING = 6


class CastlingSide(IntEnum):
    KINGSIDE = 0
    QUEENSIDE = 1


class CastlingRights(IntFlag):
    """Which castling pieces have left their original squares.

    Flags are only ever added during a game; a fresh game starts from NONE.
    """

    NONE = 0
    WHITE_KING_MOVED = 1
    WHITE_KINGSIDE_ROOK_MOVED = 2
    WHITE_QUEENSIDE_ROOK_MOVED = 4
    BLACK_KING_MOVED = 8
    BLACK_KINGSIDE_ROOK_MOVED = 16
    BLACK_QUEENSIDE_ROOK_MOVED = 32

    WHITE_ALL = 7
    BLACK_ALL = 56

    @staticmethod
    def king_moved(color: Color) -> CastlingRights:
        if color == Color.WHITE:
            return CastlingRights.WHITE_KING_MOVED
        return CastlingRights.BLACK_KING_MOVED

    @staticmethod
    def rook_moved(color: Color, side: CastlingSide) -> CastlingRights:
        if color == Color.WHITE:
            if side == CastlingSide.KINGSIDE:
                return CastlingRights.WHITE_KINGSIDE_ROOK_MOVED
            return CastlingRights.WHITE_QUEENSIDE_ROOK_MOVED
        if side == CastlingSide.KINGSIDE:
            return CastlingRights.BLACK_KINGSIDE_ROOK_MOVED
        return CastlingRights.BLACK_QUEENSIDE_ROOK_MOVED

    def can_castle(self, color: Color, side: CastlingSide) -> bool:
        """Neither the king nor the *side* rook of *color* has moved."""
        blocking = CastlingRights.king_moved(color) | CastlingRights.rook_moved(
            color, side
        )
        return not self & blocking


class StatusKind(IntEnum):
    """Game status classification after a move."""

    IN_PROGRESS = 0
    CHECK = 1
    CHECKMATE = 2
    STALEMATE = 3


class AttackStatus(IntEnum):
    """Overlay classification of an occupied square."""

    NONE = 0
    ATTACKING = 1
    ATTACKED = 2
    BOTH = 3
