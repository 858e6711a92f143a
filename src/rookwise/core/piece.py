"""Piece value object."""

from __future__ import annotations

from dataclasses import dataclass

from rookwise.core.enums import Color, PieceType

_LETTERS: dict[PieceType, str] = {
    PieceType.PAWN: "p",
    PieceType.KNIGHT: "n",
    PieceType.BISHOP: "b",
    PieceType.ROOK: "r",
    PieceType.QUEEN: "q",
    PieceType.KING: "k",
}
_TYPES_BY_LETTER: dict[str, PieceType] = {v: k for k, v in _LETTERS.items()}

# (white, black) glyphs
_SYMBOLS: dict[PieceType, tuple[str, str]] = {
    PieceType.PAWN: ("♙", "♟"),
    PieceType.KNIGHT: ("♘", "♞"),
    PieceType.BISHOP: ("♗", "♝"),
    PieceType.ROOK: ("♖", "♜"),
    PieceType.QUEEN: ("♕", "♛"),
    PieceType.KING: ("♔", "♚"),
}


@dataclass(frozen=True, slots=True)
class Piece:
    """A coloured piece.  Equal pieces compare and hash equal.

    A move replaces the reference stored on a square; promotion stores a new
    ``Piece`` instead of changing the pawn.
    """

    color: Color
    piece_type: PieceType

    def __str__(self) -> str:
        """Placement letter, uppercase for White."""
        letter = _LETTERS[self.piece_type]
        return letter.upper() if self.color == Color.WHITE else letter

    @classmethod
    def from_char(cls, char: str) -> Piece:
        """'N' → white knight, 'q' → black queen."""
        ptype = _TYPES_BY_LETTER.get(char.lower()) if len(char) == 1 else None
        if ptype is None:
            raise ValueError(f"Invalid piece character: {char!r}")
        return cls(Color.WHITE if char.isupper() else Color.BLACK, ptype)

    @property
    def symbol(self) -> str:
        """Unicode glyph used in history labels, e.g. ♞."""
        return _SYMBOLS[self.piece_type][self.color]
