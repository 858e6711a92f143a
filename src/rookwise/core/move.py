"""Move value object (coordinate notation)."""

from __future__ import annotations

from dataclasses import dataclass

from rookwise.core.types import Square, parse_square, square_name


@dataclass(frozen=True, slots=True)
class Move:
    """A plain from/to pair.

    Castling and promotion are not tagged here: they are recognised from the
    board when the move is applied.
    """

    from_sq: Square
    to_sq: Square

    def __str__(self) -> str:
        return f"{square_name(self.from_sq)}{square_name(self.to_sq)}"

    @classmethod
    def parse(cls, text: str) -> Move:
        """Parse coordinate notation, e.g. 'e2e4'."""
        text = text.strip()
        if len(text) != 4:
            raise ValueError(f"Invalid move: {text!r}")
        return cls(parse_square(text[:2]), parse_square(text[2:]))
