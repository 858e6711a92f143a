"""Board - piece placement on an 8x8 grid."""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from dataclasses import dataclass

from rookwise.core.enums import Color, PieceType
from rookwise.core.errors import InvariantViolation
from rookwise.core.piece import Piece
from rookwise.core.types import Square

_BACK_RANK: tuple[PieceType, ...] = (
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.QUEEN,
    PieceType.KING,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.ROOK,
)


def _render(cells: Sequence[Sequence[Piece | None]]) -> str:
    rows: list[str] = []
    for row_idx, row in enumerate(cells):
        rows.append(f"{8 - row_idx} {' '.join(str(p) if p else '.' for p in row)}")
    rows.append("  a b c d e f g h")
    return "\n".join(rows)


@dataclass(frozen=True, slots=True)
class BoardSnapshot:
    """Immutable copy of a board, safe to keep in history."""

    cells: tuple[tuple[Piece | None, ...], ...]

    def __getitem__(self, sq: Square) -> Piece | None:
        return self.cells[sq[0]][sq[1]]

    def to_board(self) -> Board:
        b = Board()
        b._grid = [list(row) for row in self.cells]
        return b

    def __repr__(self) -> str:
        return _render(self.cells)


class Board:
    """Mutable 8x8 board of optional pieces, indexed by ``(row, col)``."""

    __slots__ = ("_grid",)

    def __init__(self) -> None:
        self._grid: list[list[Piece | None]] = [[None] * 8 for _ in range(8)]

    # -- Element access -----------------------------------------------------

    def __getitem__(self, sq: Square) -> Piece | None:
        return self._grid[sq[0]][sq[1]]

    def __setitem__(self, sq: Square, piece: Piece | None) -> None:
        self._grid[sq[0]][sq[1]] = piece

    def is_empty(self, sq: Square) -> bool:
        return self._grid[sq[0]][sq[1]] is None

    # -- Query helpers ------------------------------------------------------

    def occupied(self) -> Iterator[tuple[Square, Piece]]:
        """Yield ``(square, piece)`` for every occupied square, row by row."""
        for row, cells in enumerate(self._grid):
            for col, piece in enumerate(cells):
                if piece is not None:
                    yield (row, col), piece

    def pieces(self, color: Color) -> list[tuple[Square, Piece]]:
        """Occupied squares of *color*."""
        return [(sq, p) for sq, p in self.occupied() if p.color == color]

    def count(self, color: Color, piece_type: PieceType) -> int:
        return sum(
            1
            for _, p in self.occupied()
            if p.color == color and p.piece_type == piece_type
        )

    def king_square(self, color: Color) -> Square:
        """Return the single king square for *color*."""
        for sq, piece in self.occupied():
            if piece.color == color and piece.piece_type == PieceType.KING:
                return sq
        raise InvariantViolation(f"No {color.name} king on board")

    # -- Mutation / copying -------------------------------------------------

    def copy(self) -> Board:
        b = Board()
        b._grid = [row.copy() for row in self._grid]
        return b

    def snapshot(self) -> BoardSnapshot:
        return BoardSnapshot(tuple(tuple(row) for row in self._grid))

    # -- Factory ------------------------------------------------------------

    @classmethod
    def initial(cls) -> Board:
        """Standard starting position."""
        b = cls()
        for col in range(8):
            b[(1, col)] = Piece(Color.BLACK, PieceType.PAWN)
            b[(6, col)] = Piece(Color.WHITE, PieceType.PAWN)
        for col, pt in enumerate(_BACK_RANK):
            b[(0, col)] = Piece(Color.BLACK, pt)
            b[(7, col)] = Piece(Color.WHITE, pt)
        return b

    # -- Dunder helpers -----------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if isinstance(other, BoardSnapshot):
            return self.snapshot() == other
        if not isinstance(other, Board):
            return NotImplemented
        return self._grid == other._grid

    def __repr__(self) -> str:
        return _render(self._grid)
