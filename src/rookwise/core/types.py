"""Square type alias and coordinate helpers.

Board layout (row, col), row 0 at the top::

    (0, 0)=a8 ... (0, 7)=h8
    ...
    (7, 0)=a1 ... (7, 7)=h1

White starts on rows 6-7 and its pawns advance toward row 0.
"""

from __future__ import annotations

from typing import TypeAlias

Square: TypeAlias = tuple[int, int]  # (row, col), each 0–7

_FILES = "abcdefgh"


def is_on_board(row: int, col: int) -> bool:
    """Check whether (row, col) lies on the 8x8 board."""
    return 0 <= row < 8 and 0 <= col < 8


def square_name(sq: Square) -> str:
    """Human-readable name, e.g. (7, 4) → 'e1', (0, 0) → 'a8'."""
    return _FILES[sq[1]] + str(8 - sq[0])


def parse_square(name: str) -> Square:
    """Parse square name, e.g. 'e4' → (4, 4)."""
    if len(name) != 2 or name[0] not in _FILES or name[1] not in "12345678":
        raise ValueError(f"Invalid square name: {name!r}")
    return (8 - int(name[1]), _FILES.index(name[0]))


ALL_SQUARES: tuple[Square, ...] = tuple(
    (row, col) for row in range(8) for col in range(8)
)
