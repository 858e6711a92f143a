"""Text forms: piece placement (FEN board field) and history labels."""

from __future__ import annotations

from rookwise.core.board import Board, BoardSnapshot
from rookwise.core.move import Move
from rookwise.core.piece import Piece
from rookwise.core.types import square_name

STARTING_PLACEMENT = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR"
INITIAL_LABEL = "Initial Position"


def board_from_placement(placement: str) -> Board:
    """Parse a FEN piece-placement field; the first rank listed is row 0."""
    ranks = placement.strip().split("/")
    if len(ranks) != 8:
        raise ValueError(f"Invalid placement (must contain 8 ranks): {placement!r}")

    board = Board()
    for row, rank_str in enumerate(ranks):
        col = 0
        for ch in rank_str:
            if ch.isdigit():
                skip = int(ch)
                if skip < 1 or skip > 8:
                    raise ValueError(f"Invalid placement digit {ch!r}: {placement!r}")
                col += skip
            else:
                if col >= 8:
                    raise ValueError(f"Invalid placement rank width: {placement!r}")
                board[(row, col)] = Piece.from_char(ch)
                col += 1
            if col > 8:
                raise ValueError(f"Invalid placement rank width: {placement!r}")
        if col != 8:
            raise ValueError(f"Invalid placement rank width: {placement!r}")
    return board


def placement_of(board: Board | BoardSnapshot) -> str:
    """Serialise a board (or snapshot) back to a piece-placement field."""
    ranks: list[str] = []
    for row in range(8):
        empty = 0
        rank = ""
        for col in range(8):
            piece = board[(row, col)]
            if piece is None:
                empty += 1
                continue
            if empty:
                rank += str(empty)
                empty = 0
            rank += str(piece)
        if empty:
            rank += str(empty)
        ranks.append(rank)
    return "/".join(ranks)


def move_label(piece: Piece | None, move: Move | None) -> str:
    """History label such as ``"♙ e2 → e4"``."""
    if move is None or piece is None:
        return INITIAL_LABEL
    return f"{piece.symbol} {square_name(move.from_sq)} → {square_name(move.to_sq)}"
