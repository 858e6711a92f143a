"""Pseudo-legal move generation, attack sets and castling preconditions."""

from __future__ import annotations

from rookwise.core.board import Board
from rookwise.core.enums import CastlingRights, CastlingSide, Color, PieceType
from rookwise.core.piece import Piece
from rookwise.core.types import ALL_SQUARES, Square, is_on_board

KNIGHT_OFFSETS: tuple[tuple[int, int], ...] = (
    (-2, -1),
    (-2, 1),
    (-1, -2),
    (-1, 2),
    (1, -2),
    (1, 2),
    (2, -1),
    (2, 1),
)

KING_OFFSETS: tuple[tuple[int, int], ...] = (
    (-1, -1),
    (-1, 0),
    (-1, 1),
    (0, -1),
    (0, 1),
    (1, -1),
    (1, 0),
    (1, 1),
)

BISHOP_DIRS: tuple[tuple[int, int], ...] = ((-1, -1), (-1, 1), (1, -1), (1, 1))
ROOK_DIRS: tuple[tuple[int, int], ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))
QUEEN_DIRS: tuple[tuple[int, int], ...] = ROOK_DIRS + BISHOP_DIRS

# Row delta of a single pawn step.
PAWN_DIRECTION: dict[Color, int] = {Color.WHITE: -1, Color.BLACK: 1}
PAWN_START_ROW: dict[Color, int] = {Color.WHITE: 6, Color.BLACK: 1}
PROMOTION_ROW: dict[Color, int] = {Color.WHITE: 0, Color.BLACK: 7}
HOME_ROW: dict[Color, int] = {Color.WHITE: 7, Color.BLACK: 0}

KING_START_COL = 4
ROOK_START_COL: dict[CastlingSide, int] = {
    CastlingSide.KINGSIDE: 7,
    CastlingSide.QUEENSIDE: 0,
}
# Column the king lands on / column the rook lands on.
CASTLE_KING_COL: dict[CastlingSide, int] = {
    CastlingSide.KINGSIDE: 6,
    CastlingSide.QUEENSIDE: 2,
}
CASTLE_ROOK_COL: dict[CastlingSide, int] = {
    CastlingSide.KINGSIDE: 5,
    CastlingSide.QUEENSIDE: 3,
}


# -- Precomputed lookup tables ---------------------------------------------


def _build_targets(
    offsets: tuple[tuple[int, int], ...],
) -> dict[Square, tuple[Square, ...]]:
    targets: dict[Square, tuple[Square, ...]] = {}
    for row, col in ALL_SQUARES:
        targets[(row, col)] = tuple(
            (row + dr, col + dc)
            for dr, dc in offsets
            if is_on_board(row + dr, col + dc)
        )
    return targets


def _build_rays(
    directions: tuple[tuple[int, int], ...],
) -> dict[Square, tuple[tuple[Square, ...], ...]]:
    rays_per_square: dict[Square, tuple[tuple[Square, ...], ...]] = {}
    for row, col in ALL_SQUARES:
        square_rays: list[tuple[Square, ...]] = []
        for dr, dc in directions:
            r = row + dr
            c = col + dc
            ray: list[Square] = []
            while is_on_board(r, c):
                ray.append((r, c))
                r += dr
                c += dc
            square_rays.append(tuple(ray))
        rays_per_square[(row, col)] = tuple(square_rays)
    return rays_per_square


_KNIGHT_TARGETS = _build_targets(KNIGHT_OFFSETS)
_KING_TARGETS = _build_targets(KING_OFFSETS)

_BISHOP_RAYS = _build_rays(BISHOP_DIRS)
_ROOK_RAYS = _build_rays(ROOK_DIRS)
_QUEEN_RAYS = _build_rays(QUEEN_DIRS)

_SLIDER_RAYS: dict[PieceType, dict[Square, tuple[tuple[Square, ...], ...]]] = {
    PieceType.BISHOP: _BISHOP_RAYS,
    PieceType.ROOK: _ROOK_RAYS,
    PieceType.QUEEN: _QUEEN_RAYS,
}


def castling_side_of(from_sq: Square, to_sq: Square) -> CastlingSide | None:
    """Castling side implied by a king travelling two columns, else ``None``."""
    if from_sq[0] != to_sq[0] or abs(to_sq[1] - from_sq[1]) != 2:
        return None
    return CastlingSide.KINGSIDE if to_sq[1] > from_sq[1] else CastlingSide.QUEENSIDE


class MoveGenerator:
    """Per-piece move and attack generation over an explicit :class:`Board`.

    Nothing here checks whether the mover's own king ends up in check; that
    is :meth:`rookwise.core.rules.Rules.legal_moves`' job.  Castling
    destinations are the exception: their path-safety test is part of
    generation.
    """

    __slots__ = ("_board", "_castling")

    def __init__(
        self,
        board: Board,
        castling: CastlingRights = CastlingRights.NONE,
    ) -> None:
        self._board = board
        self._castling = castling

    # -- Public API ---------------------------------------------------------

    def pseudo_moves(self, sq: Square) -> list[Square]:
        """Destinations for the piece on *sq* per its movement rules."""
        piece = self._board[sq]
        if piece is None:
            return []

        moves: list[Square] = []
        ptype = piece.piece_type
        if ptype == PieceType.PAWN:
            self._gen_pawn(sq, piece.color, moves)
        elif ptype == PieceType.KNIGHT:
            self._gen_steps(sq, piece.color, _KNIGHT_TARGETS[sq], moves)
        elif ptype == PieceType.KING:
            self._gen_steps(sq, piece.color, _KING_TARGETS[sq], moves)
            moves.extend(self.castling_destinations(sq, piece.color))
        else:
            self._gen_sliding(sq, piece.color, _SLIDER_RAYS[ptype][sq], moves)
        return moves

    def attack_squares(self, sq: Square) -> list[Square]:
        """Squares the piece on *sq* could capture on, regardless of turn.

        Pawns attack both forward diagonals whether or not they are occupied.
        Castling never contributes.
        """
        piece = self._board[sq]
        if piece is None:
            return []

        attacks: list[Square] = []
        ptype = piece.piece_type
        if ptype == PieceType.PAWN:
            self._gen_pawn_attacks(sq, piece.color, attacks)
        elif ptype == PieceType.KNIGHT:
            self._gen_steps(sq, piece.color, _KNIGHT_TARGETS[sq], attacks)
        elif ptype == PieceType.KING:
            self._gen_steps(sq, piece.color, _KING_TARGETS[sq], attacks)
        else:
            self._gen_sliding(sq, piece.color, _SLIDER_RAYS[ptype][sq], attacks)
        return attacks

    # -- Attack detection (public) -----------------------------------------

    def attacked_squares(self, by_color: Color) -> set[Square]:
        """Union of :meth:`attack_squares` over every piece of *by_color*."""
        attacked: set[Square] = set()
        for sq, _piece in self._board.pieces(by_color):
            attacked.update(self.attack_squares(sq))
        return attacked

    def is_square_attacked(self, sq: Square, by_color: Color) -> bool:
        """Is *sq* attacked by any piece of *by_color*?"""
        for from_sq, _piece in self._board.pieces(by_color):
            if sq in self.attack_squares(from_sq):
                return True
        return False

    def is_in_check(self, color: Color) -> bool:
        """Is *color*'s king attacked by the opponent?"""
        king_sq = self._board.king_square(color)
        return self.is_square_attacked(king_sq, color.opposite)

    # -- Castling -----------------------------------------------------------

    def castling_destinations(self, king_sq: Square, color: Color) -> list[Square]:
        """King destinations (two columns away) for which castling is allowed.

        Every check is bound to *color*, never to whoever is on move.
        """
        home = HOME_ROW[color]
        if king_sq != (home, KING_START_COL):
            return []
        if self._castling & CastlingRights.king_moved(color):
            return []

        board = self._board
        rook = Piece(color, PieceType.ROOK)
        destinations: list[Square] = []
        attacked: set[Square] | None = None

        for side in (CastlingSide.KINGSIDE, CastlingSide.QUEENSIDE):
            if not self._castling.can_castle(color, side):
                continue
            rook_col = ROOK_START_COL[side]
            if board[(home, rook_col)] != rook:
                continue

            low, high = sorted((KING_START_COL, rook_col))
            if any(not board.is_empty((home, c)) for c in range(low + 1, high)):
                continue

            if attacked is None:
                attacked = self.attacked_squares(color.opposite)
            king_col = CASTLE_KING_COL[side]
            step = 1 if king_col > KING_START_COL else -1
            king_path = range(KING_START_COL, king_col + step, step)
            if any((home, c) in attacked for c in king_path):
                continue

            destinations.append((home, king_col))
        return destinations

    # -- Piece-specific generators (private) -------------------------------

    def _gen_pawn(self, sq: Square, color: Color, moves: list[Square]) -> None:
        board = self._board
        row, col = sq
        direction = PAWN_DIRECTION[color]

        one_row = row + direction
        if is_on_board(one_row, col) and board.is_empty((one_row, col)):
            moves.append((one_row, col))
            two_row = row + 2 * direction
            if row == PAWN_START_ROW[color] and board.is_empty((two_row, col)):
                moves.append((two_row, col))

        for cap_sq in self._pawn_diagonals(sq, color):
            target = board[cap_sq]
            if target is not None and target.color != color:
                moves.append(cap_sq)

    def _gen_pawn_attacks(
        self, sq: Square, color: Color, attacks: list[Square]
    ) -> None:
        attacks.extend(self._pawn_diagonals(sq, color))

    @staticmethod
    def _pawn_diagonals(sq: Square, color: Color) -> list[Square]:
        row = sq[0] + PAWN_DIRECTION[color]
        return [(row, c) for c in (sq[1] - 1, sq[1] + 1) if is_on_board(row, c)]

    def _gen_steps(
        self,
        sq: Square,
        color: Color,
        targets: tuple[Square, ...],
        moves: list[Square],
    ) -> None:
        board = self._board
        for to_sq in targets:
            target = board[to_sq]
            if target is None or target.color != color:
                moves.append(to_sq)

    def _gen_sliding(
        self,
        sq: Square,
        color: Color,
        rays: tuple[tuple[Square, ...], ...],
        moves: list[Square],
    ) -> None:
        board = self._board
        for ray in rays:
            for to_sq in ray:
                target = board[to_sq]
                if target is None:
                    moves.append(to_sq)
                    continue
                if target.color != color:
                    moves.append(to_sq)
                break
