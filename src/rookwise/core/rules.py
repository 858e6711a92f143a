"""High-level chess rules: legality filtering, check, checkmate, stalemate."""

from __future__ import annotations

from dataclasses import dataclass

from rookwise.core.board import Board
from rookwise.core.enums import (
    AttackStatus,
    CastlingRights,
    Color,
    PieceType,
    StatusKind,
)
from rookwise.core.move_generator import (
    CASTLE_ROOK_COL,
    ROOK_START_COL,
    MoveGenerator,
    castling_side_of,
)
from rookwise.core.piece import Piece
from rookwise.core.types import Square


@dataclass(frozen=True, slots=True)
class GameStatus:
    """Status of the side to move.

    ``color`` is the checked side for CHECK, the winner for CHECKMATE and
    ``None`` otherwise.
    """

    kind: StatusKind
    color: Color | None = None

    @classmethod
    def in_progress(cls) -> GameStatus:
        return cls(StatusKind.IN_PROGRESS)

    @classmethod
    def check(cls, color: Color) -> GameStatus:
        return cls(StatusKind.CHECK, color)

    @classmethod
    def checkmate(cls, winner: Color) -> GameStatus:
        return cls(StatusKind.CHECKMATE, winner)

    @classmethod
    def stalemate(cls) -> GameStatus:
        return cls(StatusKind.STALEMATE)

    @property
    def is_terminal(self) -> bool:
        return self.kind in (StatusKind.CHECKMATE, StatusKind.STALEMATE)

    def __str__(self) -> str:
        if self.kind == StatusKind.CHECK:
            return f"{self.color} is in check"
        if self.kind == StatusKind.CHECKMATE:
            return f"checkmate, {self.color} wins"
        if self.kind == StatusKind.STALEMATE:
            return "stalemate"
        return "in progress"


@dataclass(frozen=True, slots=True)
class AttackMap:
    """Occupied squares that attack an enemy piece / are attacked by one."""

    attacking: frozenset[Square]
    attacked: frozenset[Square]

    def status_of(self, sq: Square) -> AttackStatus:
        if sq in self.attacking and sq in self.attacked:
            return AttackStatus.BOTH
        if sq in self.attacking:
            return AttackStatus.ATTACKING
        if sq in self.attacked:
            return AttackStatus.ATTACKED
        return AttackStatus.NONE


@dataclass(slots=True)
class _Undo:
    """Everything needed to revert one simulated move."""

    from_sq: Square
    to_sq: Square
    moved: Piece
    captured: Piece | None
    rook_from: Square | None = None
    rook_to: Square | None = None


def _make(board: Board, from_sq: Square, to_sq: Square) -> _Undo:
    piece = board[from_sq]
    assert piece is not None
    undo = _Undo(from_sq, to_sq, piece, board[to_sq])

    if piece.piece_type == PieceType.KING:
        side = castling_side_of(from_sq, to_sq)
        if side is not None:
            row = from_sq[0]
            undo.rook_from = (row, ROOK_START_COL[side])
            undo.rook_to = (row, CASTLE_ROOK_COL[side])
            board[undo.rook_to] = board[undo.rook_from]
            board[undo.rook_from] = None

    board[to_sq] = piece
    board[from_sq] = None
    return undo


def _unmake(board: Board, undo: _Undo) -> None:
    board[undo.from_sq] = undo.moved
    board[undo.to_sq] = undo.captured
    if undo.rook_from is not None and undo.rook_to is not None:
        board[undo.rook_from] = board[undo.rook_to]
        board[undo.rook_to] = None


class Rules:
    """Static rule-checker that operates on an explicit :class:`Board`."""

    @staticmethod
    def is_in_check(board: Board, color: Color) -> bool:
        return MoveGenerator(board).is_in_check(color)

    @staticmethod
    def legal_moves(
        board: Board,
        sq: Square,
        castling: CastlingRights = CastlingRights.NONE,
    ) -> list[Square]:
        """Destinations from *sq* that do not leave the mover's king in check.

        Each candidate is played on *board* in place and reverted before the
        next one is tried; the board is unchanged when this returns.
        """
        piece = board[sq]
        if piece is None:
            return []

        gen = MoveGenerator(board, castling)
        legal: list[Square] = []
        for to_sq in gen.pseudo_moves(sq):
            undo = _make(board, sq, to_sq)
            try:
                exposed = gen.is_in_check(piece.color)
            finally:
                _unmake(board, undo)
            if not exposed:
                legal.append(to_sq)
        return legal

    @staticmethod
    def all_legal_moves(
        board: Board,
        color: Color,
        castling: CastlingRights = CastlingRights.NONE,
    ) -> dict[Square, list[Square]]:
        """Legal destinations for every piece of *color* that has any."""
        result: dict[Square, list[Square]] = {}
        for sq, _piece in board.pieces(color):
            moves = Rules.legal_moves(board, sq, castling)
            if moves:
                result[sq] = moves
        return result

    @staticmethod
    def has_legal_move(
        board: Board,
        color: Color,
        castling: CastlingRights = CastlingRights.NONE,
    ) -> bool:
        """Stops at the first piece with a legal move."""
        return any(
            Rules.legal_moves(board, sq, castling) for sq, _ in board.pieces(color)
        )

    @staticmethod
    def is_checkmate(
        board: Board,
        color: Color,
        castling: CastlingRights = CastlingRights.NONE,
    ) -> bool:
        if not Rules.is_in_check(board, color):
            return False
        return not Rules.has_legal_move(board, color, castling)

    @staticmethod
    def is_stalemate(
        board: Board,
        color: Color,
        castling: CastlingRights = CastlingRights.NONE,
    ) -> bool:
        if Rules.is_in_check(board, color):
            return False
        return not Rules.has_legal_move(board, color, castling)

    @staticmethod
    def status(
        board: Board,
        side_to_move: Color,
        castling: CastlingRights = CastlingRights.NONE,
    ) -> GameStatus:
        """Classify the position for the side to move."""
        in_check = Rules.is_in_check(board, side_to_move)
        if Rules.has_legal_move(board, side_to_move, castling):
            if in_check:
                return GameStatus.check(side_to_move)
            return GameStatus.in_progress()
        if in_check:
            return GameStatus.checkmate(side_to_move.opposite)
        return GameStatus.stalemate()

    @staticmethod
    def attack_map(board: Board) -> AttackMap:
        """Which pieces attack an enemy piece and which are under attack."""
        gen = MoveGenerator(board)
        attacking: set[Square] = set()
        attacked: set[Square] = set()
        for sq, piece in board.occupied():
            for target_sq in gen.attack_squares(sq):
                target = board[target_sq]
                if target is not None and target.color != piece.color:
                    attacking.add(sq)
                    attacked.add(target_sq)
        return AttackMap(frozenset(attacking), frozenset(attacked))
