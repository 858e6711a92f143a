"""Game state engine: turn order, castling bookkeeping, promotion, status."""

from __future__ import annotations

import logging
from dataclasses import InitVar, dataclass, field

from rookwise.core.board import Board
from rookwise.core.enums import (
    CastlingRights,
    CastlingSide,
    Color,
    PieceType,
    StatusKind,
)
from rookwise.core.errors import InvalidMove, InvariantViolation
from rookwise.core.move import Move
from rookwise.core.move_generator import (
    CASTLE_ROOK_COL,
    HOME_ROW,
    KING_START_COL,
    PROMOTION_ROW,
    ROOK_START_COL,
    castling_side_of,
)
from rookwise.core.notation import INITIAL_LABEL, board_from_placement, move_label
from rookwise.core.piece import Piece
from rookwise.core.rules import AttackMap, GameStatus, Rules
from rookwise.core.types import Square
from rookwise.game.history import HistoryEntry, MoveHistory
from rookwise.game.interfaces import GamePhase, MoveResult

_LOGGER = logging.getLogger(__name__)


def _derive_castling(board: Board) -> CastlingRights:
    """Treat any king or rook away from its original square as moved."""
    rights = CastlingRights.NONE
    for color in (Color.WHITE, Color.BLACK):
        home = HOME_ROW[color]
        if board[(home, KING_START_COL)] != Piece(color, PieceType.KING):
            rights |= CastlingRights.king_moved(color)
        for side in (CastlingSide.KINGSIDE, CastlingSide.QUEENSIDE):
            if board[(home, ROOK_START_COL[side])] != Piece(color, PieceType.ROOK):
                rights |= CastlingRights.rook_moved(color, side)
    return rights


@dataclass
class GameState:
    """Owns the live board and is the only place it is mutated.

    Every applied move is recorded in :attr:`history`.  Navigating the
    history replaces the live board with a copy of the snapshot at the new
    index.  The optional constructor arguments are passed to :meth:`setup`.
    """

    board: Board = field(default_factory=Board.initial, init=False)
    side_to_move: Color = field(default=Color.WHITE, init=False)
    castling: CastlingRights = field(default=CastlingRights.NONE, init=False)
    status: GameStatus = field(default_factory=GameStatus.in_progress, init=False)
    history: MoveHistory = field(default_factory=MoveHistory, init=False)
    start_color: Color = field(default=Color.WHITE, init=False)
    selected: Square | None = field(default=None, init=False)
    destinations: list[Square] = field(default_factory=list, init=False)
    placement: InitVar[str | None] = None
    start_side: InitVar[Color] = Color.WHITE

    def __post_init__(self, placement: str | None, start_side: Color) -> None:
        self.setup(placement, start_side)

    # ── Initialisation ───────────────────────────────────────────────────

    def setup(
        self,
        placement: str | None = None,
        side_to_move: Color = Color.WHITE,
    ) -> None:
        """Initialise (or reset) the game, optionally from a custom placement."""
        board = board_from_placement(placement) if placement else Board.initial()
        for color in (Color.WHITE, Color.BLACK):
            kings = board.count(color, PieceType.KING)
            if kings != 1:
                raise InvariantViolation(
                    f"Expected exactly one {color.name} king, found {kings}"
                )

        self.board = board
        self.castling = _derive_castling(board)
        self.side_to_move = side_to_move
        self.start_color = side_to_move
        self.clear_selection()
        self.status = Rules.status(self.board, self.side_to_move, self.castling)

        self.history.reset()
        self.history.record(None, self.board.snapshot(), INITIAL_LABEL, self.castling)
        _LOGGER.info("New game, %s to move", self.side_to_move)

    def reset(self) -> None:
        """Fresh standard board, cleared castling flags and history."""
        self.setup()

    # ── Selection ────────────────────────────────────────────────────────

    def select_square(self, sq: Square) -> MoveResult | None:
        """Handle a click on *sq*; returns the result when it played a move."""
        if self.is_game_over:
            return None

        piece = self.board[sq]
        own_piece = piece is not None and piece.color == self.side_to_move

        if self.selected is not None and sq in self.destinations:
            return self.apply_move(self.selected, sq)
        if own_piece:
            self.selected = sq
            self.destinations = self.legal_moves(sq)
        else:
            self.clear_selection()
        return None

    def clear_selection(self) -> None:
        self.selected = None
        self.destinations = []

    @property
    def capturable(self) -> list[Square]:
        """Cached destinations that hold an enemy piece."""
        return [sq for sq in self.destinations if self.board[sq] is not None]

    # ── Move application ─────────────────────────────────────────────────

    def legal_moves(self, sq: Square) -> list[Square]:
        """Legal destinations of the side to move's piece on *sq*."""
        piece = self.board[sq]
        if self.is_game_over or piece is None or piece.color != self.side_to_move:
            return []
        return Rules.legal_moves(self.board, sq, self.castling)

    def apply_move(self, from_sq: Square, to_sq: Square) -> MoveResult:
        """Play a legal move for the side to move.

        Raises :class:`InvalidMove` without touching any state when the game
        is over or *to_sq* is not a legal destination from *from_sq*.
        """
        move = Move(from_sq, to_sq)
        if self.is_game_over:
            raise InvalidMove(f"Game is over ({self.status}); cannot play {move}")
        if to_sq not in self.legal_moves(from_sq):
            raise InvalidMove(f"Illegal move: {move}")

        board = self.board
        piece = board[from_sq]
        assert piece is not None
        color = piece.color
        home = HOME_ROW[color]

        castled: CastlingSide | None = None
        if piece.piece_type == PieceType.KING:
            self.castling |= CastlingRights.king_moved(color)
            castled = castling_side_of(from_sq, to_sq)
            if castled is not None:
                rook_from = (home, ROOK_START_COL[castled])
                board[(home, CASTLE_ROOK_COL[castled])] = board[rook_from]
                board[rook_from] = None
        elif piece.piece_type == PieceType.ROOK:
            for side in (CastlingSide.KINGSIDE, CastlingSide.QUEENSIDE):
                if from_sq == (home, ROOK_START_COL[side]):
                    self.castling |= CastlingRights.rook_moved(color, side)

        captured = board[to_sq]
        board[to_sq] = piece
        board[from_sq] = None

        # A rook taken on its corner can never castle, even if a rook returns.
        opponent = color.opposite
        for side in (CastlingSide.KINGSIDE, CastlingSide.QUEENSIDE):
            if to_sq == (HOME_ROW[opponent], ROOK_START_COL[side]):
                self.castling |= CastlingRights.rook_moved(opponent, side)

        promoted_to: Piece | None = None
        if piece.piece_type == PieceType.PAWN and to_sq[0] == PROMOTION_ROW[color]:
            promoted_to = Piece(color, PieceType.QUEEN)
            board[to_sq] = promoted_to

        self.side_to_move = color.opposite
        self.clear_selection()
        self.status = Rules.status(board, self.side_to_move, self.castling)

        self.history.record(
            move, board.snapshot(), move_label(piece, move), self.castling
        )
        _LOGGER.debug("Played %s (%s), %s", move, piece, self.status)
        if self.status.is_terminal:
            _LOGGER.info("Game over: %s", self.status)

        return MoveResult(
            move=move,
            piece=piece,
            captured=captured,
            status=self.status,
            promoted_to=promoted_to,
            castled=castled,
        )

    # ── Time travel ──────────────────────────────────────────────────────

    def go_previous(self) -> HistoryEntry | None:
        entry = self.history.previous()
        if entry is not None:
            self._restore(entry)
        return entry

    def go_next(self) -> HistoryEntry | None:
        entry = self.history.next()
        if entry is not None:
            self._restore(entry)
        return entry

    def go_to(self, index: int) -> HistoryEntry:
        entry = self.history.jump(index)
        self._restore(entry)
        return entry

    def _restore(self, entry: HistoryEntry) -> None:
        index = self.history.current_index
        self.board = entry.snapshot.to_board()
        self.castling = entry.castling
        self.side_to_move = (
            self.start_color if index % 2 == 0 else self.start_color.opposite
        )
        self.clear_selection()
        self.status = Rules.status(self.board, self.side_to_move, self.castling)
        _LOGGER.debug("Restored ply %d (%s)", index, entry.label)

    # ── Query helpers ────────────────────────────────────────────────────

    @property
    def is_game_over(self) -> bool:
        return self.status.is_terminal

    @property
    def is_at_tip(self) -> bool:
        return self.history.is_at_tip

    @property
    def ply_index(self) -> int:
        """Number of half-moves between the start and the live board."""
        return self.history.current_index

    @property
    def phase(self) -> GamePhase:
        if self.status.kind == StatusKind.CHECKMATE:
            return GamePhase.CHECKMATE
        if self.status.kind == StatusKind.STALEMATE:
            return GamePhase.STALEMATE
        if self.selected is not None:
            return GamePhase.MOVING
        if self.status.kind == StatusKind.CHECK:
            return GamePhase.CHECK
        return GamePhase.SELECTING

    def attack_map(self) -> AttackMap:
        return Rules.attack_map(self.board)
