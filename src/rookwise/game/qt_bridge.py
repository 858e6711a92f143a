"""Qt bridge exposing a :class:`GameController` through signals and slots."""

from __future__ import annotations

from PyQt6.QtCore import QObject, pyqtSignal, pyqtSlot

from rookwise.core.errors import ChessError
from rookwise.core.move import Move
from rookwise.core.rules import GameStatus
from rookwise.core.types import Square
from rookwise.game.controller import GameController
from rookwise.game.history import HistoryEntry
from rookwise.game.interfaces import GamePhase, MoveResult
from rookwise.game.settings import GameSettings
from rookwise.game.state import GameState


class GameSession(QObject):
    """Main-thread adapter between a board widget and the game engine."""

    move_made = pyqtSignal(object)  # MoveResult
    game_over = pyqtSignal(object)  # GameStatus
    phase_changed = pyqtSignal(int)  # GamePhase
    selection_changed = pyqtSignal(object, object, object)
    position_restored = pyqtSignal(int, object)  # ply index, BoardSnapshot
    error = pyqtSignal(str)

    __slots__ = ("_controller",)

    def __init__(self, settings: GameSettings | None = None) -> None:
        super().__init__()
        self._controller = GameController(settings)
        events = self._controller.events
        events.on_move.append(self._on_move)
        events.on_game_over.append(self._on_game_over)
        events.on_phase_changed.append(self._on_phase_changed)
        events.on_selection_changed.append(self._on_selection_changed)
        events.on_restore.append(self._on_restore)

    @property
    def controller(self) -> GameController:
        return self._controller

    # ── Slots ────────────────────────────────────────────────────────────

    @pyqtSlot(int, int)
    def click_square(self, row: int, col: int) -> None:
        self._controller.click((row, col))

    @pyqtSlot(str)
    def submit_move(self, text: str) -> None:
        """Play a move given in coordinate notation, e.g. ``"e2e4"``."""
        try:
            self._controller.submit_move(Move.parse(text))
        except (ChessError, ValueError) as exc:
            self.error.emit(str(exc))

    @pyqtSlot()
    def new_game(self) -> None:
        self._controller.new_game()

    @pyqtSlot()
    def go_previous(self) -> None:
        self._controller.previous()

    @pyqtSlot()
    def go_next(self) -> None:
        self._controller.next()

    @pyqtSlot(int)
    def go_to(self, index: int) -> None:
        try:
            self._controller.jump(index)
        except ChessError as exc:
            self.error.emit(str(exc))

    # ── Controller callbacks ─────────────────────────────────────────────

    def _on_move(self, result: MoveResult, _state: GameState) -> None:
        self.move_made.emit(result)

    def _on_game_over(self, status: GameStatus) -> None:
        self.game_over.emit(status)

    def _on_phase_changed(self, phase: GamePhase) -> None:
        self.phase_changed.emit(int(phase))

    def _on_selection_changed(
        self,
        selected: Square | None,
        quiet: list[Square],
        capturable: list[Square],
    ) -> None:
        self.selection_changed.emit(selected, quiet, capturable)

    def _on_restore(self, entry: HistoryEntry, state: GameState) -> None:
        self.position_restored.emit(state.ply_index, entry.snapshot)
