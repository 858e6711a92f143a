"""GameController — routes presentation input to the game state engine.

Emits events via simple callbacks so a UI / tests can subscribe.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from rookwise.core.errors import InvalidMove
from rookwise.core.move import Move
from rookwise.core.rules import AttackMap, GameStatus
from rookwise.core.types import Square
from rookwise.game.history import HistoryEntry
from rookwise.game.interfaces import GamePhase, MoveResult
from rookwise.game.settings import GameSettings
from rookwise.game.state import GameState

_LOGGER = logging.getLogger(__name__)

# ── Event definitions ────────────────────────────────────────────────────────

MoveCallback = Callable[[MoveResult, GameState], None]
GameOverCallback = Callable[[GameStatus], None]
PhaseCallback = Callable[[GamePhase], None]
# selected square, quiet destinations, capturable destinations
SelectionCallback = Callable[[Square | None, list[Square], list[Square]], None]
RestoreCallback = Callable[[HistoryEntry, GameState], None]


@dataclass
class GameEvents:
    """Observable callbacks. Multiple handlers per event."""

    on_move: list[MoveCallback] = field(default_factory=list)
    on_game_over: list[GameOverCallback] = field(default_factory=list)
    on_phase_changed: list[PhaseCallback] = field(default_factory=list)
    on_selection_changed: list[SelectionCallback] = field(default_factory=list)
    on_restore: list[RestoreCallback] = field(default_factory=list)


# ── Controller ───────────────────────────────────────────────────────────────


class GameController:
    """Turns square clicks, resets and history navigation into engine calls,
    and notifies listeners of everything that changed.

    Methods are meant to be called from a single thread (the main/UI
    thread); none of them blocks.
    """

    __slots__ = ("_state", "_settings", "events")

    def __init__(self, settings: GameSettings | None = None) -> None:
        self._settings = settings if settings is not None else GameSettings()
        self._state = GameState(
            self._settings.start_placement, self._settings.start_color
        )
        self.events = GameEvents()

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def settings(self) -> GameSettings:
        return self._settings

    # ── Game lifecycle ───────────────────────────────────────────────────

    def new_game(self) -> None:
        """Start over from the configured starting position."""
        self._state.setup(self._settings.start_placement, self._settings.start_color)
        self._emit_selection()
        self._emit_phase()

    def click(self, sq: Square) -> MoveResult | None:
        """Route a square click to the engine's selection logic."""
        result = self._state.select_square(sq)
        if result is not None:
            self._after_move(result)
        else:
            self._emit_selection()
            self._emit_phase()
        return result

    def submit_move(self, move: Move) -> MoveResult:
        """Play *move* directly; :class:`InvalidMove` propagates to the caller."""
        try:
            result = self._state.apply_move(move.from_sq, move.to_sq)
        except InvalidMove:
            _LOGGER.debug("Rejected move %s", move)
            raise
        self._after_move(result)
        return result

    # ── History navigation ───────────────────────────────────────────────

    def previous(self) -> HistoryEntry | None:
        entry = self._state.go_previous()
        if entry is not None:
            self._after_restore(entry)
        return entry

    def next(self) -> HistoryEntry | None:
        entry = self._state.go_next()
        if entry is not None:
            self._after_restore(entry)
        return entry

    def jump(self, index: int) -> HistoryEntry:
        entry = self._state.go_to(index)
        self._after_restore(entry)
        return entry

    def attack_map(self) -> AttackMap:
        return self._state.attack_map()

    # ── Internal helpers ─────────────────────────────────────────────────

    def _after_move(self, result: MoveResult) -> None:
        for cb in self.events.on_move:
            cb(result, self._state)
        self._emit_selection()
        self._emit_phase()
        if result.status.is_terminal:
            for cb in self.events.on_game_over:
                cb(result.status)

    def _after_restore(self, entry: HistoryEntry) -> None:
        for cb in self.events.on_restore:
            cb(entry, self._state)
        self._emit_selection()
        self._emit_phase()

    def _emit_selection(self) -> None:
        state = self._state
        if self._settings.highlight_capturable:
            capturable = state.capturable
            quiet = [sq for sq in state.destinations if sq not in capturable]
        else:
            capturable = []
            quiet = list(state.destinations)
        for cb in self.events.on_selection_changed:
            cb(state.selected, quiet, capturable)

    def _emit_phase(self) -> None:
        phase = self._state.phase
        for cb in self.events.on_phase_changed:
            cb(phase)
