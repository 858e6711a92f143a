"""Move history with time travel and branch truncation."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from rookwise.core.board import BoardSnapshot
from rookwise.core.enums import CastlingRights
from rookwise.core.errors import InvalidIndex
from rookwise.core.move import Move
from rookwise.core.notation import INITIAL_LABEL

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class HistoryEntry:
    """A single entry in the move history.

    ``move`` is ``None`` for the initial position.  Snapshots are immutable,
    so handing an entry out never aliases the live board.
    """

    move: Move | None
    snapshot: BoardSnapshot
    label: str
    castling: CastlingRights = CastlingRights.NONE


class MoveHistory:
    """Linear log of board snapshots with a movable cursor.

    Recording while the cursor is not on the last entry throws away every
    entry after the cursor first; those entries cannot be reached again.
    Navigation returns the entry it lands on and the caller restores the
    board from its snapshot.
    """

    __slots__ = ("_entries", "_index")

    def __init__(self) -> None:
        self._entries: list[HistoryEntry] = []
        self._index = -1

    # ── Recording ────────────────────────────────────────────────────────

    def record(
        self,
        move: Move | None,
        snapshot: BoardSnapshot,
        label: str | None = None,
        castling: CastlingRights = CastlingRights.NONE,
    ) -> HistoryEntry:
        """Append an entry after the cursor, truncating any redo branch."""
        if self._index < len(self._entries) - 1:
            dropped = len(self._entries) - self._index - 1
            del self._entries[self._index + 1 :]
            _LOGGER.debug("Discarded %d history entries after %d", dropped, self._index)

        if label is None:
            label = str(move) if move is not None else INITIAL_LABEL
        entry = HistoryEntry(
            move=move,
            snapshot=snapshot,
            label=label,
            castling=castling,
        )
        self._entries.append(entry)
        self._index += 1
        return entry

    def reset(self) -> None:
        self._entries.clear()
        self._index = -1

    # ── Navigation ───────────────────────────────────────────────────────

    def previous(self) -> HistoryEntry | None:
        """Step back one entry; ``None`` (no-op) when already at index 0."""
        if self._index <= 0:
            return None
        self._index -= 1
        return self._entries[self._index]

    def next(self) -> HistoryEntry | None:
        """Step forward one entry; ``None`` (no-op) when already at the tip."""
        if self._index >= len(self._entries) - 1:
            return None
        self._index += 1
        return self._entries[self._index]

    def jump(self, index: int) -> HistoryEntry:
        """Move the cursor to *index* (``0 <= index < len(self)``)."""
        if not 0 <= index < len(self._entries):
            raise InvalidIndex(
                f"History index {index} out of range (0..{len(self._entries) - 1})"
            )
        self._index = index
        return self._entries[index]

    # ── Query helpers ────────────────────────────────────────────────────

    @property
    def current_index(self) -> int:
        return self._index

    @property
    def current(self) -> HistoryEntry | None:
        if self._index < 0:
            return None
        return self._entries[self._index]

    @property
    def entries(self) -> tuple[HistoryEntry, ...]:
        return tuple(self._entries)

    @property
    def is_at_tip(self) -> bool:
        return self._index == len(self._entries) - 1

    @property
    def can_go_back(self) -> bool:
        return self._index > 0

    @property
    def can_go_forward(self) -> bool:
        return self._index < len(self._entries) - 1

    def __len__(self) -> int:
        return len(self._entries)

    def __getitem__(self, index: int) -> HistoryEntry:
        return self._entries[index]
