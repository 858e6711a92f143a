"""User-configurable game settings."""

from __future__ import annotations

from dataclasses import dataclass

from rookwise.core.enums import Color


@dataclass
class GameSettings:
    """Options applied by :class:`rookwise.game.controller.GameController`."""

    # Custom starting placement (FEN board field); None = standard setup
    start_placement: str | None = None
    start_color: Color = Color.WHITE

    # Report enemy-occupied destinations separately from quiet ones
    highlight_capturable: bool = True
