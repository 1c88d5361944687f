"""User-configurable settings of the board window."""

from __future__ import annotations

from dataclasses import dataclass

from chessmatch.ui.styles.theme import THEMES, BoardTheme


@dataclass
class AppSettings:
    """All user-configurable settings."""

    board_theme: str = "Classic"
    show_coordinates: bool = True
    show_legal_moves: bool = True

    @property
    def theme(self) -> BoardTheme:
        return THEMES.get(self.board_theme, BoardTheme.default())
