"""Shared pytest fixtures used across the test suite."""

from __future__ import annotations

import os
import sys
from collections.abc import Callable, Iterator

import pytest

from chessmatch.core.enums import Color, PieceType
from chessmatch.core.match import ChessMatch
from chessmatch.core.piece import Piece

# Linux CI runners are often headless. Force an offscreen backend only there.
if (
    sys.platform.startswith("linux")
    and "QT_QPA_PLATFORM" not in os.environ
    and "DISPLAY" not in os.environ
    and "WAYLAND_DISPLAY" not in os.environ
):
    os.environ["QT_QPA_PLATFORM"] = "offscreen"

Placement = tuple[str, Color, PieceType]
MatchFactory = Callable[..., ChessMatch]


@pytest.fixture(scope="session")
def qapp() -> Iterator[object]:
    """Provide a singleton QApplication for UI tests."""
    from PyQt6.QtWidgets import QApplication

    app = QApplication.instance()
    if app is None:
        app = QApplication([])
    yield app


@pytest.fixture
def make_match() -> MatchFactory:
    """Build a match from ``("e1", Color.BLACK, PieceType.KING)`` placements."""

    def _make(*placements: Placement, current: Color = Color.BLACK) -> ChessMatch:
        match = ChessMatch(setup=False)
        for square, color, piece_type in placements:
            match.place_new_piece(square[0], int(square[1]), Piece(piece_type, color))
        match.current_player = current
        return match

    return _make
