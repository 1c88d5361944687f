"""Promotion dialog — lets user pick the promotion piece."""

from __future__ import annotations

from PyQt6.QtCore import Qt
from PyQt6.QtGui import QFont
from PyQt6.QtWidgets import (
    QDialog,
    QHBoxLayout,
    QLabel,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from chessmatch.core.enums import Color, PieceType
from chessmatch.core.piece import Piece

_CHOICES: tuple[PieceType, ...] = (
    PieceType.QUEEN,
    PieceType.ROOK,
    PieceType.BISHOP,
    PieceType.KNIGHT,
)


class PromotionDialog(QDialog):
    """Modal dialog to select the promotion piece letter."""

    def __init__(self, color: Color, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setModal(True)
        self.setWindowTitle("Promotion")
        self.setWindowFlags(
            self.windowFlags() & ~Qt.WindowType.WindowContextHelpButtonHint
        )

        self._selected = PieceType.QUEEN.letter

        layout = QVBoxLayout(self)
        label = QLabel("Choose a piece for promotion")
        label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(label)

        btn_row = QHBoxLayout()
        for pt in _CHOICES:
            btn = QPushButton(Piece(pt, color).symbol)
            btn.setFont(QFont("DejaVu Sans", 28))
            btn.setFixedSize(68, 68)
            btn.setToolTip(pt.name.capitalize())
            btn.clicked.connect(lambda checked, p=pt: self._choose(p.letter))
            btn_row.addWidget(btn)
        layout.addLayout(btn_row)

    def _choose(self, letter: str) -> None:
        self._selected = letter
        self.accept()

    @property
    def selected(self) -> str:
        return self._selected

    @staticmethod
    def ask(color: Color, parent: QWidget | None = None) -> str | None:
        """Show the dialog and return the chosen letter, or ``None`` on cancel."""
        dlg = PromotionDialog(color, parent)
        if dlg.exec() == QDialog.DialogCode.Accepted:
            return dlg.selected
        return None
