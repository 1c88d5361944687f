"""MainWindow — top-level window assembling the board and status panels."""

from __future__ import annotations

import logging

from PyQt6.QtGui import QAction
from PyQt6.QtWidgets import (
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QPushButton,
    QStatusBar,
    QVBoxLayout,
    QWidget,
)

from chessmatch.core.enums import Color
from chessmatch.core.piece import Piece
from chessmatch.core.types import Position
from chessmatch.game.controller import GameController
from chessmatch.game.interfaces import GamePhase
from chessmatch.game.state import GameState, MoveRecord
from chessmatch.ui.board.board_view import BoardView
from chessmatch.ui.dialogs.promotion_dialog import PromotionDialog
from chessmatch.ui.settings import AppSettings

_LOGGER = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    """Main application window."""

    def __init__(self, settings: AppSettings | None = None) -> None:
        super().__init__()
        self.setWindowTitle("Chess Match")
        self.setMinimumSize(720, 560)

        self._controller = GameController()
        self._settings = settings or AppSettings()

        self._setup_ui()
        self._setup_menu()
        self._connect_signals()
        self._apply_settings()

        self.new_game()

    # ── UI setup ─────────────────────────────────────────────────────────

    def _setup_ui(self) -> None:
        central = QWidget()
        self.setCentralWidget(central)
        root = QHBoxLayout(central)
        root.setContentsMargins(6, 6, 6, 6)

        self._board_view = BoardView()
        root.addWidget(self._board_view, stretch=3)

        right = QVBoxLayout()
        self._turn_label = QLabel()
        self._check_label = QLabel()
        self._captured_label = QLabel()
        self._captured_label.setWordWrap(True)
        self._history_label = QLabel()
        self._history_label.setWordWrap(True)
        for label in (
            self._turn_label,
            self._check_label,
            self._captured_label,
            self._history_label,
        ):
            right.addWidget(label)
        right.addStretch(1)

        self._btn_new = QPushButton("New game")
        self._btn_flip = QPushButton("Flip board")
        right.addWidget(self._btn_new)
        right.addWidget(self._btn_flip)

        right_widget = QWidget()
        right_widget.setLayout(right)
        right_widget.setFixedWidth(240)
        root.addWidget(right_widget)

        self.setStatusBar(QStatusBar())

    def _setup_menu(self) -> None:
        menu_bar = self.menuBar()
        assert menu_bar is not None
        game_menu = menu_bar.addMenu("&Game")
        assert game_menu is not None
        act_new = QAction("&New game", self)
        act_new.setShortcut("Ctrl+N")
        act_new.triggered.connect(self.new_game)
        game_menu.addAction(act_new)

    def _connect_signals(self) -> None:
        self._board_view.board_scene.move_requested.connect(self._on_move_requested)
        self._btn_new.clicked.connect(self.new_game)
        self._btn_flip.clicked.connect(self._on_flip)

        events = self._controller.events
        events.on_move.append(self._on_move)
        events.on_promotion.append(self._on_promotion)
        events.on_game_over.append(self._on_game_over)
        events.on_error.append(self._on_error)

    def _apply_settings(self) -> None:
        scene = self._board_view.board_scene
        scene.set_theme(self._settings.theme)
        scene.set_show_coordinates(self._settings.show_coordinates)
        scene.set_show_legal_moves(self._settings.show_legal_moves)

    # ── Public API ───────────────────────────────────────────────────────

    @property
    def controller(self) -> GameController:
        return self._controller

    def new_game(self) -> None:
        self._controller.new_game()
        self._board_view.board_scene.set_interactive(True)
        self._board_view.board_scene.set_state(self._controller.state)
        self._update_panels()
        self._show_message("New game: BLACK to move")

    # ── Controller callbacks ─────────────────────────────────────────────

    def _on_move_requested(self, source: Position, target: Position) -> None:
        self._controller.submit_move(source, target)

    def _on_move(self, record: MoveRecord, state: GameState) -> None:
        self._board_view.board_scene.refresh()
        self._update_panels()
        self._show_message(f"{record.color}: {record.notation}")

    def _on_promotion(self, piece: Piece) -> None:
        letter = PromotionDialog.ask(piece.color, self)
        # Cancelling keeps the automatic queen
        self._controller.choose_promotion(letter or "Q")
        self._board_view.board_scene.refresh()
        self._update_panels()

    def _on_game_over(self, winner: Color) -> None:
        self._board_view.board_scene.set_interactive(False)
        self._show_message(f"Checkmate! Winner: {winner}")

    def _on_error(self, message: str) -> None:
        self._show_message(message)

    def _on_flip(self) -> None:
        scene = self._board_view.board_scene
        scene.set_flipped(not scene.is_flipped())

    # ── Panels ───────────────────────────────────────────────────────────

    def _update_panels(self) -> None:
        state = self._controller.state
        match = state.match
        self._turn_label.setText(
            f"Turn: {match.turn}\nWaiting player: {match.current_player}"
        )
        if match.checkmate:
            self._check_label.setText(f"CHECKMATE! Winner: {state.winner}")
        elif match.check:
            self._check_label.setText("CHECK!")
        else:
            self._check_label.setText("")

        lines = ["Captured pieces:"]
        for color in (Color.BLACK, Color.RED):
            symbols = " ".join(p.symbol for p in state.captured_by(color))
            lines.append(f"{color.name.capitalize()}: {symbols}")
        self._captured_label.setText("\n".join(lines))

        recent = state.move_history[-10:]
        self._history_label.setText(
            "\n".join(f"{r.number}. {r.color}: {r.notation}" for r in recent)
        )

    def _show_message(self, message: str) -> None:
        status = self.statusBar()
        if status is not None:
            status.showMessage(message)
        _LOGGER.debug("Status: %s", message)

    @property
    def phase(self) -> GamePhase:
        return self._controller.phase
