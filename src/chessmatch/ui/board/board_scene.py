"""BoardScene — QGraphicsScene that draws the chessboard and pieces."""

from __future__ import annotations

from PyQt6.QtCore import QObject, QPointF, Qt, pyqtSignal
from PyQt6.QtGui import QBrush, QColor, QFont, QPen
from PyQt6.QtWidgets import (
    QGraphicsRectItem,
    QGraphicsScene,
    QGraphicsSceneMouseEvent,
    QGraphicsSimpleTextItem,
)

from chessmatch.core.errors import IllegalMoveError
from chessmatch.core.types import BOARD_SIZE, Position, mask_squares, position_name
from chessmatch.game.state import GameState
from chessmatch.ui.styles.theme import BoardTheme


class BoardScene(QGraphicsScene):
    """Renders the board, coordinates, highlights, and piece glyphs.

    Signals:
        move_requested(Position, Position): the user clicked a piece of the
        side to move and then one of its legal targets.
    """

    move_requested = pyqtSignal(object, object)

    TILE = 80  # px per square

    def __init__(self, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._theme = BoardTheme.default()
        self._state: GameState | None = None
        self._flipped = False

        # Interaction state
        self._selected: Position | None = None
        self._legal_targets: set[Position] = set()
        self._interactive = True
        self._show_coordinates = True
        self._show_legal_moves = True

        # Visual layers
        self._square_items: dict[Position, QGraphicsRectItem] = {}
        self._highlight_items: list[QGraphicsRectItem] = []
        self._legal_dot_items: list[QGraphicsRectItem] = []
        self._piece_items: dict[Position, QGraphicsSimpleTextItem] = {}
        self._coord_items: list[QGraphicsSimpleTextItem] = []

        self._draw_board()

    # ── Public API ───────────────────────────────────────────────────────

    def set_state(self, state: GameState) -> None:
        """Show *state*'s match (full redraw of pieces)."""
        self._state = state
        self.refresh()

    def refresh(self) -> None:
        self._clear_selection()
        self._sync_pieces()
        self.highlight_check()

    def set_interactive(self, interactive: bool) -> None:
        self._interactive = interactive

    def set_flipped(self, flipped: bool) -> None:
        self._flipped = flipped
        self._draw_board()
        self.refresh()

    def is_flipped(self) -> bool:
        return self._flipped

    def set_theme(self, theme: BoardTheme) -> None:
        self._theme = theme
        self._draw_board()
        self.refresh()

    def set_show_coordinates(self, visible: bool) -> None:
        self._show_coordinates = visible
        for item in self._coord_items:
            item.setVisible(visible)

    def set_show_legal_moves(self, visible: bool) -> None:
        self._show_legal_moves = visible
        if not visible:
            self._clear_items(self._legal_dot_items)

    def highlight_check(self) -> None:
        """Highlight the current player's king when it is in check."""
        if self._state is None:
            return
        match = self._state.match
        if not match.check:
            return
        king_pos = match.king(match.current_player).position
        if king_pos is not None:
            rect = self._make_highlight(king_pos, self._theme.highlight_check)
            rect.setZValue(0.6)
            self._highlight_items.append(rect)

    # ── Board drawing ────────────────────────────────────────────────────

    def _draw_board(self) -> None:
        for sq_item in self._square_items.values():
            self.removeItem(sq_item)
        self._square_items.clear()
        self._clear_items(self._coord_items)

        t = self.TILE
        font = QFont("DejaVu Sans", max(9, t // 8))

        for row in range(BOARD_SIZE):
            for column in range(BOARD_SIZE):
                pos = Position(row, column)
                vx, vy = self._visual_coords(pos)
                is_light = (row + column) % 2 == 0
                color = self._theme.light_square if is_light else self._theme.dark_square
                rect = QGraphicsRectItem(vx * t, vy * t, t, t)
                rect.setBrush(QBrush(color))
                rect.setPen(QPen(Qt.PenStyle.NoPen))
                rect.setZValue(0)
                self.addItem(rect)
                self._square_items[pos] = rect

                name = position_name(pos)
                coord_brush = QBrush(
                    self._theme.coord_dark if not is_light else self._theme.coord_light
                )
                if vx == 0:
                    self._add_coord(name[1], coord_brush, font, vx * t + 2, vy * t + 1)
                if vy == BOARD_SIZE - 1:
                    self._add_coord(
                        name[0], coord_brush, font, vx * t + t - 12, vy * t + t - 16
                    )

        self.setSceneRect(0, 0, BOARD_SIZE * t, BOARD_SIZE * t)

    def _add_coord(
        self, label: str, brush: QBrush, font: QFont, x: float, y: float
    ) -> None:
        txt = QGraphicsSimpleTextItem(label)
        txt.setFont(font)
        txt.setBrush(brush)
        txt.setPos(x, y)
        txt.setZValue(0.3)
        txt.setVisible(self._show_coordinates)
        self.addItem(txt)
        self._coord_items.append(txt)

    # ── Piece synchronisation ────────────────────────────────────────────

    def _sync_pieces(self) -> None:
        """Re-create all piece items from the current match."""
        for item in self._piece_items.values():
            self.removeItem(item)
        self._piece_items.clear()

        if self._state is None:
            return

        t = self.TILE
        font = QFont("DejaVu Sans", int(t * 0.6))
        for row, pieces in enumerate(self._state.match.snapshot()):
            for column, piece in enumerate(pieces):
                if piece is None:
                    continue
                pos = Position(row, column)
                item = QGraphicsSimpleTextItem(piece.symbol)
                item.setFont(font)
                item.setBrush(QBrush(self._theme.piece_color(piece.color)))
                bounds = item.boundingRect()
                vx, vy = self._visual_coords(pos)
                item.setPos(
                    vx * t + (t - bounds.width()) / 2,
                    vy * t + (t - bounds.height()) / 2,
                )
                item.setZValue(1)
                self.addItem(item)
                self._piece_items[pos] = item

    # ── Mouse interaction ────────────────────────────────────────────────

    def mousePressEvent(self, event: QGraphicsSceneMouseEvent | None) -> None:
        if not self._interactive or self._state is None or event is None:
            return super().mousePressEvent(event)
        pos = self._pos_to_square(event.scenePos())
        if pos is not None:
            self.click_square(pos)
        else:
            self._clear_selection()
        super().mousePressEvent(event)

    def click_square(self, pos: Position) -> None:
        """Select a piece, or request a move to a highlighted target."""
        if self._state is None:
            return
        if self._selected is not None and pos in self._legal_targets:
            source = self._selected
            self._clear_selection()
            self.move_requested.emit(source, pos)
            return

        piece = self._state.match.board[pos]
        if piece is not None and piece.color == self._state.current_player:
            self._select_square(pos)
        else:
            self._clear_selection()

    # ── Selection / highlights ───────────────────────────────────────────

    def _select_square(self, pos: Position) -> None:
        self._clear_selection()
        assert self._state is not None
        try:
            mask = self._state.legal_targets(pos)
        except IllegalMoveError:
            return

        self._selected = pos
        self._legal_targets = set(mask_squares(mask))
        self._highlight_items.append(
            self._make_highlight(pos, self._theme.highlight_from)
        )
        if self._show_legal_moves:
            for target in self._legal_targets:
                self._legal_dot_items.append(
                    self._make_highlight(target, self._theme.highlight_to)
                )

    def _clear_selection(self) -> None:
        self._selected = None
        self._legal_targets = set()
        self._clear_items(self._highlight_items)
        self._clear_items(self._legal_dot_items)

    def _clear_items(self, items: list) -> None:
        for item in items:
            self.removeItem(item)
        items.clear()

    # ── Coordinate helpers ───────────────────────────────────────────────

    def _visual_coords(self, pos: Position) -> tuple[int, int]:
        """Board position → visual (x, y) tile."""
        if self._flipped:
            return BOARD_SIZE - 1 - pos.column, BOARD_SIZE - 1 - pos.row
        return pos.column, pos.row

    def _pos_to_square(self, point: QPointF) -> Position | None:
        t = self.TILE
        x = int(point.x() // t)
        y = int(point.y() // t)
        if not (0 <= x < BOARD_SIZE and 0 <= y < BOARD_SIZE):
            return None
        if self._flipped:
            return Position(BOARD_SIZE - 1 - y, BOARD_SIZE - 1 - x)
        return Position(y, x)

    def _make_highlight(self, pos: Position, color: QColor) -> QGraphicsRectItem:
        t = self.TILE
        vx, vy = self._visual_coords(pos)
        rect = QGraphicsRectItem(vx * t, vy * t, t, t)
        rect.setBrush(QBrush(color))
        rect.setPen(QPen(Qt.PenStyle.NoPen))
        rect.setZValue(0.8)
        self.addItem(rect)
        return rect
