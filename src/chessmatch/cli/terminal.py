"""Text front-end: renders the match with rich and routes prompts into it."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

import click
from rich.console import Console
from rich.text import Text

from chessmatch.core.board import Snapshot
from chessmatch.core.enums import Color
from chessmatch.core.errors import IllegalMoveError
from chessmatch.core.piece import Piece
from chessmatch.core.types import Mask, Position, parse_position
from chessmatch.game.controller import GameController
from chessmatch.game.interfaces import GamePhase
from chessmatch.game.state import GameState

_LOGGER = logging.getLogger(__name__)

_PIECE_STYLES: dict[Color, str] = {
    Color.BLACK: "bold bright_white",
    Color.RED: "bold red",
}
_HIGHLIGHT_STYLE = "on blue"


@dataclass
class TerminalSettings:
    """User-configurable options of the text front-end."""

    use_color: bool = True
    clear_screen: bool = True


# ── Rendering ────────────────────────────────────────────────────────────────


def render_board(pieces: Snapshot, possible_moves: Mask | None = None) -> Text:
    """Board as styled text: rank labels ``8..1``, ``-`` for empty squares."""
    text = Text()
    for i, row in enumerate(pieces):
        text.append(f"{8 - i} ")
        for j, piece in enumerate(row):
            background = (
                _HIGHLIGHT_STYLE
                if possible_moves is not None and possible_moves[i][j]
                else ""
            )
            if piece is None:
                text.append("-", style=background or None)
            else:
                style = f"{_PIECE_STYLES[piece.color]} {background}".strip()
                text.append(piece.letter, style=style)
            text.append(" ")
        text.append("\n")
    text.append("  a b c d e f g h")
    return text


def render_captured(captured: list[Piece]) -> Text:
    text = Text("Captured pieces:\n")
    for color in (Color.BLACK, Color.RED):
        letters = [p.letter for p in captured if p.color == color]
        text.append(f"{color.name.capitalize()}: ")
        text.append(f"[{', '.join(letters)}]", style=_PIECE_STYLES[color])
        text.append("\n")
    return text


def render_status(state: GameState) -> Text:
    match = state.match
    text = Text(f"Turn : {match.turn}\n")
    if not match.checkmate:
        text.append(f"Waiting player: {match.current_player}\n")
        if match.check:
            text.append("CHECK!\n", style="bold yellow")
    else:
        text.append("CHECKMATE!\n", style="bold yellow")
        text.append(f"Winner: {state.winner}\n")
    return text


def read_position(text: str) -> Position:
    """Parse user input such as ``'e2'`` (case-insensitive, surrounding blanks ok)."""
    return parse_position(text.strip().lower())


# ── Interactive loop ─────────────────────────────────────────────────────────


class TerminalUI:
    """Prompts for source, target and promotion choice until checkmate.

    *prompt* reads one line of user input; it must raise :class:`EOFError`
    when input is exhausted, which ends the session.
    """

    def __init__(
        self,
        controller: GameController,
        console: Console | None = None,
        prompt: Callable[[str], str] | None = None,
        settings: TerminalSettings | None = None,
    ) -> None:
        self._controller = controller
        self._settings = settings or TerminalSettings()
        self._console = console or Console(
            no_color=not self._settings.use_color, highlight=False
        )
        self._prompt = prompt or self._console.input

    def run(self) -> GameState:
        """Play until checkmate or end of input; returns the final state."""
        state = self._controller.state
        if state.phase == GamePhase.NOT_STARTED:
            self._controller.new_game()
        try:
            while not self._controller.state.is_game_over:
                self._play_turn()
        except EOFError:
            _LOGGER.debug("Input exhausted, leaving the match")
        self._show(None)
        return self._controller.state

    def _play_turn(self) -> None:
        self._show(None)
        try:
            source = read_position(self._prompt("Source: "))
            mask = self._controller.match.possible_moves(source)
            self._show(mask)
            target = read_position(self._prompt("Target: "))
        except IllegalMoveError as exc:
            self._report(str(exc))
            return

        if not self._controller.submit_move(source, target):
            self._report(self._controller.last_error or "Illegal move")
            return

        while self._controller.phase == GamePhase.AWAITING_PROMOTION:
            letter = self._prompt("Enter piece for promotion (B/N/R/Q): ")
            if not self._controller.choose_promotion(letter):
                self._console.print("Invalid value! Enter piece for promotion (B/N/R/Q).")

    def _show(self, possible_moves: Mask | None) -> None:
        state = self._controller.state
        if self._settings.clear_screen:
            self._console.clear()
        self._console.print(render_board(state.match.snapshot(), possible_moves))
        self._console.print()
        self._console.print(render_captured(state.match.captured_pieces))
        self._console.print(render_status(state))

    def _report(self, message: str) -> None:
        self._console.print(message, style="bold red")
        self._prompt("Press Enter to continue ")


# ── Entry point ──────────────────────────────────────────────────────────────


@click.command(name="chessmatch-cli")
@click.option("--no-color", is_flag=True, help="Render the board without colors.")
@click.option("--no-clear", is_flag=True, help="Do not clear the screen between turns.")
@click.option("--verbose", is_flag=True, help="Log rule-engine activity to stderr.")
def main(no_color: bool, no_clear: bool, verbose: bool) -> None:
    """Play a BLACK vs RED match in the terminal."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    settings = TerminalSettings(use_color=not no_color, clear_screen=not no_clear)
    controller = GameController()
    controller.new_game()
    TerminalUI(controller, settings=settings).run()
