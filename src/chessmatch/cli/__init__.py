"""Terminal front-end."""

from chessmatch.cli.terminal import TerminalSettings, TerminalUI, main, render_board

__all__ = ["TerminalSettings", "TerminalUI", "main", "render_board"]
