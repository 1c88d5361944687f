"""Exception hierarchy for the rules engine."""

from __future__ import annotations


class ChessError(Exception):
    """Base class for every error raised by :mod:`chessmatch`."""


class IllegalMoveError(ChessError, ValueError):
    """A requested move (or source square) is not allowed.

    Always recoverable: the match state is unchanged after it is raised.
    """


class IllegalStateError(ChessError, RuntimeError):
    """An internal invariant was violated; indicates a caller bug."""
