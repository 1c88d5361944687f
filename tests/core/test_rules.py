"""Tests for Rules: check, checkmate and the legal-move search."""

import pytest

from chessmatch.core.enums import Color, PieceType
from chessmatch.core.errors import IllegalStateError
from chessmatch.core.match import ChessMatch
from chessmatch.core.rules import Rules

B = Color.BLACK
R = Color.RED


def _fools_mate() -> ChessMatch:
    match = ChessMatch()
    for source, target in (("f2", "f3"), ("e7", "e5"), ("g2", "g4"), ("d8", "h4")):
        match.perform_move(source, target)
    return match


class TestKing:
    def test_finds_both_kings(self) -> None:
        match = ChessMatch()
        assert str(Rules.king(match, B).position) == "e1"
        assert str(Rules.king(match, R).position) == "e8"

    def test_missing_king_raises(self, make_match) -> None:
        match = make_match(("e8", R, PieceType.KING))
        with pytest.raises(IllegalStateError, match="no BLACK king"):
            Rules.king(match, B)


class TestCheck:
    def test_starting_not_in_check(self) -> None:
        match = ChessMatch()
        assert not Rules.is_in_check(match, B)
        assert not Rules.is_in_check(match, R)

    def test_fools_mate_in_check(self) -> None:
        match = _fools_mate()
        assert Rules.is_in_check(match, B)
        assert not Rules.is_in_check(match, R)

    def test_blocked_line_is_not_check(self, make_match) -> None:
        match = make_match(
            ("e1", B, PieceType.KING),
            ("e4", B, PieceType.KNIGHT),
            ("e8", R, PieceType.ROOK),
            ("a8", R, PieceType.KING),
        )
        assert not Rules.is_in_check(match, B)

    def test_pawn_checks_diagonally_forward(self, make_match) -> None:
        match = make_match(
            ("e1", B, PieceType.KING),
            ("d2", R, PieceType.PAWN),
            ("a8", R, PieceType.KING),
        )
        assert Rules.is_in_check(match, B)

    def test_pawn_does_not_check_backwards(self, make_match) -> None:
        match = make_match(
            ("e2", B, PieceType.KING),
            ("d1", R, PieceType.PAWN),
            ("a8", R, PieceType.KING),
        )
        assert not Rules.is_in_check(match, B)


class TestCheckmate:
    def test_fools_mate(self) -> None:
        match = _fools_mate()
        assert Rules.is_checkmate(match, B)
        assert not Rules.has_legal_move(match, B)
        assert Rules.has_legal_move(match, R)

    def test_not_checkmate_when_king_can_escape(self, make_match) -> None:
        match = make_match(
            ("e1", B, PieceType.KING),
            ("a1", R, PieceType.ROOK),
            ("h8", R, PieceType.KING),
        )
        assert Rules.is_in_check(match, B)
        assert not Rules.is_checkmate(match, B)

    def test_capturing_the_checker_escapes(self, make_match) -> None:
        match = make_match(
            ("h1", B, PieceType.KING),
            ("g2", R, PieceType.QUEEN),
            ("a8", R, PieceType.KING),
        )
        assert Rules.is_in_check(match, B)
        assert not Rules.is_checkmate(match, B)

    def test_defended_checker_mates(self, make_match) -> None:
        match = make_match(
            ("h1", B, PieceType.KING),
            ("g2", R, PieceType.QUEEN),
            ("e3", R, PieceType.KNIGHT),
            ("a8", R, PieceType.KING),
        )
        assert Rules.is_checkmate(match, B)

    def test_not_in_check_is_never_mate(self, make_match) -> None:
        match = make_match(
            ("a1", B, PieceType.KING),
            ("b3", R, PieceType.QUEEN),
            ("h8", R, PieceType.KING),
        )
        assert not Rules.has_legal_move(match, B)
        assert not Rules.is_checkmate(match, B)

    def test_search_restores_live_list_order(self) -> None:
        match = _fools_mate()
        before = [id(p) for p in match.pieces_on_the_board]
        Rules.has_legal_move(match, B)
        Rules.has_legal_move(match, R)
        assert [id(p) for p in match.pieces_on_the_board] == before
        assert match.board.occupied_count() == len(before)
