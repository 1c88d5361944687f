"""Tests for GameState and MoveRecord."""

import pytest

from chessmatch.core.enums import Color, PieceType
from chessmatch.core.errors import IllegalMoveError
from chessmatch.core.match import ChessMatch
from chessmatch.core.types import mask_squares, parse_position, position_name
from chessmatch.game.interfaces import GamePhase
from chessmatch.game.state import GameState, MoveRecord


def _state(*moves: str) -> GameState:
    state = GameState()
    state.setup()
    for move in moves:
        source, target = move.split("-")
        state.apply_move(source, target)
    return state


class TestSetup:
    def test_not_started_before_setup(self) -> None:
        assert GameState().phase == GamePhase.NOT_STARTED

    def test_setup(self) -> None:
        state = _state()
        assert state.phase == GamePhase.AWAITING_MOVE
        assert state.current_player == Color.BLACK
        assert state.ply_count == 0
        assert state.last_move is None
        assert state.winner is None

    def test_setup_resets_history(self) -> None:
        state = _state("e2-e4")
        state.setup()
        assert state.move_history == []
        assert state.match.turn == 1

    def test_custom_match(self, make_match) -> None:
        match = make_match(("e1", Color.BLACK, PieceType.KING), ("e8", Color.RED, PieceType.KING))
        state = GameState()
        state.setup(match)
        assert state.match is match


class TestApplyMove:
    def test_record(self) -> None:
        state = _state("e2-e4")
        record = state.last_move
        assert record is not None
        assert record.number == 1
        assert record.color == Color.BLACK
        assert record.piece_type == PieceType.PAWN
        assert record.notation == "e2-e4"
        assert state.current_player == Color.RED

    def test_illegal_move_leaves_history_alone(self) -> None:
        state = _state("e2-e4")
        with pytest.raises(IllegalMoveError):
            state.apply_move("e4", "e5")  # not RED's piece
        assert state.ply_count == 1
        assert state.phase == GamePhase.AWAITING_MOVE

    def test_capture_notation(self) -> None:
        state = _state("e2-e4", "d7-d5", "e4-d5")
        assert state.last_move is not None
        assert state.last_move.notation == "e4xd5"
        assert [p.piece_type for p in state.captured_by(Color.RED)] == [PieceType.PAWN]
        assert state.captured_by(Color.BLACK) == []

    def test_check_notation(self) -> None:
        state = _state("e2-e4", "f7-f6", "d1-h5")
        assert state.last_move is not None
        assert state.last_move.notation == "Qd1-h5+"

    def test_checkmate(self) -> None:
        state = _state("f2-f3", "e7-e5", "g2-g4", "d8-h4")
        assert state.is_game_over
        assert state.winner == Color.RED
        assert state.last_move is not None
        assert state.last_move.notation == "Qd8-h4#"
        assert state.ply_count == 4

    def test_legal_targets(self) -> None:
        state = _state()
        targets = {position_name(p) for p in mask_squares(state.legal_targets("g1"))}
        assert targets == {"f3", "h3"}


class TestPromotion:
    def _promote(self, make_match) -> GameState:
        match: ChessMatch = make_match(
            ("a7", Color.BLACK, PieceType.PAWN),
            ("e1", Color.BLACK, PieceType.KING),
            ("h5", Color.RED, PieceType.KING),
        )
        state = GameState()
        state.setup(match)
        state.apply_move("a7", "a8")
        return state

    def test_awaiting_promotion(self, make_match) -> None:
        state = self._promote(make_match)
        assert state.phase == GamePhase.AWAITING_PROMOTION
        assert state.last_move is not None
        assert state.last_move.notation == "a7-a8=Q"

    def test_choose(self, make_match) -> None:
        state = self._promote(make_match)
        piece = state.choose_promotion(" r ")
        assert piece.piece_type == PieceType.ROOK
        assert state.match.board[parse_position("a8")] is piece
        assert state.phase == GamePhase.AWAITING_MOVE
        assert state.last_move is not None
        assert state.last_move.notation == "a7-a8=R"

    def test_unknown_letter_keeps_pending(self, make_match) -> None:
        state = self._promote(make_match)
        piece = state.choose_promotion("K")
        assert piece.piece_type == PieceType.QUEEN
        assert state.phase == GamePhase.AWAITING_PROMOTION


class TestMoveRecord:
    def test_knight_prefix(self) -> None:
        record = MoveRecord(
            number=1,
            color=Color.BLACK,
            source=parse_position("g1"),
            target=parse_position("f3"),
            piece_type=PieceType.KNIGHT,
        )
        assert record.notation == "Ng1-f3"

    def test_castling_is_a_king_move(self) -> None:
        record = MoveRecord(
            number=7,
            color=Color.BLACK,
            source=parse_position("e1"),
            target=parse_position("g1"),
            piece_type=PieceType.KING,
        )
        assert record.notation == "Ke1-g1"
