"""Tests for GameController — the orchestrator."""

from chessmatch.core.enums import Color, PieceType
from chessmatch.core.types import parse_position
from chessmatch.game.controller import GameController
from chessmatch.game.interfaces import GamePhase


def _controller(match=None) -> GameController:
    ctrl = GameController()
    ctrl.new_game(match)
    return ctrl


def _promotion_controller(make_match) -> GameController:
    return _controller(
        make_match(
            ("a7", Color.BLACK, PieceType.PAWN),
            ("e1", Color.BLACK, PieceType.KING),
            ("h5", Color.RED, PieceType.KING),
        )
    )


class TestNewGame:
    def test_phase_awaiting(self) -> None:
        assert _controller().phase == GamePhase.AWAITING_MOVE

    def test_black_moves_first(self) -> None:
        assert _controller().match.current_player == Color.BLACK

    def test_phase_event(self) -> None:
        ctrl = GameController()
        phases: list[GamePhase] = []
        ctrl.events.on_phase_changed.append(phases.append)
        ctrl.new_game()
        assert phases == [GamePhase.AWAITING_MOVE]

    def test_new_game_keeps_listeners(self) -> None:
        ctrl = _controller()
        seen: list[str] = []
        ctrl.events.on_move.append(lambda rec, st: seen.append(rec.notation))
        ctrl.submit_move("e2", "e4")
        ctrl.new_game()
        ctrl.submit_move("d2", "d4")
        assert seen == ["e2-e4", "d2-d4"]


class TestSubmitMove:
    def test_legal_move_accepted(self) -> None:
        ctrl = _controller()
        assert ctrl.submit_move("e2", "e4")
        assert ctrl.match.current_player == Color.RED
        assert ctrl.last_error is None

    def test_illegal_move_rejected(self) -> None:
        ctrl = _controller()
        errors: list[str] = []
        ctrl.events.on_error.append(errors.append)
        assert not ctrl.submit_move("e2", "e5")
        assert ctrl.last_error == "The chosen piece can't move to target position"
        assert errors == [ctrl.last_error]
        assert ctrl.match.current_player == Color.BLACK

    def test_bad_coordinates_rejected(self) -> None:
        ctrl = _controller()
        assert not ctrl.submit_move("z9", "e4")
        assert ctrl.last_error is not None
        assert "Invalid position" in ctrl.last_error

    def test_error_cleared_by_next_legal_move(self) -> None:
        ctrl = _controller()
        ctrl.submit_move("e7", "e5")
        assert ctrl.last_error == "The chosen piece is not yours"
        ctrl.submit_move("e2", "e4")
        assert ctrl.last_error is None

    def test_not_started_rejects_moves(self) -> None:
        ctrl = GameController()
        assert not ctrl.submit_move("e2", "e4")
        assert ctrl.phase == GamePhase.NOT_STARTED


class TestGameOver:
    def test_fools_mate(self) -> None:
        ctrl = _controller()
        winners: list[Color] = []
        phases: list[GamePhase] = []
        ctrl.events.on_game_over.append(winners.append)
        ctrl.events.on_phase_changed.append(phases.append)
        for source, target in (("f2", "f3"), ("e7", "e5"), ("g2", "g4"), ("d8", "h4")):
            assert ctrl.submit_move(source, target)

        assert winners == [Color.RED]
        assert phases == [GamePhase.GAME_OVER]
        assert ctrl.phase == GamePhase.GAME_OVER
        assert ctrl.state.winner == Color.RED

    def test_moves_refused_after_mate(self) -> None:
        ctrl = _controller()
        for source, target in (("f2", "f3"), ("e7", "e5"), ("g2", "g4"), ("d8", "h4")):
            ctrl.submit_move(source, target)
        assert not ctrl.submit_move("h2", "h3")
        assert ctrl.last_error == "The match is not accepting moves"


class TestPromotion:
    def test_promotion_flow(self, make_match) -> None:
        ctrl = _promotion_controller(make_match)
        pending = []
        ctrl.events.on_promotion.append(pending.append)

        assert ctrl.submit_move("a7", "a8")

        assert ctrl.phase == GamePhase.AWAITING_PROMOTION
        assert len(pending) == 1
        assert pending[0].piece_type == PieceType.QUEEN

    def test_moves_blocked_until_resolved(self, make_match) -> None:
        ctrl = _promotion_controller(make_match)
        ctrl.submit_move("a7", "a8")
        assert not ctrl.submit_move("h5", "h4")
        assert ctrl.last_error == "Choose a piece for the promotion first"

    def test_choose_knight(self, make_match) -> None:
        ctrl = _promotion_controller(make_match)
        ctrl.submit_move("a7", "a8")
        assert ctrl.choose_promotion("n")
        assert ctrl.phase == GamePhase.AWAITING_MOVE
        assert ctrl.match.promoted is not None
        assert ctrl.match.promoted.piece_type == PieceType.KNIGHT
        assert ctrl.state.last_move is not None
        assert ctrl.state.last_move.notation == "a7-a8=N"
        assert ctrl.submit_move("h5", "h4")

    def test_invalid_letter(self, make_match) -> None:
        ctrl = _promotion_controller(make_match)
        ctrl.submit_move("a7", "a8")
        assert not ctrl.choose_promotion("K")
        assert ctrl.phase == GamePhase.AWAITING_PROMOTION
        assert ctrl.last_error == "Invalid promotion piece 'K'"

    def test_nothing_to_promote(self) -> None:
        ctrl = _controller()
        assert not ctrl.choose_promotion("Q")
        assert ctrl.last_error == "There is no piece to be promoted"

    def test_resolved_promotion_cannot_be_changed(self, make_match) -> None:
        ctrl = _promotion_controller(make_match)
        ctrl.submit_move("a7", "a8")
        assert ctrl.choose_promotion("N")

        assert not ctrl.choose_promotion("Q")

        assert ctrl.last_error == "There is no piece to be promoted"
        assert ctrl.phase == GamePhase.AWAITING_MOVE
        knight = ctrl.match.board[parse_position("a8")]
        assert knight is not None and knight.piece_type == PieceType.KNIGHT
