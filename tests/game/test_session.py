"""Tests for GameSession — the engine session used by the host."""

import pytest

from chessgrid.core.enums import Color, GameStatus, PieceType, Special
from chessgrid.core.errors import IllegalMoveError, InvalidSquareError
from chessgrid.core.move import MoveRecord, PendingPromotion
from chessgrid.core.piece import Piece
from chessgrid.core.position import Position
from chessgrid.core.types import E2, E4, E7, E8, parse_square
from chessgrid.game.interfaces import PromotionChooser, TimeControl
from chessgrid.game.session import GameSession

PROMO_ROWS = [
    "........",
    "....P...",
    "........",
    "........",
    "........",
    "........",
    "........",
    "K......k",
]


def _play(session: GameSession, *moves: str) -> None:
    """Apply moves given as 'e2e4'-style strings."""
    for move in moves:
        session.apply_move(parse_square(move[:2]), parse_square(move[2:4]))


def _promo_session(promotion_chooser: PromotionChooser | None = None) -> GameSession:
    return GameSession(
        promotion_chooser=promotion_chooser,
        position=Position.from_rows(PROMO_ROWS),
    )


class TestLegalTargets:
    def test_own_piece(self) -> None:
        session = GameSession()
        assert session.legal_targets(E2) == {parse_square("e3"), E4}

    def test_empty_square(self) -> None:
        assert GameSession().legal_targets(E4) == set()

    def test_opponent_piece(self) -> None:
        assert GameSession().legal_targets(E7) == set()

    @pytest.mark.parametrize("sq", [-1, 64])
    def test_invalid_square(self, sq: int) -> None:
        with pytest.raises(InvalidSquareError):
            GameSession().legal_targets(sq)


class TestApplyMove:
    def test_legal_move_committed(self) -> None:
        session = GameSession()
        record = session.apply_move(E2, E4)
        assert isinstance(record, MoveRecord)
        assert session.side_to_move == Color.BLACK
        assert session.history == (record,)
        assert session.position.en_passant_file == 4

    def test_illegal_move_rejected_without_mutation(self) -> None:
        session = GameSession()
        before = session.position.snapshot()
        with pytest.raises(IllegalMoveError):
            session.apply_move(E2, parse_square("e5"))
        assert session.position.snapshot() == before
        assert session.history == ()

    def test_wrong_side_rejected(self) -> None:
        session = GameSession()
        with pytest.raises(IllegalMoveError):
            session.apply_move(E7, parse_square("e5"))

    def test_invalid_square_rejected(self) -> None:
        with pytest.raises(InvalidSquareError):
            GameSession().apply_move(E2, 99)

    def test_events_fire(self) -> None:
        session = GameSession()
        moves: list[str] = []
        statuses: list[GameStatus] = []
        session.events.on_move.append(lambda record, text: moves.append(text))
        session.events.on_status.append(statuses.append)
        _play(session, "g1f3", "e7e5")
        assert moves == ["Nf3", "e5"]
        assert statuses == [GameStatus.IN_PROGRESS, GameStatus.IN_PROGRESS]

    def test_fools_mate(self) -> None:
        session = GameSession()
        statuses: list[GameStatus] = []
        session.events.on_status.append(statuses.append)
        _play(session, "f2f3", "e7e5", "g2g4", "d8h4")
        assert statuses[-1] == GameStatus.CHECKMATE
        assert session.is_over
        with pytest.raises(IllegalMoveError):
            _play(session, "a2a3")

    def test_check_reported(self) -> None:
        session = GameSession()
        _play(session, "e2e4", "f7f6", "d1h5")
        assert session.status == GameStatus.CHECK
        assert not session.is_over

    def test_castling_through_session(self) -> None:
        session = GameSession()
        _play(session, "e2e4", "e7e5", "g1f3", "b8c6", "f1c4", "g8f6", "e1g1")
        record = session.history[-1]
        assert record.special == Special.CASTLE_KINGSIDE
        assert session.position.board[parse_square("f1")] == Piece(
            Color.WHITE, PieceType.ROOK
        )


class TestUndo:
    def test_undo_empty_is_noop(self) -> None:
        session = GameSession()
        undone: list[MoveRecord] = []
        session.events.on_undo.append(undone.append)
        assert session.undo() is None
        assert undone == []

    def test_undo_restores_position(self) -> None:
        session = GameSession()
        before = session.position.snapshot()
        _play(session, "e2e4", "d7d5", "e4d5")
        for _ in range(3):
            assert session.undo() is not None
        assert session.position.snapshot() == before
        assert session.history == ()

    def test_undo_checkmate_reopens_game(self) -> None:
        session = GameSession(time_control=TimeControl(60))
        _play(session, "f2f3", "e7e5", "g2g4", "d8h4")
        assert not session.clock.is_running
        session.undo()
        assert session.status == GameStatus.IN_PROGRESS
        assert session.clock.is_running
        _play(session, "d8e7")

    def test_undo_emits_status(self) -> None:
        session = GameSession()
        _play(session, "e2e4")
        statuses: list[GameStatus] = []
        session.events.on_status.append(statuses.append)
        session.undo()
        assert statuses == [GameStatus.IN_PROGRESS]


class TestPromotion:
    def test_chooser_answer_used(self) -> None:
        asked: list[tuple[int, Color]] = []

        def chooser(square: int, color: Color) -> PieceType:
            asked.append((square, color))
            return PieceType.KNIGHT

        session = _promo_session(promotion_chooser=chooser)
        record = session.apply_move(E7, E8)
        assert isinstance(record, MoveRecord)
        assert asked == [(E8, Color.WHITE)]
        assert session.position.board[E8] == Piece(Color.WHITE, PieceType.KNIGHT)

    def test_undo_restores_pawn(self) -> None:
        session = _promo_session(promotion_chooser=lambda sq, c: PieceType.ROOK)
        session.apply_move(E7, E8)
        session.undo()
        assert session.position.board[E7] == Piece(Color.WHITE, PieceType.PAWN)
        assert session.position.board[E8] is None

    def test_pending_without_chooser(self) -> None:
        session = _promo_session()
        requests: list[PendingPromotion] = []
        session.events.on_promotion_pending.append(requests.append)
        before = session.position.snapshot()

        result = session.apply_move(E7, E8)
        assert result == PendingPromotion(E7, E8, Color.WHITE)
        assert requests == [result]
        assert session.pending_promotion == result
        assert session.position.snapshot() == before
        assert session.legal_targets(E7) == set()

        record = session.complete_promotion(PieceType.BISHOP)
        assert record.promotion == PieceType.BISHOP
        assert session.pending_promotion is None
        assert session.position.board[E8] == Piece(Color.WHITE, PieceType.BISHOP)

    def test_chooser_may_defer(self) -> None:
        session = _promo_session(promotion_chooser=lambda sq, c: None)
        assert isinstance(session.apply_move(E7, E8), PendingPromotion)

    def test_moves_blocked_while_pending(self) -> None:
        session = _promo_session()
        session.apply_move(E7, E8)
        with pytest.raises(IllegalMoveError):
            session.apply_move(parse_square("a1"), parse_square("a2"))

    def test_invalid_choice(self) -> None:
        session = _promo_session()
        session.apply_move(E7, E8)
        with pytest.raises(IllegalMoveError):
            session.complete_promotion(PieceType.KING)
        assert session.pending_promotion is not None

    def test_chooser_invalid_choice(self) -> None:
        session = _promo_session(promotion_chooser=lambda sq, c: PieceType.PAWN)
        with pytest.raises(IllegalMoveError):
            session.apply_move(E7, E8)
        assert session.history == ()

    def test_complete_without_pending(self) -> None:
        with pytest.raises(IllegalMoveError):
            GameSession().complete_promotion(PieceType.QUEEN)

    def test_undo_cancels_pending(self) -> None:
        session = _promo_session()
        session.apply_move(E7, E8)
        assert session.undo() is None
        assert session.pending_promotion is None
        assert session.legal_targets(E7) == {E8}


class TestClockIntegration:
    def test_tick_charges_side_to_move(self) -> None:
        session = GameSession(time_control=TimeControl(300))
        session.tick()
        _play(session, "e2e4")
        session.tick()
        session.tick()
        assert session.clock.remaining(Color.WHITE) == 299
        assert session.clock.remaining(Color.BLACK) == 298

    def test_clock_event(self) -> None:
        session = GameSession(time_control=TimeControl(300))
        ticks: list[tuple[int, int]] = []
        session.events.on_clock.append(lambda w, b: ticks.append((w, b)))
        session.tick()
        assert ticks == [(299, 300)]

    def test_flag_fall(self) -> None:
        session = GameSession(time_control=TimeControl(2))
        statuses: list[GameStatus] = []
        session.events.on_status.append(statuses.append)
        session.tick()
        session.tick()
        assert statuses == [GameStatus.BLACK_WINS_ON_TIME]
        assert session.is_over
        with pytest.raises(IllegalMoveError):
            session.apply_move(E2, E4)

    def test_undo_keeps_time_forfeit(self) -> None:
        session = GameSession(time_control=TimeControl(2))
        _play(session, "e2e4")
        session.tick(2)
        assert session.status == GameStatus.WHITE_WINS_ON_TIME
        session.undo()
        assert session.status == GameStatus.WHITE_WINS_ON_TIME

    def test_paused_clock_resumes_on_move(self) -> None:
        session = GameSession(time_control=TimeControl(300))
        session.clock.pause()
        _play(session, "e2e4")
        assert session.clock.is_running

    def test_no_clock(self) -> None:
        session = GameSession()
        session.tick(1000)
        assert session.status == GameStatus.IN_PROGRESS


class TestReset:
    def test_reset_restores_everything(self) -> None:
        session = GameSession(time_control=TimeControl(2))
        _play(session, "e2e4", "e7e5")
        session.tick(2)
        statuses: list[GameStatus] = []
        session.events.on_status.append(statuses.append)

        session.reset()
        assert session.position == Position()
        assert session.history == ()
        assert session.status == GameStatus.IN_PROGRESS
        assert session.clock.remaining(Color.WHITE) == 2
        assert statuses == [GameStatus.IN_PROGRESS]

    def test_reset_with_new_time_control(self) -> None:
        session = GameSession()
        session.reset(TimeControl.blitz_3m())
        assert session.clock.remaining(Color.BLACK) == 180

    def test_sessions_are_independent(self) -> None:
        a = GameSession()
        b = GameSession()
        _play(a, "e2e4")
        assert b.position == Position()

    def test_set_time_control_keeps_board(self) -> None:
        session = GameSession()
        _play(session, "e2e4", "e7e5")
        ticks: list[tuple[int, int]] = []
        session.events.on_clock.append(lambda w, b: ticks.append((w, b)))

        session.set_time_control(TimeControl.bullet_1m())
        assert len(session.history) == 2
        assert session.side_to_move == Color.WHITE
        assert session.clock.is_running
        assert ticks == [(60, 60)]
        session.tick()
        assert session.clock.remaining(Color.WHITE) == 59

    def test_set_time_control_after_mate_stays_paused(self) -> None:
        session = GameSession()
        _play(session, "f2f3", "e7e5", "g2g4", "d8h4")
        session.set_time_control(TimeControl(60))
        assert not session.clock.is_running
        assert session.status == GameStatus.CHECKMATE

    def test_set_time_control_keeps_time_forfeit(self) -> None:
        session = GameSession(time_control=TimeControl(1))
        session.tick()
        session.set_time_control(TimeControl(300))
        assert session.clock.flagged == Color.WHITE
        assert session.status == GameStatus.BLACK_WINS_ON_TIME
