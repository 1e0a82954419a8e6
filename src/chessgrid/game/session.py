"""GameSession — owns one position, its undo stack and the clock.

Emits events via simple callbacks so the UI / tests can subscribe.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from chessgrid.core.enums import PROMOTION_TYPES, Color, GameStatus, PieceType
from chessgrid.core.errors import IllegalMoveError
from chessgrid.core.move import MoveRecord, PendingPromotion
from chessgrid.core.move_generator import MoveGenerator
from chessgrid.core.notation import move_notation
from chessgrid.core.position import Position
from chessgrid.core.rules import Rules
from chessgrid.core.types import Square, rank_of, square_name, validate_square
from chessgrid.game.clock import CountdownClock
from chessgrid.game.interfaces import PromotionChooser, TimeControl

_LOGGER = logging.getLogger(__name__)

# ── Event definitions ────────────────────────────────────────────────────────

MoveCallback = Callable[[MoveRecord, str], None]  # record, notation
UndoCallback = Callable[[MoveRecord], None]
StatusCallback = Callable[[GameStatus], None]
PromotionCallback = Callable[[PendingPromotion], None]
ClockCallback = Callable[[int, int], None]  # white, black remaining


@dataclass
class GameEvents:
    """Observable callbacks. Multiple handlers per event."""

    on_move: list[MoveCallback] = field(default_factory=list)
    on_undo: list[UndoCallback] = field(default_factory=list)
    on_status: list[StatusCallback] = field(default_factory=list)
    on_promotion_pending: list[PromotionCallback] = field(default_factory=list)
    on_clock: list[ClockCallback] = field(default_factory=list)


# ── Session ──────────────────────────────────────────────────────────────────


class GameSession:
    """One game at one keyboard: validates moves, keeps the undo stack,
    runs the clock and notifies listeners.

    All methods are synchronous and meant to be called from a single
    thread. Caller mistakes raise :class:`IllegalMoveError` or
    :class:`InvalidSquareError` before anything is mutated.
    """

    __slots__ = (
        "_position",
        "_history",
        "_status",
        "_pending",
        "_clock",
        "_chooser",
        "events",
    )

    def __init__(
        self,
        time_control: TimeControl | None = None,
        promotion_chooser: PromotionChooser | None = None,
        position: Position | None = None,
    ) -> None:
        self._position = position if position is not None else Position()
        self._history: list[MoveRecord] = []
        self._status = Rules.status(self._position)
        self._pending: PendingPromotion | None = None
        self._clock = CountdownClock(time_control)
        self._chooser = promotion_chooser
        self.events = GameEvents()

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def position(self) -> Position:
        return self._position

    @property
    def history(self) -> tuple[MoveRecord, ...]:
        return tuple(self._history)

    @property
    def status(self) -> GameStatus:
        return self._status

    @property
    def is_over(self) -> bool:
        return self._status.is_terminal

    @property
    def side_to_move(self) -> Color:
        return self._position.side_to_move

    @property
    def pending_promotion(self) -> PendingPromotion | None:
        return self._pending

    @property
    def clock(self) -> CountdownClock:
        return self._clock

    def set_promotion_chooser(self, chooser: PromotionChooser | None) -> None:
        self._chooser = chooser

    # ── Host actions ─────────────────────────────────────────────────────

    def reset(self, time_control: TimeControl | None = None) -> None:
        """Start a new game, optionally with a different time control."""
        self._position.reset()
        self._history.clear()
        self._pending = None
        if time_control is not None:
            self._clock = CountdownClock(time_control)
        else:
            self._clock.reset()
        _LOGGER.info("New game (%r)", self._clock.time_control)
        self._set_status(GameStatus.IN_PROGRESS)
        self._emit_clock()

    def set_time_control(self, time_control: TimeControl) -> None:
        """Swap in a fresh clock for *time_control*, keeping the board.

        Has no effect on a game already lost on time; use :meth:`reset`.
        """
        if self._clock.flagged is not None:
            _LOGGER.debug("Game already lost on time; clock kept")
            return
        self._clock = CountdownClock(time_control)
        if self.is_over:
            self._clock.pause()
        _LOGGER.info("Time control changed (%r)", time_control)
        self._emit_clock()

    def legal_targets(self, sq: Square) -> set[Square]:
        """Squares the piece on *sq* may move to right now.

        Empty for empty squares, the opponent's pieces, a finished game or
        while a promotion choice is pending.
        """
        validate_square(sq)
        if self.is_over or self._pending is not None:
            return set()
        piece = self._position.board[sq]
        if piece is None or piece.color != self._position.side_to_move:
            return set()
        return MoveGenerator(self._position).legal_targets(sq)

    def apply_move(
        self, from_sq: Square, to_sq: Square
    ) -> MoveRecord | PendingPromotion:
        """Validate and commit a move.

        Returns the committed :class:`MoveRecord`, or a
        :class:`PendingPromotion` when the move promotes and the chooser
        deferred its answer; in that case nothing is applied until
        :meth:`complete_promotion`.
        """
        validate_square(from_sq)
        validate_square(to_sq)
        if self._pending is not None:
            raise IllegalMoveError("A promotion choice is pending")
        if self.is_over:
            raise IllegalMoveError(f"Game is over ({self._status})")
        if to_sq not in self.legal_targets(from_sq):
            raise IllegalMoveError(
                f"Illegal move {square_name(from_sq)}{square_name(to_sq)}"
            )

        if not self._is_promotion(from_sq, to_sq):
            return self._commit(from_sq, to_sq, None)

        color = self._position.side_to_move
        choice = self._chooser(to_sq, color) if self._chooser is not None else None
        if choice is None:
            self._pending = PendingPromotion(from_sq, to_sq, color)
            _LOGGER.debug("Promotion on %s awaits a choice", square_name(to_sq))
            for cb in self.events.on_promotion_pending:
                cb(self._pending)
            return self._pending
        self._check_promotion_choice(choice)
        return self._commit(from_sq, to_sq, choice)

    def complete_promotion(self, piece_type: PieceType) -> MoveRecord:
        """Commit the pending promoting move with the chosen *piece_type*."""
        pending = self._pending
        if pending is None:
            raise IllegalMoveError("No promotion is pending")
        self._check_promotion_choice(piece_type)
        self._pending = None
        return self._commit(pending.from_sq, pending.to_sq, piece_type)

    def cancel_promotion(self) -> None:
        """Drop the pending promoting move; the position is unchanged."""
        if self._pending is not None:
            _LOGGER.debug("Promotion on %s cancelled", square_name(self._pending.to_sq))
        self._pending = None

    def undo(self) -> MoveRecord | None:
        """Revert the last committed move. No-op (None) on empty history.

        A pending promotion is cancelled instead, since it was never applied.
        A loss on time stays in force; only :meth:`reset` clears it.
        """
        if self._pending is not None:
            self.cancel_promotion()
            return None
        if not self._history:
            return None

        record = self._history.pop()
        self._position.unmake_move(record)
        _LOGGER.debug("Undid %s", record)

        for cb in self.events.on_undo:
            cb(record)
        if self._clock.flagged is not None:
            self._set_status(self._status)
            return record

        was_over = self.is_over
        self._set_status(Rules.status(self._position))
        if was_over and not self.is_over:
            self._clock.resume()
        return record

    def tick(self, seconds: int = 1) -> None:
        """Advance the clock of the side to move by *seconds*."""
        if self.is_over:
            return
        color = self._position.side_to_move
        fell = self._clock.tick(color, seconds)
        self._emit_clock()
        if fell:
            _LOGGER.info("%s ran out of time", color.name.capitalize())
            self._set_status(GameStatus.on_time(color))

    # ── Internal helpers ─────────────────────────────────────────────────

    def _is_promotion(self, from_sq: Square, to_sq: Square) -> bool:
        piece = self._position.board[from_sq]
        assert piece is not None
        return piece.piece_type == PieceType.PAWN and rank_of(to_sq) in (0, 7)

    @staticmethod
    def _check_promotion_choice(piece_type: PieceType) -> None:
        if piece_type not in PROMOTION_TYPES:
            raise IllegalMoveError(f"Cannot promote to {piece_type!r}")

    def _commit(
        self, from_sq: Square, to_sq: Square, promotion: PieceType | None
    ) -> MoveRecord:
        record = self._position.make_move(from_sq, to_sq, promotion)
        self._history.append(record)
        text = move_notation(record)
        _LOGGER.debug("%s played %s", record.color, text)

        status = Rules.status(self._position)
        if status.is_terminal:
            self._clock.pause()
        else:
            self._clock.resume()

        for cb in self.events.on_move:
            cb(record, text)
        self._set_status(status)
        return record

    def _set_status(self, status: GameStatus) -> None:
        self._status = status
        for cb in self.events.on_status:
            cb(status)

    def _emit_clock(self) -> None:
        white = self._clock.remaining(Color.WHITE)
        black = self._clock.remaining(Color.BLACK)
        for cb in self.events.on_clock:
            cb(white, black)
