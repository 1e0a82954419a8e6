"""Qt bridge: drives the session clock and re-emits session events as signals."""

from __future__ import annotations

from PyQt6.QtCore import QObject, QTimer, pyqtSignal, pyqtSlot

from chessgrid.core.enums import PieceType
from chessgrid.core.move import MoveRecord, PendingPromotion
from chessgrid.core.types import Square, display_order
from chessgrid.game.session import GameSession


class SessionBridge(QObject):
    """GUI-thread adapter around a :class:`GameSession`.

    A ``QTimer`` calls :meth:`GameSession.tick` once per interval
    (one second by default). Views connect to the signals instead of
    registering session callbacks directly.
    """

    move_committed = pyqtSignal(object, str)  # MoveRecord, notation
    move_undone = pyqtSignal(object)  # MoveRecord
    status_changed = pyqtSignal(object)  # GameStatus
    clock_changed = pyqtSignal(int, int)  # white, black seconds
    promotion_requested = pyqtSignal(int, object)  # square, Color
    orientation_changed = pyqtSignal(bool)

    __slots__ = ("_session", "_timer", "_started", "_flipped")

    def __init__(
        self,
        session: GameSession,
        *,
        interval_ms: int = 1000,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self._session = session
        self._flipped = False
        self._started = False

        self._timer = QTimer(self)
        self._timer.setInterval(interval_ms)
        self._timer.timeout.connect(self.tick)

        events = session.events
        events.on_move.append(self._on_move)
        events.on_undo.append(self.move_undone.emit)
        events.on_status.append(self.status_changed.emit)
        events.on_clock.append(self.clock_changed.emit)
        events.on_promotion_pending.append(self._on_promotion_pending)

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def session(self) -> GameSession:
        return self._session

    @property
    def flipped(self) -> bool:
        return self._flipped

    @property
    def is_ticking(self) -> bool:
        return self._timer.isActive()

    def squares_in_view(self) -> list[Square]:
        """Square indexes in drawing order for the current orientation."""
        return display_order(self._flipped)

    # ── Slots ────────────────────────────────────────────────────────────

    @pyqtSlot()
    def start(self) -> None:
        self._started = True
        self._timer.start()

    @pyqtSlot()
    def stop(self) -> None:
        self._started = False
        self._timer.stop()

    @pyqtSlot()
    def tick(self) -> None:
        self._session.tick()
        if self._session.is_over:
            self._timer.stop()

    @pyqtSlot()
    def new_game(self) -> None:
        self._session.reset()
        self._rearm()

    @pyqtSlot()
    def undo(self) -> None:
        self._session.undo()
        self._rearm()

    @pyqtSlot()
    def flip(self) -> None:
        self._flipped = not self._flipped
        self.orientation_changed.emit(self._flipped)

    @pyqtSlot(object)
    def choose_promotion(self, piece_type: PieceType) -> None:
        """Answer a pending promotion, e.g. from a promotion dialog."""
        self._session.complete_promotion(piece_type)

    # ── Internal ─────────────────────────────────────────────────────────

    def _on_move(self, record: MoveRecord, notation: str) -> None:
        self.move_committed.emit(record, notation)

    def _on_promotion_pending(self, pending: PendingPromotion) -> None:
        self.promotion_requested.emit(pending.to_sq, pending.color)

    def _rearm(self) -> None:
        # The timer stops when a game ends; a started bridge resumes it.
        if self._started and not self._session.is_over:
            self._timer.start()
