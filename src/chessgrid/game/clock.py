"""Per-side countdown clock driven by host ticks."""

from __future__ import annotations

from chessgrid.core.enums import Color
from chessgrid.game.interfaces import IClock, TimeControl


def format_clock(seconds: int | None) -> str:
    """``MM:SS`` display text; ``--:--`` when there is no clock."""
    if seconds is None:
        return "--:--"
    s = max(0, int(seconds))
    return f"{s // 60:02d}:{s % 60:02d}"


class CountdownClock(IClock):
    """Dual countdown clock in whole seconds.

    The clock never reads wall time: the host calls :meth:`tick` once per
    second for the side to move. A disabled clock (``TimeControl.none()``)
    ignores every tick.
    """

    __slots__ = ("_time_control", "_remaining", "_running", "_flagged")

    def __init__(self, time_control: TimeControl | None = None) -> None:
        self._time_control = time_control or TimeControl.none()
        self._remaining: dict[Color, int] = {}
        self._running = False
        self._flagged: Color | None = None
        self.reset()

    # ── IClock implementation ────────────────────────────────────────────

    def reset(self) -> None:
        initial = self._time_control.initial_seconds
        self._remaining = {Color.WHITE: initial, Color.BLACK: initial}
        self._running = self.enabled
        self._flagged = None

    def pause(self) -> None:
        self._running = False

    def resume(self) -> None:
        if self.enabled and self._flagged is None:
            self._running = True

    def tick(self, color: Color, seconds: int = 1) -> bool:
        if not self._running:
            return False
        left = max(0, self._remaining[color] - seconds)
        self._remaining[color] = left
        if left == 0:
            self._flagged = color
            self._running = False
            return True
        return False

    def remaining(self, color: Color) -> int:
        return self._remaining[color]

    def flag_fallen(self, color: Color) -> bool:
        return self._flagged == color

    # ── Extra helpers ────────────────────────────────────────────────────

    def toggle_pause(self) -> bool:
        """Pause a running clock or resume a paused one. Returns running."""
        if self._running:
            self.pause()
        else:
            self.resume()
        return self._running

    @property
    def time_control(self) -> TimeControl:
        return self._time_control

    @property
    def enabled(self) -> bool:
        return self._time_control.enabled

    @property
    def is_running(self) -> bool:
        return self._running

    @property
    def flagged(self) -> Color | None:
        """Side whose flag fell, if any."""
        return self._flagged

    def display(self, color: Color) -> str:
        return format_clock(self._remaining[color] if self.enabled else None)
