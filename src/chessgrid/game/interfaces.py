"""Abstract interfaces and collaborator types for the game layer.

The session depends on these, not on concrete clock or UI classes.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import TypeAlias

from chessgrid.core.enums import Color, PieceType
from chessgrid.core.types import Square

# (promotion square, color) -> chosen piece type, or None to answer later
# through GameSession.complete_promotion().
PromotionChooser: TypeAlias = Callable[[Square, Color], PieceType | None]


# ── Time control presets ─────────────────────────────────────────────────────


class TimeControl:
    """Immutable time-control definition.

    Args:
        initial_seconds: Starting time per player in whole seconds.
            ``0`` disables the clock.
    """

    __slots__ = ("initial_seconds",)

    def __init__(self, initial_seconds: int) -> None:
        if initial_seconds < 0:
            raise ValueError(f"initial_seconds must be >= 0, got {initial_seconds}")
        self.initial_seconds = int(initial_seconds)

    # Presets offered by the time-control selector
    @classmethod
    def none(cls) -> TimeControl:
        """No clock."""
        return cls(0)

    @classmethod
    def bullet_1m(cls) -> TimeControl:
        return cls(60)

    @classmethod
    def blitz_3m(cls) -> TimeControl:
        return cls(180)

    @classmethod
    def blitz_5m(cls) -> TimeControl:
        return cls(300)

    @classmethod
    def rapid_10m(cls) -> TimeControl:
        return cls(600)

    @property
    def enabled(self) -> bool:
        return self.initial_seconds > 0

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TimeControl):
            return NotImplemented
        return self.initial_seconds == other.initial_seconds

    def __hash__(self) -> int:
        return hash(self.initial_seconds)

    def __repr__(self) -> str:
        if not self.enabled:
            return "TimeControl(none)"
        return f"TimeControl({self.initial_seconds // 60}m)"


# ── Abstract interfaces ─────────────────────────────────────────────────────


class IClock(ABC):
    """Interface for a per-side countdown clock advanced by the host."""

    @abstractmethod
    def reset(self) -> None:
        """Refill both sides and start running if enabled."""

    @abstractmethod
    def pause(self) -> None:
        """Stop consuming ticks."""

    @abstractmethod
    def resume(self) -> None:
        """Consume ticks again."""

    @abstractmethod
    def tick(self, color: Color, seconds: int = 1) -> bool:
        """Take *seconds* from *color*. Returns True if its flag just fell."""

    @abstractmethod
    def remaining(self, color: Color) -> int:
        """Seconds remaining for *color*."""

    @abstractmethod
    def flag_fallen(self, color: Color) -> bool:
        """Has *color* run out of time?"""
