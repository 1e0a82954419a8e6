"""Exceptions raised at the engine boundary."""

from __future__ import annotations


class ChessError(ValueError):
    """Base class for rejected caller input."""


class InvalidSquareError(ChessError):
    """Square index outside 0–63 (or an unparseable square name)."""

    def __init__(self, square: object) -> None:
        super().__init__(f"Invalid square: {square!r}")
        self.square = square


class IllegalMoveError(ChessError):
    """A move that is not in the legal set, or submitted at the wrong time."""
