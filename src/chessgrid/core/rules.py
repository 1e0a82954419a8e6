"""High-level chess rules: check, checkmate, stalemate."""

from __future__ import annotations

from typing import TYPE_CHECKING

from chessgrid.core.enums import GameStatus
from chessgrid.core.move_generator import MoveGenerator

if TYPE_CHECKING:
    from chessgrid.core.position import Position


class Rules:
    """Static rule-checker that operates on a :class:`Position`."""

    @staticmethod
    def is_in_check(position: Position) -> bool:
        gen = MoveGenerator(position)
        return gen.is_in_check(position.side_to_move)

    @staticmethod
    def is_checkmate(position: Position) -> bool:
        return Rules.status(position) == GameStatus.CHECKMATE

    @staticmethod
    def is_stalemate(position: Position) -> bool:
        return Rules.status(position) == GameStatus.STALEMATE

    @staticmethod
    def status(position: Position) -> GameStatus:
        """Outcome for the side to move, ignoring the clock."""
        gen = MoveGenerator(position)
        color = position.side_to_move
        in_check = gen.is_in_check(color)

        if gen.has_legal_move(color):
            return GameStatus.CHECK if in_check else GameStatus.IN_PROGRESS
        return GameStatus.CHECKMATE if in_check else GameStatus.STALEMATE
