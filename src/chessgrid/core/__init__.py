"""Core domain layer — pure chess rules with zero external dependencies.

Quick start::

    from chessgrid.core import MoveGenerator, Position, parse_square

    pos = Position()
    gen = MoveGenerator(pos)
    print(gen.legal_targets(parse_square("g1")))  # {f3, h3}
"""

from chessgrid.core.board import Board
from chessgrid.core.enums import (
    PROMOTION_TYPES,
    CastlingRights,
    Color,
    GameStatus,
    PieceType,
    Special,
)
from chessgrid.core.errors import ChessError, IllegalMoveError, InvalidSquareError
from chessgrid.core.move import MoveRecord, PendingPromotion
from chessgrid.core.move_generator import MoveGenerator
from chessgrid.core.notation import move_notation
from chessgrid.core.piece import Piece
from chessgrid.core.position import Position, PositionSnapshot
from chessgrid.core.rules import Rules
from chessgrid.core.types import (
    Square,
    display_order,
    file_of,
    is_valid_square,
    make_square,
    parse_square,
    rank_of,
    square_name,
    validate_square,
)

__all__ = [
    # Enums / flags
    "CastlingRights",
    "Color",
    "GameStatus",
    "PROMOTION_TYPES",
    "PieceType",
    "Special",
    # Errors
    "ChessError",
    "IllegalMoveError",
    "InvalidSquareError",
    # Types / helpers
    "Square",
    "display_order",
    "file_of",
    "is_valid_square",
    "make_square",
    "parse_square",
    "rank_of",
    "square_name",
    "validate_square",
    # Domain objects
    "Board",
    "MoveGenerator",
    "MoveRecord",
    "PendingPromotion",
    "Piece",
    "Position",
    "PositionSnapshot",
    "Rules",
    # Notation
    "move_notation",
]
