"""Move record (undo entry) and the pending-promotion value."""

from __future__ import annotations

from dataclasses import dataclass

from chessgrid.core.enums import CastlingRights, Color, PieceType, Special
from chessgrid.core.piece import Piece
from chessgrid.core.types import Square, square_name


@dataclass(frozen=True, slots=True)
class MoveRecord:
    """Everything needed to revert one applied move.

    ``moving_piece`` is the piece as it stood on ``from_sq`` (still a pawn
    for promotions); ``captured_sq`` differs from ``to_sq`` only for en
    passant.
    """

    from_sq: Square
    to_sq: Square
    moving_piece: Piece
    captured_piece: Piece | None
    captured_sq: Square
    special: Special
    castling_before: CastlingRights
    en_passant_file_before: int | None
    promotion: PieceType | None = None

    @property
    def color(self) -> Color:
        return self.moving_piece.color

    @property
    def is_capture(self) -> bool:
        return self.captured_piece is not None

    @property
    def is_castle(self) -> bool:
        return self.special in (Special.CASTLE_KINGSIDE, Special.CASTLE_QUEENSIDE)

    def __str__(self) -> str:
        base = f"{square_name(self.from_sq)}{square_name(self.to_sq)}"
        if self.promotion is not None:
            base += str(Piece(Color.BLACK, self.promotion))
        return base


@dataclass(frozen=True, slots=True)
class PendingPromotion:
    """A promoting move waiting for the player's piece choice.

    Nothing has been applied to the position yet; the session commits the
    move once :meth:`GameSession.complete_promotion` is called.
    """

    from_sq: Square
    to_sq: Square
    color: Color
