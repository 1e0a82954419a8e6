"""Move-list text for applied moves.

Only the short form shown next to the board: castling as ``O-O`` /
``O-O-O``, otherwise piece letter, ``x`` on captures and the destination,
e.g. ``Nf3``, ``xd6`` for a pawn capture, ``e8=Q``. No disambiguation.
"""

from __future__ import annotations

from chessgrid.core.enums import PieceType, Special
from chessgrid.core.move import MoveRecord
from chessgrid.core.piece import Piece
from chessgrid.core.types import square_name


def move_notation(record: MoveRecord) -> str:
    """Short move-list text for *record*."""
    if record.special == Special.CASTLE_KINGSIDE:
        return "O-O"
    if record.special == Special.CASTLE_QUEENSIDE:
        return "O-O-O"

    piece = record.moving_piece
    prefix = "" if piece.piece_type == PieceType.PAWN else piece.letter
    capture = "x" if record.is_capture else ""
    text = f"{prefix}{capture}{square_name(record.to_sq)}"
    if record.promotion is not None:
        text += "=" + Piece(piece.color, record.promotion).letter
    return text
