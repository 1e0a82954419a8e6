"""Piece value object and its one-character grid cell form.

A cell is a kind letter (uppercase white, lowercase black) or ``.`` for an
empty square, the alphabet used by :meth:`Board.from_rows` fixtures.
"""

from __future__ import annotations

from dataclasses import dataclass

from chessgrid.core.enums import Color, PieceType

EMPTY_CELL = "."

# Indexed by ``PieceType - 1``.
_KIND_LETTERS = "PNBRQK"
_WHITE_GLYPHS = "♙♘♗♖♕♔"
_BLACK_GLYPHS = "♟♞♝♜♛♚"


@dataclass(frozen=True, slots=True)
class Piece:
    """Immutable value object representing a chess piece."""

    color: Color
    piece_type: PieceType

    def __str__(self) -> str:
        """Cell letter, e.g. 'N' for a white knight, 'n' for a black one."""
        if self.color == Color.WHITE:
            return self.letter
        return self.letter.lower()

    @classmethod
    def from_char(cls, char: str) -> Piece:
        """Create piece from its letter, e.g. 'N' → white knight."""
        index = _KIND_LETTERS.find(char.upper()) if len(char) == 1 else -1
        if index < 0:
            raise ValueError(f"Invalid piece character: {char!r}")
        color = Color.WHITE if char.isupper() else Color.BLACK
        return cls(color, PieceType(index + 1))

    @classmethod
    def from_cell(cls, char: str) -> Piece | None:
        """Like :meth:`from_char`, but ``.`` reads as an empty square."""
        if char == EMPTY_CELL:
            return None
        return cls.from_char(char)

    @staticmethod
    def cell(piece: Piece | None) -> str:
        """Inverse of :meth:`from_cell`."""
        return EMPTY_CELL if piece is None else str(piece)

    @property
    def letter(self) -> str:
        """Uppercase kind letter, e.g. 'N'; pawns give 'P'."""
        return _KIND_LETTERS[self.piece_type - 1]

    @property
    def symbol(self) -> str:
        """Unicode chess symbol, e.g. ♞."""
        glyphs = _WHITE_GLYPHS if self.color == Color.WHITE else _BLACK_GLYPHS
        return glyphs[self.piece_type - 1]
