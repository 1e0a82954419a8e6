"""Board - piece placement on an 8x8 board."""

from __future__ import annotations

from collections.abc import Iterator, Sequence

from chessgrid.core.enums import Color, PieceType
from chessgrid.core.piece import Piece
from chessgrid.core.types import Square, make_square

_BACK_RANK: tuple[PieceType, ...] = (
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.QUEEN,
    PieceType.KING,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.ROOK,
)


class Board:
    """Mutable sequence of 64 square contents, eighth rank first."""

    __slots__ = ("_squares",)

    def __init__(self) -> None:
        self._squares: list[Piece | None] = [None] * 64

    # -- Element access -----------------------------------------------------

    def __getitem__(self, sq: Square) -> Piece | None:
        return self._squares[sq]

    def __setitem__(self, sq: Square, piece: Piece | None) -> None:
        self._squares[sq] = piece

    def __iter__(self) -> Iterator[Piece | None]:
        return iter(self._squares)

    def is_empty(self, sq: Square) -> bool:
        return self._squares[sq] is None

    # -- Query helpers ------------------------------------------------------

    def occupied(self, color: Color) -> list[Square]:
        """All squares occupied by *color*, in storage order."""
        return [
            sq
            for sq, piece in enumerate(self._squares)
            if piece is not None and piece.color == color
        ]

    def king_square(self, color: Color) -> Square:
        """Return the single king square for *color*."""
        king = Piece(color, PieceType.KING)
        for sq, piece in enumerate(self._squares):
            if piece == king:
                return sq
        raise ValueError(f"No {color.name} king on board")

    # -- Mutation / copying -------------------------------------------------

    def copy(self) -> Board:
        b = Board()
        b._squares = self._squares.copy()
        return b

    def clear(self) -> None:
        self._squares = [None] * 64

    def as_tuple(self) -> tuple[Piece | None, ...]:
        return tuple(self._squares)

    # -- Factory ------------------------------------------------------------

    @classmethod
    def initial(cls) -> Board:
        """Standard starting position."""
        b = cls()
        b.set_initial()
        return b

    def set_initial(self) -> None:
        """Overwrite the contents with the standard starting array."""
        self.clear()
        for f in range(8):
            self[make_square(f, 1)] = Piece(Color.BLACK, PieceType.PAWN)
            self[make_square(f, 6)] = Piece(Color.WHITE, PieceType.PAWN)
        for f, pt in enumerate(_BACK_RANK):
            self[make_square(f, 0)] = Piece(Color.BLACK, pt)
            self[make_square(f, 7)] = Piece(Color.WHITE, pt)

    @classmethod
    def from_rows(cls, rows: Sequence[str]) -> Board:
        """Build a board from eight strings, eighth rank first.

        Each row has eight characters: a piece letter or ``.`` for empty,
        e.g. ``"r...k..r"``.
        """
        if len(rows) != 8 or any(len(row) != 8 for row in rows):
            raise ValueError("Expected eight rows of eight characters")
        b = cls()
        for rank, row in enumerate(rows):
            for file, char in enumerate(row):
                b[make_square(file, rank)] = Piece.from_cell(char)
        return b

    # -- Dunder helpers -----------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._squares == other._squares

    def __repr__(self) -> str:
        rows: list[str] = []
        for rank in range(8):
            row = []
            for file in range(8):
                row.append(Piece.cell(self[make_square(file, rank)]))
            rows.append(f"{8 - rank} {' '.join(row)}")
        rows.append("  a b c d e f g h")
        return "\n".join(rows)
