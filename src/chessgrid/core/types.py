"""Square type alias and coordinate helpers.

Board layout (storage order, eighth rank first):
    a8=0,  b8=1,  ..., h8=7
    a7=8,  b7=9,  ..., h7=15
    ...
    a1=56, b1=57, ..., h1=63
"""

from __future__ import annotations

from typing import TypeAlias

from chessgrid.core.errors import InvalidSquareError

Square: TypeAlias = int  # 0–63

_FILES = "abcdefgh"


def file_of(sq: Square) -> int:
    """File index 0–7 (a–h)."""
    return sq & 7


def rank_of(sq: Square) -> int:
    """Row index 0–7, where 0 is the eighth rank."""
    return sq >> 3


def make_square(file: int, rank: int) -> Square:
    """Create square from file (0–7) and row index (0–7, eighth rank first)."""
    return rank * 8 + file


def is_valid_square(sq: object) -> bool:
    """Check whether *sq* is a valid square index."""
    return isinstance(sq, int) and not isinstance(sq, bool) and 0 <= sq < 64


def validate_square(sq: object) -> Square:
    """Return *sq* unchanged or raise :class:`InvalidSquareError`."""
    if not is_valid_square(sq):
        raise InvalidSquareError(sq)
    return sq  # type: ignore[return-value]


def square_name(sq: Square) -> str:
    """Human-readable name, e.g. 0 → 'a8', 63 → 'h1'."""
    return _FILES[file_of(sq)] + str(8 - rank_of(sq))


def parse_square(name: str) -> Square:
    """Parse square name, e.g. 'e4' → 36."""
    if not isinstance(name, str) or len(name) != 2:
        raise InvalidSquareError(name)
    if name[0] not in _FILES or name[1] not in "12345678":
        raise InvalidSquareError(name)
    return make_square(_FILES.index(name[0]), 8 - int(name[1]))


def display_order(flipped: bool = False) -> list[Square]:
    """Squares in the order a grid view draws them, top-left first."""
    squares = list(range(64))
    if flipped:
        squares.reverse()
    return squares


# ── Named square constants ──────────────────────────────────────────────────

A8, B8, C8, D8, E8, F8, G8, H8 = range(0, 8)
A7, B7, C7, D7, E7, F7, G7, H7 = range(8, 16)
A6, B6, C6, D6, E6, F6, G6, H6 = range(16, 24)
A5, B5, C5, D5, E5, F5, G5, H5 = range(24, 32)
A4, B4, C4, D4, E4, F4, G4, H4 = range(32, 40)
A3, B3, C3, D3, E3, F3, G3, H3 = range(40, 48)
A2, B2, C2, D2, E2, F2, G2, H2 = range(48, 56)
A1, B1, C1, D1, E1, F1, G1, H1 = range(56, 64)
