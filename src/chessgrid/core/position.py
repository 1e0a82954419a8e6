"""Position — board plus side to move, castling rights and en-passant file."""

from __future__ import annotations

from dataclasses import dataclass

from chessgrid.core.board import Board
from chessgrid.core.enums import (
    PROMOTION_TYPES,
    CastlingRights,
    Color,
    PieceType,
    Special,
)
from chessgrid.core.move import MoveRecord
from chessgrid.core.piece import Piece
from chessgrid.core.types import A1, A8, H1, H8, Square, file_of, make_square, rank_of


@dataclass(frozen=True, slots=True)
class PositionSnapshot:
    """Immutable copy of every field of a :class:`Position`."""

    squares: tuple[Piece | None, ...]
    side_to_move: Color
    castling: CastlingRights
    en_passant_file: int | None


class Position:
    """Mutable game state with :meth:`make_move` / :meth:`unmake_move`.

    The position keeps no history of its own: every :meth:`make_move`
    returns a :class:`MoveRecord` and :meth:`unmake_move` reverts exactly
    that record. Callers that need undo keep the records on a stack.
    """

    __slots__ = ("board", "side_to_move", "castling", "en_passant_file")

    def __init__(
        self,
        board: Board | None = None,
        side_to_move: Color = Color.WHITE,
        castling: CastlingRights = CastlingRights.ALL,
        en_passant_file: int | None = None,
    ) -> None:
        self.board = board if board is not None else Board.initial()
        self.side_to_move = side_to_move
        self.castling = castling
        self.en_passant_file = en_passant_file

    def reset(self) -> None:
        """Restore the standard starting position."""
        self.board.set_initial()
        self.side_to_move = Color.WHITE
        self.castling = CastlingRights.ALL
        self.en_passant_file = None

    # ── Core move operations ─────────────────────────────────────────────

    def make_move(
        self,
        from_sq: Square,
        to_sq: Square,
        promotion: PieceType | None = None,
    ) -> MoveRecord:
        """Apply a move and return the record that reverts it.

        No legality check happens here. A pawn reaching the last rank
        becomes *promotion*, or a queen when *promotion* is ``None``.
        """
        board = self.board
        piece = board[from_sq]
        if piece is None:
            raise ValueError(f"No piece on {from_sq}")
        if promotion is not None and promotion not in PROMOTION_TYPES:
            raise ValueError(f"Cannot promote to {promotion.name}")

        captured = board[to_sq]
        captured_sq = to_sq
        special = Special.NONE
        castling_before = self.castling
        en_passant_before = self.en_passant_file

        self.en_passant_file = None
        is_pawn = piece.piece_type == PieceType.PAWN

        is_castle = (
            piece.piece_type == PieceType.KING
            and abs(file_of(to_sq) - file_of(from_sq)) == 2
        )
        if is_castle:
            rook_from, rook_to, special = self._castle_squares(from_sq, to_sq)
            rook = board[rook_from]
            assert rook is not None
            board[rook_to] = rook
            board[rook_from] = None
        elif is_pawn and file_of(to_sq) != file_of(from_sq) and captured is None:
            # The pawn that double-stepped sits beside the capturer.
            captured_sq = make_square(file_of(to_sq), rank_of(from_sq))
            captured = board[captured_sq]
            board[captured_sq] = None
            special = Special.EN_PASSANT

        board[from_sq] = None
        placed = piece
        chosen: PieceType | None = None
        if is_pawn and rank_of(to_sq) in (0, 7):
            chosen = promotion or PieceType.QUEEN
            placed = Piece(piece.color, chosen)
            special = Special.PROMOTION
        board[to_sq] = placed

        if is_pawn and abs(rank_of(to_sq) - rank_of(from_sq)) == 2:
            self.en_passant_file = file_of(from_sq)

        self._update_castling(from_sq, to_sq, piece)
        self.side_to_move = self.side_to_move.opposite

        return MoveRecord(
            from_sq=from_sq,
            to_sq=to_sq,
            moving_piece=piece,
            captured_piece=captured,
            captured_sq=captured_sq,
            special=special,
            castling_before=castling_before,
            en_passant_file_before=en_passant_before,
            promotion=chosen,
        )

    def unmake_move(self, record: MoveRecord) -> None:
        """Exact inverse of the :meth:`make_move` that produced *record*."""
        board = self.board
        board[record.from_sq] = record.moving_piece
        board[record.to_sq] = None
        board[record.captured_sq] = record.captured_piece

        if record.is_castle:
            rook_from, rook_to, _ = self._castle_squares(record.from_sq, record.to_sq)
            board[rook_from] = board[rook_to]
            board[rook_to] = None

        self.castling = record.castling_before
        self.en_passant_file = record.en_passant_file_before
        self.side_to_move = self.side_to_move.opposite

    # ── Castling bookkeeping ─────────────────────────────────────────────

    _ROOK_CORNERS: dict[Square, CastlingRights] = {
        A1: CastlingRights.WHITE_QUEENSIDE,
        H1: CastlingRights.WHITE_KINGSIDE,
        A8: CastlingRights.BLACK_QUEENSIDE,
        H8: CastlingRights.BLACK_KINGSIDE,
    }

    @staticmethod
    def _castle_squares(
        king_from: Square, king_to: Square
    ) -> tuple[Square, Square, Special]:
        r = rank_of(king_from)
        if file_of(king_to) == 6:
            return make_square(7, r), make_square(5, r), Special.CASTLE_KINGSIDE
        return make_square(0, r), make_square(3, r), Special.CASTLE_QUEENSIDE

    def _update_castling(self, from_sq: Square, to_sq: Square, piece: Piece) -> None:
        # Rights only ever get cleared; nothing in make_move sets them again.
        castling = self.castling
        if piece.piece_type == PieceType.KING:
            castling &= ~CastlingRights.both(piece.color)

        for sq in (from_sq, to_sq):
            if sq in self._ROOK_CORNERS:
                castling &= ~self._ROOK_CORNERS[sq]

        self.castling = castling

    # ── Utilities ────────────────────────────────────────────────────────

    def snapshot(self) -> PositionSnapshot:
        return PositionSnapshot(
            squares=self.board.as_tuple(),
            side_to_move=self.side_to_move,
            castling=self.castling,
            en_passant_file=self.en_passant_file,
        )

    def copy(self) -> Position:
        return Position(
            board=self.board.copy(),
            side_to_move=self.side_to_move,
            castling=self.castling,
            en_passant_file=self.en_passant_file,
        )

    @classmethod
    def from_rows(
        cls,
        rows: list[str],
        side_to_move: Color = Color.WHITE,
        castling: CastlingRights = CastlingRights.NONE,
        en_passant_file: int | None = None,
    ) -> Position:
        """Position from :meth:`Board.from_rows` text plus metadata."""
        return cls(Board.from_rows(rows), side_to_move, castling, en_passant_file)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Position):
            return NotImplemented
        return self.snapshot() == other.snapshot()

    def __repr__(self) -> str:
        return (
            f"Position(side_to_move={self.side_to_move}, "
            f"castling={self.castling!r}, en_passant_file={self.en_passant_file})\n"
            f"{self.board!r}"
        )
