"""Legal and pseudo-legal move generation + attack detection."""

from __future__ import annotations

from typing import TYPE_CHECKING

from chessgrid.core.enums import CastlingRights, Color, PieceType
from chessgrid.core.piece import Piece
from chessgrid.core.types import Square, file_of, make_square, rank_of

if TYPE_CHECKING:
    from chessgrid.core.position import Position


KNIGHT_OFFSETS: tuple[tuple[int, int], ...] = (
    (-2, -1),
    (-2, 1),
    (-1, -2),
    (-1, 2),
    (1, -2),
    (1, 2),
    (2, -1),
    (2, 1),
)

KING_OFFSETS: tuple[tuple[int, int], ...] = (
    (-1, -1),
    (-1, 0),
    (-1, 1),
    (0, -1),
    (0, 1),
    (1, -1),
    (1, 0),
    (1, 1),
)

BISHOP_DIRS: tuple[tuple[int, int], ...] = ((-1, -1), (-1, 1), (1, -1), (1, 1))
ROOK_DIRS: tuple[tuple[int, int], ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))
QUEEN_DIRS: tuple[tuple[int, int], ...] = BISHOP_DIRS + ROOK_DIRS

# Row step of a pawn move; white advances towards row 0 (the eighth rank).
_PAWN_DIR: tuple[int, int] = (-1, 1)
_PAWN_HOME_ROW: tuple[int, int] = (6, 1)
# Row a pawn must stand on to capture en passant.
_EN_PASSANT_ROW: tuple[int, int] = (3, 4)
_KING_HOME: tuple[Square, Square] = (make_square(4, 7), make_square(4, 0))


# -- Precomputed lookup tables ---------------------------------------------


def _build_targets(
    offsets: tuple[tuple[int, int], ...],
) -> tuple[frozenset[Square], ...]:
    targets: list[frozenset[Square]] = []
    for sq in range(64):
        file_idx = file_of(sq)
        rank_idx = rank_of(sq)
        moves: set[Square] = set()
        for df, dr in offsets:
            af = file_idx + df
            ar = rank_idx + dr
            if 0 <= af < 8 and 0 <= ar < 8:
                moves.add(make_square(af, ar))
        targets.append(frozenset(moves))
    return tuple(targets)


def _build_pawn_captures() -> tuple[tuple[frozenset[Square], ...], ...]:
    per_color: list[tuple[frozenset[Square], ...]] = []
    for dr in _PAWN_DIR:
        per_color.append(_build_targets(((-1, dr), (1, dr))))
    return tuple(per_color)


def _build_rays(
    directions: tuple[tuple[int, int], ...],
) -> tuple[tuple[tuple[Square, ...], ...], ...]:
    rays_per_square: list[tuple[tuple[Square, ...], ...]] = []
    for sq in range(64):
        file_idx = file_of(sq)
        rank_idx = rank_of(sq)
        square_rays: list[tuple[Square, ...]] = []
        for df, dr in directions:
            af = file_idx + df
            ar = rank_idx + dr
            ray: list[Square] = []
            while 0 <= af < 8 and 0 <= ar < 8:
                ray.append(make_square(af, ar))
                af += df
                ar += dr
            if ray:
                square_rays.append(tuple(ray))
        rays_per_square.append(tuple(square_rays))
    return tuple(rays_per_square)


_KNIGHT_TARGETS = _build_targets(KNIGHT_OFFSETS)
_KING_TARGETS = _build_targets(KING_OFFSETS)
_PAWN_CAPTURES = _build_pawn_captures()

_SLIDER_RAYS: dict[PieceType, tuple[tuple[tuple[Square, ...], ...], ...]] = {
    PieceType.BISHOP: _build_rays(BISHOP_DIRS),
    PieceType.ROOK: _build_rays(ROOK_DIRS),
    PieceType.QUEEN: _build_rays(QUEEN_DIRS),
}


class MoveGenerator:
    """Generates move targets for the pieces of a :class:`Position`.

    Legality filtering mutates the position via ``make_move`` /
    ``unmake_move`` internally but always restores it before returning.
    """

    __slots__ = ("_pos", "_board")

    def __init__(self, position: Position) -> None:
        self._pos = position
        self._board = position.board

    # -- Public API ---------------------------------------------------------

    def legal_targets(self, sq: Square) -> set[Square]:
        """Targets of the piece on *sq* that do not leave its king in check."""
        piece = self._board[sq]
        if piece is None:
            return set()

        pos = self._pos
        legal: set[Square] = set()
        for to_sq in self.pseudo_targets(sq):
            record = pos.make_move(sq, to_sq, PieceType.QUEEN)
            if not self.is_in_check(piece.color):
                legal.add(to_sq)
            pos.unmake_move(record)
        return legal

    def legal_moves(self) -> dict[Square, set[Square]]:
        """Legal targets of every piece of the side to move, keyed by origin."""
        moves: dict[Square, set[Square]] = {}
        for sq in self._board.occupied(self._pos.side_to_move):
            targets = self.legal_targets(sq)
            if targets:
                moves[sq] = targets
        return moves

    def has_legal_move(self, color: Color) -> bool:
        return any(self.legal_targets(sq) for sq in self._board.occupied(color))

    def pseudo_targets(self, sq: Square) -> set[Square]:
        """Targets of the piece on *sq*, ignoring the safety of its king."""
        piece = self._board[sq]
        if piece is None:
            return set()

        ptype = piece.piece_type
        if ptype == PieceType.PAWN:
            return self._gen_pawn(sq, piece.color)
        if ptype == PieceType.KNIGHT:
            return self._gen_jumps(sq, piece.color, _KNIGHT_TARGETS[sq])
        if ptype == PieceType.KING:
            targets = self._gen_jumps(sq, piece.color, _KING_TARGETS[sq])
            self._gen_castling(sq, piece.color, targets)
            return targets
        return self._gen_sliding(sq, piece.color, _SLIDER_RAYS[ptype][sq])

    # -- Attack detection (public) -----------------------------------------

    def is_in_check(self, color: Color) -> bool:
        """Is *color*'s king attacked by the opponent?"""
        king_sq = self._board.king_square(color)
        return self.is_square_attacked(king_sq, color.opposite)

    def is_square_attacked(self, sq: Square, by_color: Color) -> bool:
        """Is *sq* attacked by any piece of *by_color*?"""
        board = self._board
        for from_sq in range(64):
            piece = board[from_sq]
            if piece is not None and piece.color == by_color:
                if self._attacks(from_sq, piece, sq):
                    return True
        return False

    def _attacks(self, from_sq: Square, piece: Piece, sq: Square) -> bool:
        ptype = piece.piece_type
        if ptype == PieceType.PAWN:
            # Diagonals only; the en-passant square is one of them.
            return sq in _PAWN_CAPTURES[int(piece.color)][from_sq]
        if ptype == PieceType.KNIGHT:
            return sq in _KNIGHT_TARGETS[from_sq]
        if ptype == PieceType.KING:
            return sq in _KING_TARGETS[from_sq]

        board = self._board
        for ray in _SLIDER_RAYS[ptype][from_sq]:
            for to_sq in ray:
                if to_sq == sq:
                    return True
                if board[to_sq] is not None:
                    break
        return False

    # -- Piece-specific generators (private) -------------------------------

    def _gen_pawn(self, sq: Square, color: Color) -> set[Square]:
        board = self._board
        targets: set[Square] = set()
        file_idx = file_of(sq)
        rank_idx = rank_of(sq)
        dr = _PAWN_DIR[int(color)]

        if 0 <= rank_idx + dr < 8:
            one_step = make_square(file_idx, rank_idx + dr)
            if board.is_empty(one_step):
                targets.add(one_step)
                if rank_idx == _PAWN_HOME_ROW[int(color)]:
                    two_step = make_square(file_idx, rank_idx + 2 * dr)
                    if board.is_empty(two_step):
                        targets.add(two_step)

        for cap_sq in _PAWN_CAPTURES[int(color)][sq]:
            target = board[cap_sq]
            if target is not None and target.color != color:
                targets.add(cap_sq)

        ep_file = self._pos.en_passant_file
        if (
            ep_file is not None
            and color == self._pos.side_to_move
            and rank_idx == _EN_PASSANT_ROW[int(color)]
            and abs(file_idx - ep_file) == 1
        ):
            targets.add(make_square(ep_file, rank_idx + dr))
        return targets

    def _gen_jumps(
        self, sq: Square, color: Color, candidates: frozenset[Square]
    ) -> set[Square]:
        board = self._board
        targets: set[Square] = set()
        for to_sq in candidates:
            target = board[to_sq]
            if target is None or target.color != color:
                targets.add(to_sq)
        return targets

    def _gen_sliding(
        self,
        sq: Square,
        color: Color,
        rays: tuple[tuple[Square, ...], ...],
    ) -> set[Square]:
        board = self._board
        targets: set[Square] = set()
        for ray in rays:
            for to_sq in ray:
                target = board[to_sq]
                if target is None:
                    targets.add(to_sq)
                    continue
                if target.color != color:
                    targets.add(to_sq)
                break
        return targets

    def _gen_castling(
        self, king_sq: Square, color: Color, targets: set[Square]
    ) -> None:
        castling = self._pos.castling
        if king_sq != _KING_HOME[int(color)]:
            return
        if not castling & CastlingRights.both(color):
            return
        if self.is_in_check(color):
            return

        board = self._board
        opponent = color.opposite
        row = rank_of(king_sq)
        f_sq, g_sq = make_square(5, row), make_square(6, row)
        b_sq, c_sq, d_sq = make_square(1, row), make_square(2, row), make_square(3, row)

        if (
            castling & CastlingRights.kingside(color)
            and board.is_empty(f_sq)
            and board.is_empty(g_sq)
            and not self.is_square_attacked(f_sq, opponent)
            and not self.is_square_attacked(g_sq, opponent)
        ):
            targets.add(g_sq)

        if (
            castling & CastlingRights.queenside(color)
            and board.is_empty(b_sq)
            and board.is_empty(c_sq)
            and board.is_empty(d_sq)
            and not self.is_square_attacked(d_sq, opponent)
            and not self.is_square_attacked(c_sq, opponent)
        ):
            targets.add(c_sq)
