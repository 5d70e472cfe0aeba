"""Pseudo-legal move generation + attack detection.

Move generation is a single function dispatching on :class:`PieceKind`.
Match-level facts a piece cannot see on the grid (whether its side is in
check, which pawn may be taken en passant) arrive in a :class:`MoveContext`
snapshot instead of a reference back to the match.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING

from chessmatch.core.enums import Color, PieceKind
from chessmatch.core.types import Square

if TYPE_CHECKING:
    from chessmatch.core.grid import Grid
    from chessmatch.core.piece import Piece

Mask = list[list[bool]]

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

# Rook column offsets relative to an unmoved king.
KINGSIDE_ROOK_OFFSET = 3
QUEENSIDE_ROOK_OFFSET = -4

# Row a pawn must stand on to capture en passant.
_EN_PASSANT_ROW: dict[Color, int] = {Color.WHITE: 3, Color.BLACK: 4}


def pawn_direction(color: Color) -> int:
    """Row delta of a forward pawn step (white moves toward row 0)."""
    return -1 if color == Color.WHITE else 1


def promotion_row(color: Color, rows: int = 8) -> int:
    """Farthest row from *color*'s own side."""
    return 0 if color == Color.WHITE else rows - 1


@dataclass(frozen=True, slots=True)
class MoveContext:
    """Snapshot of match-level flags consulted during generation."""

    in_check: bool = False
    en_passant_target: Piece | None = None


# -- Public API -------------------------------------------------------------


def pseudo_legal_moves(
    piece: Piece, grid: Grid, context: MoveContext | None = None
) -> Mask:
    """Boolean matrix of squares *piece* can reach, ignoring own-king safety."""
    if piece.position is None:
        raise ValueError(f"{piece!r} is not on the board")
    try:
        generate = _GENERATORS[piece.kind]
    except KeyError:
        raise ValueError(f"Unknown piece kind: {piece.kind!r}") from None
    mask = grid.empty_mask()
    generate(piece, grid, context or MoveContext(), mask)
    return mask


def has_any_move(mask: Mask) -> bool:
    return any(any(row) for row in mask)


def mask_squares(mask: Mask) -> list[Square]:
    """Marked squares of *mask* in row-major order."""
    return [
        (row, column)
        for row, cells in enumerate(mask)
        for column, marked in enumerate(cells)
        if marked
    ]


def is_square_attacked(grid: Grid, square: Square, by_color: Color) -> bool:
    """Is *square* attacked by any piece of *by_color*?"""
    row, column = square

    # Pawns attack diagonally forward, so look one row "behind" the square.
    pawn_row = row - pawn_direction(by_color)
    for dc in (-1, 1):
        attacker = _piece_at(grid, (pawn_row, column + dc))
        if _is(attacker, by_color, PieceKind.PAWN):
            return True

    for dr, dc in KNIGHT_OFFSETS:
        if _is(_piece_at(grid, (row + dr, column + dc)), by_color, PieceKind.KNIGHT):
            return True

    for dr, dc in KING_OFFSETS:
        if _is(_piece_at(grid, (row + dr, column + dc)), by_color, PieceKind.KING):
            return True

    if _ray_hits(grid, square, BISHOP_DIRS, by_color, (PieceKind.BISHOP, PieceKind.QUEEN)):
        return True
    return _ray_hits(grid, square, ROOK_DIRS, by_color, (PieceKind.ROOK, PieceKind.QUEEN))


# -- Piece-specific generators (private) -----------------------------------


def _gen_pawn(piece: Piece, grid: Grid, context: MoveContext, mask: Mask) -> None:
    row, column = piece.position
    direction = pawn_direction(piece.color)

    one_step = (row + direction, column)
    if grid.exists(one_step) and grid.is_empty(one_step):
        _mark(mask, one_step)
        two_step = (row + 2 * direction, column)
        if (
            piece.move_count == 0
            and grid.exists(two_step)
            and grid.is_empty(two_step)
        ):
            _mark(mask, two_step)

    for dc in (-1, 1):
        diagonal = (row + direction, column + dc)
        if grid.exists(diagonal) and piece.is_opponent(grid[diagonal]):
            _mark(mask, diagonal)

    target = context.en_passant_target
    if target is None or row != _EN_PASSANT_ROW[piece.color]:
        return
    for dc in (-1, 1):
        beside = (row, column + dc)
        if not grid.exists(beside):
            continue
        neighbour = grid[beside]
        if neighbour is target and piece.is_opponent(neighbour):
            landing = (row + direction, column + dc)
            if grid.exists(landing) and grid.is_empty(landing):
                _mark(mask, landing)


def _gen_knight(piece: Piece, grid: Grid, context: MoveContext, mask: Mask) -> None:
    _gen_steps(piece, grid, KNIGHT_OFFSETS, mask)


def _gen_bishop(piece: Piece, grid: Grid, context: MoveContext, mask: Mask) -> None:
    _gen_sliding(piece, grid, BISHOP_DIRS, mask)


def _gen_rook(piece: Piece, grid: Grid, context: MoveContext, mask: Mask) -> None:
    _gen_sliding(piece, grid, ROOK_DIRS, mask)


def _gen_queen(piece: Piece, grid: Grid, context: MoveContext, mask: Mask) -> None:
    _gen_sliding(piece, grid, QUEEN_DIRS, mask)


def _gen_king(piece: Piece, grid: Grid, context: MoveContext, mask: Mask) -> None:
    _gen_steps(piece, grid, KING_OFFSETS, mask)
    if piece.move_count == 0 and not context.in_check:
        _gen_castling(piece, grid, mask)


def _gen_castling(king: Piece, grid: Grid, mask: Mask) -> None:
    row, column = king.position
    opponent = king.color.opposite

    for rook_offset in (KINGSIDE_ROOK_OFFSET, QUEENSIDE_ROOK_OFFSET):
        rook_square = (row, column + rook_offset)
        if not _is_castling_rook(grid, rook_square, king.color):
            continue
        step = 1 if rook_offset > 0 else -1
        between = [(row, column + step * i) for i in range(1, abs(rook_offset))]
        if any(grid.has_piece(sq) for sq in between):
            continue
        # The king crosses one square and lands on the next.
        king_path = between[:2]
        if any(is_square_attacked(grid, sq, opponent) for sq in king_path):
            continue
        _mark(mask, (row, column + 2 * step))


def _is_castling_rook(grid: Grid, square: Square, color: Color) -> bool:
    rook = _piece_at(grid, square)
    return _is(rook, color, PieceKind.ROOK) and rook.move_count == 0


def _gen_steps(
    piece: Piece,
    grid: Grid,
    offsets: tuple[tuple[int, int], ...],
    mask: Mask,
) -> None:
    row, column = piece.position
    for dr, dc in offsets:
        target = (row + dr, column + dc)
        if not grid.exists(target):
            continue
        occupant = grid[target]
        if occupant is None or piece.is_opponent(occupant):
            _mark(mask, target)


def _gen_sliding(
    piece: Piece,
    grid: Grid,
    directions: tuple[tuple[int, int], ...],
    mask: Mask,
) -> None:
    row, column = piece.position
    for dr, dc in directions:
        target = (row + dr, column + dc)
        while grid.exists(target):
            occupant = grid[target]
            if occupant is None:
                _mark(mask, target)
            else:
                if piece.is_opponent(occupant):
                    _mark(mask, target)
                break
            target = (target[0] + dr, target[1] + dc)


# -- Helpers ---------------------------------------------------------------


def _mark(mask: Mask, square: Square) -> None:
    mask[square[0]][square[1]] = True


def _piece_at(grid: Grid, square: Square) -> Piece | None:
    return grid[square] if grid.exists(square) else None


def _is(piece: Piece | None, color: Color, kind: PieceKind) -> bool:
    return piece is not None and piece.color == color and piece.kind == kind


def _ray_hits(
    grid: Grid,
    square: Square,
    directions: tuple[tuple[int, int], ...],
    by_color: Color,
    kinds: tuple[PieceKind, ...],
) -> bool:
    for dr, dc in directions:
        target = (square[0] + dr, square[1] + dc)
        while grid.exists(target):
            piece = grid[target]
            if piece is not None:
                if piece.color == by_color and piece.kind in kinds:
                    return True
                break
            target = (target[0] + dr, target[1] + dc)
    return False


_GENERATORS: dict[PieceKind, Callable[[Piece, Grid, MoveContext, Mask], None]] = {
    PieceKind.PAWN: _gen_pawn,
    PieceKind.KNIGHT: _gen_knight,
    PieceKind.BISHOP: _gen_bishop,
    PieceKind.ROOK: _gen_rook,
    PieceKind.QUEEN: _gen_queen,
    PieceKind.KING: _gen_king,
}
