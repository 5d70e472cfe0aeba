"""Grid - fixed-size 2D array of optional piece references."""

from __future__ import annotations

from collections.abc import Iterator
from typing import TYPE_CHECKING

from chessmatch.core.errors import BoardError, OutOfBounds, SquareOccupied
from chessmatch.core.types import Square

if TYPE_CHECKING:
    from chessmatch.core.piece import Piece


class Grid:
    """Rows x columns of cells; knows nothing about chess rules.

    A piece appears in at most one cell.  ``place`` and ``remove`` keep the
    piece's ``position`` in sync; a removed piece is detached
    (``position is None``) until it is placed again.
    """

    __slots__ = ("_rows", "_columns", "_cells")

    def __init__(self, rows: int = 8, columns: int = 8) -> None:
        if rows < 1 or columns < 1:
            raise BoardError(
                f"Error creating grid: there must be at least 1 row and 1 column, "
                f"got {rows}x{columns}"
            )
        self._rows = rows
        self._columns = columns
        self._cells: list[list[Piece | None]] = [
            [None] * columns for _ in range(rows)
        ]

    @property
    def rows(self) -> int:
        return self._rows

    @property
    def columns(self) -> int:
        return self._columns

    # -- Element access -----------------------------------------------------

    def exists(self, square: Square) -> bool:
        row, column = square
        return 0 <= row < self._rows and 0 <= column < self._columns

    def get(self, square: Square) -> Piece | None:
        self._require(square)
        row, column = square
        return self._cells[row][column]

    __getitem__ = get

    def has_piece(self, square: Square) -> bool:
        return self.get(square) is not None

    def is_empty(self, square: Square) -> bool:
        return self.get(square) is None

    # -- Mutation -----------------------------------------------------------

    def place(self, piece: Piece, square: Square) -> None:
        self._require(square)
        row, column = square
        if self._cells[row][column] is not None:
            raise SquareOccupied(f"There is already a piece on position {square}")
        self._cells[row][column] = piece
        piece.position = square

    def remove(self, square: Square) -> Piece | None:
        """Detach and return the piece on *square* (``None`` if empty)."""
        self._require(square)
        row, column = square
        piece = self._cells[row][column]
        if piece is None:
            return None
        self._cells[row][column] = None
        piece.position = None
        return piece

    # -- Iteration / helpers -----------------------------------------------

    def occupied(self) -> Iterator[tuple[Square, Piece]]:
        """Yield ``(square, piece)`` for every occupied cell, row-major."""
        for row, cells in enumerate(self._cells):
            for column, piece in enumerate(cells):
                if piece is not None:
                    yield (row, column), piece

    def empty_mask(self) -> list[list[bool]]:
        """All-``False`` boolean matrix sized to the grid."""
        return [[False] * self._columns for _ in range(self._rows)]

    def _require(self, square: Square) -> None:
        if not self.exists(square):
            raise OutOfBounds(f"Position {square} not on the board")

    def __repr__(self) -> str:
        lines: list[str] = []
        for row, cells in enumerate(self._cells):
            rank = self._rows - row
            marks = [str(p) if p is not None else "." for p in cells]
            lines.append(f"{rank} {' '.join(marks)}")
        files = " ".join(chr(ord("a") + c) for c in range(self._columns))
        lines.append(f"  {files}")
        return "\n".join(lines)
