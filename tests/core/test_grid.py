"""Tests for Grid."""

import pytest

from chessmatch.core.enums import Color, PieceKind
from chessmatch.core.errors import BoardError, OutOfBounds, SquareOccupied
from chessmatch.core.grid import Grid
from chessmatch.core.piece import Piece
from chessmatch.core.types import A1, E2, E4, H8


class TestGridOperations:
    def test_place_and_get(self) -> None:
        grid = Grid()
        piece = Piece(PieceKind.PAWN, Color.WHITE)
        grid.place(piece, E4)
        assert grid.get(E4) is piece
        assert grid[E4] is piece
        assert grid.has_piece(E4)
        assert not grid.has_piece(E2)
        assert piece.position == E4

    def test_remove_detaches(self) -> None:
        grid = Grid()
        piece = Piece(PieceKind.ROOK, Color.BLACK)
        grid.place(piece, H8)
        assert grid.remove(H8) is piece
        assert piece.position is None
        assert grid.is_empty(H8)

    def test_remove_empty_returns_none(self) -> None:
        assert Grid().remove(A1) is None

    def test_place_on_occupied_raises(self) -> None:
        grid = Grid()
        grid.place(Piece(PieceKind.KING, Color.WHITE), E4)
        with pytest.raises(SquareOccupied, match="already a piece"):
            grid.place(Piece(PieceKind.KING, Color.BLACK), E4)

    def test_occupied_is_row_major(self) -> None:
        grid = Grid()
        low = Piece(PieceKind.PAWN, Color.WHITE)
        high = Piece(PieceKind.PAWN, Color.BLACK)
        grid.place(low, A1)
        grid.place(high, H8)
        assert list(grid.occupied()) == [(H8, high), (A1, low)]


class TestGridBounds:
    @pytest.mark.parametrize("square", [(8, 0), (0, 8), (-1, 3), (3, -1)])
    def test_out_of_bounds(self, square: tuple[int, int]) -> None:
        grid = Grid()
        assert not grid.exists(square)
        with pytest.raises(OutOfBounds):
            grid.get(square)
        with pytest.raises(OutOfBounds):
            grid.remove(square)
        with pytest.raises(OutOfBounds):
            grid.place(Piece(PieceKind.PAWN, Color.WHITE), square)

    def test_rectangular_grid(self) -> None:
        grid = Grid(3, 5)
        assert grid.exists((2, 4))
        assert not grid.exists((3, 0))
        assert len(grid.empty_mask()) == 3
        assert len(grid.empty_mask()[0]) == 5

    def test_empty_grid_rejected(self) -> None:
        with pytest.raises(BoardError):
            Grid(0, 8)

    def test_repr(self) -> None:
        grid = Grid()
        grid.place(Piece(PieceKind.KING, Color.WHITE), A1)
        text = repr(grid)
        assert "a b c d e f g h" in text
        assert text.splitlines()[7] == "1 K . . . . . . ."
