"""Shared pytest fixtures used across the test suite."""

from __future__ import annotations

from collections.abc import Callable

import pytest

from chessmatch.core.match import ChessMatch
from chessmatch.core.piece import Piece

PlayFn = Callable[..., ChessMatch]


def _play(match: ChessMatch, *moves: str) -> ChessMatch:
    """Play moves written as ``"e2e4"`` (optionally ``"a7a8n"``)."""
    for move in moves:
        promotion = move[4:] or None
        match.perform_move(move[:2], move[2:4], promotion)
    return match


@pytest.fixture
def match() -> ChessMatch:
    """Fresh match in the standard starting position."""
    return ChessMatch()


@pytest.fixture
def play() -> PlayFn:
    return _play


def _board_state(match: ChessMatch) -> tuple[object, ...]:
    """Everything a simulate/undo round trip must leave untouched."""
    on_board = tuple((id(p), p.kind, p.position, p.move_count) for p in match.pieces_on_board)
    captured = tuple((id(p), p.position, p.move_count) for p in match.captured_pieces)
    cells = tuple(
        id(match.grid[(row, column)]) if match.grid[(row, column)] is not None else None
        for row in range(8)
        for column in range(8)
    )
    return on_board, captured, cells


@pytest.fixture
def snapshot() -> Callable[[ChessMatch], tuple[object, ...]]:
    return _board_state


def _own_pieces(match: ChessMatch) -> list[Piece]:
    return [p for p in match.pieces_on_board if p.color == match.current_player]


@pytest.fixture
def own() -> Callable[[ChessMatch], list[Piece]]:
    """Pieces of the side to move."""
    return _own_pieces
