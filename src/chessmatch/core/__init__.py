"""Core domain layer: the chess rules engine, with no external dependencies.

Quick start::

    from chessmatch.core import ChessMatch

    match = ChessMatch()
    mask = match.legal_moves("e2")
    match.perform_move("e2", "e4")
"""

from chessmatch.core.enums import PROMOTION_KINDS, Color, MatchStatus, PieceKind
from chessmatch.core.errors import (
    BoardError,
    ChessError,
    IllegalTarget,
    InvalidCoordinate,
    InvalidPromotion,
    MissingKing,
    NoMovesAvailable,
    NoPieceAtSource,
    NoPromotionPending,
    NotYourPiece,
    OutOfBounds,
    SelfCheckViolation,
    SquareOccupied,
)
from chessmatch.core.grid import Grid
from chessmatch.core.match import ChessMatch, MoveRecord
from chessmatch.core.move_generator import (
    MoveContext,
    is_square_attacked,
    pseudo_legal_moves,
)
from chessmatch.core.piece import Piece, PieceView
from chessmatch.core.types import (
    ChessPosition,
    Coordinate,
    Square,
    parse_square,
    square_name,
    to_square,
)

__all__ = [
    # Enums
    "Color",
    "MatchStatus",
    "PieceKind",
    "PROMOTION_KINDS",
    # Types / helpers
    "ChessPosition",
    "Coordinate",
    "Square",
    "parse_square",
    "square_name",
    "to_square",
    # Errors
    "BoardError",
    "ChessError",
    "IllegalTarget",
    "InvalidCoordinate",
    "InvalidPromotion",
    "MissingKing",
    "NoMovesAvailable",
    "NoPieceAtSource",
    "NoPromotionPending",
    "NotYourPiece",
    "OutOfBounds",
    "SelfCheckViolation",
    "SquareOccupied",
    # Domain objects
    "ChessMatch",
    "Grid",
    "MoveContext",
    "MoveRecord",
    "Piece",
    "PieceView",
    "is_square_attacked",
    "pseudo_legal_moves",
]
