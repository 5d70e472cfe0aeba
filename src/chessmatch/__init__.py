"""chessmatch: a chess rules engine for a single match."""

from chessmatch.core import ChessError, ChessMatch, ChessPosition, Color, PieceKind
from chessmatch.config import MatchSettings  # after core: config reads core enums
from chessmatch.game import MatchController

__all__ = [
    "ChessError",
    "ChessMatch",
    "ChessPosition",
    "Color",
    "MatchController",
    "MatchSettings",
    "PieceKind",
]

__version__ = "0.1.0"
