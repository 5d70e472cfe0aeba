"""Exception hierarchy for the board primitive and the rules engine.

Every :class:`ChessError` is a recoverable rule violation: the engine raises
it before mutating the match (or after an exact undo), so callers can report
the message and ask for new input.  :class:`MissingKing` is not a
``ChessError`` because it signals a corrupted match.
"""

from __future__ import annotations


class BoardError(Exception):
    """Base class for grid-level errors."""


class OutOfBounds(BoardError):
    """A coordinate lies outside the grid."""


class SquareOccupied(BoardError):
    """Attempt to place a piece on a square that already holds one."""


class ChessError(BoardError):
    """Base class for rule violations reported back to the player."""


class InvalidCoordinate(ChessError, ValueError):
    """Malformed algebraic coordinate (file a-h, rank 1-8)."""


class NoPieceAtSource(ChessError):
    pass


class NotYourPiece(ChessError):
    pass


class NoMovesAvailable(ChessError):
    pass


class IllegalTarget(ChessError):
    pass


class SelfCheckViolation(ChessError):
    pass


class InvalidPromotion(ChessError):
    pass


class NoPromotionPending(ChessError):
    pass


class MissingKing(RuntimeError):
    """Internal invariant violation: a side has no king on the board."""
