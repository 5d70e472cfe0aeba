"""Core enumerations for the chess domain."""

from __future__ import annotations

from enum import IntEnum


class Color(IntEnum):
    """Side color."""

    WHITE = 0
    BLACK = 1

    @property
    def opposite(self) -> Color:
        return Color(1 - self.value)

    def __str__(self) -> str:
        return self.name.lower()


_LETTERS = {1: "P", 2: "N", 3: "B", 4: "R", 5: "Q", 6: "K"}


class PieceKind(IntEnum):
    """Chess piece kinds ordered by conventional value."""

    PAWN = 1
    KNIGHT = 2
    BISHOP = 3
    ROOK = 4
    QUEEN = 5
    KING = 6

    @property
    def letter(self) -> str:
        """Single uppercase letter, e.g. ``N`` for the knight."""
        return _LETTERS[self.value]

    @classmethod
    def from_letter(cls, letter: str) -> PieceKind:
        """Parse a piece letter (case-insensitive); ``H`` is a knight alias."""
        key = letter.strip().upper()
        if key == "H":
            return cls.KNIGHT
        for value, char in _LETTERS.items():
            if char == key:
                return cls(value)
        raise ValueError(f"Invalid piece letter: {letter!r}")


PROMOTION_KINDS: tuple[PieceKind, ...] = (
    PieceKind.QUEEN,
    PieceKind.ROOK,
    PieceKind.BISHOP,
    PieceKind.KNIGHT,
)


class MatchStatus(IntEnum):
    """Lifecycle of a match: IN_PROGRESS <-> CHECK -> {CHECKMATE, DRAW}."""

    IN_PROGRESS = 0
    CHECK = 1
    CHECKMATE = 2
    DRAW = 3

    @property
    def is_terminal(self) -> bool:
        return self in (MatchStatus.CHECKMATE, MatchStatus.DRAW)
