"""Square type alias and coordinate helpers.

Internal layout (row-major, rank 8 first)::

    a8=(0, 0), b8=(0, 1), ..., h8=(0, 7)
    ...
    a1=(7, 0), b1=(7, 1), ..., h1=(7, 7)

Algebraic ``(file, rank)`` maps to ``(8 - rank, file - 'a')``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TypeAlias, Union

from chessmatch.core.errors import InvalidCoordinate

Square: TypeAlias = tuple[int, int]  # (row, column)

FILES = "abcdefgh"
RANKS = range(1, 9)


@dataclass(frozen=True, slots=True)
class ChessPosition:
    """Human algebraic coordinate, e.g. ``ChessPosition("e", 4)``."""

    file: str
    rank: int

    def __post_init__(self) -> None:
        if (
            not isinstance(self.file, str)
            or len(self.file) != 1
            or self.file not in FILES
            or isinstance(self.rank, bool)
            or not isinstance(self.rank, int)
            or self.rank not in RANKS
        ):
            raise InvalidCoordinate(
                f"Error instantiating ChessPosition {self.file!r}{self.rank!r}: "
                "valid values are from a1 to h8"
            )

    def to_square(self) -> Square:
        return (8 - self.rank, ord(self.file) - ord("a"))

    @classmethod
    def from_square(cls, square: Square) -> ChessPosition:
        row, column = square
        if not (0 <= row < 8 and 0 <= column < 8):
            raise InvalidCoordinate(f"Square out of range: {square!r}")
        return cls(chr(ord("a") + column), 8 - row)

    @classmethod
    def parse(cls, name: str) -> ChessPosition:
        """Parse ``"e4"`` (surrounding whitespace and case are ignored)."""
        text = name.strip().lower() if isinstance(name, str) else ""
        if len(text) != 2 or text[0] not in FILES or not text[1].isdigit():
            raise InvalidCoordinate(f"Invalid square name: {name!r}")
        return cls(text[0], int(text[1]))

    def __str__(self) -> str:
        return f"{self.file}{self.rank}"


Coordinate: TypeAlias = Union[str, ChessPosition, Square]


def parse_square(name: str) -> Square:
    """Parse square name, e.g. ``'e4'`` -> ``(4, 4)``."""
    return ChessPosition.parse(name).to_square()


def square_name(square: Square) -> str:
    """Human-readable name, e.g. ``(7, 0)`` -> ``'a1'``."""
    return str(ChessPosition.from_square(square))


def to_square(coordinate: Coordinate) -> Square:
    """Normalise any accepted coordinate form to an internal square."""
    if isinstance(coordinate, ChessPosition):
        return coordinate.to_square()
    if isinstance(coordinate, str):
        return parse_square(coordinate)
    if (
        isinstance(coordinate, tuple)
        and len(coordinate) == 2
        and all(isinstance(v, int) and not isinstance(v, bool) for v in coordinate)
    ):
        return (coordinate[0], coordinate[1])
    raise InvalidCoordinate(f"Unsupported coordinate: {coordinate!r}")


# ── Named square constants ──────────────────────────────────────────────────

A8, B8, C8, D8, E8, F8, G8, H8 = ((0, c) for c in range(8))
A7, B7, C7, D7, E7, F7, G7, H7 = ((1, c) for c in range(8))
A6, B6, C6, D6, E6, F6, G6, H6 = ((2, c) for c in range(8))
A5, B5, C5, D5, E5, F5, G5, H5 = ((3, c) for c in range(8))
A4, B4, C4, D4, E4, F4, G4, H4 = ((4, c) for c in range(8))
A3, B3, C3, D3, E3, F3, G3, H3 = ((5, c) for c in range(8))
A2, B2, C2, D2, E2, F2, G2, H2 = ((6, c) for c in range(8))
A1, B1, C1, D1, E1, F1, G1, H1 = ((7, c) for c in range(8))
