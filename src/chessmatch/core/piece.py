"""Piece entity and its immutable snapshot."""

from __future__ import annotations

from dataclasses import dataclass

from chessmatch.core.enums import Color, PieceKind
from chessmatch.core.types import Square, square_name

_UNICODE: dict[tuple[Color, PieceKind], str] = {
    (Color.WHITE, PieceKind.PAWN): "♙",
    (Color.WHITE, PieceKind.KNIGHT): "♘",
    (Color.WHITE, PieceKind.BISHOP): "♗",
    (Color.WHITE, PieceKind.ROOK): "♖",
    (Color.WHITE, PieceKind.QUEEN): "♕",
    (Color.WHITE, PieceKind.KING): "♔",
    (Color.BLACK, PieceKind.PAWN): "♟",
    (Color.BLACK, PieceKind.KNIGHT): "♞",
    (Color.BLACK, PieceKind.BISHOP): "♝",
    (Color.BLACK, PieceKind.ROOK): "♜",
    (Color.BLACK, PieceKind.QUEEN): "♛",
    (Color.BLACK, PieceKind.KING): "♚",
}


@dataclass(frozen=True, slots=True)
class PieceView:
    """Read-only description of a piece handed out to callers."""

    kind: PieceKind
    color: Color
    coordinate: str

    def __str__(self) -> str:
        letter = self.kind.letter
        return letter if self.color == Color.WHITE else letter.lower()


@dataclass(eq=False, slots=True)
class Piece:
    """A piece on (or detached from) the grid.

    Equality is identity: the match registry, the grid and the en-passant
    target all refer to the same handle.  ``move_count`` grows on every real
    or simulated move and shrinks on undo, so ``move_count == 0`` means the
    piece has never moved.
    """

    kind: PieceKind
    color: Color
    position: Square | None = None
    move_count: int = 0

    @classmethod
    def from_letter(cls, letter: str, move_count: int = 0) -> Piece:
        """Create a detached piece from a letter, e.g. 'N' -> white knight."""
        if len(letter) != 1 or not letter.isalpha():
            raise ValueError(f"Invalid piece letter: {letter!r}")
        color = Color.WHITE if letter.isupper() else Color.BLACK
        return cls(PieceKind.from_letter(letter), color, move_count=move_count)

    def increase_move_count(self) -> None:
        self.move_count += 1

    def decrease_move_count(self) -> None:
        if self.move_count == 0:
            raise ValueError(f"{self!r} has no move to take back")
        self.move_count -= 1

    def is_opponent(self, other: Piece | None) -> bool:
        return other is not None and other.color != self.color

    @property
    def letter(self) -> str:
        """Uppercase = white, lowercase = black."""
        letter = self.kind.letter
        return letter if self.color == Color.WHITE else letter.lower()

    @property
    def symbol(self) -> str:
        """Unicode chess symbol, e.g. ♞."""
        return _UNICODE[(self.color, self.kind)]

    @property
    def coordinate(self) -> str | None:
        return square_name(self.position) if self.position is not None else None

    def view(self) -> PieceView:
        if self.position is None:
            raise ValueError(f"{self!r} is not on the board")
        return PieceView(self.kind, self.color, square_name(self.position))

    def __str__(self) -> str:
        return self.letter

    def __repr__(self) -> str:
        where = self.coordinate or "detached"
        return f"Piece({self.color} {self.kind.name.lower()} @ {where}, moves={self.move_count})"
