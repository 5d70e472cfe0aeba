"""ChessMatch: one game's board, turn and status, with move execution.

Legality is decided by simulation: every pseudo-legal candidate is executed,
the mover's king is tested, and the move is undone from an :class:`_UndoRecord`
(Command pattern).  Undo is the exact inverse of execute, including castling
rook relocation and the en-passant capture of a pawn that is not on the
target square.
"""

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, replace

from chessmatch.config import MatchSettings
from chessmatch.core.enums import PROMOTION_KINDS, Color, MatchStatus, PieceKind
from chessmatch.core.errors import (
    IllegalTarget,
    InvalidPromotion,
    MissingKing,
    NoMovesAvailable,
    NoPieceAtSource,
    NoPromotionPending,
    NotYourPiece,
    SelfCheckViolation,
)
from chessmatch.core.grid import Grid
from chessmatch.core.move_generator import (
    KINGSIDE_ROOK_OFFSET,
    QUEENSIDE_ROOK_OFFSET,
    Mask,
    MoveContext,
    has_any_move,
    is_square_attacked,
    mask_squares,
    promotion_row,
    pseudo_legal_moves,
)
from chessmatch.core.piece import Piece, PieceView
from chessmatch.core.types import Coordinate, Square, square_name, to_square

_LOGGER = logging.getLogger(__name__)

_BACK_RANK: tuple[PieceKind, ...] = (
    PieceKind.ROOK,
    PieceKind.KNIGHT,
    PieceKind.BISHOP,
    PieceKind.QUEEN,
    PieceKind.KING,
    PieceKind.BISHOP,
    PieceKind.KNIGHT,
    PieceKind.ROOK,
)


@dataclass(slots=True)
class _UndoRecord:
    """Everything needed to take back one executed move."""

    piece: Piece
    source: Square
    target: Square
    captured: Piece | None = None
    captured_at: Square | None = None
    captured_index: int = -1
    rook: Piece | None = None
    rook_source: Square | None = None
    rook_target: Square | None = None


@dataclass(frozen=True, slots=True)
class MoveRecord:
    """A single entry in the match history."""

    turn: int
    color: Color
    kind: PieceKind
    source: str
    target: str
    captured: PieceKind | None = None
    promotion: PieceKind | None = None
    castling: bool = False
    en_passant: bool = False
    check: bool = False


class ChessMatch:
    """Rules engine for exactly one match.

    Not thread-safe: board state is transiently invalid while a candidate
    move is being simulated, so a match must be driven by one caller.
    """

    __slots__ = (
        "_settings",
        "_grid",
        "_turn",
        "_current_player",
        "_check",
        "_checkmate",
        "_draw",
        "_en_passant_target",
        "_promoted",
        "_pieces_on_board",
        "_captured",
        "_history",
    )

    def __init__(
        self,
        settings: MatchSettings | None = None,
        *,
        initial_setup: bool = True,
    ) -> None:
        self._settings = settings if settings is not None else MatchSettings()
        self._grid = Grid(8, 8)
        self._turn = 1
        self._current_player = Color.WHITE
        self._check = False
        self._checkmate = False
        self._draw = False
        self._en_passant_target: Piece | None = None
        self._promoted: Piece | None = None
        self._pieces_on_board: list[Piece] = []
        self._captured: list[Piece] = []
        self._history: list[MoveRecord] = []
        if initial_setup:
            self._initial_setup()

    @classmethod
    def from_layout(
        cls,
        placement: Mapping[str, str],
        *,
        current_player: Color = Color.WHITE,
        moved: Iterable[str] = (),
        en_passant_target: str | None = None,
        settings: MatchSettings | None = None,
    ) -> ChessMatch:
        """Build a match from ``{"e1": "K", "e8": "k", ...}``.

        Uppercase letters are white.  Pieces listed in *moved* start with a
        move count of one (no castling, no pawn double step).
        *en_passant_target* names a pawn that just made a double step.
        Each side needs exactly one king.
        """
        match = cls(settings, initial_setup=False)
        moved_squares = {to_square(c) for c in moved}
        for coordinate, letter in placement.items():
            square = to_square(coordinate)
            move_count = 1 if square in moved_squares else 0
            match._place(Piece.from_letter(letter, move_count), square)

        kings = Counter(
            piece.color
            for _, piece in match._grid.occupied()
            if piece.kind == PieceKind.KING
        )
        for color in Color:
            if kings[color] == 0:
                raise MissingKing(f"There is no {color} king on the board")
            if kings[color] > 1:
                raise ValueError(f"There is more than one {color} king on the board")
        match._current_player = current_player
        if en_passant_target is not None:
            target = match._grid.get(to_square(en_passant_target))
            if target is None or target.kind != PieceKind.PAWN:
                raise ValueError(f"No pawn on en-passant square {en_passant_target!r}")
            match._en_passant_target = target
        match._update_status()
        return match

    def place_new_piece(
        self,
        kind: PieceKind,
        color: Color,
        coordinate: Coordinate,
        move_count: int = 0,
    ) -> Piece:
        """Setup helper: put a fresh piece on the board and register it.

        A second king of the same color is refused.
        """
        if kind == PieceKind.KING and any(
            p.kind == PieceKind.KING and p.color == color for p in self._pieces_on_board
        ):
            raise ValueError(f"There is already a {color} king on the board")
        piece = Piece(kind, color, move_count=move_count)
        self._place(piece, to_square(coordinate))
        return piece

    # ── Read surface ─────────────────────────────────────────────────────

    @property
    def settings(self) -> MatchSettings:
        return self._settings

    @property
    def turn(self) -> int:
        return self._turn

    @property
    def current_player(self) -> Color:
        return self._current_player

    @property
    def check(self) -> bool:
        return self._check

    @property
    def checkmate(self) -> bool:
        return self._checkmate

    @property
    def draw(self) -> bool:
        return self._draw

    @property
    def status(self) -> MatchStatus:
        if self._checkmate:
            return MatchStatus.CHECKMATE
        if self._draw:
            return MatchStatus.DRAW
        if self._check:
            return MatchStatus.CHECK
        return MatchStatus.IN_PROGRESS

    @property
    def en_passant_target(self) -> Piece | None:
        return self._en_passant_target

    @property
    def promoted(self) -> Piece | None:
        """Piece created by the last move's promotion, if any."""
        return self._promoted

    @property
    def grid(self) -> Grid:
        return self._grid

    @property
    def pieces_on_board(self) -> list[Piece]:
        return list(self._pieces_on_board)

    @property
    def captured_pieces(self) -> list[Piece]:
        return list(self._captured)

    @property
    def history(self) -> tuple[MoveRecord, ...]:
        return tuple(self._history)

    def pieces(self) -> list[list[PieceView | None]]:
        """Row-major board snapshot, rank 8 first."""
        grid = self._grid
        snapshot: list[list[PieceView | None]] = []
        for row in range(grid.rows):
            cells = (grid[(row, column)] for column in range(grid.columns))
            snapshot.append([p.view() if p is not None else None for p in cells])
        return snapshot

    def piece_at(self, coordinate: Coordinate) -> PieceView | None:
        piece = self._grid.get(to_square(coordinate))
        return piece.view() if piece is not None else None

    # ── Move queries ─────────────────────────────────────────────────────

    def legal_moves(self, source: Coordinate) -> Mask:
        """Row-major mask of squares the piece on *source* may legally reach."""
        piece, context, _ = self._validate_source(to_square(source))
        mask = self._grid.empty_mask()
        for row, column in self._iter_legal_targets(piece, context):
            mask[row][column] = True
        return mask

    def is_in_check(self, color: Color) -> bool:
        return self._is_king_in_check(color)

    def is_square_attacked(self, coordinate: Coordinate, by_color: Color) -> bool:
        return is_square_attacked(self._grid, to_square(coordinate), by_color)

    def has_legal_moves(self, color: Color) -> bool:
        return self._has_any_legal_move(color)

    # ── Move execution ───────────────────────────────────────────────────

    def perform_move(
        self,
        source: Coordinate,
        target: Coordinate,
        promotion: PieceKind | str | None = None,
    ) -> Piece | None:
        """Validate and play a move; return the captured piece, if any.

        Raises a :class:`~chessmatch.core.errors.ChessError` subclass and
        leaves the match untouched when the move is rejected.
        """
        promotion_kind = self._promotion_kind(promotion)
        source_sq = to_square(source)
        target_sq = to_square(target)

        piece, _, pseudo = self._validate_source(source_sq)
        self._grid.get(target_sq)  # bounds check before mutating anything
        if not pseudo[target_sq[0]][target_sq[1]]:
            raise IllegalTarget(
                f"The chosen piece can't move to target position {square_name(target_sq)}"
            )

        record = self._execute(source_sq, target_sq)
        if self._is_king_in_check(piece.color):
            self._undo(record)
            raise SelfCheckViolation("You can't put yourself in check")

        mover = self._current_player
        self._promoted = None
        if piece.kind == PieceKind.PAWN and target_sq[0] == promotion_row(
            piece.color, self._grid.rows
        ):
            self._promoted = self._replace_piece(piece, promotion_kind)

        double_step = piece.kind == PieceKind.PAWN and abs(target_sq[0] - source_sq[0]) == 2
        self._en_passant_target = piece if double_step else None

        self._next_turn()
        self._update_status()

        self._history.append(
            MoveRecord(
                turn=self._turn - 1,
                color=mover,
                kind=piece.kind,
                source=square_name(source_sq),
                target=square_name(target_sq),
                captured=record.captured.kind if record.captured is not None else None,
                promotion=self._promoted.kind if self._promoted is not None else None,
                castling=record.rook is not None,
                en_passant=(
                    record.captured is not None and record.captured_at != target_sq
                ),
                check=self._check,
            )
        )
        _LOGGER.debug(
            "Turn %d: %s %s %s-%s%s",
            self._turn - 1,
            mover,
            piece.kind.name.lower(),
            square_name(source_sq),
            square_name(target_sq),
            " (capture)" if record.captured is not None else "",
        )
        self._log_status()
        return record.captured

    def replace_promoted_piece(self, kind: PieceKind | str) -> Piece:
        """Swap the piece produced by the last promotion for *kind*.

        Only valid until the next move is played.
        """
        if self._promoted is None:
            raise NoPromotionPending("There's no piece to be promoted")
        new_kind = self._promotion_kind(kind)
        if new_kind == self._promoted.kind:
            return self._promoted

        self._promoted = self._replace_piece(self._promoted, new_kind)
        self._update_status()
        if self._history:
            self._history[-1] = replace(
                self._history[-1], promotion=new_kind, check=self._check
            )
        self._log_status()
        return self._promoted

    # ── Utilities ────────────────────────────────────────────────────────

    def copy(self) -> ChessMatch:
        """Independent deep copy (pieces are re-created, handles re-mapped)."""
        clone = ChessMatch(self._settings, initial_setup=False)
        twins: dict[Piece, Piece] = {}
        for piece in self._pieces_on_board:
            twin = Piece(piece.kind, piece.color, move_count=piece.move_count)
            clone._place(twin, piece.position)
            twins[piece] = twin
        for piece in self._captured:
            twin = Piece(piece.kind, piece.color, move_count=piece.move_count)
            clone._captured.append(twin)
            twins[piece] = twin

        clone._turn = self._turn
        clone._current_player = self._current_player
        clone._check = self._check
        clone._checkmate = self._checkmate
        clone._draw = self._draw
        clone._en_passant_target = twins.get(self._en_passant_target)
        clone._promoted = twins.get(self._promoted)
        clone._history = list(self._history)
        return clone

    def __repr__(self) -> str:
        return (
            f"ChessMatch(turn={self._turn}, player={self._current_player}, "
            f"status={self.status.name})\n{self._grid!r}"
        )

    # ── Validation ───────────────────────────────────────────────────────

    def _validate_source(self, square: Square) -> tuple[Piece, MoveContext, Mask]:
        piece = self._grid.get(square)
        if piece is None:
            raise NoPieceAtSource(f"There is no piece on position {square_name(square)}")
        if piece.color != self._current_player:
            raise NotYourPiece("The chosen piece is not yours")
        context = self._context(piece.color)
        pseudo = pseudo_legal_moves(piece, self._grid, context)
        if not has_any_move(pseudo):
            raise NoMovesAvailable(
                f"There is no possible move for the chosen piece on {square_name(square)}"
            )
        return piece, context, pseudo

    def _promotion_kind(self, promotion: PieceKind | str | None) -> PieceKind:
        if promotion is None:
            return self._settings.default_promotion
        kind = promotion
        if isinstance(promotion, str):
            try:
                kind = PieceKind.from_letter(promotion)
            except ValueError:
                raise InvalidPromotion(f"Invalid promotion piece: {promotion!r}") from None
        if kind not in PROMOTION_KINDS:
            raise InvalidPromotion(
                f"A pawn can only be promoted to Q, R, B or N, not {promotion!r}"
            )
        return PieceKind(kind)

    # ── Simulation (execute / undo) ──────────────────────────────────────

    def _execute(self, source: Square, target: Square) -> _UndoRecord:
        grid = self._grid
        piece = grid.remove(source)
        if piece is None:
            raise NoPieceAtSource(f"There is no piece on position {square_name(source)}")
        record = _UndoRecord(piece, source, target)
        piece.increase_move_count()

        captured = grid.remove(target)
        captured_at = target
        grid.place(piece, target)

        # A diagonal pawn step onto an empty square captures en passant.
        if piece.kind == PieceKind.PAWN and source[1] != target[1] and captured is None:
            captured_at = (source[0], target[1])
            captured = grid.remove(captured_at)

        if captured is not None:
            record.captured = captured
            record.captured_at = captured_at
            record.captured_index = self._pieces_on_board.index(captured)
            del self._pieces_on_board[record.captured_index]
            self._captured.append(captured)

        if piece.kind == PieceKind.KING and abs(target[1] - source[1]) == 2:
            kingside = target[1] > source[1]
            rook_offset = KINGSIDE_ROOK_OFFSET if kingside else QUEENSIDE_ROOK_OFFSET
            rook_source = (source[0], source[1] + rook_offset)
            rook_target = (source[0], source[1] + (1 if kingside else -1))
            rook = grid.remove(rook_source)
            if rook is None:
                raise RuntimeError(f"No castling rook on {square_name(rook_source)}")
            record.rook = rook
            record.rook_source = rook_source
            record.rook_target = rook_target
            grid.place(rook, rook_target)
            rook.increase_move_count()

        return record

    def _undo(self, record: _UndoRecord) -> None:
        grid = self._grid
        if record.rook is not None:
            grid.remove(record.rook_target)
            grid.place(record.rook, record.rook_source)
            record.rook.decrease_move_count()

        grid.remove(record.target)
        grid.place(record.piece, record.source)
        record.piece.decrease_move_count()

        if record.captured is not None:
            grid.place(record.captured, record.captured_at)
            self._captured.pop()
            self._pieces_on_board.insert(record.captured_index, record.captured)

    def _is_safe(self, source: Square, target: Square, color: Color) -> bool:
        record = self._execute(source, target)
        try:
            return not self._is_king_in_check(color)
        finally:
            self._undo(record)

    def _iter_legal_targets(self, piece: Piece, context: MoveContext) -> Iterator[Square]:
        source = piece.position
        for target in mask_squares(pseudo_legal_moves(piece, self._grid, context)):
            if self._is_safe(source, target, piece.color):
                yield target

    # ── Status ───────────────────────────────────────────────────────────

    def _context(self, color: Color) -> MoveContext:
        return MoveContext(
            in_check=self._is_king_in_check(color),
            en_passant_target=self._en_passant_target,
        )

    def _king(self, color: Color) -> Piece:
        for piece in self._pieces_on_board:
            if piece.kind == PieceKind.KING and piece.color == color:
                return piece
        raise MissingKing(f"There is no {color} king on the board")

    def _is_king_in_check(self, color: Color) -> bool:
        king = self._king(color)
        return is_square_attacked(self._grid, king.position, color.opposite)

    def _has_any_legal_move(self, color: Color) -> bool:
        context = self._context(color)
        own = [p for p in self._pieces_on_board if p.color == color]
        for piece in own:
            for _ in self._iter_legal_targets(piece, context):
                return True
        return False

    def _update_status(self) -> None:
        """Recompute flags for the side about to move."""
        color = self._current_player
        in_check = self._is_king_in_check(color)
        can_move = self._has_any_legal_move(color)
        self._check = in_check
        self._checkmate = in_check and not can_move
        self._draw = not in_check and not can_move

    def _log_status(self) -> None:
        if self._checkmate:
            _LOGGER.info("Checkmate: %s wins", self._current_player.opposite)
        elif self._draw:
            _LOGGER.info("Stalemate: %s has no legal move", self._current_player)
        elif self._check:
            _LOGGER.debug("%s is in check", self._current_player)

    def _next_turn(self) -> None:
        self._turn += 1
        self._current_player = self._current_player.opposite

    # ── Board bookkeeping ────────────────────────────────────────────────

    def _place(self, piece: Piece, square: Square) -> None:
        self._grid.place(piece, square)
        self._pieces_on_board.append(piece)

    def _replace_piece(self, piece: Piece, kind: PieceKind) -> Piece:
        square = piece.position
        index = self._pieces_on_board.index(piece)
        self._grid.remove(square)
        successor = Piece(kind, piece.color, move_count=piece.move_count)
        self._grid.place(successor, square)
        self._pieces_on_board[index] = successor
        return successor

    def _initial_setup(self) -> None:
        for column, kind in enumerate(_BACK_RANK):
            self._place(Piece(kind, Color.WHITE), (7, column))
            self._place(Piece(kind, Color.BLACK), (0, column))
        for column in range(8):
            self._place(Piece(PieceKind.PAWN, Color.WHITE), (6, column))
            self._place(Piece(PieceKind.PAWN, Color.BLACK), (1, column))
