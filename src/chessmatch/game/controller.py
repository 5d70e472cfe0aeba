"""MatchController: the caller-side driver of a chess match.

Turns rule violations and off-board squares into a rejected submission (the
player is asked again) and notifies listeners through simple callbacks so a
UI or tests can subscribe.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from chessmatch.config import MatchSettings
from chessmatch.core.enums import Color, MatchStatus, PieceKind
from chessmatch.core.errors import ChessError, OutOfBounds
from chessmatch.core.match import ChessMatch, MoveRecord
from chessmatch.core.move_generator import Mask
from chessmatch.core.piece import Piece
from chessmatch.core.types import Coordinate

_LOGGER = logging.getLogger(__name__)

# ── Event definitions ────────────────────────────────────────────────────────

MoveCallback = Callable[[MoveRecord, ChessMatch], None]
CheckCallback = Callable[[Color], None]  # side in check
GameOverCallback = Callable[[MatchStatus], None]
ErrorCallback = Callable[[ChessError | OutOfBounds], None]


@dataclass
class MatchEvents:
    """Observable callbacks. Multiple handlers per event."""

    on_move: list[MoveCallback] = field(default_factory=list)
    on_check: list[CheckCallback] = field(default_factory=list)
    on_game_over: list[GameOverCallback] = field(default_factory=list)
    on_error: list[ErrorCallback] = field(default_factory=list)


# ── Controller ───────────────────────────────────────────────────────────────


class MatchController:
    """Owns one :class:`ChessMatch` and validates submissions against it.

    Methods are meant to be called from a single thread.
    """

    __slots__ = ("_settings", "_match", "events")

    def __init__(self, settings: MatchSettings | None = None) -> None:
        self._settings = settings if settings is not None else MatchSettings()
        self._match = ChessMatch(self._settings)
        self.events = MatchEvents()

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def match(self) -> ChessMatch:
        return self._match

    @property
    def settings(self) -> MatchSettings:
        return self._settings

    @property
    def status(self) -> MatchStatus:
        return self._match.status

    @property
    def is_game_over(self) -> bool:
        return self._match.status.is_terminal

    @property
    def winner(self) -> Color | None:
        """Side that delivered checkmate, if any."""
        if self._match.checkmate:
            return self._match.current_player.opposite
        return None

    def captured(self, color: Color) -> list[Piece]:
        """Pieces of *color* that have been captured, in capture order."""
        return [p for p in self._match.captured_pieces if p.color == color]

    # ── Commands ─────────────────────────────────────────────────────────

    def new_match(self, match: ChessMatch | None = None) -> None:
        """Start over from the initial position, or adopt *match*."""
        self._match = match if match is not None else ChessMatch(self._settings)
        _LOGGER.debug("New match started (%s to move)", self._match.current_player)

    def legal_moves(self, source: Coordinate) -> Mask | None:
        """Legal-move mask for *source*, or ``None`` if the square is rejected."""
        try:
            return self._match.legal_moves(source)
        except (ChessError, OutOfBounds) as exc:
            self._reject(exc)
            return None

    def submit_move(
        self,
        source: Coordinate,
        target: Coordinate,
        promotion: PieceKind | str | None = None,
    ) -> bool:
        """Play a move. Returns True if it was legal and applied."""
        if self.is_game_over and self._settings.reject_moves_after_game_over:
            _LOGGER.warning(
                "Move %s-%s ignored: match is over (%s)",
                source,
                target,
                self._match.status.name,
            )
            return False

        try:
            self._match.perform_move(source, target, promotion)
        except (ChessError, OutOfBounds) as exc:
            self._reject(exc)
            return False

        record = self._match.history[-1]
        self._emit_move(record)

        status = self._match.status
        if status.is_terminal:
            self._emit_game_over(status)
        elif status == MatchStatus.CHECK:
            self._emit_check(self._match.current_player)
        return True

    # ── Internal helpers ─────────────────────────────────────────────────

    def _reject(self, exc: ChessError | OutOfBounds) -> None:
        _LOGGER.warning("Rejected input: %s", exc)
        for cb in self.events.on_error:
            cb(exc)

    def _emit_move(self, record: MoveRecord) -> None:
        for cb in self.events.on_move:
            cb(record, self._match)

    def _emit_check(self, color: Color) -> None:
        for cb in self.events.on_check:
            cb(color)

    def _emit_game_over(self, status: MatchStatus) -> None:
        _LOGGER.info("Game over: %s", status.name)
        for cb in self.events.on_game_over:
            cb(status)
