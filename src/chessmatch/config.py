"""Match settings.

Defaults can be overridden through environment variables:

- ``CHESSMATCH_DEFAULT_PROMOTION``: piece letter (Q, R, B, N) used when a
  promoting move does not name a piece.
- ``CHESSMATCH_REJECT_AFTER_GAME_OVER``: ``1``/``0`` (or true/false); whether
  :class:`~chessmatch.game.MatchController` refuses moves once the match is over.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass

from chessmatch.core.enums import PROMOTION_KINDS, PieceKind

ENV_DEFAULT_PROMOTION = "CHESSMATCH_DEFAULT_PROMOTION"
ENV_REJECT_AFTER_GAME_OVER = "CHESSMATCH_REJECT_AFTER_GAME_OVER"

_TRUE = frozenset({"1", "true", "yes", "on"})
_FALSE = frozenset({"0", "false", "no", "off"})


def _parse_bool(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise ValueError(f"Invalid boolean for {name}: {raw!r}")


@dataclass(frozen=True, slots=True)
class MatchSettings:
    default_promotion: PieceKind = PieceKind.QUEEN
    reject_moves_after_game_over: bool = True

    def __post_init__(self) -> None:
        if self.default_promotion not in PROMOTION_KINDS:
            raise ValueError(
                f"default_promotion must be one of "
                f"{[k.letter for k in PROMOTION_KINDS]}, got {self.default_promotion!r}"
            )

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> MatchSettings:
        """Build settings from *environ* (``os.environ`` by default)."""
        env = os.environ if environ is None else environ
        kwargs: dict[str, object] = {}

        promotion = env.get(ENV_DEFAULT_PROMOTION)
        if promotion:
            kwargs["default_promotion"] = PieceKind.from_letter(promotion)

        reject = env.get(ENV_REJECT_AFTER_GAME_OVER)
        if reject:
            kwargs["reject_moves_after_game_over"] = _parse_bool(
                ENV_REJECT_AFTER_GAME_OVER, reject
            )

        return cls(**kwargs)
