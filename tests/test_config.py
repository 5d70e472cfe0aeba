"""Tests for MatchSettings and its environment overrides."""

from __future__ import annotations

import pytest

from chessmatch.config import (
    ENV_DEFAULT_PROMOTION,
    ENV_REJECT_AFTER_GAME_OVER,
    MatchSettings,
)
from chessmatch.core.enums import PieceKind


class TestDefaults:
    def test_values(self) -> None:
        settings = MatchSettings()
        assert settings.default_promotion == PieceKind.QUEEN
        assert settings.reject_moves_after_game_over

    def test_frozen(self) -> None:
        with pytest.raises(AttributeError):
            MatchSettings().default_promotion = PieceKind.ROOK  # type: ignore[misc]

    @pytest.mark.parametrize("kind", [PieceKind.KING, PieceKind.PAWN])
    def test_rejects_non_promotion_kind(self, kind: PieceKind) -> None:
        with pytest.raises(ValueError, match="default_promotion"):
            MatchSettings(default_promotion=kind)


class TestFromEnv:
    def test_empty_environment(self) -> None:
        assert MatchSettings.from_env({}) == MatchSettings()

    def test_overrides(self) -> None:
        settings = MatchSettings.from_env(
            {ENV_DEFAULT_PROMOTION: "n", ENV_REJECT_AFTER_GAME_OVER: "off"}
        )
        assert settings.default_promotion == PieceKind.KNIGHT
        assert not settings.reject_moves_after_game_over

    @pytest.mark.parametrize("raw", ["1", "true", "YES", " on "])
    def test_truthy_values(self, raw: str) -> None:
        settings = MatchSettings.from_env({ENV_REJECT_AFTER_GAME_OVER: raw})
        assert settings.reject_moves_after_game_over

    def test_invalid_boolean(self) -> None:
        with pytest.raises(ValueError, match=ENV_REJECT_AFTER_GAME_OVER):
            MatchSettings.from_env({ENV_REJECT_AFTER_GAME_OVER: "maybe"})

    @pytest.mark.parametrize("raw", ["K", "x"])
    def test_invalid_promotion(self, raw: str) -> None:
        with pytest.raises(ValueError):
            MatchSettings.from_env({ENV_DEFAULT_PROMOTION: raw})

    def test_reads_process_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv(ENV_DEFAULT_PROMOTION, "B")
        monkeypatch.delenv(ENV_REJECT_AFTER_GAME_OVER, raising=False)
        assert MatchSettings.from_env().default_promotion == PieceKind.BISHOP
