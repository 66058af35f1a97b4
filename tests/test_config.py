"""
tests/test_config.py

Environment-driven settings and startup validation.
"""

from __future__ import annotations

import pytest

from app.config import get_app_settings, get_focus_settings, get_sparkline_settings
from app.main import _validate_env

_SETTINGS_VARS = (
    "DEFAULT_INDUSTRY",
    "LOG_LEVEL",
    "FOCUS_DIMMED_OPACITY",
    "GRAPH_MAX_PATH_DEPTH",
    "SPARKLINE_WEEKS",
    "SPARKLINE_SEED",
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in _SETTINGS_VARS:
        monkeypatch.delenv(name, raising=False)


class TestDefaults:
    def test_app_settings(self) -> None:
        settings = get_app_settings()
        assert settings.default_industry == "insurance"
        assert settings.log_level == "INFO"

    def test_focus_settings(self) -> None:
        settings = get_focus_settings()
        assert settings.dimmed_opacity == 0.2
        assert settings.max_path_depth == 3

    def test_sparkline_settings(self) -> None:
        settings = get_sparkline_settings()
        assert settings.weeks == 8
        assert settings.seed is None


class TestOverrides:
    def test_industry_is_normalised(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DEFAULT_INDUSTRY", " BANKING ")
        monkeypatch.setenv("LOG_LEVEL", "debug")
        settings = get_app_settings()
        assert settings.default_industry == "banking"
        assert settings.log_level == "DEBUG"

    def test_unsupported_industry_falls_back(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DEFAULT_INDUSTRY", "retail")
        assert get_app_settings().default_industry == "insurance"

    @pytest.mark.parametrize("raw, expected", [("0.35", 0.35), ("1.5", 0.2), ("dim", 0.2)])
    def test_dimmed_opacity(
        self, monkeypatch: pytest.MonkeyPatch, raw: str, expected: float
    ) -> None:
        monkeypatch.setenv("FOCUS_DIMMED_OPACITY", raw)
        assert get_focus_settings().dimmed_opacity == pytest.approx(expected)

    @pytest.mark.parametrize("raw, expected", [("5", 5), ("-2", 0), ("deep", 3)])
    def test_path_depth(self, monkeypatch: pytest.MonkeyPatch, raw: str, expected: int) -> None:
        monkeypatch.setenv("GRAPH_MAX_PATH_DEPTH", raw)
        assert get_focus_settings().max_path_depth == expected

    def test_sparkline(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SPARKLINE_WEEKS", "1")
        monkeypatch.setenv("SPARKLINE_SEED", "42")
        settings = get_sparkline_settings()
        assert settings.weeks == 2
        assert settings.seed == 42

    def test_getters_are_cached(self, monkeypatch: pytest.MonkeyPatch) -> None:
        first = get_focus_settings()
        monkeypatch.setenv("FOCUS_DIMMED_OPACITY", "0.5")
        assert get_focus_settings() is first
        get_focus_settings.cache_clear()
        assert get_focus_settings().dimmed_opacity == 0.5


class TestValidateEnv:
    def test_accepts_clean_environment(self) -> None:
        _validate_env()

    def test_accepts_valid_values(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DEFAULT_INDUSTRY", "Banking")
        monkeypatch.setenv("FOCUS_DIMMED_OPACITY", "0")
        monkeypatch.setenv("GRAPH_MAX_PATH_DEPTH", "4")
        _validate_env()

    def test_reports_every_invalid_variable(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DEFAULT_INDUSTRY", "retail")
        monkeypatch.setenv("FOCUS_DIMMED_OPACITY", "2")
        monkeypatch.setenv("SPARKLINE_WEEKS", "many")
        with pytest.raises(RuntimeError) as excinfo:
            _validate_env()
        message = str(excinfo.value)
        assert "DEFAULT_INDUSTRY='retail'" in message
        assert "FOCUS_DIMMED_OPACITY" in message
        assert "SPARKLINE_WEEKS='many'" in message

    def test_rejects_non_numeric_opacity(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("FOCUS_DIMMED_OPACITY", "dim")
        with pytest.raises(RuntimeError, match="is not a number"):
            _validate_env()
