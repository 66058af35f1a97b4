"""
app/config.py

Application-level configuration helpers.

Settings come from process environment variables, optionally seeded
from ``.env`` and ``.env.local`` at the project root.  Every getter is
cached; tests that change the environment call ``cache_clear()`` on the
getter they exercise.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

SUPPORTED_INDUSTRIES = ("insurance", "banking")


def load_env_files() -> None:
    """
    Load simple KEY=VALUE pairs from `.env` and `.env.local` (if present).
    Existing process environment variables are not overwritten.
    """

    project_root = Path(__file__).resolve().parents[1]
    for filename in (".env", ".env.local"):
        env_path = project_root / filename
        if not env_path.exists():
            continue

        for raw_line in env_path.read_text(encoding="utf-8").splitlines():
            line = raw_line.strip()
            if not line or line.startswith("#") or "=" not in line:
                continue

            key, value = line.split("=", 1)
            key = key.strip()
            value = value.strip().strip('"').strip("'")
            if key and key not in os.environ:
                os.environ[key] = value


@lru_cache(maxsize=1)
def _load_env_once() -> None:
    """
    Ensure project `.env` files are loaded once before reading settings.
    """

    load_env_files()


def _get_int_env(name: str, default: int) -> int:
    """
    Read an integer from environment variables with safe fallback.
    """

    _load_env_once()
    raw_value = os.getenv(name)
    if raw_value is None:
        return default
    try:
        return int(raw_value)
    except ValueError:
        return default


def _get_float_env(name: str, default: float) -> float:
    """
    Read a float from environment variables with safe fallback.
    """

    _load_env_once()
    raw_value = os.getenv(name)
    if raw_value is None:
        return default
    try:
        return float(raw_value)
    except ValueError:
        return default


def _get_str_env(name: str, default: str) -> str:
    """
    Read a string from environment variables with fallback.
    """

    _load_env_once()
    value = os.getenv(name)
    if value is None:
        return default
    stripped = value.strip()
    return stripped if stripped else default


def _get_optional_int_env(name: str) -> int | None:
    """
    Read an optional integer; missing or malformed values yield None.
    """

    _load_env_once()
    raw_value = os.getenv(name)
    if raw_value is None or not raw_value.strip():
        return None
    try:
        return int(raw_value)
    except ValueError:
        return None


# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class AppSettings:
    """
    Top-level application settings.
    """

    default_industry: str = "insurance"
    """Industry whose default inputs seed a new session."""

    log_level: str = "INFO"


@dataclass(frozen=True)
class FocusSettings:
    """
    Runtime settings for metric-map focus mode.
    """

    dimmed_opacity: float = 0.2
    """Opacity of metrics outside the selected neighbourhood."""

    max_path_depth: int = 3
    """Default hop limit for upstream / downstream paths."""


@dataclass(frozen=True)
class SparklineSettings:
    """
    Runtime settings for synthetic trend series.
    """

    weeks: int = 8
    seed: int | None = None
    """Fixed seed for reproducible series; None draws fresh entropy."""


@lru_cache(maxsize=1)
def get_app_settings() -> AppSettings:
    """
    Return cached application settings.

    An unsupported DEFAULT_INDUSTRY falls back to insurance here;
    ``app.main`` rejects it at startup instead.
    """

    industry = _get_str_env("DEFAULT_INDUSTRY", "insurance").lower()
    if industry not in SUPPORTED_INDUSTRIES:
        industry = "insurance"
    return AppSettings(
        default_industry=industry,
        log_level=_get_str_env("LOG_LEVEL", "INFO").upper(),
    )


@lru_cache(maxsize=1)
def get_focus_settings() -> FocusSettings:
    """
    Return cached focus-mode settings.
    """

    dimmed = _get_float_env("FOCUS_DIMMED_OPACITY", 0.2)
    if not 0.0 <= dimmed <= 1.0:
        dimmed = 0.2
    depth = _get_int_env("GRAPH_MAX_PATH_DEPTH", 3)
    return FocusSettings(
        dimmed_opacity=dimmed,
        max_path_depth=max(0, depth),
    )


@lru_cache(maxsize=1)
def get_sparkline_settings() -> SparklineSettings:
    """
    Return cached sparkline settings.
    """

    return SparklineSettings(
        weeks=max(2, _get_int_env("SPARKLINE_WEEKS", 8)),
        seed=_get_optional_int_env("SPARKLINE_SEED"),
    )
