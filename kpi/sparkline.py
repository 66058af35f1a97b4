"""
kpi/sparkline.py

Synthetic weekly trend series for dashboard sparklines.

The calculator holds a single month of inputs and stores no history.
These series are illustrative only: each ends near the current value
and walks back along a fixed trend with bounded random noise.
"""

from __future__ import annotations

from typing import Literal, Optional, Sequence

import numpy as np

from app.config import get_sparkline_settings
from kpi.types import CalculatedMetrics, Inputs

Trend = Literal["up", "down", "stable"]

_TREND_FACTORS: dict[str, float] = {"up": 1.15, "down": 0.85, "stable": 1.0}
_TREND_THRESHOLD_PCT = 2.0
_TREND_WINDOW = 3


def make_rng(seed: Optional[int] = None) -> np.random.Generator:
    """Random generator seeded from *seed*, or from ``SPARKLINE_SEED`` when omitted."""
    if seed is None:
        seed = get_sparkline_settings().seed
    return np.random.default_rng(seed)


def generate_time_series(
    current_value: float,
    weeks: Optional[int] = None,
    trend: Trend = "stable",
    volatility: float = 0.1,
    rng: Optional[np.random.Generator] = None,
) -> np.ndarray:
    """
    Build a weekly series that trends toward *current_value*.

    Args:
        current_value: Value the trend line reaches in the final week.
        weeks:         Series length; defaults to ``SPARKLINE_WEEKS``.
        trend:         ``"up"`` (x1.15 per week), ``"down"`` (x0.85) or
                       ``"stable"``.
        volatility:    Maximum relative noise per point, e.g. 0.1 for ±10%.
        rng:           Source of noise; see :func:`make_rng`.

    Returns:
        1-D float array of length *weeks*; every value is >= 0.
    """
    if weeks is None:
        weeks = get_sparkline_settings().weeks
    if rng is None:
        rng = make_rng()

    factor = _TREND_FACTORS[trend]
    base = current_value / factor ** (weeks - 1)
    trended = base * factor ** np.arange(weeks, dtype=np.float64)
    noise = rng.uniform(-volatility, volatility, size=weeks)
    return np.maximum(0.0, trended * (1.0 + noise))


# (source attribute, trend, volatility); source is "m" for metrics, "i" for inputs.
_SERIES_SPECS: dict[str, tuple[str, str, Trend, float]] = {
    # Acquisition
    "paid_impressions": ("i", "paid_impressions", "stable", 0.15),
    "paid_clicks": ("i", "paid_clicks", "stable", 0.12),
    "leads_generated": ("i", "leads_generated", "up", 0.1),
    "mqls_generated": ("i", "mqls_generated", "up", 0.1),
    "sqls_generated": ("m", "sqls_generated", "up", 0.12),
    "opportunities_created": ("m", "opportunities_created", "stable", 0.15),
    "deals_closed_won": ("m", "deals_closed_won", "stable", 0.2),
    # Revenue
    "new_bookings": ("m", "new_bookings", "up", 0.15),
    "expansion_arr": ("i", "expansion_arr", "up", 0.1),
    "churned_arr": ("i", "churned_arr", "stable", 0.2),
    "net_new_arr": ("m", "net_new_arr", "up", 0.15),
    "ending_arr": ("m", "ending_arr", "up", 0.08),
    # Retention
    "annualized_grr": ("m", "annualized_grr", "stable", 0.02),
    "annualized_nrr": ("m", "annualized_nrr", "stable", 0.03),
    "logo_churn_rate": ("m", "logo_churn_rate", "stable", 0.15),
    # Efficiency
    "ctr": ("m", "ctr", "stable", 0.1),
    "cac_blended": ("m", "cac_blended", "stable", 0.1),
    "ltv": ("m", "ltv", "stable", 0.05),
    "ltv_cac_ratio": ("m", "ltv_cac_ratio", "stable", 0.08),
    "magic_number": ("m", "magic_number", "stable", 0.12),
    # Financial
    "gross_margin": ("m", "gross_margin", "stable", 0.02),
    "ebitda_margin": ("m", "ebitda_margin", "up", 0.1),
    "rule_of_40": ("m", "rule_of_40", "up", 0.08),
    "saas_quick_ratio": ("m", "saas_quick_ratio", "stable", 0.1),
}

# Series drawn in $K or $ rather than the metric's native unit.
_SERIES_SCALE: dict[str, float] = {"ending_arr": 1000.0, "cac_blended": 1000.0}


def generate_all_time_series(
    metrics: CalculatedMetrics,
    inputs: Inputs,
    weeks: Optional[int] = None,
    rng: Optional[np.random.Generator] = None,
) -> dict[str, np.ndarray]:
    """
    Series for every sparkline metric, keyed by field name.

    ``ending_arr`` is drawn in $K and ``cac_blended`` in $, so both are
    scaled by 1000 from their calculated units.  One generator is shared
    across all series so a fixed seed reproduces the whole set.
    """
    if rng is None:
        rng = make_rng()

    series: dict[str, np.ndarray] = {}
    for key, (source, attr, trend, volatility) in _SERIES_SPECS.items():
        record = metrics if source == "m" else inputs
        current = float(getattr(record, attr)) * _SERIES_SCALE.get(key, 1.0)
        series[key] = generate_time_series(current, weeks, trend, volatility, rng)
    return series


def calculate_wow_change(data: Optional[Sequence[float] | np.ndarray]) -> Optional[float]:
    """
    Week-over-week change of the last point, in percent.

    ``None`` for fewer than two points.  A previous value of zero gives
    100 when the series rose and 0 otherwise.
    """
    if data is None or len(data) < 2:
        return None
    current = float(data[-1])
    previous = float(data[-2])
    if previous == 0:
        return 100.0 if current > 0 else 0.0
    return (current - previous) / previous * 100


def get_trend_direction(data: Optional[Sequence[float] | np.ndarray]) -> Trend:
    """
    Direction of the last three points.

    More than ±2% change between the first and last of those points is
    ``"up"`` / ``"down"``; a zero starting point is judged by sign alone.
    """
    if data is None or len(data) < 2:
        return "stable"

    recent = data[-_TREND_WINDOW:]
    first = float(recent[0])
    last = float(recent[-1])
    if first == 0:
        if last > first:
            return "up"
        if last < first:
            return "down"
        return "stable"

    change = (last - first) / first * 100
    if change > _TREND_THRESHOLD_PCT:
        return "up"
    if change < -_TREND_THRESHOLD_PCT:
        return "down"
    return "stable"
