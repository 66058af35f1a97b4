"""
app/services/metrics_service.py

Calculation service shared by the HTTP API and the dashboard.

Wires the engine layers into one call; no formula logic lives here:

    kpi.saas              – CalculatedMetrics from Inputs
    kpi.key_metrics       – ten headline metrics with status
    thresholds.values     – canonical id → value map
    thresholds.targets    – per-id status
    kpi.formatting        – per-id display strings

Failure contract
----------------
- Calculation never raises (zero denominators are guarded in the engine).
- Unknown industry  → raises :class:`kpi.industries.UnknownIndustryError`.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Optional

from app.config import get_app_settings
from app.logging_utils import log_event
from kpi.base import BaseKPIFormula
from kpi.formatting import format_metric_value
from kpi.industries import IndustryConfig, get_industry_config
from kpi.key_metrics import get_key_metrics
from kpi.saas import SaaSKPIFormula
from kpi.types import CalculatedMetrics, Inputs, KeyMetric
from thresholds.targets import MetricStatus, get_metric_status
from thresholds.values import build_metric_values

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Result dataclass
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class MetricsEvaluation:
    """
    Everything the presentation layer needs for one input set.
    """

    inputs: Inputs
    metrics: CalculatedMetrics
    key_metrics: list[KeyMetric] = field(default_factory=list)
    values: dict[str, float] = field(default_factory=dict)
    """Canonical numeric value per metric id."""

    statuses: dict[str, MetricStatus] = field(default_factory=dict)
    """Target status per metric id; ``neutral`` where no target exists."""

    formatted: dict[str, str] = field(default_factory=dict)
    """Display string per metric id."""


# ---------------------------------------------------------------------------
# Service
# ---------------------------------------------------------------------------


class MetricsService:
    """
    Evaluate inputs end to end and resolve industry presets.
    """

    def __init__(
        self,
        formula: Optional[BaseKPIFormula] = None,
        default_industry: str = "insurance",
    ) -> None:
        self._formula = formula or SaaSKPIFormula()
        self._default_industry = default_industry

    def evaluate(self, inputs: Inputs) -> MetricsEvaluation:
        """
        Compute metrics, headline metrics, statuses and display strings.

        Parameters
        ----------
        inputs:
            One month of business activity.

        Returns
        -------
        MetricsEvaluation
        """
        started = time.perf_counter()
        metrics = self._formula.calculate(inputs)
        values = build_metric_values(metrics, inputs)
        statuses = {
            metric_id: get_metric_status(metric_id, value)
            for metric_id, value in values.items()
        }
        formatted = {
            metric_id: format_metric_value(metric_id, metrics, inputs)
            for metric_id in values
        }
        key_metrics = get_key_metrics(metrics)

        log_event(
            logger,
            logging.DEBUG,
            "metrics_evaluated",
            duration_ms=round((time.perf_counter() - started) * 1000, 3),
            bad=sorted(k for k, s in statuses.items() if s == "bad"),
            net_new_arr=metrics.net_new_arr,
        )
        return MetricsEvaluation(
            inputs=inputs,
            metrics=metrics,
            key_metrics=key_metrics,
            values=values,
            statuses=statuses,
            formatted=formatted,
        )

    def industry(self, industry: Optional[str] = None) -> IndustryConfig:
        """
        Return the preset for *industry*, or for the service default.

        Raises
        ------
        UnknownIndustryError
            If *industry* is not registered.
        """
        return get_industry_config(industry or self._default_industry)

    def default_inputs(self, industry: Optional[str] = None) -> Inputs:
        return self.industry(industry).default_inputs


# ---------------------------------------------------------------------------
# Factory
# ---------------------------------------------------------------------------


@lru_cache(maxsize=1)
def get_metrics_service() -> MetricsService:
    """
    Build and cache the metrics service with env-driven settings.
    """
    settings = get_app_settings()
    return MetricsService(default_industry=settings.default_industry)
