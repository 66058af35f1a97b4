"""
tests/test_key_metrics.py

Headline metric selection, rendering and inclusive status bands.
"""

from __future__ import annotations

from dataclasses import replace

import pytest

from kpi.key_metrics import get_key_metrics
from kpi.types import CalculatedMetrics, KeyMetric


def _by_name(metrics: CalculatedMetrics) -> dict[str, KeyMetric]:
    return {km.name: km for km in get_key_metrics(metrics)}


class TestKeyMetricOrder:
    def test_fixed_order(self, scenario_metrics: CalculatedMetrics) -> None:
        names = [km.name for km in get_key_metrics(scenario_metrics)]
        assert names == [
            "ARR Growth",
            "GRR",
            "NRR",
            "LTV:CAC",
            "CAC Payback",
            "Rule of 40",
            "Magic #",
            "Logo Churn",
            "Gross Margin",
            "Quick Ratio",
        ]

    def test_every_metric_has_target_and_tooltip(
        self, scenario_metrics: CalculatedMetrics
    ) -> None:
        for km in get_key_metrics(scenario_metrics):
            assert km.target
            assert km.tooltip


class TestScenarioRendering:
    def test_values(self, scenario_metrics: CalculatedMetrics) -> None:
        km = _by_name(scenario_metrics)
        assert km["ARR Growth"].value == "30.9%"
        assert km["GRR"].value == "94.9%"
        assert km["NRR"].value == "107.9%"
        assert km["LTV:CAC"].value == "3.5x"
        assert km["CAC Payback"].value == "6 mo"
        assert km["Rule of 40"].value == "52%"
        assert km["Magic #"].value == "3.02x"
        assert km["Logo Churn"].value == "2.5%"
        assert km["Gross Margin"].value == "85%"
        assert km["Quick Ratio"].value == "6.2x"

    def test_statuses(self, scenario_metrics: CalculatedMetrics) -> None:
        km = _by_name(scenario_metrics)
        assert km["ARR Growth"].status == "good"
        assert km["GRR"].status == "good"
        assert km["NRR"].status == "warning"
        assert km["LTV:CAC"].status == "good"
        assert km["CAC Payback"].status == "good"
        assert km["Logo Churn"].status == "warning"
        assert km["Quick Ratio"].status == "good"


class TestInclusiveBands:
    @pytest.mark.parametrize(
        "value, expected",
        [(3.0, "good"), (2.99, "warning"), (2.0, "warning"), (1.99, "bad")],
    )
    def test_ltv_cac(
        self, scenario_metrics: CalculatedMetrics, value: float, expected: str
    ) -> None:
        metrics = replace(scenario_metrics, ltv_cac_ratio=value)
        assert _by_name(metrics)["LTV:CAC"].status == expected

    @pytest.mark.parametrize(
        "value, expected",
        [(1.5, "good"), (1.51, "warning"), (3.0, "warning"), (3.01, "bad")],
    )
    def test_logo_churn_lower_is_better(
        self, scenario_metrics: CalculatedMetrics, value: float, expected: str
    ) -> None:
        metrics = replace(scenario_metrics, logo_churn_rate=value)
        assert _by_name(metrics)["Logo Churn"].status == expected

    @pytest.mark.parametrize(
        "value, expected",
        [(12.0, "good"), (18.0, "warning"), (18.5, "bad")],
    )
    def test_cac_payback(
        self, scenario_metrics: CalculatedMetrics, value: float, expected: str
    ) -> None:
        metrics = replace(scenario_metrics, cac_payback_period=value)
        assert _by_name(metrics)["CAC Payback"].status == expected

    def test_magic_number_bands(self, scenario_metrics: CalculatedMetrics) -> None:
        assert _by_name(replace(scenario_metrics, magic_number=1.0))["Magic #"].status == "good"
        assert _by_name(replace(scenario_metrics, magic_number=0.75))["Magic #"].status == "warning"
        assert _by_name(replace(scenario_metrics, magic_number=0.7))["Magic #"].status == "bad"
