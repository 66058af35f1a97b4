"""
tests/test_thresholds.py

Per-metric targets and the canonical id → value map.
"""

from __future__ import annotations

import pytest

from kpi.types import CalculatedMetrics, Inputs
from metrics_graph.relationships import METRICS_RELATIONSHIPS
from thresholds.targets import METRIC_TARGETS, get_metric_status, get_metric_target_label
from thresholds.values import build_metric_values, get_calculated_metric_status


class TestMetricStatus:
    def test_ltv_cac_boundary_is_strict(self) -> None:
        assert get_metric_status("ltv-cac-ratio", 3.0) == "warning"
        assert get_metric_status("ltv-cac-ratio", 3.01) == "good"
        assert get_metric_status("ltv-cac-ratio", 2.0) == "warning"
        assert get_metric_status("ltv-cac-ratio", 1.99) == "bad"

    @pytest.mark.parametrize(
        "value, expected",
        [(99.99, "good"), (100, "warning"), (199.99, "warning"), (200, "bad")],
    )
    def test_lower_is_better_half_open_band(self, value: float, expected: str) -> None:
        assert get_metric_status("cost-per-mql", value) == expected

    @pytest.mark.parametrize(
        "value, expected",
        [(20.01, "good"), (20, "warning"), (0, "warning"), (-0.1, "bad")],
    )
    def test_ebitda_margin(self, value: float, expected: str) -> None:
        assert get_metric_status("ebitda-margin", value) == expected

    def test_unknown_metric_is_neutral(self) -> None:
        assert get_metric_status("impressions", 1_000_000) == "neutral"
        assert get_metric_status("not-a-metric", 1) == "neutral"

    def test_target_labels(self) -> None:
        assert get_metric_target_label("ltv-cac-ratio") == "> 3:1"
        assert get_metric_target_label("cpc") == "< $2.00"
        assert get_metric_target_label("leads") is None

    def test_every_target_is_a_known_metric(self) -> None:
        known = set(METRICS_RELATIONSHIPS) | {"click-to-lead-rate", "lead-to-mql-rate"}
        assert set(METRIC_TARGETS) <= known


class TestMetricValues:
    def test_covers_every_graph_node(
        self, scenario_metrics: CalculatedMetrics, scenario_inputs: Inputs
    ) -> None:
        values = build_metric_values(scenario_metrics, scenario_inputs)
        assert set(METRICS_RELATIONSHIPS) <= set(values)

    def test_covers_every_target(
        self, scenario_metrics: CalculatedMetrics, scenario_inputs: Inputs
    ) -> None:
        values = build_metric_values(scenario_metrics, scenario_inputs)
        assert set(METRIC_TARGETS) <= set(values)

    def test_budget_split(
        self, scenario_metrics: CalculatedMetrics, scenario_inputs: Inputs
    ) -> None:
        values = build_metric_values(scenario_metrics, scenario_inputs)
        channels = 140 + 143 + 90 + 60 + 32 + 100
        assert values["marketing-spend"] == pytest.approx(channels)
        assert values["sales-spend"] == pytest.approx(1125 - channels)

    def test_calculated_values(
        self, scenario_metrics: CalculatedMetrics, scenario_inputs: Inputs
    ) -> None:
        values = build_metric_values(scenario_metrics, scenario_inputs)
        assert values["net-new-arr"] == pytest.approx(3400)
        assert values["arr-growth-rate"] == scenario_metrics.annualized_growth_rate
        assert values["quick-ratio"] == scenario_metrics.saas_quick_ratio
        assert values["cac-blended"] == scenario_metrics.cac_blended

    def test_calculated_status(
        self, scenario_metrics: CalculatedMetrics, scenario_inputs: Inputs
    ) -> None:
        assert (
            get_calculated_metric_status("ltv-cac-ratio", scenario_metrics, scenario_inputs)
            == "good"
        )
        assert (
            get_calculated_metric_status("logo-churn-rate", scenario_metrics, scenario_inputs)
            == "warning"
        )
        assert (
            get_calculated_metric_status("mqls", scenario_metrics, scenario_inputs)
            == "neutral"
        )
        assert (
            get_calculated_metric_status("no-such-id", scenario_metrics, scenario_inputs)
            == "neutral"
        )

    def test_cac_blended_is_compared_in_thousands(
        self, scenario_metrics: CalculatedMetrics, scenario_inputs: Inputs
    ) -> None:
        # $80.4K blended CAC sits far below the $5,000 threshold in its native unit.
        assert (
            get_calculated_metric_status("cac-blended", scenario_metrics, scenario_inputs)
            == "good"
        )
