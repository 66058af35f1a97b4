"""
tests/test_definitions.py
"""

from __future__ import annotations

import pytest

from kpi.definitions import (
    METRIC_DEFINITIONS,
    get_conversion_rate,
    get_metric_definition,
    get_metric_label,
)
from kpi.key_metrics import get_key_metrics
from kpi.types import CalculatedMetrics, Inputs


class TestLabels:
    def test_known_labels(self) -> None:
        assert get_metric_label("ltv-cac-ratio") == "LTV:CAC Ratio"
        assert get_metric_label("ending-customer-count") == "Total Customers"

    def test_unknown_label_is_the_id(self) -> None:
        assert get_metric_label("made-up-metric") == "made-up-metric"


class TestDefinitions:
    def test_magic_number_aliases_share_one_definition(self) -> None:
        assert get_metric_definition("Magic #") is get_metric_definition("Magic Number")

    def test_unknown_definition(self) -> None:
        assert get_metric_definition("Vanity Metric") is None

    def test_every_headline_metric_is_defined(
        self, scenario_metrics: CalculatedMetrics
    ) -> None:
        for km in get_key_metrics(scenario_metrics):
            assert km.name in METRIC_DEFINITIONS

    def test_definitions_are_complete(self) -> None:
        for definition in METRIC_DEFINITIONS.values():
            assert definition.formula
            assert definition.description
            assert definition.impact


class TestConversionRate:
    def test_leads_to_mqls(
        self, scenario_metrics: CalculatedMetrics, scenario_inputs: Inputs
    ) -> None:
        rate = get_conversion_rate("leads", "mqls", scenario_metrics, scenario_inputs)
        assert rate == pytest.approx(25.0)

    def test_zero_leads(self, scenario_metrics: CalculatedMetrics, scenario_inputs: Inputs) -> None:
        inputs = scenario_inputs.replace(leads_generated=0)
        assert get_conversion_rate("leads", "mqls", scenario_metrics, inputs) == 0.0

    @pytest.mark.parametrize(
        "from_id, to_id, expected",
        [
            ("mqls", "sqls", 42),
            ("sqls", "opportunities", 68),
            ("opportunities", "deals-won", 32),
        ],
    )
    def test_stage_rates_come_from_inputs(
        self,
        scenario_metrics: CalculatedMetrics,
        scenario_inputs: Inputs,
        from_id: str,
        to_id: str,
        expected: float,
    ) -> None:
        assert get_conversion_rate(from_id, to_id, scenario_metrics, scenario_inputs) == expected

    def test_derived_rates(
        self, scenario_metrics: CalculatedMetrics, scenario_inputs: Inputs
    ) -> None:
        assert (
            get_conversion_rate("impressions", "clicks", scenario_metrics, scenario_inputs)
            == scenario_metrics.ctr
        )
        assert (
            get_conversion_rate("mqls", "deals-won", scenario_metrics, scenario_inputs)
            == scenario_metrics.pipeline_conversion
        )

    def test_unsupported_pair(
        self, scenario_metrics: CalculatedMetrics, scenario_inputs: Inputs
    ) -> None:
        assert get_conversion_rate("leads", "deals-won", scenario_metrics, scenario_inputs) is None
        assert get_conversion_rate("mqls", "leads", scenario_metrics, scenario_inputs) is None
