"""
tests/test_industries.py

Industry presets and their lookup.
"""

from __future__ import annotations

import pytest

from kpi.industries import (
    INDUSTRY_CONFIGS,
    UnknownIndustryError,
    default_inputs,
    get_industry_config,
)
from kpi.saas import calculate_metrics
from kpi.types import Inputs


class TestLookup:
    def test_insurance_defaults(self) -> None:
        inputs = default_inputs("insurance")
        assert inputs.beginning_arr == 180
        assert inputs.avg_deal_size == 850
        assert inputs.avg_customer_lifetime == 48

    def test_lookup_is_case_insensitive(self) -> None:
        config = get_industry_config("  Banking ")
        assert config.id == "banking"
        assert config.default_inputs.beginning_arr == 145

    def test_unknown_industry(self) -> None:
        with pytest.raises(UnknownIndustryError) as excinfo:
            get_industry_config("retail")
        assert excinfo.value.industry == "retail"
        assert isinstance(excinfo.value, ValueError)

    def test_none_uses_configured_default(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DEFAULT_INDUSTRY", "banking")
        assert get_industry_config().id == "banking"

    def test_none_falls_back_to_insurance(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DEFAULT_INDUSTRY", "retail")
        assert get_industry_config(None).id == "insurance"


class TestLabels:
    @pytest.mark.parametrize("industry", sorted(INDUSTRY_CONFIGS))
    def test_every_input_field_is_labelled(self, industry: str) -> None:
        config = get_industry_config(industry)
        assert set(Inputs.field_names()) <= set(config.field_labels)

    def test_label_fallback(self) -> None:
        config = get_industry_config("insurance")
        assert config.field_label("win_rate") == "Win Rate (%)"
        assert config.field_label("unknown_field") == "unknown_field"
        assert config.metric_label("ending_arr") == "Ending ARR"
        assert config.metric_label("burn_multiple") == "burn_multiple"

    def test_personas(self) -> None:
        personas = get_industry_config("banking").persona_labels
        assert set(personas) == {"ceo", "cfo", "sales", "marketing"}
        assert personas["sales"] == "CRO"


class TestPresetsCalculate:
    @pytest.mark.parametrize("industry", sorted(INDUSTRY_CONFIGS))
    def test_presets_produce_positive_arr(self, industry: str) -> None:
        metrics = calculate_metrics(default_inputs(industry))
        assert metrics.ending_arr > default_inputs(industry).beginning_arr
        assert metrics.deals_closed_won > 0
