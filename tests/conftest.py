"""
tests/conftest.py

Shared fixtures: a realistic month of inputs and settings cache hygiene.
"""

from __future__ import annotations

from typing import Iterator

import pytest

from app.config import get_app_settings, get_focus_settings, get_sparkline_settings
from app.services.graph_service import get_graph_service
from app.services.metrics_service import get_metrics_service
from kpi.saas import calculate_metrics
from kpi.types import CalculatedMetrics, Inputs


@pytest.fixture(autouse=True)
def _clear_settings_caches() -> Iterator[None]:
    """Every test sees settings built from its own environment."""
    caches = (
        get_app_settings,
        get_focus_settings,
        get_sparkline_settings,
        get_metrics_service,
        get_graph_service,
    )
    for cached in caches:
        cached.cache_clear()
    yield
    for cached in caches:
        cached.cache_clear()


@pytest.fixture()
def scenario_inputs() -> Inputs:
    """
    Mid-size SaaS month: $150M beginning ARR, 800 customers, 14 new logos
    at $175K, $1.6M expansion and $650K churn.
    """
    return Inputs(
        beginning_arr=150,
        total_customers=800,
        expansion_arr=1600,
        churned_arr=650,
        customers_churned=20,
        new_customers_added=14,
        leads_generated=620,
        mqls_generated=155,
        mql_to_sql_conversion=42,
        sql_to_opp_conversion=68,
        win_rate=32,
        avg_deal_size=175,
        sales_cycle=4.2,
        paid_search_spend=140,
        paid_search_leads=180,
        paid_social_spend=143,
        paid_social_leads=150,
        events_spend=90,
        events_leads=110,
        content_spend=60,
        content_leads=120,
        partnerships_spend=32,
        partnerships_leads=60,
        target_accounts=120,
        engaged_accounts=45,
        abm_spend=100,
        paid_impressions=28000,
        paid_clicks=3800,
        total_sales_marketing=1125,
        marketing_spend=565,
        rd_spend=4500,
        ga_spend=2600,
        cogs_percent=15,
        avg_customer_lifetime=18,
    )


@pytest.fixture()
def scenario_metrics(scenario_inputs: Inputs) -> CalculatedMetrics:
    return calculate_metrics(scenario_inputs)
