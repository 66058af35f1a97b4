"""
kpi/formatting.py

Display formatting for metric values.

Numbers are rendered the way the dashboard shows them: fixed decimals
round half away from zero on the exact binary value, and grouped numbers
use commas with at most three fraction digits.  Values that cannot be
rendered (infinity, NaN) display as ``"-"``.
"""

from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Decimal, localcontext
from typing import Callable

from kpi.numeric import round_half_up
from kpi.types import CalculatedMetrics, Inputs

_UNAVAILABLE = "-"
_MIN_PRECISION = 28


def _quantize(value: float, digits: int) -> Decimal:
    """Exact binary *value* rounded half up to *digits* decimals."""
    exact = Decimal(value)
    with localcontext() as ctx:
        # quantize needs room for every integer digit plus the fraction
        ctx.prec = max(_MIN_PRECISION, exact.adjusted() + digits + 2)
        return exact.quantize(Decimal(1).scaleb(-digits), rounding=ROUND_HALF_UP)


def to_fixed(value: float, digits: int) -> str:
    """Format *value* with exactly *digits* decimals, halves rounded up."""
    if not math.isfinite(value):
        return _UNAVAILABLE
    rounded = _quantize(value, digits)
    if rounded == 0:
        rounded = abs(rounded)
    return f"{rounded:.{digits}f}"


def group_number(value: float) -> str:
    """Comma-grouped number with up to three fraction digits, zeros trimmed."""
    if not math.isfinite(value):
        return _UNAVAILABLE
    rounded = _quantize(value, 3)
    if rounded == 0:
        return "0"
    text = f"{rounded:,.3f}".rstrip("0").rstrip(".")
    return text


def _usd(value: float) -> str:
    if not math.isfinite(value):
        return _UNAVAILABLE
    return f"${group_number(value)}"


def _usd_rounded(value: float) -> str:
    if not math.isfinite(value):
        return _UNAVAILABLE
    return f"${group_number(round_half_up(value))}"


def channel_spend(inputs: Inputs) -> float:
    """Sum of the five channel spends plus ABM spend, in $K."""
    return (
        inputs.paid_search_spend
        + inputs.paid_social_spend
        + inputs.events_spend
        + inputs.content_spend
        + inputs.partnerships_spend
        + inputs.abm_spend
    )


# ---------------------------------------------------------------------------
# Per-metric formatters keyed by graph metric id
# ---------------------------------------------------------------------------

_Formatter = Callable[[CalculatedMetrics, Inputs], str]

_FORMATTERS: dict[str, _Formatter] = {
    # Budget
    "sales-marketing-spend": lambda m, i: _usd(i.total_sales_marketing * 1000),
    "marketing-spend": lambda m, i: _usd(channel_spend(i) * 1000),
    "sales-spend": lambda m, i: _usd((i.total_sales_marketing - channel_spend(i)) * 1000),
    "rd-spend": lambda m, i: _usd(i.rd_spend * 1000),
    "ga-spend": lambda m, i: _usd(i.ga_spend * 1000),
    # Activities
    "paid-search": lambda m, i: _usd(i.paid_search_spend * 1000),
    "paid-social": lambda m, i: _usd(i.paid_social_spend * 1000),
    "events": lambda m, i: _usd(i.events_spend * 1000),
    "content": lambda m, i: _usd(i.content_spend * 1000),
    "partnerships": lambda m, i: _usd(i.partnerships_spend * 1000),
    "abm": lambda m, i: _usd(i.abm_spend * 1000),
    # Acquisition volume
    "impressions": lambda m, i: group_number(i.paid_impressions),
    "clicks": lambda m, i: group_number(i.paid_clicks),
    "leads": lambda m, i: group_number(i.leads_generated),
    "mqls": lambda m, i: group_number(i.mqls_generated),
    "sqls": lambda m, i: group_number(m.sqls_generated),
    "opportunities": lambda m, i: group_number(m.opportunities_created),
    "deals-won": lambda m, i: group_number(m.deals_closed_won),
    # Acquisition efficiency
    "cpm": lambda m, i: f"${to_fixed(m.cpm, 2)}",
    "cpc": lambda m, i: f"${to_fixed(m.cpc, 2)}",
    "ctr": lambda m, i: f"{to_fixed(m.ctr, 2)}%",
    "cost-per-lead": lambda m, i: _usd_rounded(m.cost_per_lead),
    "cost-per-mql": lambda m, i: _usd_rounded(m.cost_per_mql),
    "cost-per-sql": lambda m, i: _usd_rounded(m.cost_per_sql),
    "cost-per-opp": lambda m, i: _usd_rounded(m.cost_per_opp),
    "cost-per-won": lambda m, i: _usd_rounded(m.cost_per_won),
    # Acquisition conversion rates
    "click-to-lead-rate": lambda m, i: f"{to_fixed(m.click_to_lead_rate, 1)}%",
    "lead-to-mql-rate": lambda m, i: f"{to_fixed(m.lead_to_mql_rate, 1)}%",
    "mql-to-sql-rate": lambda m, i: f"{group_number(i.mql_to_sql_conversion)}%",
    "sql-to-opp-rate": lambda m, i: f"{group_number(i.sql_to_opp_conversion)}%",
    "win-rate": lambda m, i: f"{group_number(i.win_rate)}%",
    # Acquisition pipeline
    "pipeline-generated": lambda m, i: f"${to_fixed(m.pipeline_generated / 1000, 1)}M",
    "pipeline-velocity": lambda m, i: f"{_usd_rounded(m.pipeline_velocity)}/day",
    "pipeline-conversion": lambda m, i: f"{to_fixed(m.pipeline_conversion, 1)}%",
    # Revenue
    "new-customers-added": lambda m, i: group_number(i.new_customers_added),
    "new-bookings": lambda m, i: f"${to_fixed(m.new_bookings / 1000, 1)}M",
    "expansion-arr": lambda m, i: f"${to_fixed(i.expansion_arr / 1000, 1)}M",
    "churned-arr": lambda m, i: f"${to_fixed(i.churned_arr / 1000, 1)}M",
    "net-new-arr": lambda m, i: f"${to_fixed(m.net_new_arr / 1000, 1)}M",
    "beginning-arr": lambda m, i: f"${to_fixed(i.beginning_arr, 1)}M",
    "ending-arr": lambda m, i: f"${to_fixed(m.ending_arr, 1)}M",
    "mrr": lambda m, i: _usd_rounded(m.mrr * 1000),
    "arr-growth-rate": lambda m, i: f"{to_fixed(m.annualized_growth_rate, 1)}%",
    "grr": lambda m, i: f"{to_fixed(m.grr, 1)}%",
    "nrr": lambda m, i: f"{to_fixed(m.nrr, 1)}%",
    "annualized-grr": lambda m, i: f"{to_fixed(m.annualized_grr, 0)}%",
    "annualized-nrr": lambda m, i: f"{to_fixed(m.annualized_nrr, 0)}%",
    "logo-churn-rate": lambda m, i: f"{to_fixed(m.logo_churn_rate, 1)}%",
    "customers-churned": lambda m, i: group_number(i.customers_churned),
    "ending-customer-count": lambda m, i: group_number(m.ending_customer_count),
    "arpa": lambda m, i: _usd(m.arpa),
    # Outcomes
    "gross-margin": lambda m, i: f"{to_fixed(m.gross_margin, 1)}%",
    "ebitda-margin": lambda m, i: f"{to_fixed(m.ebitda_margin, 1)}%",
    "rule-of-40": lambda m, i: f"{to_fixed(m.rule_of_40, 1)}%",
    "gross-profit": lambda m, i: _usd_rounded(m.gross_profit * 1000),
    "total-opex": lambda m, i: _usd_rounded(m.total_opex * 1000),
    "ebitda": lambda m, i: _usd_rounded(m.ebitda * 1000),
    "cac-blended": lambda m, i: _usd_rounded(m.cac_blended * 1000),
    "cac-paid-only": lambda m, i: _usd_rounded(m.cac_paid_only * 1000),
    "ltv": lambda m, i: _usd_rounded(m.ltv),
    "ltv-cac-ratio": lambda m, i: f"{to_fixed(m.ltv_cac_ratio, 1)}x",
    "magic-number": lambda m, i: f"{to_fixed(m.magic_number, 2)}x",
    "quick-ratio": lambda m, i: f"{to_fixed(m.saas_quick_ratio, 1)}x",
    "burn-multiple": lambda m, i: f"{to_fixed(m.burn_multiple, 1)}x",
    "cac-payback-period": lambda m, i: f"{to_fixed(m.cac_payback_period, 1)} mo",
    "payback-period-sm": lambda m, i: f"{to_fixed(m.payback_period_sm, 1)} mo",
}


def format_metric_value(metric_id: str, metrics: CalculatedMetrics, inputs: Inputs) -> str:
    """
    Render the display string for *metric_id*.

    Unknown ids render as ``"-"``.
    """
    formatter = _FORMATTERS.get(metric_id)
    if formatter is None:
        return "-"
    return formatter(metrics, inputs)
