"""
kpi/types.py

Typed records exchanged by the SaaS metrics engine.

Units are not uniform across fields.  ARR-like quantities alternate
between $M and $K depending on the field; every formula in
:mod:`kpi.saas` depends on the exact unit listed here.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from dataclasses import replace as _replace
from typing import Literal

KeyMetricStatus = Literal["good", "warning", "bad"]


# ---------------------------------------------------------------------------
# Inputs
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Inputs:
    """
    One month of business activity entered by the user.

    A new record is created for every field edit (see :meth:`replace`);
    records are never mutated in place.
    """

    # Starting position
    beginning_arr: float = 0.0
    """Annual recurring revenue at the start of the month, in $M."""

    total_customers: float = 0.0
    """Customer count at the start of the month."""

    # Monthly movement
    expansion_arr: float = 0.0
    """Upsell / cross-sell ARR added in the month, in $K."""

    churned_arr: float = 0.0
    """ARR lost to cancellations in the month, in $K."""

    customers_churned: float = 0.0
    new_customers_added: float = 0.0

    # Pipeline funnel
    leads_generated: float = 0.0
    mqls_generated: float = 0.0
    mql_to_sql_conversion: float = 0.0
    """Percentage, 0-100."""

    sql_to_opp_conversion: float = 0.0
    """Percentage, 0-100."""

    win_rate: float = 0.0
    """Percentage, 0-100."""

    avg_deal_size: float = 0.0
    """Average first-year contract value, in $K."""

    sales_cycle: float = 0.0
    """Average sales cycle length, in months."""

    # Channel mix (spend in $K, leads as counts)
    paid_search_spend: float = 0.0
    paid_search_leads: float = 0.0
    paid_social_spend: float = 0.0
    paid_social_leads: float = 0.0
    events_spend: float = 0.0
    events_leads: float = 0.0
    content_spend: float = 0.0
    content_leads: float = 0.0
    partnerships_spend: float = 0.0
    partnerships_leads: float = 0.0

    # ABM
    target_accounts: float = 0.0
    engaged_accounts: float = 0.0
    abm_spend: float = 0.0
    """ABM programme spend, in $K."""

    # Paid media detail
    paid_impressions: float = 0.0
    paid_clicks: float = 0.0

    # Operating expenses ($K)
    total_sales_marketing: float = 0.0
    marketing_spend: float = 0.0
    rd_spend: float = 0.0
    ga_spend: float = 0.0

    # Customer value
    cogs_percent: float = 0.0
    """Cost of goods sold as a percentage of revenue, 0-100."""

    avg_customer_lifetime: float = 0.0
    """Average customer lifetime, in months."""

    def replace(self, **changes: float) -> "Inputs":
        """Return a new record with *changes* applied."""
        return _replace(self, **changes)

    def to_dict(self) -> dict[str, float]:
        return asdict(self)

    @classmethod
    def field_names(cls) -> tuple[str, ...]:
        return tuple(f.name for f in fields(cls))


# ---------------------------------------------------------------------------
# Calculated metrics
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class CalculatedMetrics:
    """
    Every KPI derived from one :class:`Inputs` record.

    Recomputed in full on every input change; see :data:`METRIC_UNITS`
    for the unit of each field.
    """

    # ARR & growth
    new_bookings: float
    net_new_arr: float
    ending_arr: float
    mrr: float
    arr_growth_rate_monthly: float
    annualized_growth_rate: float

    # Retention
    grr: float
    nrr: float
    annualized_grr: float
    annualized_nrr: float
    logo_churn_rate: float
    ending_customer_count: float

    # Pipeline
    sqls_generated: int
    opportunities_created: int
    deals_closed_won: int
    pipeline_generated: float
    pipeline_conversion: float
    pipeline_velocity: float

    # Marketing efficiency
    cac_blended: float
    cac_paid_only: float
    ltv: float
    ltv_cac_ratio: float
    cac_payback_period: float
    cost_per_lead: float
    cost_per_mql: float
    cost_per_sql: float
    cost_per_opp: float
    cost_per_won: float
    cpm: float
    cpc: float
    ctr: float
    click_to_lead_rate: float
    lead_to_mql_rate: float

    # Sales efficiency
    magic_number: float
    payback_period_sm: float

    # Financial performance
    gross_profit: float
    gross_margin: float
    total_opex: float
    ebitda: float
    ebitda_margin: float
    rule_of_40: float
    saas_quick_ratio: float
    burn_multiple: float

    # Helper
    arpa: float

    def to_dict(self) -> dict[str, float]:
        return asdict(self)


METRIC_UNITS: dict[str, str] = {
    "new_bookings": "usd_thousands",
    "net_new_arr": "usd_thousands",
    "ending_arr": "usd_millions",
    "mrr": "usd_millions",
    "arr_growth_rate_monthly": "percent",
    "annualized_growth_rate": "percent",
    "grr": "percent",
    "nrr": "percent",
    "annualized_grr": "percent",
    "annualized_nrr": "percent",
    "logo_churn_rate": "percent",
    "ending_customer_count": "count",
    "sqls_generated": "count",
    "opportunities_created": "count",
    "deals_closed_won": "count",
    "pipeline_generated": "usd_thousands",
    "pipeline_conversion": "percent",
    "pipeline_velocity": "usd_per_day",
    "cac_blended": "usd_thousands",
    "cac_paid_only": "usd_thousands",
    "ltv": "usd",
    "ltv_cac_ratio": "ratio",
    "cac_payback_period": "months",
    "cost_per_lead": "usd",
    "cost_per_mql": "usd",
    "cost_per_sql": "usd",
    "cost_per_opp": "usd",
    "cost_per_won": "usd",
    "cpm": "usd",
    "cpc": "usd",
    "ctr": "percent",
    "click_to_lead_rate": "percent",
    "lead_to_mql_rate": "percent",
    "magic_number": "ratio",
    "payback_period_sm": "months",
    "gross_profit": "usd_thousands",
    "gross_margin": "percent",
    "total_opex": "usd_thousands",
    "ebitda": "usd_thousands",
    "ebitda_margin": "percent",
    "rule_of_40": "percent",
    "saas_quick_ratio": "ratio",
    "burn_multiple": "ratio",
    "arpa": "usd",
}
"""Unit of every :class:`CalculatedMetrics` field."""


# ---------------------------------------------------------------------------
# Key metric
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class KeyMetric:
    """Display-ready headline metric evaluated against a fixed target."""

    name: str
    value: str
    target: str
    status: KeyMetricStatus
    tooltip: str | None = None
