"""
kpi/industries.py

Industry presets: field labels, metric labels, persona labels and the
default inputs a new session starts from.

The formulas in :mod:`kpi.saas` never look at the industry; only the
values and labels offered to the user differ.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Optional

from app.config import get_app_settings
from kpi.types import Inputs

logger = logging.getLogger(__name__)


class UnknownIndustryError(ValueError):
    """Raised when an industry id has no registered configuration."""

    def __init__(self, industry: str) -> None:
        self.industry = industry
        super().__init__(
            f"Unknown industry '{industry}'. Supported: {sorted(INDUSTRY_CONFIGS)}"
        )


@dataclass(frozen=True)
class IndustryConfig:
    """
    Presentation preset for one industry vertical.

    Attributes
    ----------
    id:
        Stable lowercase identifier, e.g. ``"insurance"``.
    display_name:
        Name shown in selectors.
    field_labels:
        Input field name (``Inputs`` attribute) to form label.
    metric_labels:
        ``CalculatedMetrics`` attribute to summary label.
    default_inputs:
        Starting values for a new session.
    persona_labels:
        Stakeholder view to title (``ceo``, ``cfo``, ``sales``, ``marketing``).
    """

    id: str
    display_name: str
    default_inputs: Inputs
    field_labels: Mapping[str, str] = field(default_factory=dict)
    metric_labels: Mapping[str, str] = field(default_factory=dict)
    persona_labels: Mapping[str, str] = field(default_factory=dict)

    def field_label(self, field_name: str) -> str:
        return self.field_labels.get(field_name, field_name)

    def metric_label(self, metric_name: str) -> str:
        return self.metric_labels.get(metric_name, metric_name)


# ---------------------------------------------------------------------------
# Shared label tables
# ---------------------------------------------------------------------------

_FIELD_LABELS = MappingProxyType(
    {
        "beginning_arr": "Beginning ARR",
        "total_customers": "Total Customers",
        "expansion_arr": "Expansion ARR",
        "churned_arr": "Churned ARR",
        "customers_churned": "Customers Churned",
        "new_customers_added": "New Customers Added",
        "leads_generated": "Leads Generated",
        "mqls_generated": "MQLs Generated",
        "mql_to_sql_conversion": "MQL to SQL Rate (%)",
        "sql_to_opp_conversion": "SQL to Opp Rate (%)",
        "win_rate": "Win Rate (%)",
        "avg_deal_size": "Avg Deal Size",
        "sales_cycle": "Sales Cycle (months)",
        "paid_search_spend": "Paid Search Spend",
        "paid_search_leads": "Paid Search Leads",
        "paid_social_spend": "Paid Social Spend",
        "paid_social_leads": "Paid Social Leads",
        "events_spend": "Events Spend",
        "events_leads": "Events Leads",
        "content_spend": "Content Spend",
        "content_leads": "Content Leads",
        "partnerships_spend": "Partnerships Spend",
        "partnerships_leads": "Partnerships Leads",
        "target_accounts": "Target Accounts",
        "engaged_accounts": "Engaged Accounts",
        "abm_spend": "ABM Spend",
        "paid_impressions": "Paid Impressions",
        "paid_clicks": "Paid Clicks",
        "total_sales_marketing": "Total Sales & Marketing",
        "marketing_spend": "Marketing Spend",
        "rd_spend": "R&D Spend",
        "ga_spend": "G&A Spend",
        "cogs_percent": "COGS (%)",
        "avg_customer_lifetime": "Avg Customer Lifetime (mo)",
    }
)

_METRIC_LABELS = MappingProxyType(
    {
        "new_bookings": "New Bookings",
        "net_new_arr": "Net New ARR",
        "ending_arr": "Ending ARR",
        "mrr": "MRR",
        "annualized_growth_rate": "ARR Growth Rate",
        "annualized_grr": "Gross Retention Rate",
        "annualized_nrr": "Net Retention Rate",
        "logo_churn_rate": "Logo Churn Rate",
        "sqls_generated": "SQLs Generated",
        "opportunities_created": "Opportunities Created",
        "deals_closed_won": "Deals Closed Won",
        "pipeline_generated": "Pipeline Generated",
        "arpa": "ARPA",
        "ending_customer_count": "Total Customers",
    }
)

_PERSONA_LABELS = MappingProxyType(
    {
        "ceo": "CEO / Board",
        "cfo": "CFO",
        "sales": "CRO",
        "marketing": "CMO",
    }
)


# ---------------------------------------------------------------------------
# Presets
# ---------------------------------------------------------------------------

INSURANCE = IndustryConfig(
    id="insurance",
    display_name="Insurance",
    field_labels=_FIELD_LABELS,
    metric_labels=_METRIC_LABELS,
    persona_labels=_PERSONA_LABELS,
    # Fewer, larger enterprise contracts with long compliance-driven cycles.
    default_inputs=Inputs(
        beginning_arr=180,
        total_customers=85,
        expansion_arr=2200,
        churned_arr=650,
        customers_churned=3,
        new_customers_added=4,
        leads_generated=420,
        mqls_generated=105,
        mql_to_sql_conversion=48,
        sql_to_opp_conversion=72,
        win_rate=38,
        avg_deal_size=850,
        sales_cycle=8.5,
        paid_search_spend=85,
        paid_search_leads=95,
        paid_social_spend=120,
        paid_social_leads=88,
        events_spend=180,
        events_leads=142,
        content_spend=75,
        content_leads=95,
        partnerships_spend=45,
        partnerships_leads=0,
        target_accounts=150,
        engaged_accounts=68,
        abm_spend=220,
        paid_impressions=18000,
        paid_clicks=2400,
        total_sales_marketing=1850,
        marketing_spend=505,
        rd_spend=5200,
        ga_spend=2950,
        cogs_percent=22,
        avg_customer_lifetime=48,
    ),
)

BANKING = IndustryConfig(
    id="banking",
    display_name="Banking",
    field_labels=_FIELD_LABELS,
    metric_labels=_METRIC_LABELS,
    persona_labels=_PERSONA_LABELS,
    # Mid-market mix: more logos, smaller deals, shorter cycles.
    default_inputs=Inputs(
        beginning_arr=145,
        total_customers=120,
        expansion_arr=1650,
        churned_arr=720,
        customers_churned=5,
        new_customers_added=7,
        leads_generated=680,
        mqls_generated=165,
        mql_to_sql_conversion=42,
        sql_to_opp_conversion=68,
        win_rate=32,
        avg_deal_size=380,
        sales_cycle=6.5,
        paid_search_spend=125,
        paid_search_leads=155,
        paid_social_spend=145,
        paid_social_leads=118,
        events_spend=95,
        events_leads=85,
        content_spend=65,
        content_leads=142,
        partnerships_spend=28,
        partnerships_leads=180,
        target_accounts=220,
        engaged_accounts=85,
        abm_spend=165,
        paid_impressions=24000,
        paid_clicks=3200,
        total_sales_marketing=1550,
        marketing_spend=523,
        rd_spend=4600,
        ga_spend=2650,
        cogs_percent=18,
        avg_customer_lifetime=36,
    ),
)

INDUSTRY_CONFIGS: Mapping[str, IndustryConfig] = MappingProxyType(
    {config.id: config for config in (INSURANCE, BANKING)}
)


def get_industry_config(industry: Optional[str] = None) -> IndustryConfig:
    """
    Look up the preset for *industry*.

    Parameters
    ----------
    industry:
        Industry id, case-insensitive.  ``None`` resolves to the
        configured ``DEFAULT_INDUSTRY``.

    Raises
    ------
    UnknownIndustryError
        If no preset is registered under *industry*.
    """
    if industry is None:
        industry = get_app_settings().default_industry

    key = industry.strip().lower()
    config = INDUSTRY_CONFIGS.get(key)
    if config is None:
        logger.warning("Unknown industry requested: %s", industry)
        raise UnknownIndustryError(industry)
    return config


def default_inputs(industry: Optional[str] = None) -> Inputs:
    """Default :class:`Inputs` for *industry*."""
    return get_industry_config(industry).default_inputs
