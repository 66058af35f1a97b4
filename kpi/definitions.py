"""
kpi/definitions.py

Human-readable labels, formula explanations and stage-to-stage
conversion rates for the dashboard and the metric map.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from kpi.types import CalculatedMetrics, Inputs


# ---------------------------------------------------------------------------
# Labels
# ---------------------------------------------------------------------------

METRIC_LABELS: dict[str, str] = {
    # Budget
    "sales-marketing-spend": "S&M Spend",
    "marketing-spend": "Marketing Spend",
    "sales-spend": "Sales Spend",
    "rd-spend": "R&D Spend",
    "ga-spend": "G&A Spend",
    # Activities
    "paid-search": "Paid Search",
    "paid-social": "Paid Social",
    "events": "Events",
    "content": "Content",
    "partnerships": "Partnerships",
    "abm": "ABM",
    # Acquisition
    "impressions": "Impressions",
    "clicks": "Clicks",
    "leads": "Leads",
    "mqls": "MQLs",
    "sqls": "SQLs",
    "opportunities": "Opportunities",
    "deals-won": "Deals Won",
    "cpm": "CPM",
    "cpc": "CPC",
    "ctr": "CTR",
    "cost-per-lead": "Cost/Lead",
    "cost-per-mql": "Cost/MQL",
    "cost-per-sql": "Cost/SQL",
    "cost-per-opp": "Cost/Opp",
    "cost-per-won": "Cost/Won",
    "click-to-lead-rate": "Click→Lead",
    "lead-to-mql-rate": "Lead→MQL",
    "mql-to-sql-rate": "MQL→SQL",
    "sql-to-opp-rate": "SQL→Opp",
    "win-rate": "Win Rate",
    "pipeline-generated": "Pipeline Value",
    "pipeline-velocity": "Pipeline Velocity",
    "pipeline-conversion": "Pipeline Conv.",
    # Revenue
    "new-customers-added": "New Customers",
    "new-bookings": "New Bookings",
    "expansion-arr": "Expansion ARR",
    "churned-arr": "Churned ARR",
    "net-new-arr": "Net New ARR",
    "beginning-arr": "Beginning ARR",
    "ending-arr": "Ending ARR",
    "mrr": "MRR",
    "arr-growth-rate": "ARR Growth",
    "grr": "GRR",
    "nrr": "NRR",
    "annualized-grr": "GRR (Annual)",
    "annualized-nrr": "NRR (Annual)",
    "logo-churn-rate": "Logo Churn",
    "customers-churned": "Customers Churned",
    "ending-customer-count": "Total Customers",
    "arpa": "ARPA",
    # Outcomes
    "gross-margin": "Gross Margin",
    "ebitda-margin": "EBITDA Margin",
    "rule-of-40": "Rule of 40",
    "gross-profit": "Gross Profit",
    "total-opex": "Total OpEx",
    "ebitda": "EBITDA",
    "cac-blended": "CAC (Blended)",
    "cac-paid-only": "CAC (Paid)",
    "ltv": "LTV",
    "ltv-cac-ratio": "LTV:CAC Ratio",
    "magic-number": "Magic Number",
    "quick-ratio": "Quick Ratio",
    "burn-multiple": "Burn Multiple",
    "cac-payback-period": "CAC Payback",
    "payback-period-sm": "S&M Payback",
}


def get_metric_label(metric_id: str) -> str:
    """Display label for *metric_id*; unknown ids are returned unchanged."""
    return METRIC_LABELS.get(metric_id, metric_id)


# ---------------------------------------------------------------------------
# Definitions
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class MetricDefinition:
    formula: str
    description: str
    impact: str


_MAGIC_NUMBER = MetricDefinition(
    formula="Net New ARR / Total S&M Spend",
    description="Measures sales and marketing efficiency - revenue generated per dollar spent.",
    impact=">0.75 is efficient; >1.0 is very efficient. <0.5 suggests overspending on growth.",
)

METRIC_DEFINITIONS: dict[str, MetricDefinition] = {
    # ARR & growth
    "Net New ARR": MetricDefinition(
        formula="New Bookings + Expansion ARR - Churned ARR",
        description=(
            "The net change in Annual Recurring Revenue during the period, combining all "
            "new business, upsells, and losses."
        ),
        impact=(
            "Shows your company's true growth trajectory. Positive net new ARR means "
            "you're growing; negative means contraction."
        ),
    ),
    "Ending ARR": MetricDefinition(
        formula="Beginning ARR + Net New ARR",
        description="Total Annual Recurring Revenue at the end of the period.",
        impact="Your primary growth metric - the annualized value of all recurring revenue streams.",
    ),
    "ARR Growth": MetricDefinition(
        formula="((1 + Monthly Growth Rate) ^ 12) - 1",
        description="The compounded annual growth rate of your ARR.",
        impact="Key metric for investors. 20%+ is good for mature companies; 40%+ is excellent.",
    ),
    # Retention
    "GRR": MetricDefinition(
        formula="((Starting ARR - Churned ARR) / Starting ARR) ^ 12",
        description=(
            "Gross Revenue Retention measures the percentage of revenue retained from "
            "existing customers, excluding expansions."
        ),
        impact=(
            "Shows how well you retain base revenue. >90% is healthy; >95% is excellent. "
            "Low GRR indicates product or service issues."
        ),
    ),
    "NRR": MetricDefinition(
        formula="((Starting ARR - Churned ARR + Expansion ARR) / Starting ARR) ^ 12",
        description="Net Revenue Retention measures revenue retained plus expansion from existing customers.",
        impact=(
            ">100% means you're growing within your base (negative churn). "
            ">110% is world-class. >120% is exceptional."
        ),
    ),
    "Logo Churn": MetricDefinition(
        formula="(Customers Churned / Total Customers) × 100",
        description="The percentage of customers who cancel each month.",
        impact=(
            "<1.5% monthly is good for enterprise; <3% acceptable for SMB. "
            "High churn indicates product-market fit issues."
        ),
    ),
    # Unit economics
    "LTV:CAC": MetricDefinition(
        formula="(ARPA × Customer Lifetime) / CAC",
        description="The ratio of customer lifetime value to customer acquisition cost.",
        impact=(
            ">3.0x means healthy unit economics. <2x suggests unprofitable customer "
            "acquisition. Aim for 3-5x."
        ),
    ),
    "CAC Payback": MetricDefinition(
        formula="CAC / (ARPA × Gross Margin %)",
        description="Months needed to recover the cost of acquiring a customer.",
        impact=(
            "<12 months is excellent; <18 months is good. Longer payback requires more "
            "capital to grow."
        ),
    ),
    "CAC Blended": MetricDefinition(
        formula="Total S&M Spend / New Customers Added",
        description=(
            "Average cost to acquire a customer including all sales and marketing expenses."
        ),
        impact="Measures total acquisition efficiency. Compare to LTV to ensure profitable growth.",
    ),
    "LTV": MetricDefinition(
        formula="ARPA × Customer Lifetime (months)",
        description="Total revenue expected from a customer over their lifetime.",
        impact="Must be significantly higher than CAC (3-5x) for sustainable growth.",
    ),
    "ARPA": MetricDefinition(
        formula="Total ARR / Total Customers / 12",
        description="Average Revenue Per Account (monthly).",
        impact="Higher ARPA generally means better unit economics and easier path to profitability.",
    ),
    # Pipeline & marketing
    "Cost per MQL": MetricDefinition(
        formula="Total Marketing Spend / MQLs Generated",
        description="Average cost to generate a Marketing Qualified Lead.",
        impact="Measures top-of-funnel efficiency. Track trends to optimize marketing spend.",
    ),
    "Cost per SQL": MetricDefinition(
        formula="Total Marketing Spend / SQLs Generated",
        description="Average cost to generate a Sales Qualified Lead.",
        impact="More important than MQL cost - measures quality of lead qualification.",
    ),
    "Pipeline Conversion": MetricDefinition(
        formula="(Deals Won / MQLs Generated) × 100",
        description="Percentage of MQLs that eventually become customers.",
        impact="End-to-end funnel efficiency. Improving this amplifies all marketing efforts.",
    ),
    "Pipeline Velocity": MetricDefinition(
        formula="Pipeline Value / (Sales Cycle Days × 30)",
        description="Dollar value of pipeline created per day.",
        impact="Measures sales team productivity. Higher velocity means faster revenue growth.",
    ),
    # Sales efficiency
    "Magic Number": _MAGIC_NUMBER,
    "Magic #": _MAGIC_NUMBER,
    "Quick Ratio": MetricDefinition(
        formula="(New Bookings + Expansion ARR) / Churned ARR",
        description="Growth efficiency ratio comparing revenue gains to losses.",
        impact=(
            ">4.0 is healthy growth; <1.0 means you're shrinking. Measures overall "
            "business health."
        ),
    ),
    # Financial performance
    "Gross Margin": MetricDefinition(
        formula="(Revenue - COGS) / Revenue × 100",
        description="Percentage of revenue remaining after direct costs.",
        impact=(
            ">75% is typical for SaaS; >80% is excellent. Higher margins mean better "
            "unit economics."
        ),
    ),
    "EBITDA Margin": MetricDefinition(
        formula="(Gross Profit - OpEx) / Revenue × 100",
        description=(
            "Operating profit margin before interest, taxes, depreciation, and amortization."
        ),
        impact="Shows path to profitability. Positive EBITDA means you can self-fund growth.",
    ),
    "Rule of 40": MetricDefinition(
        formula="ARR Growth Rate % + EBITDA Margin %",
        description="Balances growth and profitability. Key metric for SaaS company health.",
        impact=(
            ">40% is healthy; >50% is excellent. Shows you're efficiently balancing growth "
            "with profitability."
        ),
    ),
    "Burn Multiple": MetricDefinition(
        formula="|Net Burn| / Net New ARR",
        description="Capital efficiency - dollars burned to generate each dollar of new ARR.",
        impact="<1.5x is efficient; <1.0x is excellent. >2.0x suggests inefficient growth spending.",
    ),
    # Paid marketing
    "CPM": MetricDefinition(
        formula="(Paid Marketing Spend / Impressions) × 1000",
        description="Cost per thousand impressions in paid advertising.",
        impact="Measures ad reach efficiency. Compare across channels to optimize spend.",
    ),
    "CPC": MetricDefinition(
        formula="Paid Marketing Spend / Clicks",
        description="Cost per click in paid advertising campaigns.",
        impact="Measures click efficiency. Lower CPC means more traffic for same budget.",
    ),
    "CTR": MetricDefinition(
        formula="(Clicks / Impressions) × 100",
        description="Click-through rate - percentage of people who click your ads.",
        impact="Measures ad relevance. >2% is typically good for B2B SaaS.",
    ),
}


def get_metric_definition(metric_name: str) -> Optional[MetricDefinition]:
    """Definition for a headline metric name such as ``"LTV:CAC"``, if any."""
    return METRIC_DEFINITIONS.get(metric_name)


# ---------------------------------------------------------------------------
# Stage conversion rates
# ---------------------------------------------------------------------------


def get_conversion_rate(
    from_id: str,
    to_id: str,
    metrics: CalculatedMetrics,
    inputs: Inputs,
) -> Optional[float]:
    """
    Conversion percentage between two funnel stages.

    Supported pairs are leads→mqls, mqls→sqls, sqls→opportunities,
    opportunities→deals-won, impressions→clicks and mqls→deals-won
    (end-to-end).  Any other pair returns ``None``.
    """
    pair = (from_id, to_id)
    if pair == ("leads", "mqls"):
        if inputs.leads_generated > 0:
            return inputs.mqls_generated / inputs.leads_generated * 100
        return 0.0
    if pair == ("mqls", "sqls"):
        return inputs.mql_to_sql_conversion
    if pair == ("sqls", "opportunities"):
        return inputs.sql_to_opp_conversion
    if pair == ("opportunities", "deals-won"):
        return inputs.win_rate
    if pair == ("impressions", "clicks"):
        return metrics.ctr
    if pair == ("mqls", "deals-won"):
        return metrics.pipeline_conversion
    return None
