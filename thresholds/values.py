"""
thresholds/values.py

Canonical numeric value per metric id.

The status colours in the metric map and the values drawn in the
sparklines both read from :func:`build_metric_values`, so every id
resolves to exactly one number.  Units follow the calculated metric the
id is taken from; ``cac-blended`` is therefore in $K while its target in
:mod:`thresholds.targets` is written in $.
"""

from __future__ import annotations

from kpi.formatting import channel_spend
from kpi.numeric import saturate
from kpi.types import CalculatedMetrics, Inputs
from thresholds.targets import MetricStatus, get_metric_status


def build_metric_values(metrics: CalculatedMetrics, inputs: Inputs) -> dict[str, float]:
    """
    Map every known metric id to its numeric value.

    Parameters
    ----------
    metrics:
        Calculated metrics for *inputs*.
    inputs:
        The inputs the metrics were computed from; budget and activity
        nodes read their values directly from here.

    Returns
    -------
    dict[str, float]
        ``{metric_id: value}`` for every graph node plus the derived ids
        that are not drawn on the graph.  Every value is finite; see
        :func:`kpi.numeric.saturate`.
    """
    marketing = channel_spend(inputs)
    values: dict[str, float] = {
        # Budget ($K)
        "sales-marketing-spend": inputs.total_sales_marketing,
        "marketing-spend": marketing,
        "sales-spend": inputs.total_sales_marketing - marketing,
        "rd-spend": inputs.rd_spend,
        "ga-spend": inputs.ga_spend,
        "total-opex": metrics.total_opex,
        # Activities ($K)
        "paid-search": inputs.paid_search_spend,
        "paid-social": inputs.paid_social_spend,
        "events": inputs.events_spend,
        "content": inputs.content_spend,
        "partnerships": inputs.partnerships_spend,
        "abm": inputs.abm_spend,
        # Acquisition
        "impressions": inputs.paid_impressions,
        "clicks": inputs.paid_clicks,
        "leads": inputs.leads_generated,
        "mqls": inputs.mqls_generated,
        "sqls": float(metrics.sqls_generated),
        "opportunities": float(metrics.opportunities_created),
        "deals-won": float(metrics.deals_closed_won),
        "cpm": metrics.cpm,
        "cpc": metrics.cpc,
        "ctr": metrics.ctr,
        "cost-per-lead": metrics.cost_per_lead,
        "cost-per-mql": metrics.cost_per_mql,
        "cost-per-sql": metrics.cost_per_sql,
        "cost-per-opp": metrics.cost_per_opp,
        "cost-per-won": metrics.cost_per_won,
        "click-to-lead-rate": metrics.click_to_lead_rate,
        "lead-to-mql-rate": metrics.lead_to_mql_rate,
        "mql-to-sql-rate": inputs.mql_to_sql_conversion,
        "sql-to-opp-rate": inputs.sql_to_opp_conversion,
        "win-rate": inputs.win_rate,
        "pipeline-generated": metrics.pipeline_generated,
        "pipeline-velocity": metrics.pipeline_velocity,
        "pipeline-conversion": metrics.pipeline_conversion,
        # Revenue
        "new-bookings": metrics.new_bookings,
        "new-customers-added": inputs.new_customers_added,
        "expansion-arr": inputs.expansion_arr,
        "churned-arr": inputs.churned_arr,
        "net-new-arr": metrics.net_new_arr,
        "beginning-arr": inputs.beginning_arr,
        "ending-arr": metrics.ending_arr,
        "mrr": metrics.mrr,
        "arr-growth-rate": metrics.annualized_growth_rate,
        "grr": metrics.grr,
        "nrr": metrics.nrr,
        "annualized-grr": metrics.annualized_grr,
        "annualized-nrr": metrics.annualized_nrr,
        "logo-churn-rate": metrics.logo_churn_rate,
        "customers-churned": inputs.customers_churned,
        "ending-customer-count": metrics.ending_customer_count,
        "arpa": metrics.arpa,
        # Outcomes
        "gross-profit": metrics.gross_profit,
        "gross-margin": metrics.gross_margin,
        "ebitda": metrics.ebitda,
        "ebitda-margin": metrics.ebitda_margin,
        "rule-of-40": metrics.rule_of_40,
        "cac-blended": metrics.cac_blended,
        "cac-paid-only": metrics.cac_paid_only,
        "ltv": metrics.ltv,
        "ltv-cac-ratio": metrics.ltv_cac_ratio,
        "cac-payback-period": metrics.cac_payback_period,
        "payback-period-sm": metrics.payback_period_sm,
        "magic-number": metrics.magic_number,
        "quick-ratio": metrics.saas_quick_ratio,
        "burn-multiple": metrics.burn_multiple,
    }
    return {metric_id: saturate(value) for metric_id, value in values.items()}


def get_calculated_metric_status(
    metric_id: str,
    metrics: CalculatedMetrics,
    inputs: Inputs,
) -> MetricStatus:
    """
    Status of *metric_id* given the current calculation.

    Ids with no registered target, or with no numeric value, are
    ``"neutral"``.
    """
    value = build_metric_values(metrics, inputs).get(metric_id)
    if value is None:
        return "neutral"
    return get_metric_status(metric_id, value)
